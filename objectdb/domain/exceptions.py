"""Domain exception hierarchy."""


class ObjectDbException(Exception):
    pass


class InvalidSearchQueryException(ObjectDbException):
    pass


class PrefixNotFoundException(ObjectDbException):
    pass


class CategoryNotFoundException(ObjectDbException):
    pass


class EntryNotFoundException(ObjectDbException):
    pass


class IndexLoadException(ObjectDbException):
    pass


class IndexNotBuiltException(ObjectDbException):
    pass
