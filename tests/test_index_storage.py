"""Tests for ObjectIndex and IndexStorage."""

import pytest

from objectdb.domain.entities import IndexEntry
from objectdb.domain.exceptions import IndexLoadException, IndexNotBuiltException
from objectdb.domain.path import StrictPath
from objectdb.infrastructure.category.category import CategoryObjectDb, SimpleCategoryObjectDb
from objectdb.infrastructure.loaders.entry_loader import EntryFileLoader
from objectdb.infrastructure.storage.index_storage import (
    IndexStorage,
    ObjectIndex,
    category_key,
    create_category_index,
    index_words,
)


class TestCreateCategoryIndex:
    def test_layouts(self):
        assert isinstance(create_category_index("tree"), CategoryObjectDb)
        assert isinstance(create_category_index("flat"), SimpleCategoryObjectDb)

    def test_unknown_layout(self):
        with pytest.raises(ValueError, match="Unknown index layout"):
            create_category_index("graph")

    def test_category_key_is_case_insensitive(self):
        assert category_key("/Reports/HR") == StrictPath("reports/hr")

    def test_index_words_split_like_queries(self):
        entry = IndexEntry(name="x", keywords=("e-mail", "mail", "q3_report"))
        assert index_words(entry) == ["e", "mail", "q3", "report"]


@pytest.mark.parametrize("layout", ["tree", "flat"])
class TestObjectIndex:
    def test_add_fills_every_structure(self, layout, sample_entries):
        index = ObjectIndex(layout)
        for entry in sample_entries:
            index.add(entry)

        revenue = sample_entries[0]
        assert index.size == 4
        assert index.categories.get_all_categories().find("rev") == [revenue]
        assert index.categories.find_category("/reports/finance/q3").find("quarterly") == sample_entries[:2]
        assert revenue in index.paths.get_child("reports").get_objects()
        assert index.names.get_value("/reports/finance/q3/Q3 Revenue") is revenue

    def test_entry_in_several_categories(self, layout, sample_entries):
        index = ObjectIndex(layout)
        policy = sample_entries[3]
        index.add(policy)
        assert index.categories.find_category("/policies").find("pol") == [policy]
        assert index.categories.find_category("/reports/hr").find("ret") == [policy]
        assert index.names.get_value("/policies/Retention Policy") is policy

    def test_clear(self, layout, sample_entries):
        index = ObjectIndex(layout)
        for entry in sample_entries:
            index.add(entry)
        index.clear()
        assert index.size == 0
        assert index.categories.get_all_categories().find("rev") == []
        assert index.paths.get_child("reports") is None
        assert index.names.get_value("/reports/hr/Headcount") is None


class TestIndexStorage:
    def test_index_before_build(self, entries_file):
        storage = IndexStorage(EntryFileLoader(), entries_file)
        assert not storage.is_built
        with pytest.raises(IndexNotBuiltException):
            storage.index

    def test_build(self, entries_file):
        storage = IndexStorage(EntryFileLoader(), entries_file, layout="flat")
        index = storage.build()
        assert storage.is_built
        assert storage.index is index
        assert index.size == 4
        assert isinstance(index.categories, SimpleCategoryObjectDb)

    def test_rebuild_replaces_index(self, entries_file):
        storage = IndexStorage(EntryFileLoader(), entries_file)
        first = storage.build()
        second = storage.build()
        assert storage.index is second
        assert first is not second

    def test_build_missing_source(self, tmp_path):
        storage = IndexStorage(EntryFileLoader(), tmp_path / "missing.json")
        with pytest.raises(IndexLoadException):
            storage.build()
        assert not storage.is_built
