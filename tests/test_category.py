"""Tests for category trees, text trees and the flat category map."""

from objectdb.domain.path import Path, StrictPath
from objectdb.infrastructure.category.category import (
    ALL_CATEGORIES,
    CategoryObjectDb,
    CategoryObjectNode,
    SimpleCategoryObjectDb,
)
from objectdb.infrastructure.category.text import TextObjectDb, TextObjectNode
from objectdb.infrastructure.trie.radix import RadixObjectDb


def _count_nodes(db) -> int:
    return sum(1 for _ in db.walk())


class TestCategoryObjectDb:
    def test_same_path_returns_same_node(self):
        db = CategoryObjectDb[str]()
        first = db.get_child_by_path("/a/b/c")
        second = db.get_child_by_path("/a/b/c")
        assert first is second

    def test_auto_creation_creates_each_level_once(self):
        db = CategoryObjectDb[str]()
        db.get_child_by_path("/a/b/c")
        db.get_child_by_path("/a/b/c")
        db.get_child_by_path(Path("a", "b", "c"))
        assert _count_nodes(db) == 3

    def test_trie_survives_repeat_resolution(self):
        db = CategoryObjectDb[str]()
        db.get_child_by_path("/finance/q3").tree.add_object("revenue", "X")
        node = db.get_child_by_path("/finance/q3")
        assert node.tree.get_child("revenue").get_objects() == ["X"]
        assert node.tree.find("rev") == ["X"]

    def test_categories_have_independent_tries(self):
        db = CategoryObjectDb[str]()
        db.get_category("/finance").add_object("revenue", "X")
        assert db.get_category("/hr").find("revenue") == []
        assert db.get_category("/finance/q3").find("revenue") == []

    def test_names_are_lower_cased(self):
        db = CategoryObjectDb[str]()
        node = db.get_child_by_path("/Finance/Q3")
        assert node.name == "q3"
        assert db.get_child_by_path("/finance/q3") is node

    def test_lookup_never_creates(self):
        db = CategoryObjectDb[str]()
        assert db.lookup("/a/b") is None
        assert db.find_category("/a/b") is None
        assert db.root.get_child_count() == 0

    def test_lookup_finds_created_node(self):
        db = CategoryObjectDb[str]()
        node = db.get_child_by_path("/a/b")
        assert db.lookup("a.b") is node
        assert db.find_category("/a/b") is node.tree

    def test_all_categories(self):
        db = CategoryObjectDb[str]()
        everything = db.get_all_categories()
        assert isinstance(everything, RadixObjectDb)
        assert db.get_all_categories() is everything
        assert db.lookup(ALL_CATEGORIES) is not None

    def test_all_categories_not_filled_automatically(self):
        db = CategoryObjectDb[str]()
        db.get_category("/finance").add_object("revenue", "X")
        assert db.get_all_categories().find("revenue") == []

    def test_iteration_yields_top_level_children(self):
        db = CategoryObjectDb[str]()
        db.get_child_by_path("/a/x")
        db.get_child_by_path("/b")
        assert sorted(node.name for node in db) == ["a", "b"]

    def test_category_paths(self):
        db = CategoryObjectDb[str]()
        db.get_child_by_path("/b/c")
        db.get_child_by_path("/a")
        assert db.category_paths() == [Path("a"), Path("b"), Path("b/c")]

    def test_clear_empties_tree_and_memo(self):
        db = CategoryObjectDb[str]()
        old = db.get_child_by_path("/a/b")
        old.tree.add_object("word", "X")
        db.clear()
        assert db.root.get_child_count() == 0
        assert db.lookup("/a/b") is None
        new = db.get_child_by_path("/a/b")
        assert new is not old
        assert new.tree.get_objects() == []

    def test_node_clear_invalidates_memo(self):
        db = CategoryObjectDb[str]()
        old = db.get_child_by_path("/a/b")
        db.get_child_by_path("/a").clear()
        assert db.lookup("/a/b") is None
        assert db.get_child_by_path("/a/b") is not old

    def test_clear_preserves_node_name(self):
        db = CategoryObjectDb[str]()
        node = db.get_child_by_path("/a")
        node.get_or_create_child("b")
        node.clear()
        assert node.name == "a"
        assert node.get_child_count() == 0


class TestCategoryObjectNode:
    def test_get_child_is_read_only(self):
        node = CategoryObjectNode[str]("root")
        assert node.get_child("x") is None
        created = node.get_or_create_child("X")
        assert node.get_child("x") is created

    def test_descent_from_node(self):
        node = CategoryObjectNode[str]("root")
        leaf = node.get_child_by_path("a/b")
        assert node.lookup(StrictPath("a", "b")) is leaf
        assert node.lookup_or_create("a/b") is leaf

    def test_string_paths_are_strict(self):
        node = CategoryObjectNode[str]("root")
        leaf = node.get_child_by_path("Q3 (draft)")
        assert leaf.name == "q3_draft"

    def test_nodes_sort_by_name(self):
        nodes = [CategoryObjectNode[str]("b"), CategoryObjectNode[str]("a")]
        assert [n.name for n in sorted(nodes)] == ["a", "b"]


class TestTextObjectDb:
    def test_single_value_per_path(self):
        db = TextObjectDb[str]()
        db.get_child_by_path("/docs/readme").set_value("first")
        db.get_child_by_path("/docs/readme").set_value("second")
        assert db.get_child_by_path("/docs/readme").get_value() == "second"

    def test_set_and_get_value_helpers(self):
        db = TextObjectDb[str]()
        node = db.set_value("/docs/readme", "text")
        assert node.value == "text"
        assert db.get_value("/docs/readme") == "text"
        assert db.get_value("/docs/missing") is None
        assert db.lookup("/docs/missing") is None

    def test_intermediate_nodes_have_no_value(self):
        db = TextObjectDb[str]()
        db.set_value("/docs/readme", "text")
        assert db.get_child_by_path("/docs").value is None

    def test_same_node_instance(self):
        db = TextObjectDb[str]()
        assert db.get_child_by_path("/a/b") is db.get_child_by_path("a.b")

    def test_clear_resets_values(self):
        db = TextObjectDb[str]()
        db.set_value("/a", "x")
        node = db.get_child_by_path("/a")
        node.clear()
        assert node.value is None
        db.clear()
        assert db.get_value("/a") is None
        assert db.root.get_child_count() == 0

    def test_iteration_yields_top_level_children(self):
        db = TextObjectDb[str]()
        db.set_value("/x/y", "1")
        assert [node.name for node in db] == ["x"]
        assert all(isinstance(node, TextObjectNode) for node in db)


class TestSimpleCategoryObjectDb:
    def test_all_categories_registered_on_construction(self):
        db = SimpleCategoryObjectDb[str]()
        assert db.get_all_categories() is not None
        assert db.get_child_count() == 1
        assert list(db) == [ALL_CATEGORIES]

    def test_full_path_key_without_intermediates(self):
        db = SimpleCategoryObjectDb[str]()
        db.get_category("/a/b").add_object("word", "X")
        assert db.find_category("/a") is None
        assert db.get_category("a", "b").find("wo") == ["X"]
        assert db.get_child_count() == 2

    def test_same_category_same_trie(self):
        db = SimpleCategoryObjectDb[str]()
        assert db.get_category("/a/b") is db.get_category(StrictPath("a.b"))

    def test_clear_reregisters_all_categories(self):
        db = SimpleCategoryObjectDb[str]()
        old_all = db.get_all_categories()
        db.get_category("/a")
        db.clear()
        assert db.get_child_count() == 1
        assert db.get_all_categories() is not old_all
        assert db.find_category("/a") is None

    def test_category_paths_sorted(self):
        db = SimpleCategoryObjectDb[str]()
        db.get_category("/z")
        db.get_category("/b")
        assert db.category_paths() == [ALL_CATEGORIES, Path("b"), Path("z")]


class TestPlainPathKeys:
    def test_tree_resolves_plain_path_like_string(self):
        db = CategoryObjectDb[str]()
        node = db.get_child_by_path("/Q3 (draft)")
        assert db.get_child_by_path(Path("/Q3 (draft)")) is node
        assert db.lookup(Path("/Q3 (draft)")) is node
        assert db.root.get_child_count() == 1

    def test_node_lookup_sanitizes_plain_path(self):
        node = CategoryObjectNode[str]("root")
        leaf = node.lookup_or_create(Path("reports", "Q3 (draft)"))
        assert leaf.name == "q3_draft"
        assert node.lookup("reports/Q3 (draft)") is leaf

    def test_flat_map_sanitizes_plain_path(self):
        db = SimpleCategoryObjectDb[str]()
        trie = db.get_category("/Q3 (draft)")
        assert db.get_category(Path("/Q3 (draft)")) is trie
        assert db.find_category(Path("Q3 (draft)")) is trie
        assert db.get_child_count() == 2

    def test_text_tree_sanitizes_plain_path(self):
        db = TextObjectDb[str]()
        db.set_value(Path("/docs/read me"), "text")
        assert db.get_value("/docs/read me") == "text"
