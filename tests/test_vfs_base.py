"""Tests for VFS node classes: Folder and File."""

import re

import pytest

from vfshell.vfs.base import File, Folder, NodeType


@pytest.fixture
def tree():
    """
    Structure:
        /
        ├── docs/
        │   ├── a.txt
        │   └── archive/
        │       └── a.txt
        └── b.log
    """
    root = Folder("")
    docs = Folder("docs")
    archive = Folder("archive")
    root.add(docs)
    root.add(File("b.log", "log"))
    docs.add(File("a.txt", "first"))
    docs.add(archive)
    archive.add(File("a.txt", "second"))
    return root


class TestValidation:
    """Name rules for files and folders."""

    @pytest.mark.parametrize("name", ["docs", "my-folder", "x_1", ""])
    def test_valid_folder_names(self, name):
        assert Folder(name).validate() is True

    @pytest.mark.parametrize("name", ["a/b", "a.b", ".", "..", "/"])
    def test_invalid_folder_names(self, name):
        assert Folder(name).validate() is False

    @pytest.mark.parametrize("name", ["notes.txt", ".hidden", "..", "plain"])
    def test_valid_file_names(self, name):
        assert File(name).validate() is True

    def test_file_name_with_separator_is_invalid(self):
        assert File("a/b.txt").validate() is False

    def test_node_types(self):
        assert Folder("x").node_type == NodeType.FOLDER
        assert File("x").node_type == NodeType.FILE


class TestFolderChildren:
    """Adding, removing and looking up children."""

    def test_add_keeps_insertion_order(self):
        folder = Folder("f")
        for name in ["c", "a", "b"]:
            folder.add(Folder(name))

        assert [child.name for child in folder.list_children()] == ["c", "a", "b"]

    def test_add_sets_back_references(self):
        folder = Folder("f")
        sub = Folder("sub")
        leaf = File("leaf")

        folder.add(sub)
        folder.add(leaf)

        assert sub.parent is folder
        assert leaf.folder is folder

    def test_names_unique_across_kinds(self):
        folder = Folder("f")
        assert folder.add(File("same")) is True
        assert folder.add(Folder("same")) is False
        assert folder.add(File("same")) is False
        assert len(folder.children) == 1

    def test_remove(self, tree):
        assert tree.remove("docs") is True
        assert tree.has("docs") is False
        assert tree.remove("docs") is False

    def test_typed_lookups(self, tree):
        assert tree.get_folder("docs") is not None
        assert tree.get_file("docs") is None
        assert tree.get_file("b.log") is not None
        assert tree.get_folder("b.log") is None
        assert tree.get("b.log").contents == "log"

    def test_list_children_returns_copy(self, tree):
        children = tree.list_children()
        children.clear()
        assert len(tree.children) == 2


class TestClone:
    """Deep copies of nodes."""

    def test_file_clone_copies_content_and_permissions(self):
        source_file = File("a.txt", "data", permissions="rw")
        source_file.folder = Folder("somewhere")

        copy = source_file.clone()

        assert copy is not source_file
        assert copy.name == "a.txt"
        assert copy.contents == "data"
        assert copy.permissions == "rw"
        assert copy.folder is None

    def test_folder_clone_is_deep_and_reparented(self, tree):
        docs = tree.get_folder("docs")

        copy = docs.clone()

        assert copy.parent is None
        archive_copy = copy.get_folder("archive")
        assert archive_copy is not docs.get_folder("archive")
        assert archive_copy.parent is copy
        assert copy.get_file("a.txt").folder is copy

    def test_folder_clone_is_independent(self, tree):
        docs = tree.get_folder("docs")
        copy = docs.clone()

        copy.get_file("a.txt").contents = "changed"
        copy.get_folder("archive").remove("a.txt")

        assert docs.get_file("a.txt").contents == "first"
        assert docs.get_folder("archive").get_file("a.txt") is not None


class TestFind:
    """Name search below a folder."""

    def test_find_preorder(self, tree):
        docs = tree.get_folder("docs")
        results = tree.find("a.txt")

        assert len(results) == 2
        assert results[0] is docs.get_file("a.txt")
        assert results[1] is docs.get_folder("archive").get_file("a.txt")

    def test_find_direct_child_first(self):
        root = Folder("")
        sub = Folder("sub")
        root.add(sub)
        sub.add(File("x"))
        root.add(File("x"))

        results = root.find("x")

        assert results[0].folder is root
        assert results[1].folder is sub

    def test_find_folders_too(self, tree):
        results = tree.find("archive")
        assert len(results) == 1
        assert isinstance(results[0], Folder)

    def test_find_excludes_self(self, tree):
        assert tree.get_folder("docs").find("docs") == []

    def test_find_nothing(self, tree):
        assert tree.find("missing") == []


class TestFilesMatching:
    """Regex matching on direct child files."""

    def test_matches_anywhere_in_name(self, tree):
        docs = tree.get_folder("docs")
        assert [f.name for f in docs.get_files_matching("txt")] == ["a.txt"]

    def test_skips_folders(self, tree):
        docs = tree.get_folder("docs")
        assert docs.get_files_matching("arch") == []

    def test_compiled_pattern(self, tree):
        assert [f.name for f in tree.get_files_matching(re.compile(r"\.log$"))] == ["b.log"]


class TestPaths:
    """String rendering of node paths."""

    def test_root_renders_empty(self, tree):
        assert str(tree) == ""

    def test_folder_path(self, tree):
        archive = tree.get_folder("docs").get_folder("archive")
        assert str(archive) == "/docs/archive"

    def test_file_path(self, tree):
        archive = tree.get_folder("docs").get_folder("archive")
        assert str(archive.get_file("a.txt")) == "/docs/archive/a.txt"

    def test_detached_file_renders_name(self):
        assert str(File("loose.txt")) == "loose.txt"

    def test_get_info(self, tree):
        info = tree.get_folder("docs").get_info()
        assert info["type"] == "folder"
        assert info["children_count"] == 2
        assert info["path"] == "/docs"

        file_info = tree.get_file("b.log").get_info()
        assert file_info["type"] == "file"
        assert file_info["size"] == 3
        assert file_info["path"] == "/b.log"
