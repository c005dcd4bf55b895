"""Unit tests for FileNode and FileTree."""

import pytest

from treeassert.exceptions import FormatError
from treeassert.file_tree.file_mode import FileMode
from treeassert.file_tree.file_node import FileNode, FileTree


@pytest.fixture
def sample_tree():
    """Create a sample tree:

    file 1
    folder 2/
        file 2        perm 0755
        file 4
        folder 3/     mode Dir|Sticky
            file 3
        folder 4/
    """
    folder_3 = FileNode("folder 3", is_dir=True, tags={"mode": FileMode.DIR | FileMode.STICKY})
    FileNode("file 3", parent=folder_3)
    folder_2 = FileNode(
        "folder 2",
        is_dir=True,
        children=[
            FileNode("file 2", tags={"perm": 0o755}),
            FileNode("file 4"),
            folder_3,
            FileNode("folder 4", is_dir=True),
        ],
    )
    return FileTree.from_nodes([FileNode("file 1"), folder_2])


def test_node_creation():
    node = FileNode("a.txt", tags={"perm": 0o644})

    assert node.name == "a.txt"
    assert node.is_dir is False
    assert node.tags.perm == 0o644
    assert node.children == ()


def test_entries(sample_tree):
    folder = sample_tree["folder 2"]

    assert sorted(folder.entries) == ["file 2", "file 4", "folder 3", "folder 4"]
    assert folder.entries["folder 4"].entries == {}
    assert sample_tree["file 1"].entries is None


def test_flatten(sample_tree):
    flat = sample_tree.flatten()

    assert sorted(flat) == [
        "file 1",
        "folder 2",
        "folder 2/file 2",
        "folder 2/file 4",
        "folder 2/folder 3",
        "folder 2/folder 3/file 3",
        "folder 2/folder 4",
    ]
    assert flat["folder 2/file 2"].tags.perm == 0o755
    assert flat["folder 2/folder 3"].is_dir


def test_flatten_with_root(sample_tree):
    flat = sample_tree["folder 2"].flatten("base")
    assert "base/folder 2/folder 3/file 3" in flat
    assert "base/folder 2" in flat


def test_flatten_subtree_is_relative_to_its_parent(sample_tree):
    folder_3 = sample_tree["folder 2"].entries["folder 3"]
    assert sorted(folder_3.flatten()) == ["folder 3", "folder 3/file 3"]


def test_flatten_returns_new_mapping(sample_tree):
    first = sample_tree.flatten()
    first.clear()

    assert len(sample_tree.flatten()) == 7


def test_from_nodes_later_wins():
    tree = FileTree.from_nodes([FileNode("a"), FileNode("a", tags={"perm": 0o600})])

    assert len(tree) == 1
    assert tree["a"].tags.perm == 0o600


def test_equality(sample_tree):
    other = FileNode("folder 2", is_dir=True, children=[FileNode("file 4")])

    assert FileNode("a", tags={"perm": 0o644}) == FileNode("a", tags={"perm": 0o644})
    assert FileNode("a", tags={"perm": 0o644}) != FileNode("a", tags={"perm": 0o600})
    assert FileNode("a") != FileNode("a", is_dir=True)
    assert sample_tree["folder 2"] != other


def test_nodes_are_unhashable():
    with pytest.raises(TypeError):
        hash(FileNode("a"))


class TestFileNodeErrors:
    """Invalid hierarchies are rejected when they are built."""

    def test_empty_name(self):
        with pytest.raises(FormatError, match="file name is empty"):
            FileNode("")

    def test_file_cannot_have_children(self):
        parent = FileNode("file.txt")
        with pytest.raises(FormatError, match="is not a directory"):
            FileNode("child", parent=parent)

    def test_duplicate_child_names(self):
        with pytest.raises(FormatError, match="already contains"):
            FileNode("folder", is_dir=True, children=[FileNode("x"), FileNode("x")])

    def test_failed_attach_keeps_existing_children(self):
        folder = FileNode("folder", is_dir=True, children=[FileNode("x")])
        with pytest.raises(FormatError):
            FileNode("x", parent=folder)
        assert [child.name for child in folder.children] == ["x"]
