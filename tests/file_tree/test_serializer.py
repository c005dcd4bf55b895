"""Unit tests for the specification serializer."""

from treeassert.file_tree.file_mode import FileMode
from treeassert.file_tree.file_node import FileNode, FileTree
from treeassert.file_tree.parser import parse_tree
from treeassert.file_tree.serializer import dump_tree


def test_dump_sorted_and_indented():
    spec = """
- folder 2:
    - folder 4 'mode:"Dir|Temporary"':
    - file 4
    - folder 3 'mode:"Dir|Sticky" type:"Dir" perm:"0644"':
        - file 3
    - file 2 'perm:"0755"'
- file 1
"""
    expected = """\
- file 1
- folder 2:
    - file 2 'perm:"0755"'
    - file 4
    - folder 3 'mode:"Dir|Sticky" type:"Dir" perm:"0644"':
        - file 3
    - folder 4 'mode:"Dir|Temporary"': {}
"""
    assert dump_tree(parse_tree(spec)) == expected


def test_dump_empty_tree():
    assert dump_tree(FileTree()) == "{}\n"
    assert parse_tree(dump_tree(FileTree())) == {}


def test_dump_then_parse_gives_equal_tree():
    tree = FileTree.from_nodes(
        [
            FileNode("README.md", tags={"perm": 0o644}),
            FileNode(
                "src",
                is_dir=True,
                tags={"mode": FileMode.DIR},
                children=[
                    FileNode("main.py"),
                    FileNode("pkg", is_dir=True, children=[FileNode("__init__.py", tags={"mode": 0})]),
                    FileNode("empty", is_dir=True),
                ],
            ),
            FileNode("link", tags={"mode": FileMode.SYMLINK, "perm": 0o777}),
        ]
    )

    assert parse_tree(dump_tree(tree)) == tree


def test_dump_names_needing_quotes():
    tree = FileTree.from_nodes(
        [
            FileNode("name: with colon"),
            FileNode("123"),
            FileNode("true", is_dir=True),
            FileNode("- dash"),
            FileNode("#hash"),
        ]
    )

    assert parse_tree(dump_tree(tree)) == tree


def test_dump_unicode_names():
    tree = FileTree.from_nodes([FileNode("résumé.txt"), FileNode("日本語", is_dir=True)])
    text = dump_tree(tree)

    assert "résumé.txt" in text
    assert parse_tree(text) == tree


def test_dump_trims_spaces_around_names():
    tree = FileTree.from_nodes([FileNode("a ", tags={"perm": 0o644}), FileNode(" b")])

    parsed = parse_tree(dump_tree(tree))

    assert sorted(parsed) == ["a", "b"]
    assert parsed["a"].tags.perm == 0o644
