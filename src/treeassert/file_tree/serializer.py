"""Render a file tree as canonical specification text."""

from typing import Any, List, Mapping, Union

import yaml

from treeassert.file_tree.file_node import FileNode


class _SpecDumper(yaml.SafeDumper):
    """Dumper that indents nested lists below their directory key."""

    def increase_indent(self, flow: bool = False, indentless: bool = False) -> None:
        return super().increase_indent(flow, False)


def dump_tree(tree: Mapping[str, FileNode]) -> str:
    """Serialize a tree level into specification text.

    Entries are sorted by name. Files render as ``name`` or ``name 'tags'``; directories
    render as single-key mappings whose value is their children, or ``{}`` when they have
    none. Parsing the result with :func:`treeassert.file_tree.parser.parse_tree` yields
    an equal tree, except for names with leading or trailing spaces: the parser trims
    those, so ``"a "`` comes back as ``"a"``.

    Args:
        tree: The level to serialize, usually a FileTree.

    Returns:
        The YAML text, ending with a newline.

    Example:
        >>> from treeassert.file_tree.file_node import FileNode, FileTree
        >>> print(dump_tree(FileTree.from_nodes([FileNode("b"), FileNode("a", tags={"perm": 0o644})])), end="")
        - a 'perm:"0644"'
        - b
    """
    return yaml.dump(
        _represent_level(tree),
        Dumper=_SpecDumper,
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False,
        width=float("inf"),
    )


def _represent_level(tree: Mapping[str, FileNode]) -> Union[List[Any], Mapping[str, Any]]:
    if not tree:
        return {}
    return [_represent_node(tree[name]) for name in sorted(tree)]


def _represent_node(node: FileNode) -> Union[str, Mapping[str, Any]]:
    key = node.name
    tags = str(node.tags)
    if tags:
        key = f"{key} '{tags}'"

    if not node.is_dir:
        return key

    return {key: _represent_level(node.entries or {})}
