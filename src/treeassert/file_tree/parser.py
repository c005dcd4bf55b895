"""Parse the YAML specification of an expected file tree.

The specification is a YAML list. A plain string is a file; a single-key mapping is
a directory whose value is the list of its children. Either may end with a tag block
in single quotes::

    - file 1
    - folder 2:
        - file 2 'perm:"0755"'
        - folder 3 'mode:"Dir|Sticky" perm:"0644"':
            - file 3
        - folder 4:
"""

import logging
import re
from pathlib import Path
from typing import FrozenSet, List, Optional, Tuple

import yaml

from treeassert.exceptions import FormatError
from treeassert.file_tree.file_node import FileNode, FileTree
from treeassert.file_tree.tags import FileModeTags
from treeassert.types import PathType

logger = logging.getLogger(__name__)

TAG_PATTERN = re.compile(r"\s*'[^`]+'\Z")

_YAML_TAG_PREFIX = "tag:yaml.org,2002:"
_NULL_TAG = _YAML_TAG_PREFIX + "null"


def parse_tree(text: str) -> FileTree:
    """Parse specification text into a FileTree.

    Args:
        text: The YAML specification.

    Returns:
        The top level of the expected tree. An empty document yields an empty tree.

    Raises:
        FormatError: If the text is not valid YAML or does not have the expected shape.
        ModeError: If a tag holds an invalid file mode.

    Example:
        >>> tree = parse_tree("- a.txt\\n- docs:\\n    - index.md\\n")
        >>> sorted(tree.flatten())
        ['a.txt', 'docs', 'docs/index.md']
    """
    try:
        document = yaml.compose(text, Loader=yaml.SafeLoader)
    except yaml.MarkedYAMLError as e:
        line = e.problem_mark.line + 1 if e.problem_mark is not None else None
        raise FormatError(f"invalid YAML: {e.problem}", line) from e
    except yaml.YAMLError as e:
        raise FormatError(f"invalid YAML: {e}") from e

    tree = FileTree.from_nodes(_parse_level(document))
    logger.debug("Parsed specification with %d top-level entries", len(tree))
    return tree


def load_tree(path: PathType) -> FileTree:
    """Read and parse a specification file.

    Raises:
        OSError: If the file cannot be read.
        FormatError: See :func:`parse_tree`.
        ModeError: See :func:`parse_tree`.
    """
    return parse_tree(Path(path).read_text(encoding="utf-8"))


def _parse_level(node: Optional[yaml.Node], enclosing: FrozenSet[int] = frozenset()) -> List[FileNode]:
    """Parse one list of entries. Null and empty mappings are empty levels.

    ``enclosing`` holds the ids of the levels being parsed above this one; an alias
    leading back to one of them would make the tree infinite.
    """
    if node is None or _is_null(node):
        return []
    if isinstance(node, yaml.MappingNode) and not node.value:
        return []
    if not isinstance(node, yaml.SequenceNode):
        raise FormatError(f"expected a sequence of entries but got {_short_tag(node)}", _line(node))
    if id(node) in enclosing:
        raise FormatError("invalid file tree format", _line(node))
    enclosing = enclosing | {id(node)}

    entries: List[FileNode] = []
    seen = set()
    for item in node.value:
        entry = _parse_entry(item, enclosing)
        if entry.name in seen:
            logger.debug("Entry %r at line %d replaces an earlier entry", entry.name, _line(item))
            entries = [e for e in entries if e.name != entry.name]
        seen.add(entry.name)
        entries.append(entry)
    return entries


def _parse_entry(node: yaml.Node, enclosing: FrozenSet[int]) -> FileNode:
    if isinstance(node, yaml.ScalarNode):
        name, tags = _parse_name(node)
        return FileNode(name, tags=tags)

    if isinstance(node, yaml.MappingNode):
        return _parse_directory(node, enclosing)

    raise FormatError(
        f"invalid file tree format, expected !!str or !!map but got {_short_tag(node)}",
        _line(node),
    )


def _parse_directory(node: yaml.MappingNode, enclosing: FrozenSet[int]) -> FileNode:
    if len(node.value) != 1:
        raise FormatError("invalid file tree format", _line(node))

    key, value = node.value[0]
    if not isinstance(key, yaml.ScalarNode):
        raise FormatError(f"invalid file tree format, expected !!str but got {_short_tag(key)}", _line(key))

    name, tags = _parse_name(key)
    children = _parse_level(value, enclosing)

    directory = FileNode(name, is_dir=True, tags=tags)
    directory.children = children
    return directory


def _parse_name(node: yaml.ScalarNode) -> Tuple[str, FileModeTags]:
    """Split a scalar into the entry name and its optional tag block."""
    value = "" if _is_null(node) else node.value
    line = _line(node)

    match = TAG_PATTERN.search(value)
    name = value.strip(" ") if match is None else value[: match.start()]
    if not name:
        raise FormatError("file name is empty", line)

    if match is None:
        return name, FileModeTags()
    return name, FileModeTags.parse(match.group().strip(" `'"), line)


def _is_null(node: yaml.Node) -> bool:
    return isinstance(node, yaml.ScalarNode) and node.tag == _NULL_TAG


def _short_tag(node: yaml.Node) -> str:
    tag = node.tag or ""
    if tag.startswith(_YAML_TAG_PREFIX):
        return "!!" + tag[len(_YAML_TAG_PREFIX) :]
    return tag


def _line(node: yaml.Node) -> int:
    return node.start_mark.line + 1
