"""Node representation for expected files and directories."""

import posixpath
from typing import Any, Dict, Iterable, Mapping, Optional

from anytree import NodeMixin, PreOrderIter

from treeassert.exceptions import FormatError
from treeassert.file_tree.tags import FileModeTags


class FileNode(NodeMixin):  # type: ignore
    """An expected file or directory together with its tag constraints.

    Extends anytree.NodeMixin, so every node has at most one parent and the hierarchy
    can never contain cycles. Children are attached through ``parent`` or ``children``
    exactly as with any anytree node; the name-keyed view of a directory's children is
    available as :attr:`entries`.

    Attributes:
        name (str): The entry name (a single path component, never empty).
        is_dir (bool): True for directories, False for files.
        tags (FileModeTags): Mode and permission constraints; empty means unconstrained.
        children (tuple[FileNode]): The child nodes (inherited from anytree.NodeMixin).

    Example:
        >>> folder = FileNode("folder", is_dir=True)
        >>> _ = FileNode("file.txt", parent=folder)
        >>> sorted(folder.flatten())
        ['folder', 'folder/file.txt']
    """

    def __init__(
        self,
        name: str,
        is_dir: bool = False,
        tags: Optional[Mapping[str, int]] = None,
        parent: Optional["FileNode"] = None,
        children: Optional[Iterable["FileNode"]] = None,
    ) -> None:
        """Initialize a FileNode.

        Args:
            name: The name of the file or directory.
            is_dir: Whether this node is a directory. Defaults to False.
            tags: Mode constraints keyed by ``mode``, ``type`` or ``perm``. Defaults to None.
            parent: The parent directory node. Defaults to None.
            children: Initial child nodes, only valid for directories. Defaults to None.

        Raises:
            FormatError: If the name is empty, if children are given to a file, or if two
                children share a name.
        """
        if not name:
            raise FormatError("file name is empty")

        self.name = name
        self.is_dir = is_dir
        self.tags = FileModeTags(tags or {})
        self.parent = parent
        if children:
            self.children = children

    def _pre_attach(self, parent: "FileNode") -> None:
        if not parent.is_dir:
            raise FormatError(f"{parent.name!r} is not a directory and cannot contain {self.name!r}")
        if any(sibling.name == self.name for sibling in parent.children):
            raise FormatError(f"{parent.name!r} already contains {self.name!r}")

    @property
    def entries(self) -> Optional["FileTree"]:
        """The children keyed by name, or None for files."""
        if not self.is_dir:
            return None
        return FileTree.from_nodes(self.children)

    def flatten(self, root: str = "") -> Dict[str, "FileNode"]:
        """Map the path of this node and of every descendant to its node.

        Paths are joined with forward slashes below ``root``. Directories are included,
        not only leaves. A new mapping is returned on every call.

        Args:
            root: Prefix for every path. Defaults to "" (paths relative to this node's parent).
        """
        depth = self.depth
        result = {}
        for node in PreOrderIter(self):
            names = [ancestor.name for ancestor in node.path[depth:]]
            result[posixpath.join(root, *names)] = node
        return result

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, FileNode):
            return NotImplemented
        return (
            self.name == other.name
            and self.is_dir == other.is_dir
            and self.tags == other.tags
            and self.entries == other.entries
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"FileNode({self.name!r}, is_dir={self.is_dir!r}, tags={dict(self.tags)!r})"


class FileTree(Dict[str, FileNode]):
    """One level of an expected hierarchy: a mapping from entry name to node.

    The mapping carries no order; :func:`treeassert.file_tree.serializer.dump_tree`
    sorts entries by name.
    """

    @classmethod
    def from_nodes(cls, nodes: Iterable[FileNode]) -> "FileTree":
        """Build a level from nodes, later nodes replacing earlier ones with the same name."""
        return cls((node.name, node) for node in nodes)

    def flatten(self, root: str = "") -> Dict[str, FileNode]:
        """Map every path in this level and below to its node.

        Example:
            >>> tree = FileTree.from_nodes([FileNode("a", is_dir=True, children=[FileNode("b")])])
            >>> sorted(tree.flatten())
            ['a', 'a/b']
        """
        result: Dict[str, FileNode] = {}
        for node in self.values():
            result.update(node.flatten(root))
        return result
