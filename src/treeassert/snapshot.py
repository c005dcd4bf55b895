"""Build the expected tree that describes an existing directory."""

import logging
import os
from typing import Dict, Optional

from treeassert.file_tree.file_mode import PERM_MASK
from treeassert.file_tree.file_node import FileNode, FileTree
from treeassert.filesystem import FileInfo, FileSystem, OsFileSystem, walk

logger = logging.getLogger(__name__)


def snapshot_tree(
    root: str,
    fs: Optional[FileSystem] = None,
    perm: bool = False,
    mode: bool = False,
) -> FileTree:
    """Describe the directory at ``root`` as a FileTree.

    The result matches ``root`` exhaustively as long as the directory does not change,
    which makes it a convenient starting point for writing expectations.

    Args:
        root: Directory to describe. The root itself is not part of the tree.
        fs: Filesystem to read. Defaults to the operating system.
        perm: Add a ``perm`` tag with the permission bits of every entry.
        mode: Add a ``mode`` tag with the mode flags of every entry.

    Returns:
        The entries below ``root``.

    Raises:
        OSError: If the walk fails.

    Example:
        >>> from treeassert.file_tree.serializer import dump_tree
        >>> print(dump_tree(snapshot_tree("src")))  # doctest: +SKIP
        - treeassert:
            - __init__.py
            ...
    """
    fs = fs if fs is not None else OsFileSystem()
    root = os.path.normpath(root)

    tree = FileTree()
    directories: Dict[str, FileNode] = {}

    for path, info in walk(fs, root):
        if path == root:
            continue

        node = FileNode(os.path.basename(path), is_dir=info.is_dir, tags=_tags_for(info, perm, mode))
        parent_path = os.path.dirname(path)
        if parent_path == root:
            tree[node.name] = node
        else:
            node.parent = directories[parent_path]

        if node.is_dir:
            directories[path] = node

    logger.debug("Snapshot of %s has %d top-level entries", root, len(tree))
    return tree


def _tags_for(info: FileInfo, perm: bool, mode: bool) -> Dict[str, int]:
    tags = {}
    if mode:
        tags["mode"] = info.mode & ~PERM_MASK
    if perm:
        tags["perm"] = info.perm
    return tags
