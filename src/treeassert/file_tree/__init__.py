"""Expected file trees: the node model, mode tags and the YAML specification format.

This package provides the in-memory representation of an expected directory layout,
together with the parser and serializer for its textual specification.
"""

from .file_mode import FileMode
from .file_node import FileNode, FileTree
from .parser import load_tree, parse_tree
from .serializer import dump_tree
from .tags import FileModeTags

__all__ = [
    "FileMode",
    "FileModeTags",
    "FileNode",
    "FileTree",
    "dump_tree",
    "load_tree",
    "parse_tree",
]
