"""Command-line interface for treeassert."""
