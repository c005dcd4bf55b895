"""Test configuration and fixtures for treeassert."""

import os

import pytest


@pytest.fixture
def project_directory(tmp_path):
    """Create a small directory tree with known permissions.

    Layout::

        README.md       0644
        bin/            0755
            tool        0755
        docs/           0755
            index.md    0644
        empty/          0755
    """
    (tmp_path / "README.md").write_text("# Project")
    (tmp_path / "bin").mkdir()
    (tmp_path / "bin" / "tool").write_text("#!/bin/sh\n")
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "index.md").write_text("Documentation")
    (tmp_path / "empty").mkdir()

    for path in ("README.md", "docs/index.md"):
        os.chmod(tmp_path / path, 0o644)
    for path in ("bin", "bin/tool", "docs", "empty"):
        os.chmod(tmp_path / path, 0o755)

    return tmp_path


@pytest.fixture
def project_spec():
    """Specification matching ``project_directory`` exactly."""
    return """
- README.md 'perm:"0644"'
- bin 'perm:"0755"':
    - tool 'perm:"0755"'
- docs:
    - index.md
- empty 'mode:"Dir"':
"""
