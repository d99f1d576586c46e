"""Test configuration and fixtures for flatten."""

from pathlib import Path
from typing import Dict, Union

import pytest


def write_tree(root: Path, files: Dict[str, Union[str, bytes, None]]) -> Path:
    """Create files below root. A value of None creates a directory."""
    for rel_path, content in files.items():
        path = root / rel_path
        if content is None:
            path.mkdir(parents=True, exist_ok=True)
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content)
    return root


@pytest.fixture
def make_tree(tmp_path):
    """Return a helper that builds a directory tree inside tmp_path."""

    def _make_tree(files: Dict[str, Union[str, bytes, None]]) -> Path:
        return write_tree(tmp_path, files)

    return _make_tree


@pytest.fixture
def project_dir(make_tree):
    """A small project with an ignore file, VCS metadata, a binary and a duplicate."""
    return make_tree(
        {
            ".gitignore": "*.log\nbuild/\n",
            ".git/config": "[core]\n",
            ".git/objects/ab/cdef": b"\x00\x01",
            "main.go": "package main\n",
            "README.md": "# Project\n",
            "debug.log": "noise\n",
            "nested/dir/debug.log": "more noise\n",
            "build/out.txt": "artifact\n",
            "docs/copy.go": "package main\n",
            "assets/logo.png": b"\x89PNG\r\n\x1a\n\x00\x00",
            "empty": None,
        }
    )
