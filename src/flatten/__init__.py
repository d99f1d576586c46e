"""Directory flattening utilities.

This package walks a directory tree, filters it with ignore-file, VCS, binary
and glob rules, and renders the visible files as a single flat text document
with duplicate detection by content hash.
"""

from importlib.metadata import PackageNotFoundError, version

from flatten.file_system_tree.entry import Entry
from flatten.file_system_tree.tree_builder import TreeBuilder, build
from flatten.renderer import Renderer, RenderOptions, render
from flatten.visibility_filter import FilterOptions, VisibilityFilter

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("flatten")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = [
    "Entry",
    "FilterOptions",
    "RenderOptions",
    "Renderer",
    "TreeBuilder",
    "VisibilityFilter",
    "build",
    "render",
]
