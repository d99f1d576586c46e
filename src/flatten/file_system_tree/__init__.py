"""In-memory tree of visible filesystem entries.

This package provides the Entry node type, the recursive TreeBuilder that fills it
from a directory walk, and the binary file detection used while filtering.
"""
