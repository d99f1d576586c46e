"""Exclusion rules for filtering files and directories."""

from .base_rules import BaseExclusionRules
from .git_rules import GitIgnoreExclusionRules
from .glob_rules import GlobExclusionRules
from .size_rules import SizeExclusionRules

__all__ = [
    "BaseExclusionRules",
    "GitIgnoreExclusionRules",
    "GlobExclusionRules",
    "SizeExclusionRules",
]
