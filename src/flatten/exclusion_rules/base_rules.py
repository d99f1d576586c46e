from abc import ABC, abstractmethod


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for file/directory exclusion rules.

    Concrete rule sets (ignore-file patterns, glob lists, size limits) are compiled once
    when constructed and are immutable afterwards, so a single instance can be consulted
    for every entry of a walk.

    Paths handed to exclude() are relative to the filtered root, use forward slashes as
    separators, and carry a trailing slash when they name a directory.

    Example:
        >>> class TmpRules(BaseExclusionRules):
        ...     def exclude(self, path: str) -> bool:
        ...         return path.endswith('.tmp')
        >>> rules = TmpRules()
        >>> rules.exclude("build/temp.tmp")
        True
        >>> rules.exclude("main.py")
        False
        >>> rules.has_rules()
        True
    """

    @abstractmethod
    def exclude(self, path: str) -> bool:
        """
        Determine if a given path should be excluded.

        Args:
            path (str): The path to check, relative to the root being processed.
                Directory paths end with "/".

        Returns:
            bool: True if the path should be excluded, False if it should be included.
        """
        pass

    def has_rules(self) -> bool:
        """
        Report whether this rule set can exclude anything at all.

        Callers use this to skip work for empty rule sets. The default implementation
        assumes rules are configured.

        Returns:
            bool: True if the rule set holds at least one effective rule.
        """
        return True
