"""Root-relative filter configuration shared by the interactive and batch paths."""

from dataclasses import dataclass, field
from typing import List, Set


@dataclass
class FilterConfig:
    """Pattern lists and explicit overrides that drive every inclusion decision.

    A path is never in both explicit sets at once. The selection session keeps that
    invariant by always removing a path from one set before inserting it into the other, and
    is the only writer of this object while a session is active.

    Attributes:
        include_patterns: Ordered glob patterns selecting paths. Empty means "include
            everything that is not excluded".
        exclude_patterns: Ordered glob patterns rejecting paths.
        explicit_includes: Root-relative paths forced in, overriding patterns.
        explicit_excludes: Root-relative paths forced out, overriding everything else.

    Example:
        >>> config = FilterConfig(include_patterns=["*.py"])
        >>> config.has_overrides()
        False
        >>> config.explicit_excludes.add("setup.py")
        >>> config.has_overrides()
        True
    """

    include_patterns: List[str] = field(default_factory=list)
    exclude_patterns: List[str] = field(default_factory=list)
    explicit_includes: Set[str] = field(default_factory=set)
    explicit_excludes: Set[str] = field(default_factory=set)

    def has_overrides(self) -> bool:
        return bool(self.explicit_includes or self.explicit_excludes)

    def copy(self) -> "FilterConfig":
        """Return an independent copy whose lists and sets can be mutated freely."""
        return FilterConfig(
            include_patterns=list(self.include_patterns),
            exclude_patterns=list(self.exclude_patterns),
            explicit_includes=set(self.explicit_includes),
            explicit_excludes=set(self.explicit_excludes),
        )
