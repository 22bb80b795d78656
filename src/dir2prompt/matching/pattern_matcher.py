"""Compilation of ordered glob pattern lists into read-only matchers."""

import logging
from pathlib import Path
from typing import List, Sequence, Tuple

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern  # type: ignore

from dir2prompt.exceptions import ConfigurationError
from dir2prompt.types import PathType

logger = logging.getLogger(__name__)


class CompiledMatcher:
    """Read-only matcher built from an ordered list of glob patterns.

    Patterns follow .gitignore wildcard syntax as implemented by the pathspec library:

    - Basic globs (*, ?, [abc], [0-9], etc.)
    - Directory-specific patterns (ending in /)
    - Root-anchored patterns (starting with /)
    - Double-asterisk matching (**)
    - Comment lines (starting with #) and blank lines, which match nothing

    A pattern without a slash matches at any depth, so ``*.txt`` matches both ``a.txt`` and
    ``docs/a.txt``.

    A matcher is never mutated. When the source pattern list changes a new matcher must be
    compiled; no method adds a pattern to an existing instance.

    Attributes:
        patterns (Tuple[str, ...]): The source patterns, in their original order.

    Example:
        >>> matcher = CompiledMatcher(["*.txt", "build/"])
        >>> matcher.matches("notes/a.txt")
        True
        >>> matcher.matches("build/output.o")
        True
        >>> matcher.matches("main.py")
        False
        >>> CompiledMatcher([]).is_empty
        True
    """

    def __init__(self, patterns: Sequence[str] = ()):
        """Compile each pattern of the list.

        Args:
            patterns: Ordered glob patterns. Order is preserved for display only.

        Raises:
            ConfigurationError: If any pattern is syntactically invalid. No matcher is
                produced in that case.
        """
        compiled: List[GitWildMatchPattern] = []
        for pattern in patterns:
            try:
                compiled.append(GitWildMatchPattern(pattern))
            except (ValueError, TypeError) as e:
                raise ConfigurationError(str(pattern), str(e)) from e

        self._patterns: Tuple[str, ...] = tuple(patterns)
        self._spec = PathSpec(compiled)
        # Comments and blank lines compile to patterns with include=None
        self._is_empty = not any(p.include is not None for p in compiled)

    @property
    def patterns(self) -> Tuple[str, ...]:
        return self._patterns

    @property
    def is_empty(self) -> bool:
        """True when no effective pattern was compiled (comments and blank lines excluded)."""
        return self._is_empty

    def matches(self, path: str) -> bool:
        """Check whether a root-relative path matches the compiled patterns.

        Args:
            path: Path relative to the root, using forward slashes (/) as separators.

        Returns:
            bool: True if the path matches a pattern that is not overridden by a later
                negation pattern.
        """
        if self._is_empty:
            return False
        return bool(self._spec.match_file(path))

    def __repr__(self) -> str:
        return f"CompiledMatcher(patterns={list(self._patterns)!r})"


def compile_patterns(patterns: Sequence[str]) -> CompiledMatcher:
    """Compile an ordered pattern list into a new matcher.

    Args:
        patterns: Ordered glob patterns.

    Returns:
        A freshly compiled, read-only matcher.

    Raises:
        ConfigurationError: If any individual pattern is invalid.

    Example:
        >>> compile_patterns(["src/**/*.py"]).matches("src/pkg/mod.py")
        True
    """
    matcher = CompiledMatcher(patterns)
    logger.debug("Compiled %d pattern(s): %s", len(matcher.patterns), list(matcher.patterns))
    return matcher


def read_pattern_file(path: PathType) -> List[str]:
    """Read gitignore-style patterns from a file.

    Blank lines and comment lines (starting with #) are dropped; every other line is kept
    verbatim, in order.

    Args:
        path: Path to the pattern file. Can be any path-like object.

    Returns:
        The patterns found in the file.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    pattern_file = Path(path)
    if not pattern_file.exists():
        raise FileNotFoundError(f"Pattern file not found: {pattern_file}")

    with open(pattern_file, "r", encoding="utf-8") as f:
        lines = f.read().splitlines()

    return [line for line in lines if line.strip() and not line.startswith("#")]
