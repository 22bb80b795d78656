"""Inclusion decisions combining explicit overrides with include/exclude patterns."""

from os import PathLike
from pathlib import PurePath, PurePosixPath
from typing import AbstractSet

from dir2prompt.types import PathType

from .pattern_matcher import CompiledMatcher


def normalize_relative_path(path: PathType) -> str:
    """Convert a root-relative path to the forward-slash form used for matching.

    Backslashes become forward slashes and `.` segments are dropped, so `./a.txt` and
    `src/./a.txt` name the same entries as `a.txt` and `src/a.txt`.

    Example:
        >>> normalize_relative_path("src/main.py")
        'src/main.py'
        >>> from pathlib import PurePosixPath
        >>> normalize_relative_path(PurePosixPath("src") / "main.py")
        'src/main.py'
        >>> normalize_relative_path("./src/./main.py")
        'src/main.py'
    """
    if isinstance(path, PurePath):
        return path.as_posix()
    if isinstance(path, PathLike):
        path = path.__fspath__()
    return PurePosixPath(str(path).replace("\\", "/")).as_posix()


def decide(
    relative_path: PathType,
    include_matcher: CompiledMatcher,
    exclude_matcher: CompiledMatcher,
    explicit_includes: AbstractSet[str],
    explicit_excludes: AbstractSet[str],
) -> bool:
    """Decide whether a root-relative path is included.

    Precedence, highest first:

    1. The path is an explicit exclude: excluded.
    2. The path is an explicit include: included.
    3. The exclude matcher matches and the include matcher does not (or has no patterns):
       excluded.
    4. The include matcher matches, or has no patterns at all: included.
    5. Otherwise: excluded.

    Both the interactive tree and the batch traversal call this function, so the two always
    agree for the same configuration.

    Args:
        relative_path: Path relative to the root directory.
        include_matcher: Compiled include patterns.
        exclude_matcher: Compiled exclude patterns.
        explicit_includes: Root-relative paths forced in.
        explicit_excludes: Root-relative paths forced out.

    Returns:
        bool: True if the path is included.

    Example:
        >>> from dir2prompt.matching.pattern_matcher import CompiledMatcher
        >>> include, exclude = CompiledMatcher(["*.txt"]), CompiledMatcher([])
        >>> decide("a.txt", include, exclude, set(), set())
        True
        >>> decide("b.log", include, exclude, set(), set())
        False
        >>> decide("a.txt", include, exclude, set(), {"a.txt"})
        False
    """
    path = normalize_relative_path(relative_path)

    if path in explicit_excludes:
        return False
    if path in explicit_includes:
        return True

    include_all = include_matcher.is_empty
    included_by_pattern = include_all or include_matcher.matches(path)

    if exclude_matcher.matches(path) and (include_all or not included_by_pattern):
        return False

    return included_by_pattern
