from typing import Optional

from dir2prompt.types import PathType


class ConfigurationError(ValueError):
    """
    Exception raised when a pattern list cannot be compiled.

    The whole pattern list is rejected: no partial matcher is produced, and callers keep
    whatever matcher they had before the failed compilation.

    Attributes:
        pattern (str): The pattern that failed to compile.
        reason (str): Why the pattern was rejected.

    Example:
        >>> error = ConfigurationError("!", "nothing to negate")
        >>> str(error)
        "Invalid pattern '!': nothing to negate"
        >>> error.pattern
        '!'
    """

    def __init__(self, pattern: str, reason: str) -> None:
        """
        Initialize the exception with the offending pattern.

        Args:
            pattern (str): The pattern that failed to compile.
            reason (str): Description of the compilation failure.
        """
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")


class DirectoryLoadError(OSError):
    """
    Exception raised when the entries of a directory cannot be listed.

    Raised while lazily loading a tree node's children (and by the batch traversal when
    configured to raise). The failure is scoped to one directory: the node stays unloaded so
    the listing can be retried.

    Attributes:
        path (str): The directory that could not be listed.
        reason (str): Description of the underlying failure.

    Example:
        >>> error = DirectoryLoadError("/srv/private", "Permission denied")
        >>> str(error)
        'Cannot list directory /srv/private: Permission denied'
        >>> error.path
        '/srv/private'
    """

    def __init__(self, path: PathType, reason: Optional[str] = None) -> None:
        """
        Initialize the exception with the path of the unreadable directory.

        Args:
            path: The directory that could not be listed.
            reason (str, optional): Description of the failure. Defaults to "unreadable".
        """
        self.path = str(path)
        self.reason = reason or "unreadable"
        super().__init__(f"Cannot list directory {self.path}: {self.reason}")
