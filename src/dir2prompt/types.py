from enum import Enum
from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class PermissionAction(str, Enum):
    """What the batch traversal does with a directory it cannot list.

    Attributes:
        IGNORE: Skip the directory's contents and keep walking (default)
        RAISE: Stop with a DirectoryLoadError
    """

    IGNORE = "ignore"
    RAISE = "raise"
