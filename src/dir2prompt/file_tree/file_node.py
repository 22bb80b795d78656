"""Node representation for entries of the navigable file tree."""

from pathlib import Path
from typing import Any, Optional

from anytree import Node

from dir2prompt.types import PathType


class FileNode(Node):  # type: ignore
    """Node class representing a file or directory in the navigable tree.

    Extends anytree.Node with the state the interactive view needs: whether the node is
    expanded, whether the user selected it, its depth for indentation, and whether its
    children have been listed yet. A node owns its children; they are only ever replaced as a
    whole by a lazy load.

    Note that anytree already uses ``path`` for the tuple of nodes from the root to this one,
    so the filesystem location is kept in ``file_path``.

    Attributes:
        name (str): Display name (the basename).
        file_path (Path): Absolute filesystem path.
        is_directory (bool): True if the entry is a directory (symlinks to directories count).
        is_symlink (bool): True if the entry itself is a symbolic link.
        is_expanded (bool): Whether children are shown. Display state only.
        is_selected (bool): User-facing selection flag, set independently of any inclusion
            decision.
        level (int): Depth from the browsing root; root-level entries are at level 0.
        children_loaded (bool): Whether the directory listing has been read successfully.

    Example:
        >>> root = FileNode("src", "/repo/src", is_directory=True)
        >>> child = FileNode("main.py", "/repo/src/main.py", level=1, parent=root)
        >>> child.file_path.as_posix()
        '/repo/src/main.py'
        >>> root.children_loaded, child.is_selected
        (False, False)
    """

    def __init__(
        self,
        name: str,
        file_path: PathType,
        level: int = 0,
        is_directory: bool = False,
        is_symlink: bool = False,
        parent: Optional["FileNode"] = None,
        **kwargs: Any,
    ) -> None:
        """Initialize a FileNode.

        Args:
            name: The display name of the file or directory.
            file_path: The absolute path of the entry.
            level: Depth from the browsing root. Defaults to 0.
            is_directory: Whether this node represents a directory. Defaults to False.
            is_symlink: Whether this node represents a symbolic link. Defaults to False.
            parent: The parent node. Defaults to None.
            **kwargs: Additional arguments passed to anytree.Node.
        """
        super().__init__(name, parent, **kwargs)
        self.file_path = Path(file_path)
        self.level = level
        self.is_directory = is_directory
        self.is_symlink = is_symlink
        self.is_expanded = False
        self.is_selected = False
        self.children_loaded = False

    @classmethod
    def from_path(cls, file_path: PathType, level: int = 0) -> "FileNode":
        """Create an unselected, collapsed, unloaded node for an existing filesystem entry.

        The entry's type is read from the filesystem. Entries that cannot be inspected are
        treated as plain files.
        """
        path = Path(file_path)
        try:
            is_directory = path.is_dir()
            is_symlink = path.is_symlink()
        except OSError:
            is_directory = is_symlink = False
        return cls(path.name or str(path), path, level=level, is_directory=is_directory, is_symlink=is_symlink)

    def __repr__(self) -> str:
        kind = "dir" if self.is_directory else "file"
        return f"FileNode({self.file_path.as_posix()!r}, {kind}, level={self.level}, selected={self.is_selected})"
