"""Batch traversal producing the final list of included files.

The walk covers the whole directory independently of the interactive tree and shares no
state with it; it only applies the same inclusion predicate so both agree on every path.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Iterator, NamedTuple, Set, Tuple

from dir2prompt.exceptions import DirectoryLoadError
from dir2prompt.types import PathType, PermissionAction

logger = logging.getLogger(__name__)


class FileIdentifier(NamedTuple):
    """Device and inode pair identifying a directory, used to detect symlink loops."""

    device_id: int
    inode_number: int


class IncludedFileWalker:
    """Walk a directory and yield the files accepted by an inclusion predicate.

    Every directory is descended into; the predicate is applied to regular files only, using
    their forward-slash path relative to the root. Entries are visited in sorted order.

    Symbolic Link Behavior:
        By default symbolic links are skipped. With ``follow_symlinks`` the targets are
        walked as regular files and directories, and a directory already on the current
        branch (same device and inode) is not entered again.

    Permission Handling:
        - IGNORE (default): skip the contents of directories that cannot be listed
        - RAISE: raise DirectoryLoadError for the first such directory

    Attributes:
        root_path (Path): The directory to walk.
        should_include (Callable[[str], bool]): Predicate over root-relative file paths.
        follow_symlinks (bool): Whether to follow symbolic links.
        permission_action (PermissionAction): How to handle unreadable directories.

    Example:
        >>> walker = IncludedFileWalker("src", lambda rel: rel.endswith(".py"))  # doctest: +SKIP
        >>> [rel for _, rel in walker.iterate_files()]  # doctest: +SKIP
        ['main.py', 'utils/helpers.py']
    """

    def __init__(
        self,
        root_path: PathType,
        should_include: Callable[[str], bool],
        follow_symlinks: bool = False,
        permission_action: PermissionAction = PermissionAction.IGNORE,
    ) -> None:
        self.root_path = Path(root_path)
        self.should_include = should_include
        self.follow_symlinks = follow_symlinks
        self.permission_action = permission_action

    def iterate_files(self) -> Iterator[Tuple[str, str]]:
        """Yield ``(absolute_path, relative_path)`` for every included file.

        Raises:
            FileNotFoundError: If the root path doesn't exist.
            NotADirectoryError: If the root path isn't a directory.
            DirectoryLoadError: If a directory cannot be listed and permission_action is RAISE.
        """
        if not self.root_path.exists():
            raise FileNotFoundError(f"Root path does not exist: {self.root_path}")
        if not self.root_path.is_dir():
            raise NotADirectoryError(f"Root path is not a directory: {self.root_path}")

        visited: Set[FileIdentifier] = set()
        yield from self._walk(self.root_path, "", visited)

    def _identify(self, path: Path) -> FileIdentifier:
        try:
            stat_info = path.stat()
            return FileIdentifier(stat_info.st_dev, stat_info.st_ino)
        except OSError:
            # Never equal to a real device/inode pair
            return FileIdentifier(-1, -1)

    def _walk(self, directory: Path, relative_dir: str, visited: Set[FileIdentifier]) -> Iterator[Tuple[str, str]]:
        file_id = self._identify(directory)
        if file_id.device_id != -1:
            if file_id in visited:
                logger.debug("Symlink loop detected at %s", directory)
                return
            visited.add(file_id)

        try:
            entries = sorted(os.listdir(directory))
        except OSError as e:
            if self.permission_action == PermissionAction.RAISE:
                raise DirectoryLoadError(directory, e.strerror or str(e)) from e
            logger.debug("Skipping unreadable directory %s: %s", directory, e)
            entries = []

        for entry in entries:
            path = directory / entry
            relative = f"{relative_dir}/{entry}" if relative_dir else entry

            if path.is_symlink() and not self.follow_symlinks:
                continue

            try:
                is_dir = path.is_dir()
            except OSError:
                is_dir = False

            if is_dir:
                yield from self._walk(path, relative, visited)
            elif path.is_file() and self.should_include(relative):
                yield (str(path), relative)

        # Allow the same directory to be reached again through an unrelated branch
        visited.discard(file_id)
