"""Lazily loaded, selectable file tree backing the interactive view.

This module provides the FileTree class, which mirrors a directory as a forest of FileNode
objects. Directory listings are read one level at a time, the first time a directory is
expanded, and selection state is kept per node independently of the inclusion rules.
"""

import logging
import os
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from anytree import PreOrderIter

from dir2prompt.exceptions import DirectoryLoadError
from dir2prompt.matching.search import node_matches
from dir2prompt.types import PathType

from .file_node import FileNode

logger = logging.getLogger(__name__)


class FileTree:
    """A navigable tree of a directory with lazy loading, selection and search.

    Root-level nodes are created from a single, non-recursive listing of the root directory
    the first time the tree is browsed. Each directory's children are created exactly once,
    on its first successful load, and nodes are never removed individually; ``refresh()``
    discards the whole structure.

    Node state machine:
        - ``children_loaded``: False -> True, one way, on the first successful load.
        - ``is_expanded``: freely toggled, display only.

    Nodes are addressed by absolute path through an index, so lookups do not walk the tree.

    Attributes:
        root_path (Path): Absolute path of the directory being browsed.
        search_query (str): Active search query filtering ``visible_nodes()``.
        tree_cursor (int): Index of the highlighted row in ``visible_nodes()``.

    Example:
        >>> tree = FileTree("/path/to/project")  # doctest: +SKIP
        >>> tree.load_root()  # doctest: +SKIP
        >>> tree.load_children("/path/to/project/src")  # doctest: +SKIP
        >>> tree.expand("/path/to/project/src")  # doctest: +SKIP
        >>> [node.name for node in tree.visible_nodes()]  # doctest: +SKIP
        ['src', 'main.py', 'README.md']
    """

    def __init__(self, root_path: PathType) -> None:
        """Initialize a FileTree without touching the filesystem.

        Args:
            root_path: Directory to browse. Relative paths are made absolute.
        """
        self.root_path = Path(root_path).absolute()
        self.search_query = ""
        self.tree_cursor = 0
        self._roots: Tuple[FileNode, ...] = ()
        self._index: Dict[Path, FileNode] = {}
        self._root_loaded = False

    @property
    def roots(self) -> Tuple[FileNode, ...]:
        """Root-level nodes, directories first then by name."""
        return self._roots

    @property
    def root_loaded(self) -> bool:
        return self._root_loaded

    def _absolute(self, path: PathType) -> Path:
        candidate = Path(path)
        if candidate.is_absolute():
            return candidate
        return self.root_path / candidate

    def find(self, path: PathType) -> Optional[FileNode]:
        """Look up a loaded node by absolute or root-relative path.

        Returns:
            The node, or None if no loaded node has that path.
        """
        return self._index.get(self._absolute(path))

    def relative_path(self, node: FileNode) -> str:
        """Return the node's path relative to the root, using forward slashes."""
        try:
            return node.file_path.relative_to(self.root_path).as_posix()
        except ValueError:
            return node.file_path.as_posix()

    def _list_directory(self, directory: Path, level: int) -> List[FileNode]:
        try:
            entries = os.listdir(directory)
        except OSError as e:
            raise DirectoryLoadError(directory, e.strerror or str(e)) from e

        children = [FileNode.from_path(directory / entry, level=level) for entry in entries]
        # Directories first, then lexicographically by name
        children.sort(key=lambda n: (not n.is_directory, n.name))
        return children

    def load_root(self) -> None:
        """List the root directory once and create the root-level nodes.

        A second call is a no-op.

        Raises:
            DirectoryLoadError: If the root directory cannot be listed. The tree stays
                unloaded so the call can be retried.
        """
        if self._root_loaded:
            return

        roots = self._list_directory(self.root_path, level=0)
        self._roots = tuple(roots)
        for node in roots:
            self._index[node.file_path] = node
        self._root_loaded = True
        logger.debug("Loaded %d root entries from %s", len(roots), self.root_path)

    def load_children(self, path: PathType) -> None:
        """Create the children of a directory node from a single listing, once.

        Children start unselected and collapsed at ``level + 1`` regardless of the parent's
        selection. Calling this again for an already loaded directory, for a file node, or
        for a path with no loaded node does nothing.

        Args:
            path: Absolute or root-relative path of the directory node.

        Raises:
            DirectoryLoadError: If the directory cannot be listed (permission denied, path
                vanished, not a directory). ``children_loaded`` stays False so the load can
                be retried.
        """
        node = self.find(path)
        if node is None:
            logger.debug("No loaded node for %s; nothing to load", path)
            return
        if not node.is_directory or node.children_loaded:
            return

        children = self._list_directory(node.file_path, level=node.level + 1)
        node.children = children
        for child in children:
            self._index[child.file_path] = child
        node.children_loaded = True
        logger.debug("Loaded %d entries from %s", len(children), node.file_path)

    def set_selection(self, path: PathType, selected: bool, is_directory: bool) -> None:
        """Set a node's selection flag, propagating to loaded descendants for directories.

        Descendants that have not been loaded yet are not affected: when they are loaded
        later they start unselected whatever their ancestor's flag is.

        Args:
            path: Absolute or root-relative path of the node.
            selected: New selection flag.
            is_directory: When True, every currently loaded descendant receives the same flag.
                When False, only the node itself is updated.
        """
        node = self.find(path)
        if node is None:
            logger.debug("No loaded node for %s; selection unchanged", path)
            return

        node.is_selected = selected
        if is_directory:
            for descendant in node.descendants:
                descendant.is_selected = selected

    def _set_expanded(self, path: PathType, expanded: bool) -> None:
        node = self.find(path)
        if node is not None and node.is_directory:
            node.is_expanded = expanded

    def expand(self, path: PathType) -> None:
        """Mark a directory node as expanded. Loading is left to ``load_children``."""
        self._set_expanded(path, True)

    def collapse(self, path: PathType) -> None:
        """Mark a directory node as collapsed. Loaded children and selection are kept."""
        self._set_expanded(path, False)

    def visible_nodes(self) -> List[FileNode]:
        """Flatten the tree into the rows currently shown, honoring the search query.

        Traversal is depth-first and pre-order. A node is listed when its name or path
        matches ``search_query``. Its children are visited when it is expanded and either
        matched or is a directory, so an expanded, non-matching directory still surfaces
        matching descendants.

        Returns:
            A new list of node references. It must be recomputed after any state change.
        """
        visible: List[FileNode] = []
        stack: List[FileNode] = list(reversed(self._roots))
        while stack:
            node = stack.pop()
            matched = node_matches(self.search_query, node.name, node.file_path.as_posix())
            if matched:
                visible.append(node)
            if node.is_expanded and (matched or node.is_directory):
                stack.extend(reversed(node.children))
        return visible

    def iter_loaded(self) -> Iterator[FileNode]:
        """Iterate over every loaded node in pre-order, ignoring expansion and search."""
        for root in self._roots:
            yield from PreOrderIter(root)

    def count_loaded_files(self) -> int:
        """Count file (non-directory) nodes loaded so far."""
        return sum(1 for node in self.iter_loaded() if not node.is_directory)

    def refresh(self) -> None:
        """Discard every node, selection and expansion, and list the root again."""
        self._roots = ()
        self._index = {}
        self._root_loaded = False
        self.tree_cursor = 0
        self.load_root()
