"""Stateful selection session over a codebase.

The session owns the filter configuration, the compiled matchers derived from it, and the
interactive file tree. It is the only writer of the configuration: every override
operation keeps the two explicit sets disjoint, and the same inclusion decision serves the
interactive view and the batch file list.
"""

import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from dir2prompt.config import FilterConfig
from dir2prompt.exceptions import ConfigurationError, DirectoryLoadError
from dir2prompt.file_tree.file_node import FileNode
from dir2prompt.file_tree.file_tree import FileTree
from dir2prompt.file_tree.included_files import IncludedFileWalker
from dir2prompt.matching.inclusion import decide, normalize_relative_path
from dir2prompt.matching.pattern_matcher import CompiledMatcher, compile_patterns
from dir2prompt.types import PathType, PermissionAction

logger = logging.getLogger(__name__)


class SelectionSession:
    """Selection state for one root directory.

    Paths given to any operation may be absolute (under the root) or relative to the root.
    Override operations return the session so calls can be chained, and never fail: they are
    plain set operations.

    Matchers are compiled from the pattern lists and rebuilt whenever the lists differ from
    the ones they were compiled from. When the new lists do not compile, decisions keep
    using the last matchers that did, and the error is kept in ``pattern_error`` until the
    lists compile again. Only ``recompile()`` and ``set_patterns()`` raise.

    Attributes:
        root_path (Path): Absolute path of the root directory.
        config (FilterConfig): Pattern lists and explicit overrides.
        tree (FileTree): The interactive tree.
        load_errors (Dict[str, str]): Directories whose last load failed, by relative path
            ("." for the root), with the error message. Cleared on a successful retry.
        pattern_error (Optional[ConfigurationError]): Why the current pattern lists do not
            compile, or None when the matchers reflect them.

    Example:
        >>> session = SelectionSession("/repo", FilterConfig(include_patterns=["*.txt"]))
        >>> session.is_included("a.txt"), session.is_included("b.log")
        (True, False)
        >>> _ = session.toggle("a.txt")
        >>> session.config.explicit_excludes
        {'a.txt'}
        >>> session.is_included("/repo/a.txt")
        False
    """

    def __init__(self, root_path: PathType, config: Optional[FilterConfig] = None) -> None:
        self.root_path = Path(root_path).absolute()
        self.config = config if config is not None else FilterConfig()
        self.tree = FileTree(self.root_path)
        self.load_errors: Dict[str, str] = {}
        self._include_matcher = CompiledMatcher()
        self._exclude_matcher = CompiledMatcher()
        self._compiled_from: Optional[Tuple[Tuple[str, ...], Tuple[str, ...]]] = None
        self._failed_from: Optional[Tuple[Tuple[str, ...], Tuple[str, ...]]] = None
        self.pattern_error: Optional[ConfigurationError] = None

    def relative_path(self, path: PathType) -> str:
        """Convert a path to the root-relative, forward-slash form used for decisions.

        Absolute paths outside the root are returned unchanged.
        """
        candidate = Path(path)
        if candidate.is_absolute():
            try:
                return candidate.relative_to(self.root_path).as_posix()
            except ValueError:
                return candidate.as_posix()
        return normalize_relative_path(path)

    # Pattern matchers

    def _pattern_lists(self) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
        return tuple(self.config.include_patterns), tuple(self.config.exclude_patterns)

    def recompile(self) -> "SelectionSession":
        """Rebuild both matchers from the current pattern lists.

        Raises:
            ConfigurationError: If any pattern is invalid. Both previous matchers are kept
                and the error is also stored in ``pattern_error``.
        """
        pattern_lists = self._pattern_lists()
        try:
            include_matcher = compile_patterns(self.config.include_patterns)
            exclude_matcher = compile_patterns(self.config.exclude_patterns)
        except ConfigurationError as e:
            self.pattern_error = e
            self._failed_from = pattern_lists
            raise
        self._include_matcher = include_matcher
        self._exclude_matcher = exclude_matcher
        self._compiled_from = pattern_lists
        self._failed_from = None
        self.pattern_error = None
        return self

    def _ensure_compiled(self) -> None:
        pattern_lists = self._pattern_lists()
        if pattern_lists == self._compiled_from:
            # The lists went back to the last compiled ones
            self._failed_from = None
            self.pattern_error = None
            return
        if pattern_lists == self._failed_from:
            return
        try:
            self.recompile()
        except ConfigurationError as e:
            logger.warning("%s; keeping the previous patterns", e)

    @property
    def include_matcher(self) -> CompiledMatcher:
        self._ensure_compiled()
        return self._include_matcher

    @property
    def exclude_matcher(self) -> CompiledMatcher:
        self._ensure_compiled()
        return self._exclude_matcher

    def set_patterns(
        self, include: Optional[Sequence[str]] = None, exclude: Optional[Sequence[str]] = None
    ) -> "SelectionSession":
        """Replace one or both pattern lists, only if all the new patterns compile.

        Args:
            include: New include patterns, or None to keep the current list.
            exclude: New exclude patterns, or None to keep the current list.

        Raises:
            ConfigurationError: If any new pattern is invalid. Nothing is changed.
        """
        include_list = list(self.config.include_patterns if include is None else include)
        exclude_list = list(self.config.exclude_patterns if exclude is None else exclude)
        include_matcher = compile_patterns(include_list)
        exclude_matcher = compile_patterns(exclude_list)

        self.config.include_patterns = include_list
        self.config.exclude_patterns = exclude_list
        self._include_matcher = include_matcher
        self._exclude_matcher = exclude_matcher
        self._compiled_from = self._pattern_lists()
        self._failed_from = None
        self.pattern_error = None
        return self

    def add_include_pattern(self, pattern: str) -> "SelectionSession":
        """Append an include pattern. It is compiled before the next decision.

        An invalid pattern does not raise here or later; see ``pattern_error``.
        """
        self.config.include_patterns.append(pattern)
        return self

    def add_exclude_pattern(self, pattern: str) -> "SelectionSession":
        """Append an exclude pattern. It is compiled before the next decision."""
        self.config.exclude_patterns.append(pattern)
        return self

    def remove_include_pattern(self, pattern: str) -> "SelectionSession":
        """Remove every occurrence of an include pattern."""
        self.config.include_patterns = [p for p in self.config.include_patterns if p != pattern]
        return self

    def remove_exclude_pattern(self, pattern: str) -> "SelectionSession":
        """Remove every occurrence of an exclude pattern."""
        self.config.exclude_patterns = [p for p in self.config.exclude_patterns if p != pattern]
        return self

    # Inclusion decisions and explicit overrides

    def is_included(self, path: PathType) -> bool:
        """Return the current inclusion decision for a path."""
        self._ensure_compiled()
        return decide(
            self.relative_path(path),
            self._include_matcher,
            self._exclude_matcher,
            self.config.explicit_includes,
            self.config.explicit_excludes,
        )

    def include(self, path: PathType) -> "SelectionSession":
        """Force a path in, replacing any explicit exclude for it."""
        relative = self.relative_path(path)
        self.config.explicit_excludes.discard(relative)
        self.config.explicit_includes.add(relative)
        logger.debug("Explicitly included %s", relative)
        return self

    def exclude(self, path: PathType) -> "SelectionSession":
        """Force a path out, replacing any explicit include for it."""
        relative = self.relative_path(path)
        self.config.explicit_includes.discard(relative)
        self.config.explicit_excludes.add(relative)
        logger.debug("Explicitly excluded %s", relative)
        return self

    def toggle(self, path: PathType) -> "SelectionSession":
        """Flip a path's decision with an explicit override.

        An included path is explicitly excluded and an excluded one explicitly included,
        whether the current decision came from a pattern or from an earlier override.
        """
        if self.is_included(path):
            return self.exclude(path)
        return self.include(path)

    def clear_overrides(self) -> "SelectionSession":
        """Drop all explicit overrides, leaving decisions to the patterns alone."""
        self.config.explicit_includes.clear()
        self.config.explicit_excludes.clear()
        return self

    # Interactive tree

    def _load(self, relative: str, directory: Optional[FileNode]) -> None:
        try:
            if directory is None:
                self.tree.load_root()
            else:
                self.tree.load_children(directory.file_path)
        except DirectoryLoadError as e:
            logger.warning("Could not load directory %s: %s", relative, e.reason)
            self.load_errors[relative] = str(e)
        else:
            self.load_errors.pop(relative, None)

    def browse(self) -> "SelectionSession":
        """List the root directory once to create the root-level nodes.

        A failure is recorded in ``load_errors`` under "." and the tree stays empty.
        """
        self._load(".", None)
        return self

    def expand(self, path: PathType) -> "SelectionSession":
        """Load a directory's children on first use and mark it expanded.

        When the listing fails the directory is shown expanded with zero children, the error
        is recorded in ``load_errors`` and expanding again retries the load.
        """
        node = self.tree.find(path)
        if node is None or not node.is_directory:
            return self
        self._load(self.relative_path(node.file_path), node)
        self.tree.expand(node.file_path)
        return self

    def collapse(self, path: PathType) -> "SelectionSession":
        self.tree.collapse(path)
        return self

    def toggle_expanded(self, path: PathType) -> "SelectionSession":
        node = self.tree.find(path)
        if node is not None and node.is_expanded:
            return self.collapse(path)
        return self.expand(path)

    def toggle_node(self, path: PathType) -> "SelectionSession":
        """Flip a node's decision and show the result in the tree.

        For a directory, every loaded descendant receives the same explicit override and
        selection flag as the directory, so the batch file list agrees with what is shown.
        Descendants loaded later start unselected and keep their pattern-based decision.
        """
        node = self.tree.find(path)
        if node is None:
            return self.toggle(path)

        selected = not self.is_included(node.file_path)
        targets = [node, *node.descendants] if node.is_directory else [node]
        for target in targets:
            if selected:
                self.include(target.file_path)
            else:
                self.exclude(target.file_path)
        self.tree.set_selection(node.file_path, selected, node.is_directory)
        return self

    def refresh_selection(self) -> "SelectionSession":
        """Recompute every loaded node's selection flag from the current decision.

        Selection flags are not recomputed automatically when patterns or overrides change;
        call this to resynchronize the tree with the rules.
        """
        for node in self.tree.iter_loaded():
            node.is_selected = self.is_included(node.file_path)
        return self

    @property
    def search_query(self) -> str:
        return self.tree.search_query

    @search_query.setter
    def search_query(self, query: str) -> None:
        self.tree.search_query = query
        self.move_cursor(0)

    def visible_nodes(self) -> List[FileNode]:
        return self.tree.visible_nodes()

    def move_cursor(self, delta: int) -> int:
        """Move the tree cursor, clamped to the visible rows, and return its new position."""
        count = len(self.tree.visible_nodes())
        self.tree.tree_cursor = max(0, min(self.tree.tree_cursor + delta, count - 1))
        return self.tree.tree_cursor

    def current_node(self) -> Optional[FileNode]:
        visible = self.tree.visible_nodes()
        if 0 <= self.tree.tree_cursor < len(visible):
            return visible[self.tree.tree_cursor]
        return None

    # Batch file list

    def iterate_selected_files(
        self, follow_symlinks: bool = False, permission_action: PermissionAction = PermissionAction.IGNORE
    ) -> Iterator[Tuple[str, str]]:
        """Walk the whole root directory, yielding `(absolute_path, relative_path)` per included file.

        Raises:
            FileNotFoundError: If the root path doesn't exist.
            NotADirectoryError: If the root path isn't a directory.
            DirectoryLoadError: If a directory cannot be listed and permission_action is RAISE.
        """
        self._ensure_compiled()
        walker = IncludedFileWalker(
            self.root_path,
            self.is_included,
            follow_symlinks=follow_symlinks,
            permission_action=permission_action,
        )
        return walker.iterate_files()

    def selected_files(
        self, follow_symlinks: bool = False, permission_action: PermissionAction = PermissionAction.IGNORE
    ) -> List[str]:
        """Walk the whole root directory and return the included files' relative paths.

        Raises:
            FileNotFoundError: If the root path doesn't exist.
            NotADirectoryError: If the root path isn't a directory.
            DirectoryLoadError: If a directory cannot be listed and permission_action is RAISE.
        """
        files = self.iterate_selected_files(follow_symlinks=follow_symlinks, permission_action=permission_action)
        return [relative for _, relative in files]

    def count_selected_files(self) -> int:
        return len(self.selected_files())
