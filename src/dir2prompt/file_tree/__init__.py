"""Lazily loaded file tree for interactive selection, and the batch file walk.

This package provides the node and tree classes backing the interactive view, plus the
independent traversal that produces the final list of included files.
"""

from .file_node import FileNode
from .file_tree import FileTree
from .included_files import IncludedFileWalker

__all__ = ["FileNode", "FileTree", "IncludedFileWalker"]
