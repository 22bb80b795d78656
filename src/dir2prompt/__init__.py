"""Codebase selection utilities.

This package decides, for every path under a directory, whether that path is
included in a prompt assembled for Large Language Models (LLMs). Decisions
combine ordered include/exclude patterns, explicit per-path overrides and live
selection in a lazily loaded file tree.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("dir2prompt")
except PackageNotFoundError:
    __version__ = "unknown"
