"""Pattern compilation, inclusion decisions and search matching."""

from .inclusion import decide, normalize_relative_path
from .pattern_matcher import CompiledMatcher, compile_patterns, read_pattern_file
from .search import matches, node_matches

__all__ = [
    "CompiledMatcher",
    "compile_patterns",
    "decide",
    "matches",
    "node_matches",
    "normalize_relative_path",
    "read_pattern_file",
]
