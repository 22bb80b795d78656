"""Search matcher deciding which tree nodes stay visible while filtering.

The matcher is looser than real glob matching: ``*`` and ``**`` only split
the query into substrings that must each appear somewhere in the candidate, in any order
and without anchoring. ``*`` also matches across path separators.
"""

from typing import List


def _split_matches(parts: List[str], text: str) -> bool:
    return all(part in text for part in parts)


def matches(query: str, text: str) -> bool:
    """Check whether a candidate text satisfies a search query.

    Cases are evaluated in a fixed order:

    1. An empty query matches everything.
    2. A query containing ``**`` that splits into exactly two parts: the part before (with
       trailing ``/`` stripped) and the part after (with leading ``/`` stripped) must each be
       contained in the text. Empty parts are vacuously satisfied, so ``**`` alone matches
       everything.
    3. A query containing ``*`` but not ``**`` that splits into exactly two parts: both parts
       must be contained in the text.
    4. Anything else: case-insensitive substring containment of the raw query.

    Args:
        query: The active search query.
        text: The candidate text (a node name or path).

    Returns:
        bool: True if the text matches.

    Example:
        >>> matches("", "anything")
        True
        >>> matches("src/**", "/repo/src/main.py")
        True
        >>> matches("*.py", "main.py")
        True
        >>> matches("a*b*c", "A*B*C.txt")
        True
        >>> matches("a*b*c", "abc")
        False
    """
    if not query:
        return True

    if "**" in query:
        parts = query.split("**")
        if len(parts) == 2:
            prefix = parts[0].rstrip("/")
            suffix = parts[1].lstrip("/")
            if not prefix and not suffix:
                return True
            return _split_matches([p for p in (prefix, suffix) if p], text)
    elif "*" in query:
        parts = query.split("*")
        if len(parts) == 2:
            return _split_matches(parts, text)

    return query.lower() in text.lower()


def node_matches(query: str, name: str, path: str) -> bool:
    """Check whether a node matches a query by its display name or its full path."""
    return matches(query, name) or matches(query, path)
