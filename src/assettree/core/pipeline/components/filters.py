from __future__ import annotations

"""
Ingestion Ignore Rules.

Implements the regex-based exclusion logic applied while mirroring a
directory into an assets tree. Directory names are matched with a trailing
separator so that rules such as `.*/$` target directories only.
"""

import re
from typing import Iterable, List, Optional, Sequence, Union

from assettree.domain.constants import DEFAULT_IGNORE_PATTERNS, ITEM_IGNORE_PATTERNS, LOGICAL_SEP

PatternLike = Union[str, re.Pattern]

# -----------------------------------------------------------------------------
# CONFIGURATION DEFAULTS
# -----------------------------------------------------------------------------

def default_ignore_patterns() -> List[str]:
    """
    Get the rules that are always applied during ingestion.

    Returns:
        List[str]: Regex strings for placeholder files such as `.gitkeep`.
    """
    return list(DEFAULT_IGNORE_PATTERNS)


def item_ignore_patterns() -> List[str]:
    """
    Get the rules used when ingesting the files colocated with a content item.

    Excludes the item's content and metadata files, and every sub-directory.

    Returns:
        List[str]: Regex strings for non-asset entries of a content item.
    """
    return list(ITEM_IGNORE_PATTERNS)

# -----------------------------------------------------------------------------
# PATTERN COMPILATION AND MATCHING
# -----------------------------------------------------------------------------

def compile_patterns(patterns: Optional[Iterable[PatternLike]]) -> List[re.Pattern]:
    """
    Transform raw regex strings into compiled Pattern objects.

    Already compiled patterns are passed through. Malformed regex strings are
    rejected since a silently dropped ignore rule would publish files the
    caller meant to keep out.

    Args:
        patterns: Raw regex strings or compiled patterns.

    Returns:
        List[re.Pattern]: Compiled regex objects.

    Raises:
        ValueError: If a pattern is not a valid regular expression.
    """
    compiled: List[re.Pattern] = []
    for p in patterns or []:
        if isinstance(p, re.Pattern):
            compiled.append(p)
            continue
        try:
            compiled.append(re.compile(p))
        except re.error as e:
            raise ValueError(f"Invalid ignore pattern '{p}': {e}") from e
    return compiled


def entry_match_name(name: str, is_dir: bool) -> str:
    """Return the name an ignore rule is evaluated against."""
    return name + LOGICAL_SEP if is_dir else name


def matches_any(name: str, compiled_patterns: Sequence[re.Pattern]) -> bool:
    """
    Verify if a name matches at least one compiled pattern anywhere in it.

    Args:
        name: Entry name, suffixed with '/' for directories.
        compiled_patterns: Pre-compiled regex objects.

    Returns:
        bool: True if any match is found, False otherwise.
    """
    return any(rx.search(name) for rx in compiled_patterns)


def is_ignored(name: str, is_dir: bool, compiled_patterns: Sequence[re.Pattern]) -> bool:
    """
    Evaluate a directory entry against the default and supplied ignore rules.

    Args:
        name: Bare entry name.
        is_dir: Whether the entry is a directory.
        compiled_patterns: Caller-supplied compiled rules.

    Returns:
        bool: True if the entry must be left out of the tree.
    """
    candidate = entry_match_name(name, is_dir)
    if matches_any(candidate, _DEFAULT_IGNORE_RX):
        return True
    return matches_any(candidate, compiled_patterns)


_DEFAULT_IGNORE_RX: List[re.Pattern] = compile_patterns(DEFAULT_IGNORE_PATTERNS)
