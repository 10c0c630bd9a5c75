from __future__ import annotations

"""
Stylesheet Minification Utility.

Wraps csscompressor to strip comments and redundant whitespace from the
concatenated stylesheet bundle before it is content-addressed.
"""

import logging

import csscompressor

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def minify_css(content: bytes) -> bytes:
    """
    Minify a CSS document held in memory.

    Args:
        content: Raw CSS bytes, normally UTF-8.

    Returns:
        bytes: Minified CSS bytes, empty for empty input.
    """
    if not content:
        return b""

    # Bytes that are not UTF-8 (e.g. a latin-1 comment) pass through unchanged
    text = content.decode("utf-8", errors="surrogateescape")
    result = csscompressor.compress(text).encode("utf-8", errors="surrogateescape")

    original_len = len(content)
    reduction = 100 - (len(result) * 100 / original_len)
    logger.debug(f"Minified css: {original_len} -> {len(result)} bytes ({reduction:.1f}% reduction)")

    return result
