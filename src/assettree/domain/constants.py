from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Centralizes the naming conventions shared by the ingestion, publishing and
resolution layers: the root node name, the recognised raster image and
stylesheet file names, and the rules that are always ignored.
"""

import re
from typing import Final, List

# -----------------------------------------------------------------------------
# TREE NAMING
# -----------------------------------------------------------------------------

ROOT_NODE_NAME: Final[str] = "assets"
DEFAULT_PUBLISHED_ROOT: Final[str] = "assets"
STYLESHEET_BUNDLE_NAME: Final[str] = "style.css"

# Separator used in logical paths regardless of the host OS
LOGICAL_SEP: Final[str] = "/"

# -----------------------------------------------------------------------------
# FILE CLASSIFICATION PATTERNS
# -----------------------------------------------------------------------------

IMAGE_NAME_PATTERN: Final[re.Pattern] = re.compile(r".+\.(jpg|jpeg|png)$")
STYLESHEET_NAME_PATTERN: Final[re.Pattern] = re.compile(r"^.*\.css$")

# -----------------------------------------------------------------------------
# INGESTION DEFAULTS
# -----------------------------------------------------------------------------

# Always applied on top of caller-supplied ignore rules
DEFAULT_IGNORE_PATTERNS: Final[List[str]] = [r"\.gitkeep"]

# Files colocated with a content item that are not assets of that item.
# The trailing-separator rule drops every sub-directory.
ITEM_IGNORE_PATTERNS: Final[List[str]] = [
    r"content_.+\.md",
    r"data.yaml",
    r".*/$",
]

DEFAULT_RESPONSIVE_WIDTHS: Final[List[int]] = [640, 1024, 1920]
