from __future__ import annotations

"""
Build Configuration Defaults.

The build is driven by a plain dictionary. This module provides the default
session state consumed by the validator and the build engine.
"""

import os
from typing import Any, Dict

from assettree.domain.constants import DEFAULT_PUBLISHED_ROOT, DEFAULT_RESPONSIVE_WIDTHS

DEFAULT_OUTPUT_SUBDIR = "public"


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default build configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    base = os.getcwd()
    return {
        # IO Paths
        "assets_path": os.path.join(base, "assets"),
        "items_path": os.path.join(base, "posts"),
        "output_path": os.path.join(base, DEFAULT_OUTPUT_SUBDIR),
        "published_root": DEFAULT_PUBLISHED_ROOT,

        # Ingestion
        "ignore_patterns": [],

        # Stylesheets
        "bundle_stylesheets": True,

        # Responsive images
        "responsive_image_widths": list(DEFAULT_RESPONSIVE_WIDTHS),
        "responsive_image_media_queries": "",
    }
