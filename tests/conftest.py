from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Factories for PNG/JPEG files and hand-built assets trees.
3. A sample build configuration dictionary.
"""

import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict

import pytest
from PIL import Image

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from assettree.core.analysis.tree_generator import add_child  # noqa: E402
from assettree.domain.tree_models import NodeKind, TreeNode  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def make_image() -> Callable[..., Path]:
    """
    Return a factory writing a solid-colour image of the given size.

    The format is derived from the file extension (.png or .jpg/.jpeg).
    """
    def _make(path: Path, width: int, height: int, color: str = "red") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        fmt = "PNG" if path.suffix == ".png" else "JPEG"
        Image.new("RGB", (width, height), color).save(path, format=fmt)
        return path

    return _make


@pytest.fixture
def nested_tree() -> TreeNode:
    """
    Build `dir1{dir2{file1}, dir3{file2}, dir4{file3}}` in memory.

    Node lookup by name is available through the `nodes` attribute.
    """
    root = TreeNode(NodeKind.DIRECTORY, "dir1", path="dir1")
    dir2 = add_child(root, NodeKind.DIRECTORY, "dir2")
    dir3 = add_child(root, NodeKind.DIRECTORY, "dir3")
    dir4 = add_child(root, NodeKind.DIRECTORY, "dir4")
    file1 = add_child(dir2, NodeKind.FILE, "file1")
    file2 = add_child(dir3, NodeKind.FILE, "file2")
    file3 = add_child(dir4, NodeKind.FILE, "file3")

    root.nodes = {  # type: ignore[attr-defined]
        n.name: n for n in (root, dir2, dir3, dir4, file1, file2, file3)
    }
    return root


@pytest.fixture
def mock_config_dict(tmp_path) -> Dict[str, Any]:
    """
    Return a complete build configuration rooted in `tmp_path`.

    Returns:
        Dict[str, Any]: A sample configuration dictionary.
    """
    return {
        # IO Paths
        "assets_path": str(tmp_path / "site" / "assets"),
        "items_path": str(tmp_path / "site" / "posts"),
        "output_path": str(tmp_path / "public"),
        "published_root": "assets",

        # Ingestion
        "ignore_patterns": [r"^draft_"],

        # Stylesheets
        "bundle_stylesheets": True,

        # Responsive images
        "responsive_image_widths": [320, 640],
        "responsive_image_media_queries": "(max-width: 640px) 100vw, 640px",
    }
