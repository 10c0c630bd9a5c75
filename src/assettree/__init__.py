from __future__ import annotations

"""
assettree: content-addressed asset trees for static site builds.
"""

from assettree.core.analysis.traversal import traverse
from assettree.core.analysis.tree_generator import add_child, generate_assets_tree, remove_from_tree
from assettree.core.pipeline.engine import run_build
from assettree.core.pipeline.publisher import add_sizes, bundle_stylesheets, process_sizes, publish
from assettree.core.services.resolver import (
    asset_link,
    find_by_relative_path,
    find_in_trees,
    generate_srcset_value,
)
from assettree.domain.tree_models import NodeKind, SizeVariant, TraverseStatus, TreeNode

__version__ = "0.1.0"

__all__ = [
    "NodeKind",
    "SizeVariant",
    "TraverseStatus",
    "TreeNode",
    "add_child",
    "add_sizes",
    "asset_link",
    "bundle_stylesheets",
    "find_by_relative_path",
    "find_in_trees",
    "generate_assets_tree",
    "generate_srcset_value",
    "process_sizes",
    "publish",
    "remove_from_tree",
    "run_build",
    "traverse",
]
