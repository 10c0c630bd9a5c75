from __future__ import annotations

"""
Build Result Data Models.

Defines the value object returned by the build engine together with the
factories used to create success and failure results.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from assettree.domain.tree_models import TreeNode

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class BuildResult:
    """
    Outcome of an assets build.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        config: The normalized configuration used by the build.
        output_path: Root directory of the build output.
        assets_output_path: Directory holding the published assets.
        global_tree: Published site-wide assets tree.
        item_trees: Published local trees keyed by content item id.
        warnings: Configuration warnings collected during validation.
        summary: Counters describing the build.
    """
    ok: bool
    error: str

    config: Dict[str, Any]
    output_path: str
    assets_output_path: str

    global_tree: Optional[TreeNode] = None
    item_trees: Dict[str, TreeNode] = field(default_factory=dict)

    warnings: List[str] = field(default_factory=list)
    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        cfg: Dict[str, Any],
        output_path: str = "",
        assets_output_path: str = "",
        warnings: Optional[List[str]] = None,
) -> BuildResult:
    """
    Create a failed build result.

    Args:
        error: Detailed error description.
        cfg: The configuration used during the failed build.
        output_path: Build output root, if already resolved.
        assets_output_path: Assets output directory, if already resolved.
        warnings: Configuration warnings.

    Returns:
        BuildResult: An immutable error result object.
    """
    return BuildResult(
        ok=False,
        error=error,
        config=cfg,
        output_path=output_path,
        assets_output_path=assets_output_path,
        warnings=warnings or [],
    )


def create_success_result(
        cfg: Dict[str, Any],
        output_path: str,
        assets_output_path: str,
        global_tree: TreeNode,
        item_trees: Dict[str, TreeNode],
        warnings: Optional[List[str]] = None,
        summary: Optional[Dict[str, Any]] = None,
) -> BuildResult:
    """Create a successful build result."""
    return BuildResult(
        ok=True,
        error="",
        config=cfg,
        output_path=output_path,
        assets_output_path=assets_output_path,
        global_tree=global_tree,
        item_trees=dict(item_trees),
        warnings=warnings or [],
        summary=summary or {},
    )
