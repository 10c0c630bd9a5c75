from __future__ import annotations

"""
Template Function Factories.

Builds the asset-related callables handed to the template engine. Each
factory binds the global tree, the optional local tree of the content item
being rendered and that item's scope id, so templates only pass references.
"""

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from assettree.core.pipeline.publisher import add_sizes, process_sizes
from assettree.core.processing.imaging import ImageProcessor
from assettree.core.services.resolver import asset_link, find_in_trees, generate_srcset_value
from assettree.domain.constants import DEFAULT_PUBLISHED_ROOT
from assettree.domain.errors import AssetNotFoundError
from assettree.domain.tree_models import TreeNode

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def make_asset_link_fn(
        global_tree: Optional[TreeNode],
        local_tree: Optional[TreeNode] = None,
        scope_id: str = "",
        published_root: str = DEFAULT_PUBLISHED_ROOT,
) -> Callable[[str], str]:
    """
    Create the `assetLink` template function.

    The scope id only prefixes links resolved in the local tree.

    Returns:
        Callable[[str], str]: Maps a reference to its public link, raising
        AssetNotFoundError when the reference cannot be resolved.
    """
    def _asset_link(reference: str) -> str:
        node, searched_local = _resolve(global_tree, local_tree, reference)
        return asset_link(node, scope_id if searched_local else "", published_root=published_root)

    return _asset_link


def make_has_asset_fn(
        global_tree: Optional[TreeNode],
        local_tree: Optional[TreeNode] = None,
) -> Callable[[str], bool]:
    """Create the `hasAsset` template function."""
    def _has_asset(reference: str) -> bool:
        node, _ = find_in_trees(global_tree, local_tree, reference)
        return node is not None

    return _has_asset


def make_srcset_value_fn(
        global_tree: Optional[TreeNode],
        local_tree: Optional[TreeNode] = None,
        scope_id: str = "",
        widths: Sequence[int] = (),
        published_root: str = DEFAULT_PUBLISHED_ROOT,
        image_processor: Optional[ImageProcessor] = None,
) -> Callable[[str], str]:
    """
    Create the `srcSetValue` template function.

    Resolving an image requests the configured responsive widths and
    materializes the missing ones before rendering the listing.

    Returns:
        Callable[[str], str]: Maps an image reference to its srcset value.
    """
    requested: List[int] = list(widths)

    def _srcset_value(reference: str) -> str:
        node, searched_local = _resolve(global_tree, local_tree, reference)
        add_sizes(node, requested)
        process_sizes(node, image_processor)
        return generate_srcset_value(
            node, scope_id if searched_local else "", published_root=published_root
        )

    return _srcset_value

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _resolve(
        global_tree: Optional[TreeNode],
        local_tree: Optional[TreeNode],
        reference: str,
) -> Tuple[TreeNode, bool]:
    node, searched_local = find_in_trees(global_tree, local_tree, reference)
    if node is None:
        logger.warning(f"Asset reference not found: {reference}")
        raise AssetNotFoundError(reference, searched_local)
    return node, searched_local
