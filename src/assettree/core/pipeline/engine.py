from __future__ import annotations

"""
Assets Build Orchestration.

Coordinates a build of the static assets of a site:
1. Validates the configuration.
2. Prepares a fresh output directory.
3. Ingests, bundles and publishes the global assets tree.
4. Ingests and publishes the local tree of every content item.
5. Exposes the published trees to templates through helper functions.
"""

import logging
import os
from typing import Any, Callable, Dict, List, Optional

from assettree.core.analysis.tree_generator import generate_assets_tree
from assettree.core.pipeline.components.filters import item_ignore_patterns
from assettree.core.pipeline.publisher import bundle_stylesheets, publish
from assettree.core.pipeline.validator import validate_config
from assettree.core.processing.imaging import ImageProcessor, default_image_processor
from assettree.core.services.template_helpers import (
    make_asset_link_fn,
    make_has_asset_fn,
    make_srcset_value_fn,
)
from assettree.domain.errors import AssetTreeError, PublishError
from assettree.domain.pipeline_models import (
    BuildResult,
    create_error_result,
    create_success_result,
)
from assettree.domain.tree_models import TreeNode
from assettree.infra.fs import normalize_path, prepare_output_dir

logger = logging.getLogger(__name__)


def run_build(
        config: Optional[Dict[str, Any]],
        *,
        image_processor: Optional[ImageProcessor] = None,
) -> BuildResult:
    """
    Execute a complete assets build.

    A failure aborts the build and is reported in the result; files written
    before the failure are left in the output directory.

    Args:
        config: The configuration dictionary (raw or partial).
        image_processor: Image probe/resizer shared by every tree.

    Returns:
        BuildResult: Object containing status, published trees and summary.
    """
    logger.info("Assets build started.")

    # -------------------------------------------------------------------------
    # 1) Config & Path Normalization
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    base = os.getcwd()
    output_path = normalize_path(cfg["output_path"], base)
    assets_output_path = os.path.join(output_path, cfg["published_root"])
    processor = image_processor or default_image_processor()

    # -------------------------------------------------------------------------
    # 2) Output Preparation
    # -------------------------------------------------------------------------
    try:
        prepare_output_dir(output_path)
        os.makedirs(assets_output_path, exist_ok=True)
    except OSError as e:
        msg = f"Failed to prepare output directory {output_path}: {e}"
        logger.critical(msg)
        return create_error_result(msg, cfg, output_path, assets_output_path, warnings)

    # -------------------------------------------------------------------------
    # 3) Global & Item Trees
    # -------------------------------------------------------------------------
    try:
        global_tree = build_global_assets(
            normalize_path(cfg["assets_path"], base),
            assets_output_path,
            ignore_patterns=cfg["ignore_patterns"],
            bundle_css=cfg["bundle_stylesheets"],
            image_processor=processor,
        )

        item_trees: Dict[str, TreeNode] = {}
        items_path = normalize_path(cfg["items_path"], base)
        if os.path.isdir(items_path):
            with os.scandir(items_path) as it:
                entries = sorted(it, key=lambda e: e.name)
            for entry in entries:
                if not entry.is_dir():
                    continue
                item_trees[entry.name] = build_item_assets(
                    entry.path, entry.name, assets_output_path, image_processor=processor
                )
    except (AssetTreeError, OSError) as e:
        msg = f"Assets build failed: {e}"
        logger.error(msg)
        return create_error_result(msg, cfg, output_path, assets_output_path, warnings)

    summary = {
        "items": len(item_trees),
        "items_with_assets": sum(1 for t in item_trees.values() if t.first_child is not None),
    }
    logger.info(f"Assets build finished: {summary['items']} content items processed.")

    return create_success_result(
        cfg, output_path, assets_output_path, global_tree, item_trees, warnings, summary
    )


def build_global_assets(
        assets_path: str,
        assets_output_path: str,
        *,
        ignore_patterns: Optional[List[str]] = None,
        bundle_css: bool = True,
        image_processor: Optional[ImageProcessor] = None,
) -> TreeNode:
    """
    Ingest, bundle and publish the site-wide assets tree.

    Args:
        assets_path: Directory holding the shared assets.
        assets_output_path: Existing directory receiving the published files.
        ignore_patterns: Extra ignore rules for ingestion.
        bundle_css: Merge depth-1 stylesheets into a single `style.css`.
        image_processor: Image probe/resizer.

    Returns:
        TreeNode: The published global tree.
    """
    tree = generate_assets_tree(assets_path, ignore_patterns, image_processor)
    if bundle_css:
        bundle_stylesheets(tree)
    publish(tree, assets_output_path, include_root=False, image_processor=image_processor)
    return tree


def build_item_assets(
        item_path: str,
        scope_id: str,
        assets_output_path: str,
        *,
        image_processor: Optional[ImageProcessor] = None,
) -> TreeNode:
    """
    Ingest and publish the local assets tree of one content item.

    The item's output directory is only created when it has assets, and an
    existing directory of the same name (coming from the global tree) is
    reused.

    Args:
        item_path: Directory of the content item.
        scope_id: Identifier of the item, used as output sub-directory.
        assets_output_path: Published assets root.
        image_processor: Image probe/resizer.

    Returns:
        TreeNode: The item's local tree, published if non-empty.

    Raises:
        PublishError: If the item's output directory cannot be created.
    """
    tree = generate_assets_tree(item_path, item_ignore_patterns(), image_processor)
    if tree.first_child is None:
        return tree

    item_output_path = os.path.join(assets_output_path, scope_id)
    if not os.path.isdir(item_output_path):
        try:
            os.mkdir(item_output_path)
        except OSError as e:
            raise PublishError(tree.path, f"creating {item_output_path}: {e}") from e

    publish(tree, item_output_path, include_root=False, image_processor=image_processor)
    logger.debug(f"Published assets of content item {scope_id}")
    return tree


def make_template_functions(
        result: BuildResult,
        scope_id: str = "",
        *,
        image_processor: Optional[ImageProcessor] = None,
) -> Dict[str, Callable[..., Any]]:
    """
    Build the asset helpers available while rendering a page.

    Args:
        result: A successful build result.
        scope_id: Content item being rendered, empty for site-wide pages.
        image_processor: Resizer for widths requested during rendering.

    Returns:
        Dict[str, Callable]: `assetLink`, `hasAsset` and `srcSetValue`
        functions plus the pass-through `responsiveImgMediaQueries` value.
    """
    cfg = result.config
    local_tree = result.item_trees.get(scope_id) if scope_id else None
    published_root = cfg["published_root"]

    return {
        "assetLink": make_asset_link_fn(result.global_tree, local_tree, scope_id, published_root),
        "hasAsset": make_has_asset_fn(result.global_tree, local_tree),
        "srcSetValue": make_srcset_value_fn(
            result.global_tree,
            local_tree,
            scope_id,
            cfg["responsive_image_widths"],
            published_root,
            image_processor,
        ),
        "responsiveImgMediaQueries": lambda: cfg["responsive_image_media_queries"],
    }
