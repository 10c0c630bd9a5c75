from __future__ import annotations

"""
Content-Addressed Publishing Pipeline.

Writes an assets tree to an output directory using cache-friendly names:
- plain files become `<name-without-ext>-<md5><ext>`;
- images become a directory named after the md5 of the original bytes,
  holding one `<width><ext>` file per materialized size variant.

Size variants are materialized incrementally, so widths requested later
(e.g. while executing templates) are written without touching the ones
already on disk.
"""

import hashlib
import logging
import os
import posixpath
from typing import Iterable, List, Optional

from assettree.core.analysis.traversal import traverse
from assettree.core.analysis.tree_generator import add_child, remove_from_tree
from assettree.core.processing.imaging import IMAGE_ERRORS, ImageProcessor, default_image_processor
from assettree.core.processing.minifier import minify_css
from assettree.domain.constants import STYLESHEET_BUNDLE_NAME, STYLESHEET_NAME_PATTERN
from assettree.domain.errors import PublishError, TreeContractError
from assettree.domain.tree_models import NodeKind, SizeVariant, TraverseStatus, TreeNode

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API (PUBLISHING)
# -----------------------------------------------------------------------------

def publish(
        root: TreeNode,
        output_dir: str,
        include_root: bool = False,
        image_processor: Optional[ImageProcessor] = None,
) -> None:
    """
    Publish every node of the tree rooted at `root` into `output_dir`.

    Each published node gets `output_path` and `output_rel_path` set. The
    first failure aborts the walk, leaving already written files in place.

    Args:
        root: Start of the tree to publish.
        output_dir: Existing directory receiving the output.
        include_root: Publish `root` itself as a directory named after it.
        image_processor: Resizer used for non-original image variants.

    Raises:
        PublishError: If a directory or file cannot be written, or an image
            variant cannot be produced.
    """
    processor = image_processor or default_image_processor()
    published = 0

    def _visit(node: TreeNode) -> TraverseStatus:
        nonlocal published
        if node is root and not include_root:
            return TraverseStatus.CONTINUE

        rel_path = _relative_path(node, root, include_root)

        if node.kind is NodeKind.DIRECTORY:
            _publish_dir(node, output_dir, rel_path)
        elif node.kind is NodeKind.IMAGE:
            _publish_image(node, output_dir, rel_path, processor)
        else:
            _publish_file(node, output_dir, rel_path)

        published += 1
        return TraverseStatus.CONTINUE

    traverse(root, _visit)
    logger.info(f"Published {published} asset nodes from {root.path or root.name} to {output_dir}")


def process_sizes(node: TreeNode, image_processor: Optional[ImageProcessor] = None) -> None:
    """
    Write every size variant of an image node that is not on disk yet.

    Safe to call repeatedly; already materialized widths are never rewritten.

    Args:
        node: A published image node.
        image_processor: Resizer used for non-original widths.

    Raises:
        TreeContractError: If the node is not an image or hasn't been published.
        PublishError: If reading, resizing or writing a variant fails.
    """
    if node.kind is not NodeKind.IMAGE:
        raise TreeContractError(f"{node.name} is not an image node")
    if not node.output_path:
        raise TreeContractError(f"{node.name} hasn't been published")

    pending = [size for size in node.sizes if not size.materialized]
    if not pending:
        return

    processor = image_processor or default_image_processor()

    try:
        original = node.content()
    except OSError as e:
        raise PublishError(node.path, f"retrieving content: {e}") from e

    for size in pending:
        size_file_path = node.variant_path(size)

        if size.original:
            data = original
        else:
            try:
                data = processor.resize(node.source_path, size.width)
            except IMAGE_ERRORS as e:
                raise PublishError(node.path, f"resizing to {size.width}px: {e}") from e

        try:
            with open(size_file_path, "wb") as f:
                f.write(data)
        except OSError as e:
            raise PublishError(node.path, f"writing {size_file_path}: {e}") from e

        size.materialized = True
        logger.debug(f"Materialized {size.width}px variant of {node.name} at {size_file_path}")


def add_sizes(node: TreeNode, widths: Iterable[int]) -> List[SizeVariant]:
    """
    Request additional widths for an image node.

    Processing stops at the first width that is already present or that is
    not strictly smaller than the original width: that width and every width
    after it are dropped.

    Args:
        node: An image node.
        widths: Candidate widths, processed in the given order.

    Returns:
        List[SizeVariant]: The variants that were added, unmaterialized.

    Raises:
        TreeContractError: If the node is not an image.
    """
    original = node.original_size()
    added: List[SizeVariant] = []

    for width in widths:
        if width >= original.width or node.find_size(width) is not None:
            break

        size = SizeVariant(width=width)
        node.sizes.append(size)
        added.append(size)

    return added

# -----------------------------------------------------------------------------
# PUBLIC API (STYLESHEETS)
# -----------------------------------------------------------------------------

def bundle_stylesheets(root: TreeNode) -> TreeNode:
    """
    Merge the depth-1 stylesheets of `root` into a single minified file.

    Stylesheets are concatenated in sibling order and removed from the tree;
    the minified result is added as an in-memory `style.css` child.

    Args:
        root: Directory whose direct children are scanned.

    Returns:
        TreeNode: The synthetic stylesheet node.

    Raises:
        PublishError: If a stylesheet cannot be read.
    """
    chunks: List[bytes] = []

    def _collect(node: TreeNode) -> TraverseStatus:
        if node is root:
            return TraverseStatus.CONTINUE
        if node.kind is NodeKind.DIRECTORY:
            return TraverseStatus.SKIP_CHILDREN

        if STYLESHEET_NAME_PATTERN.search(node.name):
            try:
                chunks.append(node.content())
            except OSError as e:
                raise PublishError(node.path, f"reading stylesheet: {e}") from e
            remove_from_tree(node)

        return TraverseStatus.CONTINUE

    traverse(root, _collect)

    bundle = add_child(root, NodeKind.FILE, STYLESHEET_BUNDLE_NAME)
    bundle.set_content(minify_css(b"".join(chunks)))

    logger.debug(f"Bundled {len(chunks)} stylesheets into {bundle.path}")
    return bundle

# -----------------------------------------------------------------------------
# HASHING AND NAMING
# -----------------------------------------------------------------------------

def content_digest(content: bytes) -> str:
    """Return the hex md5 digest used in published names."""
    return hashlib.md5(content).hexdigest()


def hashed_file_name(rel_path: str, digest: str) -> str:
    """
    Insert `-<digest>` between a path's stem and its extension.

    The extension is everything from the last dot of the leaf name, so a
    dotfile such as `.htaccess` has an empty stem.
    """
    head, leaf = posixpath.split(rel_path)
    dot = leaf.rfind(".")
    if dot == -1:
        stem, ext = leaf, ""
    else:
        stem, ext = leaf[:dot], leaf[dot:]
    return posixpath.join(head, f"{stem}-{digest}{ext}")

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _relative_path(node: TreeNode, root: TreeNode, include_root: bool) -> str:
    """Join the names from `root` (exclusive unless included) down to `node`."""
    segments: List[str] = []
    current: Optional[TreeNode] = node
    while current is not None and current is not root:
        segments.append(current.name)
        current = current.parent
    if include_root:
        segments.append(root.name)
    return posixpath.join(*reversed(segments)) if segments else ""


def _native(output_dir: str, rel_path: str) -> str:
    return os.path.join(output_dir, *rel_path.split("/"))


def _publish_dir(node: TreeNode, output_dir: str, rel_path: str) -> None:
    out_path = _native(output_dir, rel_path)
    try:
        os.mkdir(out_path)
    except OSError as e:
        raise PublishError(node.path, f"creating {out_path}: {e}") from e

    node.output_rel_path = rel_path
    node.output_path = out_path


def _publish_file(node: TreeNode, output_dir: str, rel_path: str) -> None:
    try:
        content = node.content()
    except OSError as e:
        raise PublishError(node.path, f"retrieving content: {e}") from e

    hashed_rel_path = hashed_file_name(rel_path, content_digest(content))
    out_path = _native(output_dir, hashed_rel_path)

    try:
        with open(out_path, "wb") as f:
            f.write(content)
    except OSError as e:
        raise PublishError(node.path, f"writing {out_path}: {e}") from e

    node.output_rel_path = hashed_rel_path
    node.output_path = out_path
    logger.debug(f"Published {node.path or node.name} -> {hashed_rel_path}")


def _publish_image(
        node: TreeNode,
        output_dir: str,
        rel_path: str,
        processor: ImageProcessor,
) -> None:
    try:
        content = node.content()
    except OSError as e:
        raise PublishError(node.path, f"retrieving content: {e}") from e

    digest_rel_path = posixpath.join(posixpath.dirname(rel_path), content_digest(content))
    out_path = _native(output_dir, digest_rel_path)

    try:
        os.mkdir(out_path)
    except OSError as e:
        raise PublishError(node.path, f"creating {out_path} directory: {e}") from e

    node.output_rel_path = digest_rel_path
    node.output_path = out_path

    process_sizes(node, processor)
