from __future__ import annotations

"""
Assets Tree Generator.

Mirrors a directory of static assets into a sorted in-memory tree and
provides the mutation API used afterwards: sorted child insertion and
subtree detachment. Images are recognised by extension and their natural
width is probed from the header during ingestion.
"""

import logging
import os
import posixpath
import re
from typing import Iterable, List, Optional, Union

from assettree.core.analysis.traversal import traverse
from assettree.core.pipeline.components.filters import compile_patterns, is_ignored
from assettree.core.processing.imaging import IMAGE_ERRORS, ImageProcessor, default_image_processor
from assettree.domain.constants import IMAGE_NAME_PATTERN, LOGICAL_SEP, ROOT_NODE_NAME
from assettree.domain.errors import IngestionError, TreeContractError
from assettree.domain.tree_models import NodeKind, SizeVariant, TraverseStatus, TreeNode

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API (INGESTION)
# -----------------------------------------------------------------------------

def generate_assets_tree(
        assets_path: str,
        ignore_patterns: Optional[Iterable[Union[str, re.Pattern]]] = None,
        image_processor: Optional[ImageProcessor] = None,
) -> TreeNode:
    """
    Build an assets tree rooted at `assets_path`.

    Entries whose name (suffixed with '/' for directories) matches one of the
    supplied or default ignore rules are skipped together with their whole
    subtree. Siblings are sorted by name in ascending order. A missing root
    directory yields an empty tree.

    Args:
        assets_path: Directory to mirror.
        ignore_patterns: Regex strings or compiled patterns to exclude.
        image_processor: Header probe used for PNG/JPEG files.

    Returns:
        TreeNode: The root directory node, named "assets".

    Raises:
        IngestionError: If a nested directory cannot be listed or an image
            header cannot be decoded.
    """
    root = TreeNode(
        NodeKind.DIRECTORY,
        ROOT_NODE_NAME,
        path=_logical(os.path.normpath(assets_path)),
        source_path=os.path.abspath(assets_path),
    )

    if not os.path.isdir(root.source_path):
        logger.debug(f"Assets directory not found, using empty tree: {assets_path}")
        return root

    rules = compile_patterns(ignore_patterns)
    processor = image_processor or default_image_processor()

    _ingest_dir(root, rules, processor)
    logger.debug(f"Generated assets tree for {assets_path}")

    return root

# -----------------------------------------------------------------------------
# PUBLIC API (MUTATION)
# -----------------------------------------------------------------------------

def add_child(
        parent: TreeNode,
        kind: NodeKind,
        name: str,
        source_path: Optional[str] = None,
        image_processor: Optional[ImageProcessor] = None,
) -> TreeNode:
    """
    Insert a new child keeping the parent's children sorted by name.

    The insertion point is found by walking the current children in order
    and stopping at the first one whose name sorts after `name`; directories
    are not descended into. Logical paths of the new node's subtree are
    recomputed from the parent chain.

    Args:
        parent: Directory node receiving the child.
        kind: Kind of the new node.
        name: Leaf name of the new node.
        source_path: Backing file for lazy content reads, if any.
        image_processor: Header probe used when adding an image with a source.

    Returns:
        TreeNode: The inserted node.

    Raises:
        TreeContractError: If `parent` is not a directory, or an image is
            added without a backing file.
    """
    if parent.kind is not NodeKind.DIRECTORY:
        raise TreeContractError(f"{parent.name} is not a directory node")

    child = TreeNode(kind, name, parent=parent, source_path=source_path)
    if kind is NodeKind.IMAGE:
        if source_path is None:
            raise TreeContractError(f"image node {name} needs a source path")
        processor = image_processor or default_image_processor()
        child.sizes.append(SizeVariant(width=processor.probe_width(source_path), original=True))

    if parent.first_child is None:
        parent.first_child = child
    else:
        previous_node = _find_insertion_predecessor(parent, name)

        if previous_node is None:
            parent.first_child.previous = child
            child.next = parent.first_child
            parent.first_child = child
        else:
            child.previous = previous_node
            child.next = previous_node.next
            if previous_node.next is not None:
                previous_node.next.previous = child
            previous_node.next = child

    def _refresh_path(n: TreeNode) -> TraverseStatus:
        n.path = posixpath.join(n.parent.path, n.name)
        return TraverseStatus.CONTINUE

    traverse(child, _refresh_path)

    return child


def remove_from_tree(node: TreeNode) -> None:
    """
    Detach `node` from its parent and siblings.

    Logical paths of the whole detached subtree are blanked; links inside the
    subtree are left untouched. On-disk content is never deleted. Detached
    subtrees are not meant to be re-attached.

    Args:
        node: The node to detach. Root nodes are left as they are.
    """
    if node.parent is None:
        return

    if node.previous is None:
        node.parent.first_child = node.next
        if node.next is not None:
            node.next.previous = None
    else:
        node.previous.next = node.next
        if node.next is not None:
            node.next.previous = node.previous

    if node.kind is NodeKind.DIRECTORY:
        def _blank_path(n: TreeNode) -> TraverseStatus:
            n.path = ""
            return TraverseStatus.CONTINUE

        traverse(node, _blank_path)

    node.parent = None
    node.previous = None
    node.next = None
    node.path = ""


def render_tree(root: TreeNode) -> List[str]:
    """
    Render an indented listing of a tree for diagnostics.

    Each line shows the kind marker, the name and, once published, the
    output-relative path.

    Returns:
        List[str]: One line per node.
    """
    lines: List[str] = []

    def _depth(n: TreeNode) -> int:
        depth = 0
        while n is not root and n.parent is not None:
            n = n.parent
            depth += 1
        return depth

    def _render(n: TreeNode) -> TraverseStatus:
        marker = {NodeKind.DIRECTORY: "+", NodeKind.FILE: "-", NodeKind.IMAGE: "*"}[n.kind]
        line = f"{'    ' * _depth(n)}{marker} {n.name}"
        if n.output_rel_path is not None:
            line += f" -> {n.output_rel_path}"
        if n.is_image:
            widths = ", ".join(str(s.width) for s in sorted(n.sizes, key=lambda s: s.width))
            line += f" [{widths}]"
        lines.append(line)
        return TraverseStatus.CONTINUE

    traverse(root, _render)
    return lines

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _logical(path: str) -> str:
    """Join path segments with '/' whatever the host separator is."""
    return path.replace(os.sep, LOGICAL_SEP)


def _find_insertion_predecessor(parent: TreeNode, name: str) -> Optional[TreeNode]:
    """Return the last child whose name does not sort after `name`."""
    previous_node: Optional[TreeNode] = None

    def _visit(n: TreeNode) -> TraverseStatus:
        nonlocal previous_node
        if n is parent:
            return TraverseStatus.CONTINUE
        if name < n.name:
            return TraverseStatus.TERMINATE

        previous_node = n
        if n.kind is NodeKind.DIRECTORY:
            return TraverseStatus.SKIP_CHILDREN
        return TraverseStatus.CONTINUE

    traverse(parent, _visit)
    return previous_node


def _ingest_dir(dir_node: TreeNode, rules: List[re.Pattern], processor: ImageProcessor) -> None:
    """Recursively append the sorted, non-ignored entries of a directory."""
    try:
        with os.scandir(dir_node.source_path) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        raise IngestionError(dir_node.path, str(e)) from e

    last_node: Optional[TreeNode] = None

    for entry in entries:
        entry_is_dir = entry.is_dir()
        if is_ignored(entry.name, entry_is_dir, rules):
            logger.debug(f"Ignoring {entry.path}")
            continue

        node_path = posixpath.join(dir_node.path, entry.name)

        if entry_is_dir:
            node = TreeNode(NodeKind.DIRECTORY, entry.name, path=node_path, source_path=entry.path)
            _ingest_dir(node, rules, processor)
        elif IMAGE_NAME_PATTERN.search(entry.name):
            try:
                width = processor.probe_width(entry.path)
            except IMAGE_ERRORS as e:
                raise IngestionError(node_path, f"decoding image header: {e}") from e
            node = TreeNode(NodeKind.IMAGE, entry.name, path=node_path, source_path=entry.path)
            node.sizes.append(SizeVariant(width=width, original=True))
        else:
            node = TreeNode(NodeKind.FILE, entry.name, path=node_path, source_path=entry.path)

        node.parent = dir_node
        if last_node is None:
            dir_node.first_child = node
        else:
            last_node.next = node
            node.previous = last_node
        last_node = node
