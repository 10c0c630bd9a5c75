from __future__ import annotations

"""
Cross-Namespace Asset Resolution.

Resolves path-like references against the global assets tree (references
starting with '/') or the local tree of the content item being rendered
(any other reference), and renders the public links of resolved nodes.
"""

import logging
import posixpath
from typing import List, Optional, Tuple

from assettree.core.analysis.traversal import traverse
from assettree.domain.constants import DEFAULT_PUBLISHED_ROOT, LOGICAL_SEP
from assettree.domain.errors import TreeContractError
from assettree.domain.tree_models import NodeKind, SizeVariant, TraverseStatus, TreeNode

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# LOOKUP
# -----------------------------------------------------------------------------

def find_by_relative_path(root: TreeNode, rel_path: str) -> Optional[TreeNode]:
    """
    Find the node reached from `root` by following '/'-separated names.

    Each level is scanned linearly for an exact name match.

    Args:
        root: Tree root; its own name is not part of `rel_path`.
        rel_path: Path such as "imgs/red.png".

    Returns:
        Optional[TreeNode]: The matching node, or None.
    """
    segments = rel_path.split(LOGICAL_SEP)
    node = root.first_child
    i = 0

    while i < len(segments) and node is not None:
        if node.name == segments[i]:
            if i + 1 == len(segments):
                return node
            node = node.first_child
            i += 1
        else:
            node = node.next

    return None


def find_node_by_name(root: TreeNode, name: str) -> Optional[TreeNode]:
    """Return the first node named `name` in pre-order, or None."""
    found: Optional[TreeNode] = None

    def _visit(node: TreeNode) -> TraverseStatus:
        nonlocal found
        if node.name == name:
            found = node
            return TraverseStatus.TERMINATE
        return TraverseStatus.CONTINUE

    traverse(root, _visit)
    return found


def find_in_trees(
        global_tree: Optional[TreeNode],
        local_tree: Optional[TreeNode],
        reference: str,
) -> Tuple[Optional[TreeNode], bool]:
    """
    Resolve a reference against exactly one of the two trees in scope.

    A leading '/' selects the global tree and is stripped before lookup;
    anything else is looked up verbatim in the local tree. There is no
    fallback from one tree to the other.

    Args:
        global_tree: Site-wide assets tree, if any.
        local_tree: Assets tree of the current content item, if any.
        reference: The path-like reference.

    Returns:
        Tuple[Optional[TreeNode], bool]: The node (or None) and whether the
        local tree was the one consulted.
    """
    if not reference:
        return None, False

    if reference.startswith(LOGICAL_SEP):
        if global_tree is None:
            return None, False
        return find_by_relative_path(global_tree, reference[1:]), False

    if local_tree is None:
        return None, True
    return find_by_relative_path(local_tree, reference), True

# -----------------------------------------------------------------------------
# LINK RENDERING
# -----------------------------------------------------------------------------

def asset_link(
        node: TreeNode,
        scope_id: str = "",
        size: Optional[SizeVariant] = None,
        published_root: str = DEFAULT_PUBLISHED_ROOT,
) -> str:
    """
    Render the public link of a published node.

    Format: `/<published_root>[/<scope_id>]/<output-relative path>`, where
    images point at the file of `size` (the original width by default).

    Args:
        node: A published node.
        scope_id: Content item identifier, only for local-tree nodes.
        size: Image variant to link to.
        published_root: Public prefix of the assets output directory.

    Raises:
        TreeContractError: If the node hasn't been published.
    """
    segments: List[str] = ["/" + published_root]
    if scope_id:
        segments.append(scope_id)

    if size is not None:
        segments.append(node.variant_path(size, relative=True))
    elif node.kind is NodeKind.IMAGE:
        segments.append(node.variant_path(node.original_size(), relative=True))
    else:
        if node.output_rel_path is None:
            raise TreeContractError(f"{node.name} hasn't been published")
        segments.append(node.output_rel_path)

    return posixpath.normpath(posixpath.join(*segments))


def generate_srcset_value(
        node: TreeNode,
        scope_id: str = "",
        published_root: str = DEFAULT_PUBLISHED_ROOT,
) -> str:
    """
    Render a `srcset` listing of the materialized variants of an image.

    Variants are listed by ascending width as `<link> <width>w`, joined with
    ", ". Variants not written yet are left out.

    Returns:
        str: The listing, empty when nothing is materialized.
    """
    entries: List[str] = []
    for size in sorted(node.sizes, key=lambda s: s.width):
        if not size.materialized:
            continue
        link = asset_link(node, scope_id, size, published_root)
        entries.append(f"{link} {size.width}w")

    return ", ".join(entries)
