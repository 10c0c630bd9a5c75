from __future__ import annotations

"""
Assets Tree Traversal Engine.

Depth-first pre-order walk driven by a visitor returning a TraverseStatus.

Propagation rules:
- A directory child is walked recursively. TERMINATE (or a visitor
  exception) stops the whole walk; SKIP_CHILDREN only prunes that
  directory's own subtree and its siblings are still visited.
- A file or image child is visited in place. SKIP_CHILDREN stops the
  current sibling list and is returned to the enclosing level, where the
  first directory loop above absorbs it.
"""

from typing import Callable

from assettree.domain.tree_models import NodeKind, TraverseStatus, TreeNode

Visitor = Callable[[TreeNode], TraverseStatus]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def traverse(node: TreeNode, visitor: Visitor) -> None:
    """
    Walk the subtree rooted at `node`, starting with `node` itself.

    An exception raised by the visitor terminates the walk and propagates
    to the caller unchanged; no further visitor calls happen afterwards.

    Args:
        node: Start of the walk, not necessarily a tree root.
        visitor: Callable invoked for every node reached.
    """
    _traverse_rec(node, visitor)

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _traverse_rec(node: TreeNode, visitor: Visitor) -> TraverseStatus:
    status = visitor(node)
    if status is TraverseStatus.TERMINATE:
        return TraverseStatus.TERMINATE
    if status is TraverseStatus.SKIP_CHILDREN:
        return TraverseStatus.SKIP_CHILDREN

    child = node.first_child
    while child is not None:
        # The visitor may detach the child, so grab the successor first
        following = child.next

        if child.kind is NodeKind.DIRECTORY:
            if _traverse_rec(child, visitor) is TraverseStatus.TERMINATE:
                return TraverseStatus.TERMINATE
        else:
            child_status = visitor(child)
            if child_status is TraverseStatus.SKIP_CHILDREN:
                return TraverseStatus.SKIP_CHILDREN
            if child_status is TraverseStatus.TERMINATE:
                return TraverseStatus.TERMINATE

        child = following

    return TraverseStatus.CONTINUE
