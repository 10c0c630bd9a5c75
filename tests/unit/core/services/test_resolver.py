from __future__ import annotations

"""
Unit tests for cross-namespace resolution and link rendering.

Verifies:
1. Segment-by-segment relative lookup and its round trip.
2. Strict global/local tree selection by the leading '/'.
3. Public link rendering with and without scope ids.
"""

import pytest

from assettree.core.analysis.traversal import traverse
from assettree.core.analysis.tree_generator import add_child
from assettree.core.services.resolver import (
    asset_link,
    find_by_relative_path,
    find_in_trees,
    find_node_by_name,
)
from assettree.domain.errors import TreeContractError
from assettree.domain.tree_models import NodeKind, SizeVariant, TraverseStatus, TreeNode


def _tree(root_path, *paths):
    root = TreeNode(NodeKind.DIRECTORY, "assets", path=root_path)
    for p in paths:
        parent = root
        segments = p.split("/")
        for i, seg in enumerate(segments):
            existing = next((c for c in parent.children() if c.name == seg), None)
            if existing is None:
                kind = NodeKind.FILE if i == len(segments) - 1 else NodeKind.DIRECTORY
                existing = add_child(parent, kind, seg)
            parent = existing
    return root


@pytest.fixture
def global_tree():
    return _tree("site/assets", "a/b", "a/c/d.txt", "icon.png.txt", "style.css")


@pytest.fixture
def local_tree():
    return _tree("site/posts/hello", "a/b", "cover.txt")


def test_find_by_relative_path_round_trip(global_tree):
    def _check(node):
        if node is global_tree:
            return TraverseStatus.CONTINUE
        rel = node.path[len(global_tree.path) + 1:]
        assert find_by_relative_path(global_tree, rel) is node
        assert find_by_relative_path(global_tree, rel + "/bogus") is None
        return TraverseStatus.CONTINUE

    traverse(global_tree, _check)


def test_find_by_relative_path_misses(global_tree):
    assert find_by_relative_path(global_tree, "nope") is None
    assert find_by_relative_path(global_tree, "a/x") is None
    assert find_by_relative_path(global_tree, "") is None


def test_find_node_by_name(global_tree):
    assert find_node_by_name(global_tree, "d.txt").path == "site/assets/a/c/d.txt"
    assert find_node_by_name(global_tree, "missing") is None


def test_leading_slash_selects_global_tree_only(global_tree, local_tree):
    node, searched_local = find_in_trees(global_tree, local_tree, "/a/b")

    assert searched_local is False
    assert node.path == "site/assets/a/b"


def test_relative_reference_selects_local_tree_only(global_tree, local_tree):
    node, searched_local = find_in_trees(global_tree, local_tree, "a/b")
    assert searched_local is True
    assert node.path == "site/posts/hello/a/b"

    node, searched_local = find_in_trees(global_tree, local_tree, "style.css")
    assert node is None
    assert searched_local is True


def test_missing_trees_and_empty_reference(global_tree, local_tree):
    assert find_in_trees(global_tree, None, "cover.txt") == (None, True)
    assert find_in_trees(None, local_tree, "/a/b") == (None, False)
    assert find_in_trees(global_tree, local_tree, "") == (None, False)


def test_asset_link_for_files():
    node = TreeNode(NodeKind.FILE, "app.js")
    node.output_rel_path = "js/app-abc.js"

    assert asset_link(node) == "/assets/js/app-abc.js"
    assert asset_link(node, scope_id="post-1") == "/assets/post-1/js/app-abc.js"
    assert asset_link(node, published_root="static") == "/static/js/app-abc.js"


def test_asset_link_for_images_defaults_to_original():
    node = TreeNode(NodeKind.IMAGE, "hero.jpg")
    node.sizes = [SizeVariant(640), SizeVariant(1280, original=True)]
    node.output_path = "/out/imgs/abc"
    node.output_rel_path = "imgs/abc"

    assert asset_link(node) == "/assets/imgs/abc/1280.jpg"
    assert asset_link(node, size=node.sizes[0]) == "/assets/imgs/abc/640.jpg"


def test_asset_link_requires_publishing():
    with pytest.raises(TreeContractError):
        asset_link(TreeNode(NodeKind.FILE, "a.txt"))
