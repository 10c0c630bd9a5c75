from __future__ import annotations

"""
Unit tests for the TreeNode model.

Verifies lazy content loading, in-memory overrides and the contract
errors raised for operations a node kind does not support.
"""

import pytest

from assettree.domain.errors import TreeContractError
from assettree.domain.tree_models import NodeKind, SizeVariant, TreeNode


def test_content_is_read_once_and_cached(tmp_path):
    src = tmp_path / "a.txt"
    src.write_bytes(b"first")
    node = TreeNode(NodeKind.FILE, "a.txt", path="assets/a.txt", source_path=str(src))

    assert node.content() == b"first"
    src.write_bytes(b"second")
    assert node.content() == b"first"


def test_set_content_overrides_file(tmp_path):
    src = tmp_path / "a.txt"
    src.write_bytes(b"disk")
    node = TreeNode(NodeKind.FILE, "a.txt", source_path=str(src))

    node.set_content(b"memory")

    assert node.content() == b"memory"
    assert node.is_overridden is True


def test_synthetic_file_without_content_is_empty():
    assert TreeNode(NodeKind.FILE, "empty.txt").content() == b""


@pytest.mark.parametrize("kind", [NodeKind.DIRECTORY, NodeKind.IMAGE])
def test_set_content_rejected_for_non_files(kind):
    node = TreeNode(kind, "x")

    with pytest.raises(TreeContractError):
        node.set_content(b"nope")


def test_content_rejected_for_directories():
    with pytest.raises(TreeContractError):
        TreeNode(NodeKind.DIRECTORY, "d").content()


def test_missing_source_raises_os_error(tmp_path):
    node = TreeNode(NodeKind.FILE, "gone.txt", source_path=str(tmp_path / "gone.txt"))

    with pytest.raises(OSError):
        node.content()


def test_original_size_only_for_images():
    with pytest.raises(TreeContractError):
        TreeNode(NodeKind.FILE, "a.txt").original_size()

    img = TreeNode(NodeKind.IMAGE, "a.png")
    img.sizes = [SizeVariant(640), SizeVariant(1280, original=True)]
    assert img.original_size().width == 1280
    assert img.find_size(640) is img.sizes[0]
    assert img.find_size(999) is None


def test_variant_path_requires_publishing():
    img = TreeNode(NodeKind.IMAGE, "a.png")
    img.sizes = [SizeVariant(1280, original=True)]

    with pytest.raises(TreeContractError):
        img.variant_path(img.sizes[0])

    img.output_path = "/out/imgs/abc"
    img.output_rel_path = "imgs/abc"
    assert img.variant_path(img.sizes[0], relative=True) == "imgs/abc/1280.png"
