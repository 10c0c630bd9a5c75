from __future__ import annotations

"""
Unit tests for assets tree ingestion.

Verifies directory mirroring, ignore rules (including whole-subtree
pruning), image detection with width probing and error reporting.
"""

import pytest
from PIL import Image

from assettree.core.analysis.tree_generator import generate_assets_tree, render_tree
from assettree.core.pipeline.components.filters import item_ignore_patterns
from assettree.domain.errors import IngestionError
from assettree.domain.tree_models import NodeKind


@pytest.fixture
def assets_dir(tmp_path, make_image):
    """
    Structure:
    /assets
      foo.txt
      .gitkeep
      /imgs
        red.png (1920x1080)
        photo.jpg (800x600)
      /vendor
        lib.css
      zeta.css
    """
    root = tmp_path / "assets"
    root.mkdir()
    (root / "foo.txt").write_text("foo", encoding="utf-8")
    (root / ".gitkeep").write_text("", encoding="utf-8")
    (root / "zeta.css").write_text("a { color: red; }", encoding="utf-8")
    make_image(root / "imgs" / "red.png", 1920, 1080)
    make_image(root / "imgs" / "photo.jpg", 800, 600)
    (root / "vendor").mkdir()
    (root / "vendor" / "lib.css").write_text("b { margin: 0; }", encoding="utf-8")
    return root


def test_generate_mirrors_directory_sorted(assets_dir):
    tree = generate_assets_tree(str(assets_dir))

    assert tree.name == "assets"
    assert tree.kind is NodeKind.DIRECTORY
    assert [c.name for c in tree.children()] == ["foo.txt", "imgs", "vendor", "zeta.css"]

    imgs = tree.first_child.next
    assert [c.name for c in imgs.children()] == ["photo.jpg", "red.png"]
    assert imgs.path == f"{tree.path}/imgs"
    assert imgs.first_child.path == f"{tree.path}/imgs/photo.jpg"


def test_default_rules_drop_gitkeep(assets_dir):
    tree = generate_assets_tree(str(assets_dir))

    assert ".gitkeep" not in [c.name for c in tree.children()]


def test_images_record_original_width(assets_dir):
    tree = generate_assets_tree(str(assets_dir))
    imgs = tree.first_child.next
    photo, red = list(imgs.children())

    assert red.kind is NodeKind.IMAGE
    assert [(s.width, s.original, s.materialized) for s in red.sizes] == [(1920, True, False)]
    assert photo.original_size().width == 800


def test_plain_files_are_file_nodes(assets_dir):
    tree = generate_assets_tree(str(assets_dir))

    assert tree.first_child.kind is NodeKind.FILE
    assert tree.first_child.content() == b"foo"


def test_ignored_directory_prunes_whole_subtree(assets_dir):
    tree = generate_assets_tree(str(assets_dir), [r"^vendor/$"])

    assert [c.name for c in tree.children()] == ["foo.txt", "imgs", "zeta.css"]


def test_directory_rule_does_not_match_files(assets_dir):
    tree = generate_assets_tree(str(assets_dir), [r".*/$"])

    assert [c.name for c in tree.children()] == ["foo.txt", "zeta.css"]


def test_item_rules_keep_only_direct_assets(tmp_path, make_image):
    item = tmp_path / "my-post"
    item.mkdir()
    (item / "content_en.md").write_text("# hi", encoding="utf-8")
    (item / "data.yaml").write_text("feed: true", encoding="utf-8")
    make_image(item / "cover.png", 100, 50)
    (item / "nested").mkdir()
    (item / "nested" / "x.txt").write_text("x", encoding="utf-8")

    tree = generate_assets_tree(str(item), item_ignore_patterns())

    assert [c.name for c in tree.children()] == ["cover.png"]


def test_missing_root_yields_empty_tree(tmp_path):
    tree = generate_assets_tree(str(tmp_path / "nope"))

    assert tree.first_child is None
    assert tree.name == "assets"


def test_undecodable_image_raises_ingestion_error(tmp_path):
    root = tmp_path / "assets"
    root.mkdir()
    (root / "broken.png").write_bytes(b"not an image")

    with pytest.raises(IngestionError) as exc_info:
        generate_assets_tree(str(root))

    assert "broken.png" in str(exc_info.value)


def test_oversized_image_raises_ingestion_error(tmp_path, make_image):
    root = tmp_path / "assets"
    make_image(root / "huge.png", 10, 10)

    class BombProcessor:
        def probe_width(self, file_path):
            raise Image.DecompressionBombError("too many pixels")

    with pytest.raises(IngestionError) as exc_info:
        generate_assets_tree(str(root), image_processor=BombProcessor())

    assert "huge.png" in str(exc_info.value)
    assert "too many pixels" in str(exc_info.value)


def test_render_tree_lists_nodes(assets_dir):
    tree = generate_assets_tree(str(assets_dir))
    lines = render_tree(tree)

    assert lines[0] == "+ assets"
    assert "    - foo.txt" in lines
    assert "        * red.png [1920]" in lines
