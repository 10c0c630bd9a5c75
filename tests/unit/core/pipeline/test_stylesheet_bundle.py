from __future__ import annotations

"""
Unit tests for depth-1 stylesheet bundling.
"""

from assettree.core.analysis.tree_generator import generate_assets_tree
from assettree.core.pipeline.publisher import bundle_stylesheets
from assettree.domain.tree_models import NodeKind


def _names(node):
    return [c.name for c in node.children()]


def test_bundle_merges_top_level_css_in_order(tmp_path):
    root = tmp_path / "assets"
    (root / "themes").mkdir(parents=True)
    (root / "b.css").write_text("b { color: blue; }\n", encoding="utf-8")
    (root / "a.css").write_text("/* first */\na { color: red; }\n", encoding="utf-8")
    (root / "themes" / "dark.css").write_text("body { color: #fff; }", encoding="utf-8")
    (root / "z.txt").write_text("z", encoding="utf-8")
    tree = generate_assets_tree(str(root))

    bundle = bundle_stylesheets(tree)

    assert _names(tree) == ["style.css", "themes", "z.txt"]
    assert _names(tree.first_child.next) == ["dark.css"]
    assert bundle.kind is NodeKind.FILE
    assert bundle.is_overridden is True
    assert bundle.path == f"{tree.path}/style.css"

    css = bundle.content().decode("utf-8")
    assert "first" not in css
    assert css.index("a{") < css.index("b{")


def test_bundle_without_stylesheets_adds_empty_file(tmp_path):
    root = tmp_path / "assets"
    root.mkdir()
    (root / "app.js").write_text("1", encoding="utf-8")
    tree = generate_assets_tree(str(root))

    bundle = bundle_stylesheets(tree)

    assert _names(tree) == ["app.js", "style.css"]
    assert bundle.content() == b""


def test_bundle_consumes_existing_style_css(tmp_path):
    root = tmp_path / "assets"
    root.mkdir()
    (root / "style.css").write_text("p { margin: 0; }", encoding="utf-8")
    tree = generate_assets_tree(str(root))

    bundle_stylesheets(tree)

    assert _names(tree) == ["style.css"]
    assert tree.first_child.content() == b"p{margin:0}"


def test_bundle_accepts_latin1_stylesheet(tmp_path):
    root = tmp_path / "assets"
    root.mkdir()
    (root / "a.css").write_bytes(b"/* caf\xe9 */ a { color: red; }")

    tree = generate_assets_tree(str(root))
    bundle = bundle_stylesheets(tree)

    assert bundle.content() == b"a{color:red}"
