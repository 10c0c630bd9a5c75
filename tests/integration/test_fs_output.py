from __future__ import annotations

"""
Integration tests for path normalization and output directory preparation.
"""

import os

from assettree.infra.fs import normalize_path, prepare_output_dir


def test_normalize_path_falls_back_when_empty(tmp_path):
    assert normalize_path("   ", str(tmp_path)) == os.path.abspath(str(tmp_path))


def test_normalize_path_expands_variables(tmp_path, monkeypatch):
    monkeypatch.setenv("ASSETTREE_OUT", str(tmp_path))

    assert normalize_path("$ASSETTREE_OUT/public", "/unused") == os.path.join(str(tmp_path), "public")


def test_prepare_output_dir_wipes_previous_build(tmp_path):
    out = tmp_path / "public"
    (out / "nested").mkdir(parents=True)
    (out / "nested" / "old.css").write_text("x", encoding="utf-8")

    prepare_output_dir(str(out))

    assert out.is_dir()
    assert list(out.iterdir()) == []


def test_prepare_output_dir_replaces_plain_file(tmp_path):
    out = tmp_path / "public"
    out.write_text("not a directory", encoding="utf-8")

    prepare_output_dir(str(out))

    assert out.is_dir()
