"""Tests for build settings and results."""

from __future__ import annotations

from pathlib import Path

from cs3build.models.build import BuildSettings, PipelineResult


def test_defaults() -> None:
    settings = BuildSettings(build_dir=Path("/repo/Provider/build"))

    assert settings.min_sdk == 21
    assert not settings.minify_enabled
    assert settings.dex_output_file == Path("/repo/Provider/build/intermediates/classes.dex")
    assert settings.mapping_file == Path("/repo/Provider/build/intermediates/r8-mapping.txt")
    assert settings.required_rules_file.name == "r8-required-rules.pro"
    assert settings.plugin_class_file == Path("/repo/Provider/build/intermediates/pluginClass")


def test_unset_min_sdk_defaults_to_21() -> None:
    assert BuildSettings(build_dir=Path("build"), min_sdk=None).min_sdk == 21


def test_minify_enabled_by_either_variant() -> None:
    assert BuildSettings(build_dir=Path("build"), debug_minify=True).minify_enabled
    assert BuildSettings(build_dir=Path("build"), release_minify=True).minify_enabled


def test_result_size(tmp_path: Path) -> None:
    (tmp_path / "classes.dex").write_bytes(b"x" * 10)
    (tmp_path / "classes2.dex").write_bytes(b"x" * 5)

    result = PipelineResult(dex_files=[tmp_path / "classes.dex", tmp_path / "classes2.dex"])

    assert result.total_size == 15
    assert not result.has_entry_point
