"""Tests for the D8 archive step."""

from __future__ import annotations

from pathlib import Path

import pytest

from cs3build.core.archive import ArchiveBuilder, clear_dex_outputs, list_dex_outputs
from cs3build.exceptions import DexingError, ProcessError
from cs3build.models.classes import CompiledClass
from tests._fixtures.fake_tools import FakeDexer


def _classes(*names: str) -> list[CompiledClass]:
    return [CompiledClass(path=Path(f"/classes/{name}.class"), data=b"") for name in names]


def test_list_dex_outputs_in_load_order(tmp_path: Path) -> None:
    for name in ("classes10.dex", "classes2.dex", "classes.dex", "resources.arsc", "classes.jar"):
        (tmp_path / name).write_bytes(b"")

    assert [p.name for p in list_dex_outputs(tmp_path)] == [
        "classes.dex",
        "classes2.dex",
        "classes10.dex",
    ]


def test_list_dex_outputs_missing_dir(tmp_path: Path) -> None:
    assert list_dex_outputs(tmp_path / "nope") == []


def test_clear_dex_outputs_keeps_other_files(tmp_path: Path) -> None:
    (tmp_path / "classes.dex").write_bytes(b"")
    (tmp_path / "classes3.dex").write_bytes(b"")
    (tmp_path / "pluginClass").write_text("a.b")

    clear_dex_outputs(tmp_path)

    assert sorted(p.name for p in tmp_path.iterdir()) == ["pluginClass"]


def test_build_dexes_every_class(tmp_path: Path) -> None:
    dexer = FakeDexer(segments=2)
    classes = _classes("A", "B", "C")

    segments = ArchiveBuilder(dexer).build(classes, tmp_path / "out", 21, [Path("/sdk/android.jar")])

    assert [p.name for p in segments] == ["classes.dex", "classes2.dex"]
    (call,) = dexer.calls
    assert call["inputs"] == [c.path for c in classes]
    assert call["libraries"] == [Path("/sdk/android.jar")]
    assert call["min_api"] == 21


def test_build_failure(tmp_path: Path) -> None:
    dexer = FakeDexer(error=ProcessError(["d8"], 1, "Compilation failed"))

    with pytest.raises(DexingError, match="Compilation failed"):
        ArchiveBuilder(dexer).build(_classes("A"), tmp_path, 21)


def test_build_without_output(tmp_path: Path) -> None:
    with pytest.raises(DexingError, match="no dex file"):
        ArchiveBuilder(FakeDexer(segments=0)).build(_classes("A"), tmp_path, 21)
