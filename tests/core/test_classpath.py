"""Tests for library classpath filtering."""

from __future__ import annotations

from pathlib import Path

import pytest

from cs3build.core.classpath import filter_classpath, is_foreign_build_path

OWN_BUILD = Path("/repo/moduleB/build")


@pytest.mark.parametrize(
    ("path", "foreign"),
    [
        ("/repo/moduleA/build/libs/x.jar", True),
        ("/repo/moduleA/build/tmp/kotlin-classes/debug", True),
        ("/repo/moduleB/build/libs/x.jar", False),
        ("/repo/moduleB/build/intermediates/classes", False),
        ("/sdk/platforms/android-34/android.jar", False),
        ("/home/dev/.gradle/caches/files-2.1/okhttp-4.12.0.jar", False),
        ("/repo/moduleB/../moduleA/build/libs/x.jar", True),
        ("/repo/moduleB/build/../../moduleA/build/x.jar", True),
        ("/repo/buildSrc/libs/x.jar", False),
    ],
)
def test_is_foreign_build_path(path: str, foreign: bool) -> None:
    assert is_foreign_build_path(Path(path), OWN_BUILD) is foreign


def test_filter_keeps_order_and_drops_foreign() -> None:
    paths = [
        Path("/home/dev/.gradle/caches/library.jar"),
        Path("/repo/moduleA/build/libs/x.jar"),
        Path("/repo/moduleB/build/libs/x.jar"),
        Path("/sdk/platforms/android-34/android.jar"),
    ]

    assert filter_classpath(paths, OWN_BUILD) == [
        Path("/home/dev/.gradle/caches/library.jar"),
        Path("/repo/moduleB/build/libs/x.jar"),
        Path("/sdk/platforms/android-34/android.jar"),
    ]


def test_filter_deduplicates() -> None:
    jar = Path("/sdk/platforms/android-34/android.jar")

    assert filter_classpath([jar, jar, Path("/sdk/platforms/./android-34/android.jar")], OWN_BUILD) == [jar]


def test_relative_paths_are_resolved_against_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    base = Path.cwd()
    own_build = base / "moduleB" / "build"

    kept = filter_classpath(
        [Path("moduleA/build/libs/a.jar"), Path("moduleB/build/libs/b.jar")], own_build
    )

    assert kept == [base / "moduleB" / "build" / "libs" / "b.jar"]
