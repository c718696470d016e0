"""Tests for SDK and toolchain lookup."""

from __future__ import annotations

from pathlib import Path

import pytest

from cs3build.exceptions import ToolNotFoundError
from cs3build.utils import android_sdk
from cs3build.utils.android_sdk import (
    get_android_home,
    get_build_tools_path,
    get_d8_jar,
    get_platform_jar,
)
from cs3build.utils.deps import get_java_command, get_r8_jar


@pytest.fixture
def no_default_sdk(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(android_sdk.platform, "system", lambda: "Unknown")


def test_android_home_from_env(fake_sdk: Path) -> None:
    assert get_android_home() == fake_sdk


def test_android_home_from_config(tmp_path: Path, write_config, no_default_sdk) -> None:
    sdk = tmp_path / "configured-sdk"
    sdk.mkdir()
    write_config({"android_home": str(sdk)})

    assert get_android_home() == sdk


def test_missing_sdk_raises(no_default_sdk) -> None:
    assert get_android_home() is None
    with pytest.raises(ToolNotFoundError, match="Android SDK"):
        get_build_tools_path()


def test_latest_build_tools_skips_previews(fake_sdk: Path) -> None:
    assert get_build_tools_path() == fake_sdk / "build-tools" / "34.0.0"


def test_build_tools_minimum_version(fake_sdk: Path) -> None:
    with pytest.raises(ToolNotFoundError, match=">= 36.0.0"):
        get_build_tools_path("36.0.0")


def test_build_tools_minimum_from_config(fake_sdk: Path, write_config) -> None:
    write_config({"min_build_tools": "99.0.0"})

    with pytest.raises(ToolNotFoundError):
        get_build_tools_path()


def test_d8_jar(fake_sdk: Path) -> None:
    assert get_d8_jar() == fake_sdk / "build-tools" / "34.0.0" / "lib" / "d8.jar"


def test_platform_jar(fake_sdk: Path) -> None:
    assert get_platform_jar(34) == fake_sdk / "platforms" / "android-34" / "android.jar"

    with pytest.raises(ToolNotFoundError, match="platform 33"):
        get_platform_jar(33)


def test_r8_jar_prefers_env(
    fake_sdk: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    r8_jar = tmp_path / "r8.jar"
    r8_jar.write_bytes(b"PK\x03\x04")
    monkeypatch.setenv("R8_JAR", str(r8_jar))

    assert get_r8_jar() == r8_jar


def test_r8_jar_from_config(fake_sdk: Path, tmp_path: Path, write_config) -> None:
    r8_jar = tmp_path / "tools" / "r8-8.5.jar"
    r8_jar.parent.mkdir()
    r8_jar.write_bytes(b"PK\x03\x04")
    write_config({"r8_jar": str(r8_jar)})

    assert get_r8_jar() == r8_jar


def test_r8_jar_falls_back_to_sdk(fake_sdk: Path) -> None:
    assert get_r8_jar() == get_d8_jar()


def test_r8_jar_missing(no_default_sdk) -> None:
    with pytest.raises(ToolNotFoundError, match="r8"):
        get_r8_jar()


def test_java_from_java_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    java = tmp_path / "jdk" / "bin" / "java"
    java.parent.mkdir(parents=True)
    java.write_text("#!/bin/sh\n")
    monkeypatch.setattr("cs3build.utils.deps.platform.system", lambda: "Linux")
    monkeypatch.setenv("JAVA_HOME", str(tmp_path / "jdk"))

    assert get_java_command() == str(java)


def test_java_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("cs3build.utils.deps.shutil.which", lambda _: None)

    with pytest.raises(ToolNotFoundError, match="java"):
        get_java_command()
