from __future__ import annotations

import json
from pathlib import Path

import pytest

from cs3build.utils.config import reload_config
from cs3build.utils.output import console
from tests._fixtures.fake_tools import FakeDexer, FakeMinifier


@pytest.fixture(autouse=True)
def _isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point config and toolchain lookups away from the developer machine."""
    monkeypatch.setenv("CS3BUILD_CONFIG", str(tmp_path / "cs3build-config.json"))
    for var in ("ANDROID_HOME", "ANDROID_SDK_ROOT", "JAVA_HOME", "R8_JAR"):
        monkeypatch.delenv(var, raising=False)
    reload_config()
    console.set_quiet(True)
    yield
    console.set_quiet(False)
    reload_config()


@pytest.fixture
def write_config(tmp_path: Path):
    """Write the isolated config file and invalidate the cache."""

    def _write(data: dict) -> Path:
        path = tmp_path / "cs3build-config.json"
        path.write_text(json.dumps(data))
        reload_config()
        return path

    return _write


@pytest.fixture
def fake_sdk(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A fake Android SDK with two build-tools versions and one platform."""
    sdk = tmp_path / "sdk"
    for version in ("30.0.3", "34.0.0", "35.0.0-rc1"):
        lib = sdk / "build-tools" / version / "lib"
        lib.mkdir(parents=True)
        (lib / "d8.jar").write_bytes(b"PK\x03\x04")
    platform_dir = sdk / "platforms" / "android-34"
    platform_dir.mkdir(parents=True)
    (platform_dir / "android.jar").write_bytes(b"PK\x03\x04")
    monkeypatch.setenv("ANDROID_HOME", str(sdk))
    return sdk


@pytest.fixture
def module_dir(tmp_path: Path) -> Path:
    """A plugin module with compiled Kotlin output under build/."""
    module = tmp_path / "repo" / "ExampleProvider"
    (module / "build" / "tmp" / "kotlin-classes" / "debug").mkdir(parents=True)
    return module


@pytest.fixture
def classes_dir(module_dir: Path) -> Path:
    return module_dir / "build" / "tmp" / "kotlin-classes" / "debug"


@pytest.fixture
def fake_minifier() -> FakeMinifier:
    return FakeMinifier()


@pytest.fixture
def fake_dexer() -> FakeDexer:
    return FakeDexer()
