"""External tool dependency lookup (java and the D8/R8 jar)."""

from __future__ import annotations

import os
import platform
import shutil
from pathlib import Path
from typing import Final

from cs3build.exceptions import ToolNotFoundError
from cs3build.utils.android_sdk import get_d8_jar
from cs3build.utils.config import get_config_value

# Install hints for required tools
TOOL_INSTALL_HINTS: dict[str, str] = {
    "java": "Part of Java JDK 11+ (install JDK, set JAVA_HOME or add it to PATH)",
    "r8": (
        "Part of Android SDK build-tools (set ANDROID_HOME), or set R8_JAR "
        "or configure r8_jar in ~/.cs3build/config.json"
    ),
}

R8_ENV_VAR: Final[str] = "R8_JAR"
R8_CONFIG_KEY: Final[str] = "r8_jar"
JAVA_CONFIG_KEY: Final[str] = "java"


def _find_java() -> str | None:
    configured = get_config_value(JAVA_CONFIG_KEY)
    if isinstance(configured, str):
        candidate = Path(configured).expanduser()
        if candidate.is_file():
            return str(candidate)

    if java_home := os.environ.get("JAVA_HOME"):
        name = "java.exe" if platform.system() == "Windows" else "java"
        candidate = Path(java_home) / "bin" / name
        if candidate.is_file():
            return str(candidate)

    return shutil.which("java")


def get_java_command() -> str:
    """Resolve the java executable via config, $JAVA_HOME, then PATH.

    Raises:
        ToolNotFoundError: If no java executable is found.
    """
    java = _find_java()
    if java is None:
        raise ToolNotFoundError("java", TOOL_INSTALL_HINTS["java"])
    return java


def _resolve_jar_path(raw_value: str | None) -> Path | None:
    if not raw_value:
        return None

    candidate = Path(raw_value).expanduser()
    if candidate.is_file():
        return candidate

    return None


def get_r8_jar() -> Path:
    """Resolve the jar carrying the D8/R8 entry points via env/config/SDK.

    Raises:
        ToolNotFoundError: If no jar is configured and the SDK has none.
    """
    jar_path = _resolve_jar_path(os.environ.get(R8_ENV_VAR))
    if jar_path is None:
        cfg_value = get_config_value(R8_CONFIG_KEY)
        jar_path = _resolve_jar_path(cfg_value if isinstance(cfg_value, str) else None)

    if jar_path is not None:
        return jar_path

    try:
        return get_d8_jar()
    except ToolNotFoundError as e:
        raise ToolNotFoundError("r8", TOOL_INSTALL_HINTS["r8"]) from e
