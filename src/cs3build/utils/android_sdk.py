"""Android SDK path detection utilities."""

import os
import platform
from pathlib import Path

from cs3build.exceptions import ToolNotFoundError
from cs3build.utils.config import get_config_value

DEFAULT_MIN_BUILD_TOOLS = "30.0.0"


def get_android_home() -> Path | None:
    """Get Android SDK root directory.

    Checks environment variables, the config file, then common installation
    locations.

    Returns:
        Path to Android SDK root, or None if not found.
    """
    for env_var in ("ANDROID_HOME", "ANDROID_SDK_ROOT"):
        if value := os.environ.get(env_var):
            path = Path(value)
            if path.is_dir():
                return path

    configured = get_config_value("android_home")
    if isinstance(configured, str):
        path = Path(configured).expanduser()
        if path.is_dir():
            return path

    system = platform.system()
    home = Path.home()

    common_locations: list[Path] = []
    if system == "Darwin":  # macOS
        common_locations = [
            home / "Library" / "Android" / "sdk",
            Path("/opt/android-sdk"),
        ]
    elif system == "Linux":
        common_locations = [
            home / "Android" / "Sdk",
            home / "android-sdk",
            Path("/opt/android-sdk"),
        ]
    elif system == "Windows":
        common_locations = [
            home / "AppData" / "Local" / "Android" / "Sdk",
            Path("C:/Android/sdk"),
        ]

    for location in common_locations:
        if location.is_dir():
            return location

    return None


def _require_android_home() -> Path:
    android_home = get_android_home()
    if not android_home:
        raise ToolNotFoundError(
            "Android SDK",
            "Set ANDROID_HOME environment variable or install Android SDK",
        )
    return android_home


def get_build_tools_path(min_version: str | None = None) -> Path:
    """Get the latest Android build-tools directory.

    Args:
        min_version: Minimum required version (e.g., "30.0.0"). Defaults to
            the ``min_build_tools`` config value, then 30.0.0.

    Returns:
        Path to build-tools directory (e.g., .../build-tools/35.0.0/).

    Raises:
        ToolNotFoundError: If Android SDK or suitable build-tools not found.
    """
    if min_version is None:
        min_version = str(get_config_value("min_build_tools", DEFAULT_MIN_BUILD_TOOLS))

    android_home = _require_android_home()

    build_tools_dir = android_home / "build-tools"
    if not build_tools_dir.is_dir():
        raise ToolNotFoundError(
            "Android build-tools",
            f"Install build-tools via Android SDK Manager in {android_home}",
        )

    versions: list[tuple[tuple[int, ...], Path]] = []
    min_version_tuple = tuple(int(x) for x in min_version.split("."))

    for version_dir in build_tools_dir.iterdir():
        if not version_dir.is_dir():
            continue
        try:
            version_tuple = tuple(int(x) for x in version_dir.name.split("."))
        except ValueError:
            # Preview builds like 35.0.0-rc1
            continue
        if version_tuple >= min_version_tuple:
            versions.append((version_tuple, version_dir))

    if not versions:
        raise ToolNotFoundError(
            f"Android build-tools >= {min_version}",
            f"Install build-tools via Android SDK Manager in {android_home}",
        )

    versions.sort(reverse=True)
    return versions[0][1]


def get_d8_jar() -> Path:
    """Get path to the build-tools d8.jar (ships both D8 and R8).

    Raises:
        ToolNotFoundError: If d8.jar not found.
    """
    d8_jar = get_build_tools_path() / "lib" / "d8.jar"

    if not d8_jar.is_file():
        raise ToolNotFoundError(
            "d8.jar",
            f"Expected at {d8_jar}, install via Android SDK Manager",
        )

    return d8_jar


def get_platform_jar(api_level: int) -> Path:
    """Get the android.jar for a compile SDK level (used as boot classpath).

    Raises:
        ToolNotFoundError: If the platform is not installed.
    """
    android_jar = _require_android_home() / "platforms" / f"android-{api_level}" / "android.jar"

    if not android_jar.is_file():
        raise ToolNotFoundError(
            f"Android platform {api_level}",
            f'Install "platforms;android-{api_level}" via Android SDK Manager',
        )

    return android_jar
