"""Android SDK path detection utilities."""

import os
import platform
import shutil
from pathlib import Path

from apkbadge.exceptions import ToolNotFoundError
from apkbadge.utils.deps import TOOL_INSTALL_HINTS, get_configured_tool


def get_android_home() -> Path | None:
    """Get Android SDK root directory.

    Checks environment variables and common installation locations.

    Returns:
        Path to Android SDK root, or None if not found.
    """
    for env_var in ("ANDROID_HOME", "ANDROID_SDK_ROOT"):
        if value := os.environ.get(env_var):
            path = Path(value)
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


def get_build_tools_path(min_version: str = "26.0.0") -> Path:
    """Get the latest Android build-tools directory.

    aapt and apksigner both ship with build-tools 26+, which is also the first
    release aware of adaptive icons.

    Args:
        min_version: Minimum required version (e.g., "26.0.0").

    Returns:
        Path to build-tools directory (e.g., .../build-tools/35.0.0/).

    Raises:
        ToolNotFoundError: If Android SDK or suitable build-tools not found.
    """
    android_home = get_android_home()
    if not android_home:
        raise ToolNotFoundError(
            "Android SDK",
            "Set ANDROID_HOME environment variable or install Android SDK",
        )

    build_tools_dir = android_home / "build-tools"
    if not build_tools_dir.is_dir():
        raise ToolNotFoundError(
            "Android build-tools",
            f"Install build-tools via Android SDK Manager in {android_home}",
        )

    # Find all version directories and sort them
    versions: list[tuple[tuple[int, ...], Path]] = []
    min_version_tuple = tuple(int(x) for x in min_version.split("."))

    for version_dir in build_tools_dir.iterdir():
        if not version_dir.is_dir():
            continue
        try:
            version_tuple = tuple(int(x) for x in version_dir.name.split("."))
            if version_tuple >= min_version_tuple:
                versions.append((version_tuple, version_dir))
        except ValueError:
            # Skip non-version directories
            continue

    if not versions:
        raise ToolNotFoundError(
            f"Android build-tools >= {min_version}",
            f"Install build-tools via Android SDK Manager in {android_home}",
        )

    # Return the latest version
    versions.sort(reverse=True)
    return versions[0][1]


def _build_tool(name: str, windows_suffix: str) -> Path:
    """Locate a build-tools binary: explicit config, then PATH, then the SDK.

    Raises:
        ToolNotFoundError: If the binary cannot be found anywhere.
    """
    configured = get_configured_tool(name)
    if configured is not None:
        return configured

    on_path = shutil.which(name)
    if on_path:
        return Path(on_path)

    build_tools = get_build_tools_path()
    binary = build_tools / name

    # On Windows, build-tools ship .exe/.bat wrappers
    if platform.system() == "Windows":
        binary = build_tools / f"{name}{windows_suffix}"

    if not binary.is_file():
        raise ToolNotFoundError(
            name,
            f"Expected at {binary}. {TOOL_INSTALL_HINTS[name]}",
        )

    return binary


def get_aapt() -> Path:
    """Get path to aapt binary.

    Returns:
        Path to aapt executable.

    Raises:
        ToolNotFoundError: If aapt not found.
    """
    return _build_tool("aapt", ".exe")


def get_apksigner() -> Path:
    """Get path to apksigner binary.

    Returns:
        Path to apksigner executable.

    Raises:
        ToolNotFoundError: If apksigner not found.
    """
    # apksigner is a wrapper script (jar on all platforms)
    return _build_tool("apksigner", ".bat")
