"""External tool dependency checker."""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import Final

from apkbadge.exceptions import ToolNotFoundError
from apkbadge.utils.config import get_config_value

# Install hints for required tools
TOOL_INSTALL_HINTS: dict[str, str] = {
    "aapt": "Part of Android SDK build-tools (set ANDROID_HOME or APKBADGE_AAPT)",
    "apksigner": "Part of Android SDK build-tools (set ANDROID_HOME)",
    "keytool": "Part of Java JDK (install JDK and ensure it's on PATH)",
    "openssl": "https://www.openssl.org/ (usually provided by the OS package manager)",
}

AAPT_ENV_VAR: Final[str] = "APKBADGE_AAPT"
AAPT_CONFIG_KEY: Final[str] = "aapt_path"
APKSIGNER_CONFIG_KEY: Final[str] = "apksigner_path"


def check_tool(tool: str) -> bool:
    """Check if a tool is available on PATH."""

    return shutil.which(tool) is not None


def require(*tools: str) -> None:
    """Require that all specified tools are available.

    Args:
        *tools: Names of tools that must be available.

    Raises:
        ToolNotFoundError: If any tool is not found.
    """
    for tool in tools:
        if not check_tool(tool):
            raise ToolNotFoundError(tool, TOOL_INSTALL_HINTS.get(tool))


def _resolve_executable(raw_value: str | None) -> Path | None:
    if not raw_value:
        return None

    candidate = Path(raw_value).expanduser()
    if candidate.is_file():
        return candidate

    return None


def get_configured_tool(tool: str) -> Path | None:
    """Resolve an explicitly configured tool path via env/config.

    Only aapt honours the environment variable; both aapt and apksigner
    can be pinned in ~/.apkbadge/config.json.
    """

    if tool == "aapt":
        path = _resolve_executable(os.environ.get(AAPT_ENV_VAR))
        if path is not None:
            return path
        cfg_value = get_config_value(AAPT_CONFIG_KEY)
    elif tool == "apksigner":
        cfg_value = get_config_value(APKSIGNER_CONFIG_KEY)
    else:
        return None

    return _resolve_executable(cfg_value if isinstance(cfg_value, str) else None)
