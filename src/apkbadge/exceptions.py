"""Typed exception hierarchy for apkbadge."""


class ApkBadgeError(Exception):
    """Base exception for all apkbadge errors."""

    pass


class ToolNotFoundError(ApkBadgeError):
    """Raised when a required external tool is not installed."""

    def __init__(self, tool: str, install_hint: str | None = None):
        self.tool = tool
        self.install_hint = install_hint
        message = f"Required tool not found: {tool}"
        if install_hint:
            message += f"\nInstall: {install_hint}"
        super().__init__(message)


class ProcessError(ApkBadgeError):
    """Raised when a subprocess command fails."""

    def __init__(self, command: list[str], returncode: int, stderr: str):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        cmd_str = " ".join(command)
        super().__init__(f"Command failed (exit {returncode}): {cmd_str}\n{stderr}")


class ManifestValidateError(ApkBadgeError):
    """Raised when AndroidManifest.xml repeats a tag that must be unique."""

    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(f"Duplication of {tag} tag is not allowed")
