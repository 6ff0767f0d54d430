"""Subprocess wrapper for all external tool invocations."""

import logging
import subprocess
from dataclasses import dataclass

from apkbadge.exceptions import ProcessError

logger = logging.getLogger(__name__)


@dataclass
class ProcessResult:
    """Result of a subprocess execution."""

    command: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        """Check if the command succeeded."""
        return self.returncode == 0


def run_tool(
    command: list[str],
    *,
    check: bool = True,
    timeout: float | None = None,
    input_data: bytes | None = None,
) -> ProcessResult:
    """Run an external tool command.

    Output is always captured and decoded as UTF-8 (undecodable bytes are
    replaced), so binary tools such as keytool can be fed raw certificate
    blocks on stdin.

    Args:
        command: Command and arguments to run.
        check: If True, raise ProcessError on non-zero exit.
        timeout: Optional timeout in seconds.
        input_data: Optional bytes written to the command's stdin.

    Returns:
        ProcessResult with command output.

    Raises:
        ProcessError: If the command cannot be started, times out, or
            (with check=True) returns non-zero.
    """
    logger.debug("Running: %s", " ".join(command))
    try:
        result = subprocess.run(
            command,
            capture_output=True,
            input=input_data,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise ProcessError(command, -1, f"Command timed out after {timeout}s") from e
    except FileNotFoundError as e:
        raise ProcessError(command, -1, f"Command not found: {command[0]}") from e
    except OSError as e:
        raise ProcessError(command, -1, f"Cannot run {command[0]}: {e}") from e

    proc_result = ProcessResult(
        command=command,
        returncode=result.returncode,
        stdout=_decode(result.stdout),
        stderr=_decode(result.stderr),
    )

    if check and not proc_result.success:
        raise ProcessError(command, result.returncode, proc_result.stderr)

    return proc_result


def _decode(raw: bytes | None) -> str:
    if not raw:
        return ""
    return raw.decode("utf-8", errors="replace")
