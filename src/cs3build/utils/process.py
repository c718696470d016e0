"""Subprocess wrapper for the Java toolchain invocations."""

import subprocess
from dataclasses import dataclass
from pathlib import Path

from cs3build.exceptions import ProcessError
from cs3build.utils.logging import get_logger

logger = get_logger("process")


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

    @property
    def diagnostics(self) -> str:
        """Combined tool output, as D8/R8 report problems on either stream."""
        return "\n".join(part for part in (self.stdout.strip(), self.stderr.strip()) if part)


def run_tool(
    command: list[str],
    *,
    check: bool = True,
    timeout: float | None = None,
    cwd: Path | None = None,
) -> ProcessResult:
    """Run an external tool command and wait for it to exit.

    Args:
        command: Command and arguments to run.
        check: If True, raise ProcessError on non-zero exit.
        timeout: Optional timeout in seconds. None waits indefinitely.
        cwd: Working directory for the command.

    Returns:
        ProcessResult with captured output.

    Raises:
        ProcessError: If the command cannot be started, times out, or
            check=True and it returns non-zero.
    """
    logger.debug("Running: %s", " ".join(command))
    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            timeout=timeout,
            cwd=cwd,
        )
    except subprocess.TimeoutExpired as e:
        raise ProcessError(command, -1, f"Command timed out after {timeout}s") from e
    except FileNotFoundError as e:
        raise ProcessError(command, -1, f"Command not found: {command[0]}") from e

    proc_result = ProcessResult(
        command=command,
        returncode=result.returncode,
        stdout=result.stdout or "",
        stderr=result.stderr or "",
    )

    if check and not proc_result.success:
        raise ProcessError(command, result.returncode, proc_result.diagnostics)

    return proc_result
