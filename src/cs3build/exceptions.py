"""Typed exception hierarchy for cs3build."""

from pathlib import Path


class Cs3BuildError(Exception):
    """Base exception for all cs3build errors."""

    pass


class ToolNotFoundError(Cs3BuildError):
    """Raised when a required external tool is not installed."""

    def __init__(self, tool: str, install_hint: str | None = None):
        self.tool = tool
        self.install_hint = install_hint
        message = f"Required tool not found: {tool}"
        if install_hint:
            message += f"\nInstall: {install_hint}"
        super().__init__(message)


class ProcessError(Cs3BuildError):
    """Raised when a subprocess command fails."""

    def __init__(self, command: list[str], returncode: int, stderr: str):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        cmd_str = " ".join(command)
        super().__init__(f"Command failed (exit {returncode}): {cmd_str}\n{stderr}")


class CollectionError(Cs3BuildError):
    """Raised when a declared class input cannot be collected."""

    def __init__(self, message: str, path: Path | None = None):
        self.path = path
        super().__init__(message)


class ClassFormatError(CollectionError):
    """Raised when a class file is malformed or truncated."""

    pass


class ConfigurationError(Cs3BuildError):
    """Raised when the build inputs describe an invalid plugin."""

    pass


class MultipleEntryPointsError(ConfigurationError):
    """Raised when more than one class carries the plugin marker."""

    def __init__(self, first: str, second: str):
        self.class_names = [first, second]
        super().__init__(
            "Only one plugin entry point is supported per build unit, "
            f"found {first} and {second}"
        )


class MinificationError(Cs3BuildError):
    """Raised when R8 fails or breaks its output contract."""

    pass


class DexingError(Cs3BuildError):
    """Raised when D8 fails to produce a dex archive."""

    pass


class ResolutionError(Cs3BuildError):
    """Raised when the entry point's obfuscated name cannot be resolved."""

    def __init__(self, message: str, class_name: str | None = None):
        self.class_name = class_name
        super().__init__(message)
