"""Rich console helpers for build lifecycle output."""

from rich.console import Console as RichConsole


class Console:
    """Wrapper around rich.Console with convenience methods."""

    def __init__(self) -> None:
        self._console = RichConsole(stderr=True)
        self._quiet = False

    def set_quiet(self, enabled: bool) -> None:
        """Enable or disable quiet mode (suppresses lifecycle output)."""
        self._quiet = enabled

    def print_success(self, message: str) -> None:
        """Print a success message in green."""
        if not self._quiet:
            self._console.print(f"[green]✓[/green] {message}")

    def print_info(self, message: str) -> None:
        """Print an info message in blue."""
        if not self._quiet:
            self._console.print(f"[blue]ℹ[/blue] {message}")

    def print_warning(self, message: str) -> None:
        """Print a warning message in yellow."""
        if not self._quiet:
            self._console.print(f"[yellow]⚠[/yellow] {message}")


def format_size(num_bytes: int) -> str:
    """Render a byte count as a human-readable size (e.g. '1.50 KB')."""
    units = ["B", "KB", "MB", "GB", "TB"]
    size = float(num_bytes)
    index = 0
    while size >= 1024 and index < len(units) - 1:
        size /= 1024
        index += 1
    return f"{size:.2f} {units[index]}"


# Global console instance
console = Console()
