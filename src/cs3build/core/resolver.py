"""Resolution of the entry point's name inside the dex archive."""

from pathlib import Path

from cs3build.exceptions import ResolutionError
from cs3build.utils.logging import get_logger

logger = get_logger("resolver")

MAPPING_SEPARATOR = " -> "


class MappingTable:
    """Class renames read from an R8/ProGuard mapping file.

    Only class lines (``original -> renamed:``) are consulted. Member lines
    are indented and comment lines start with ``#``, so neither can match
    a class name prefix.
    """

    def __init__(self, path: Path):
        self.path = path

    def lookup(self, original_name: str) -> str | None:
        """Return the new name of ``original_name``, or None if not listed.

        Raises:
            ResolutionError: If the file cannot be decoded.
        """
        prefix = f"{original_name}{MAPPING_SEPARATOR}"
        try:
            with self.path.open(encoding="utf-8") as lines:
                for line in lines:
                    if line.startswith(prefix):
                        return line[len(prefix):].strip().removesuffix(":").strip()
        except UnicodeDecodeError as e:
            raise ResolutionError(
                f"Mapping file {self.path} is not valid UTF-8: {e}",
                class_name=original_name,
            ) from e
        logger.debug("No obfuscated name found for %s in %s", original_name, self.path)
        return None


class NameResolver:
    """Maps the entry point's original name to its name in the archive."""

    def __init__(self, mapping_file: Path | None = None):
        """Initialize the resolver.

        Args:
            mapping_file: Mapping table written by the minifier, or None when
                minification did not run.
        """
        self.mapping_file = mapping_file

    @property
    def minified(self) -> bool:
        return self.mapping_file is not None

    def resolve(self, original_name: str) -> str:
        """Resolve ``original_name`` (dot-separated).

        Raises:
            ResolutionError: If the mapping file is missing, or does not list
                the class. A missing entry is never treated as "not renamed".
        """
        if self.mapping_file is None:
            return original_name

        if not self.mapping_file.is_file():
            raise ResolutionError(
                f"Mapping file does not exist at {self.mapping_file.absolute()}",
                class_name=original_name,
            )

        renamed = MappingTable(self.mapping_file).lookup(original_name)
        if renamed is None:
            logger.error(
                "Entry point %s is not listed in %s", original_name, self.mapping_file
            )
            raise ResolutionError(
                f"Failed to find obfuscated name for {original_name}",
                class_name=original_name,
            )
        return renamed
