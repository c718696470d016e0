"""Plugin entry point discovery from class annotations."""

from collections.abc import Iterable

from cs3build.exceptions import MultipleEntryPointsError
from cs3build.models.classes import CompiledClass
from cs3build.utils.logging import get_logger

logger = get_logger("scanner")

PLUGIN_ANNOTATION = "Lcom/lagradost/cloudstream3/plugins/CloudstreamPlugin;"


class EntryPointScanner:
    """Finds the single class annotated with ``@CloudstreamPlugin``.

    Must run over the classes as compiled, since R8 may strip or move
    annotations.
    """

    def __init__(self, marker: str = PLUGIN_ANNOTATION):
        self.marker = marker

    def is_entry_point(self, compiled: CompiledClass) -> bool:
        """Check whether a class carries the marker (visible or invisible)."""
        return self.marker in compiled.annotations

    def scan(self, classes: Iterable[CompiledClass]) -> CompiledClass | None:
        """Return the entry point class, or None if no class is marked.

        Raises:
            MultipleEntryPointsError: As soon as a second marked class is seen.
            ClassFormatError: If a class file cannot be parsed.
        """
        found: CompiledClass | None = None
        for compiled in classes:
            if not self.is_entry_point(compiled):
                continue
            if found is not None:
                logger.error(
                    "Plugin entry point declared twice: %s (%s) and %s (%s)",
                    found.name,
                    found.path,
                    compiled.name,
                    compiled.path,
                )
                raise MultipleEntryPointsError(found.name, compiled.name)
            logger.debug("Found plugin entry point %s in %s", compiled.name, compiled.path)
            found = compiled
        return found
