"""Dex archive production without minification."""

import re
from collections.abc import Sequence
from pathlib import Path

from cs3build.core.toolchain import Dexer
from cs3build.exceptions import DexingError
from cs3build.models.classes import CompiledClass
from cs3build.utils.logging import get_logger

logger = get_logger("archive")

_DEX_NAME = re.compile(r"^classes(\d*)\.dex$")


def _dex_index(path: Path) -> int:
    match = _DEX_NAME.match(path.name)
    if match is None:
        return -1
    # classes.dex is segment 1, classes2.dex segment 2, ...
    return int(match.group(1) or 1)


def list_dex_outputs(output_dir: Path) -> list[Path]:
    """Return the dex segments in ``output_dir`` in load order."""
    if not output_dir.is_dir():
        return []
    segments = [p for p in output_dir.iterdir() if p.is_file() and _dex_index(p) > 0]
    return sorted(segments, key=_dex_index)


def clear_dex_outputs(output_dir: Path) -> None:
    """Remove dex segments left over from a previous build."""
    for segment in list_dex_outputs(output_dir):
        logger.debug("Removing stale dex segment %s", segment)
        segment.unlink()


class ArchiveBuilder:
    """Converts every collected class to dex with a Dexer."""

    def __init__(self, dexer: Dexer):
        self.dexer = dexer

    def build(
        self,
        classes: Sequence[CompiledClass],
        output_dir: Path,
        min_api: int,
        libraries: Sequence[Path] = (),
    ) -> list[Path]:
        """Dex all ``classes`` into ``output_dir`` in a single pass.

        Returns:
            Produced dex segments.

        Raises:
            DexingError: If the dexer fails or produces no dex file.
        """
        output_dir.mkdir(parents=True, exist_ok=True)

        try:
            self.dexer.dex([c.path for c in classes], output_dir, min_api, libraries)
        except Exception as e:
            logger.error("%s failed to dex %d classes", self.dexer.name, len(classes), exc_info=True)
            raise DexingError(f"{self.dexer.name} dexing failed: {e}") from e

        segments = list_dex_outputs(output_dir)
        if not segments:
            raise DexingError(
                f"{self.dexer.name} completed but no dex file found in {output_dir}"
            )

        return segments
