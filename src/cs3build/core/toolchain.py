"""Capability interfaces for the external minifier and dexer."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol


class Minifier(Protocol):
    """Whole-program shrinker/obfuscator emitting dex output (e.g. R8)."""

    name: str

    def minify(
        self,
        programs: Sequence[Path],
        libraries: Sequence[Path],
        rule_files: Sequence[Path],
        min_api: int,
        output_dir: Path,
    ) -> None:
        """Minify ``programs`` and write dex files into ``output_dir``.

        Mapping table output is requested through ``rule_files``.
        Implementations raise on failure.
        """


class Dexer(Protocol):
    """Class-to-dex converter (e.g. D8)."""

    name: str

    def dex(
        self,
        inputs: Sequence[Path],
        output_dir: Path,
        min_api: int,
        libraries: Sequence[Path] = (),
    ) -> None:
        """Convert every input class to dex files in ``output_dir``.

        Implementations raise on failure.
        """
