"""Class input collection: expand files and directories into class blobs."""

import os
from collections.abc import Iterable
from pathlib import Path

from cs3build.exceptions import CollectionError
from cs3build.models.classes import CompiledClass
from cs3build.utils.logging import get_logger

logger = get_logger("collector")

CLASS_SUFFIX = ".class"


def normalize_path(path: Path) -> Path:
    """Absolute, lexically normalized path (symlinks are not followed)."""
    return Path(os.path.normpath(Path(path).absolute()))


class ClassCollector:
    """Collects compiled classes from a set of file and directory inputs.

    Directories are walked recursively and only ``.class`` members are taken;
    plain files are passed through regardless of extension. Duplicates are
    dropped by normalized path, keeping the first occurrence.
    """

    def __init__(self, inputs: Iterable[Path]):
        self.inputs = [Path(p) for p in inputs]

    def _expand(self, root: Path) -> list[Path]:
        if not root.exists():
            raise CollectionError(f"Class input not found: {root}", path=root)

        if root.is_dir():
            return sorted(
                p for p in root.rglob(f"*{CLASS_SUFFIX}") if p.is_file()
            )
        return [root]

    def collect_paths(self) -> list[Path]:
        """Return the deduplicated, deterministically ordered class paths.

        Raises:
            CollectionError: If a declared input does not exist.
        """
        seen: set[Path] = set()
        paths: list[Path] = []
        for root in self.inputs:
            for path in self._expand(normalize_path(root)):
                if path not in seen:
                    seen.add(path)
                    paths.append(path)
        return paths

    def collect(self) -> list[CompiledClass]:
        """Read every collected class file once.

        Raises:
            CollectionError: If an input is missing or unreadable.
        """
        classes: list[CompiledClass] = []
        for path in self.collect_paths():
            try:
                data = path.read_bytes()
            except OSError as e:
                raise CollectionError(f"Failed to read class input {path}: {e}", path=path) from e
            classes.append(CompiledClass(path=path, data=data))

        logger.debug("Collected %d class files from %d inputs", len(classes), len(self.inputs))
        return classes
