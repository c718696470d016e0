"""Library classpath filtering for R8."""

from collections.abc import Iterable
from pathlib import Path

from cs3build.core.collector import normalize_path
from cs3build.utils.logging import get_logger

logger = get_logger("classpath")

BUILD_SEGMENT = "build"


def is_foreign_build_path(path: Path, own_build_dir: Path) -> bool:
    """Check whether a path points into another module's build output.

    A path is foreign when one of its directories is named ``build`` and it
    does not live under ``own_build_dir``. The check is purely lexical.
    """
    normalized = normalize_path(path)
    if BUILD_SEGMENT not in normalized.parts[:-1]:
        return False
    return not normalized.is_relative_to(normalize_path(own_build_dir))


def filter_classpath(paths: Iterable[Path], own_build_dir: Path) -> list[Path]:
    """Drop classpath entries that belong to other modules' build outputs.

    Args:
        paths: Candidate library paths (compile classpath, boot classpath).
        own_build_dir: The current module's build directory.

    Returns:
        Normalized, deduplicated paths safe to hand to R8 as library input,
        in their original order.
    """
    kept: list[Path] = []
    seen: set[Path] = set()
    for path in paths:
        normalized = normalize_path(path)
        if normalized in seen:
            continue
        seen.add(normalized)
        if is_foreign_build_path(normalized, own_build_dir):
            logger.debug("Excluding foreign build output from classpath: %s", normalized)
            continue
        kept.append(normalized)
    return kept
