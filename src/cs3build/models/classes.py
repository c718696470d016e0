"""Pydantic models for collected class inputs."""

from functools import cached_property
from pathlib import Path

from pydantic import BaseModel

from cs3build.utils.classfile import ClassInfo, read_class_info


class CompiledClass(BaseModel):
    """One compiled class read from disk."""

    path: Path
    """Normalized absolute path the bytes were read from."""

    data: bytes
    """Raw class file bytes, never modified."""

    @cached_property
    def info(self) -> ClassInfo:
        """Parsed class identity (raises ClassFormatError on bad bytes)."""
        return read_class_info(self.data)

    @property
    def name(self) -> str:
        """Fully-qualified dotted class name."""
        return self.info.name

    @property
    def annotations(self) -> frozenset[str]:
        """Own class-level annotation descriptors."""
        return self.info.annotations
