"""Pydantic models for dex compilation settings and results."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

DEFAULT_MIN_SDK = 21


class BuildSettings(BaseModel):
    """Inputs of one plugin build unit."""

    build_dir: Path
    """The module's own build directory (e.g. ``<module>/build``)."""

    min_sdk: int = DEFAULT_MIN_SDK
    """Minimum platform API level passed to D8/R8."""

    compile_sdk: int | None = None
    """Platform used to locate android.jar when no boot classpath is given."""

    debug_minify: bool = False
    release_minify: bool = False

    rule_files: list[Path] = Field(default_factory=list)
    """Externally authored ProGuard/R8 rule files."""

    library_paths: list[Path] = Field(default_factory=list)
    """Compile classpath of the module (jars and class directories)."""

    boot_classpath: list[Path] = Field(default_factory=list)
    """Platform jars, typically a single android.jar."""

    @field_validator("min_sdk", mode="before")
    @classmethod
    def _default_min_sdk(cls, value: int | None) -> int:
        return DEFAULT_MIN_SDK if value is None else value

    @property
    def minify_enabled(self) -> bool:
        """Minify when either variant asks for it."""
        return self.debug_minify or self.release_minify

    @property
    def intermediates_dir(self) -> Path:
        return self.build_dir / "intermediates"

    @property
    def dex_output_file(self) -> Path:
        return self.intermediates_dir / "classes.dex"

    @property
    def dex_output_dir(self) -> Path:
        return self.dex_output_file.parent

    @property
    def mapping_file(self) -> Path:
        return self.intermediates_dir / "r8-mapping.txt"

    @property
    def required_rules_file(self) -> Path:
        return self.intermediates_dir / "r8-required-rules.pro"

    @property
    def plugin_class_file(self) -> Path:
        return self.intermediates_dir / "pluginClass"


class PipelineResult(BaseModel):
    """Result of compiling one build unit to dex."""

    dex_files: list[Path]
    """Produced dex segments (classes.dex, classes2.dex, ...)."""

    minified: bool = False
    """Whether R8 produced the archive."""

    original_class_name: str | None = None
    """Entry point name as compiled, before any renaming."""

    plugin_class_name: str | None = None
    """Entry point name inside the dex archive."""

    plugin_class_file: Path | None = None
    """File the resolved name was written to (None without entry point)."""

    mapping_file: Path | None = None
    """R8 mapping table (only set when minified)."""

    @property
    def has_entry_point(self) -> bool:
        return self.plugin_class_name is not None

    @property
    def total_size(self) -> int:
        """Combined size of all dex segments in bytes."""
        return sum(path.stat().st_size for path in self.dex_files if path.exists())
