"""Dex compilation pipeline for one plugin build unit."""

from collections.abc import Iterable
from pathlib import Path

from cs3build.core.archive import ArchiveBuilder, clear_dex_outputs, list_dex_outputs
from cs3build.core.classpath import filter_classpath
from cs3build.core.collector import ClassCollector
from cs3build.core.d8 import D8Tool
from cs3build.core.minifier import MinifyingCompiler, collect_rule_files
from cs3build.core.r8 import R8Tool
from cs3build.core.resolver import NameResolver
from cs3build.core.scanner import EntryPointScanner
from cs3build.core.toolchain import Dexer, Minifier
from cs3build.exceptions import Cs3BuildError
from cs3build.models.build import BuildSettings, PipelineResult
from cs3build.utils.android_sdk import get_platform_jar
from cs3build.utils.logging import get_logger
from cs3build.utils.output import console, format_size

logger = get_logger("pipeline")


def write_plugin_class_file(path: Path, class_name: str) -> Path:
    """Persist the resolved entry point name for downstream packaging."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(class_name, encoding="utf-8")
    return path


def read_plugin_class_name(path: Path) -> str | None:
    """Read a persisted entry point name, or None if none was recorded."""
    if not path.is_file():
        return None
    return path.read_text(encoding="utf-8").strip() or None


class DexCompiler:
    """Compiles a module's classes to dex and records its plugin class.

    Stages run strictly in order: collect, scan, minify or dex, resolve.
    The scan reads the classes as compiled, before R8 can strip annotations,
    and aborts on a duplicate entry point before any output is written.
    """

    def __init__(
        self,
        settings: BuildSettings,
        minifier: Minifier | None = None,
        dexer: Dexer | None = None,
    ):
        """Initialize the compiler.

        Args:
            settings: Build unit settings (paths, API levels, minify flags).
            minifier: Tool used when minification is enabled. Defaults to R8.
            dexer: Tool used otherwise. Defaults to D8.
        """
        self.settings = settings
        self.minifier = minifier or R8Tool()
        self.dexer = dexer or D8Tool()
        self.scanner = EntryPointScanner()

    def _boot_classpath(self) -> list[Path]:
        if self.settings.boot_classpath:
            return list(self.settings.boot_classpath)
        if self.settings.compile_sdk is not None:
            return [get_platform_jar(self.settings.compile_sdk)]
        return []

    def compile(self, inputs: Iterable[Path]) -> PipelineResult:
        """Run the pipeline over class inputs (directories and/or files).

        Returns:
            PipelineResult describing the dex archive and entry point.

        Raises:
            CollectionError: If an input is missing or not a class file.
            ConfigurationError: If more than one plugin class is found.
            MinificationError: If R8 fails or writes no mapping table.
            DexingError: If D8 fails.
            ResolutionError: If the entry point is missing from the mapping.
        """
        # Outputs of an earlier run must not outlive this one, even on failure.
        self._clear_outputs()
        try:
            return self._compile(inputs)
        except Cs3BuildError:
            self._clear_outputs()
            raise

    def _clear_outputs(self) -> None:
        clear_dex_outputs(self.settings.dex_output_dir)
        self.settings.plugin_class_file.unlink(missing_ok=True)

    def _compile(self, inputs: Iterable[Path]) -> PipelineResult:
        settings = self.settings
        output_dir = settings.dex_output_dir
        plugin_class_file = settings.plugin_class_file

        classes = ClassCollector(inputs).collect()
        if not classes:
            console.print_warning("No class files found, skipping dex compilation")
            return PipelineResult(dex_files=[], minified=False)

        entry_point = self.scanner.scan(classes)
        boot_classpath = self._boot_classpath()

        mapping_file: Path | None = None
        if settings.minify_enabled:
            libraries = filter_classpath(
                [*settings.library_paths, *boot_classpath], settings.build_dir
            )
            mapping_file = MinifyingCompiler(
                self.minifier,
                mapping_file=settings.mapping_file,
                required_rules_file=settings.required_rules_file,
            ).run(
                [c.path for c in classes],
                libraries,
                collect_rule_files(settings.rule_files),
                settings.min_sdk,
                output_dir,
            )
            dex_files = list_dex_outputs(output_dir)
        else:
            dex_files = ArchiveBuilder(self.dexer).build(
                classes, output_dir, settings.min_sdk, boot_classpath
            )

        result = PipelineResult(
            dex_files=dex_files,
            minified=mapping_file is not None,
            mapping_file=mapping_file,
        )

        if entry_point is None:
            logger.info("No plugin entry point found in %d classes", len(classes))
        else:
            resolved = NameResolver(mapping_file).resolve(entry_point.name)
            if resolved != entry_point.name:
                logger.info("Plugin class %s renamed to %s", entry_point.name, resolved)
            result.original_class_name = entry_point.name
            result.plugin_class_name = resolved
            result.plugin_class_file = write_plugin_class_file(plugin_class_file, resolved)

        console.print_success(
            f"Compiled dex to {settings.dex_output_file} ({format_size(result.total_size)})"
        )
        return result
