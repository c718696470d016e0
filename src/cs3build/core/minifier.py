"""R8 minification step: rule synthesis, invocation and output checks."""

from collections.abc import Iterable, Sequence
from pathlib import Path

from cs3build.core.collector import normalize_path
from cs3build.core.toolchain import Minifier
from cs3build.exceptions import MinificationError
from cs3build.utils.logging import get_logger
from cs3build.utils.output import console

logger = get_logger("minifier")

RULE_FILE_SUFFIXES = frozenset({".pro", ".txt"})


def collect_rule_files(paths: Iterable[Path]) -> list[Path]:
    """Keep the rule files that exist and look like ProGuard configs.

    Missing paths and directories are dropped silently, as build scripts
    commonly list optional rule files.
    """
    rule_files: list[Path] = []
    for path in paths:
        path = normalize_path(path)
        if path in rule_files:
            continue
        if path.is_file() and path.suffix.lower() in RULE_FILE_SUFFIXES:
            rule_files.append(path)
        else:
            logger.debug("Ignoring rule file %s", path)
    return rule_files


def write_mapping_rule(rules_file: Path, mapping_file: Path) -> Path:
    """Write the rule file asking R8 to print its mapping to ``mapping_file``."""
    rules_file.parent.mkdir(parents=True, exist_ok=True)
    rules_file.write_text(f"-printmapping {mapping_file.absolute()}\n", encoding="utf-8")
    return rules_file


class MinifyingCompiler:
    """Runs a Minifier and enforces that it leaves a mapping table behind."""

    def __init__(self, minifier: Minifier, mapping_file: Path, required_rules_file: Path):
        """Initialize the step.

        Args:
            minifier: Tool that shrinks, obfuscates and dexes in one pass.
            mapping_file: Where the mapping table must be written.
            required_rules_file: Where the synthesized rule file is written.
        """
        self.minifier = minifier
        self.mapping_file = mapping_file
        self.required_rules_file = required_rules_file

    def run(
        self,
        programs: Sequence[Path],
        libraries: Sequence[Path],
        rule_files: Sequence[Path],
        min_api: int,
        output_dir: Path,
    ) -> Path:
        """Minify ``programs`` into dex files in ``output_dir``.

        Returns:
            Path to the mapping table.

        Raises:
            MinificationError: If the minifier fails, or reports success
                without writing the mapping table.
        """
        # A table left over from an earlier run would hide a missing one.
        self.mapping_file.unlink(missing_ok=True)
        required_rules = write_mapping_rule(self.required_rules_file, self.mapping_file)
        output_dir.mkdir(parents=True, exist_ok=True)

        console.print_info(f"Running {self.minifier.name} minification with output to {output_dir}")
        logger.debug(
            "%s inputs: %d programs, %d libraries, rules=%s, min-api=%d",
            self.minifier.name,
            len(programs),
            len(libraries),
            [str(p) for p in [*rule_files, required_rules]],
            min_api,
        )

        try:
            self.minifier.minify(
                programs,
                libraries,
                [*rule_files, required_rules],
                min_api,
                output_dir,
            )
        except Exception as e:
            logger.error("%s minification failed", self.minifier.name, exc_info=True)
            raise MinificationError(f"{self.minifier.name} minification failed: {e}") from e

        if not self.mapping_file.is_file():
            logger.error(
                "%s reported success but wrote no mapping table at %s",
                self.minifier.name,
                self.mapping_file,
            )
            raise MinificationError(
                f"{self.minifier.name} mapping file not found at "
                f"{self.mapping_file} after minification"
            )

        if self.mapping_file.stat().st_size == 0:
            logger.error("%s wrote an empty mapping table at %s", self.minifier.name, self.mapping_file)
            raise MinificationError(
                f"{self.minifier.name} mapping file at {self.mapping_file} is empty"
            )

        console.print_success(f"{self.minifier.name} minification completed successfully")
        return self.mapping_file
