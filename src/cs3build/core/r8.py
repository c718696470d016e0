"""R8 minifier invoked through the JVM."""

from collections.abc import Sequence
from pathlib import Path

from cs3build.utils.deps import get_java_command, get_r8_jar
from cs3build.utils.process import run_tool

R8_MAIN_CLASS = "com.android.tools.r8.R8"


class R8Tool:
    """Runs R8 from the build-tools d8.jar (or a configured r8.jar)."""

    name = "R8"

    def __init__(self, jar: Path | None = None, java: str | None = None):
        """Initialize the tool.

        Args:
            jar: Jar carrying ``com.android.tools.r8.R8``. Resolved lazily via
                $R8_JAR, config, then the SDK when omitted.
            java: Java executable. Resolved lazily when omitted.
        """
        self.jar = jar
        self.java = java

    def build_command(
        self,
        programs: Sequence[Path],
        libraries: Sequence[Path],
        rule_files: Sequence[Path],
        min_api: int,
        output_dir: Path,
    ) -> list[str]:
        """Build the R8 command line."""
        java = self.java or get_java_command()
        jar = self.jar or get_r8_jar()

        cmd = [
            java,
            "-cp",
            str(jar),
            R8_MAIN_CLASS,
            "--release",
            "--dex",
            "--min-api",
            str(min_api),
            "--output",
            str(output_dir),
        ]
        for library in libraries:
            cmd += ["--lib", str(library)]
        for rule_file in rule_files:
            cmd += ["--pg-conf", str(rule_file)]
        cmd += [str(p) for p in programs]
        return cmd

    def minify(
        self,
        programs: Sequence[Path],
        libraries: Sequence[Path],
        rule_files: Sequence[Path],
        min_api: int,
        output_dir: Path,
    ) -> None:
        """Run R8 and block until it exits.

        Raises:
            ProcessError: If R8 exits non-zero.
            ToolNotFoundError: If java or the R8 jar cannot be found.
        """
        cmd = self.build_command(programs, libraries, rule_files, min_api, output_dir)
        run_tool(cmd, check=True)
