"""D8 dexer invoked through the JVM."""

from collections.abc import Sequence
from pathlib import Path

from cs3build.utils.deps import get_java_command, get_r8_jar
from cs3build.utils.process import run_tool

D8_MAIN_CLASS = "com.android.tools.r8.D8"


class D8Tool:
    """Runs D8 from the build-tools d8.jar."""

    name = "D8"

    def __init__(
        self,
        jar: Path | None = None,
        java: str | None = None,
        debuggable: bool = True,
    ):
        self.jar = jar
        self.java = java
        self.debuggable = debuggable

    def build_command(
        self,
        inputs: Sequence[Path],
        output_dir: Path,
        min_api: int,
        libraries: Sequence[Path] = (),
    ) -> list[str]:
        """Build the D8 command line.

        Libraries are only used for desugaring; they never end up in the output.
        """
        java = self.java or get_java_command()
        jar = self.jar or get_r8_jar()

        cmd = [java, "-cp", str(jar), D8_MAIN_CLASS]
        cmd.append("--debug" if self.debuggable else "--release")
        cmd += ["--min-api", str(min_api), "--output", str(output_dir)]
        for library in libraries:
            cmd += ["--lib", str(library)]
        cmd += [str(p) for p in inputs]
        return cmd

    def dex(
        self,
        inputs: Sequence[Path],
        output_dir: Path,
        min_api: int,
        libraries: Sequence[Path] = (),
    ) -> None:
        """Run D8 and block until it exits.

        Raises:
            ProcessError: If D8 exits non-zero.
            ToolNotFoundError: If java or d8.jar cannot be found.
        """
        run_tool(self.build_command(inputs, output_dir, min_api, libraries), check=True)
