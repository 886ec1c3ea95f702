"""
flatc compiler — spawn the external schema compiler and report the outcome.

One synchronous invocation per call: the calling thread blocks until
flatc exits. There is no timeout, no retry and no shared state, so
independent calls from several threads are safe.

Outcomes:
    exit 0              → returns normally
    cannot spawn        → SpawnFailed
    exit != 0           → CompilerFailed (exit code + stderr)
    killed by a signal  → AbnormalTermination
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

from flatcgen.adapters.flatc.args import build_args, format_command
from flatcgen.adapters.flatc.errors import (
    AbnormalTermination,
    CompilerFailed,
    SpawnFailed,
    VersionError,
)
from flatcgen.core.models.request import GenerationRequest

logger = logging.getLogger(__name__)

# Executable name looked up on PATH when no explicit path is given
DEFAULT_EXECUTABLE = "flatc"

_VERSION_PREFIX = "flatc version "


@dataclass(frozen=True)
class FlatcVersion:
    """Version string reported by ``flatc --version`` (e.g. ``24.3.25``)."""

    version: str

    @property
    def parts(self) -> tuple[int, ...]:
        """Leading numeric components, ``"23.5.26-git"`` → ``(23, 5)``."""
        nums: list[int] = []
        for piece in self.version.split("."):
            if not piece.isdigit():
                break
            nums.append(int(piece))
        return tuple(nums)

    def __str__(self) -> str:
        return self.version


def parse_version(output: str) -> FlatcVersion:
    """Parse the first line of ``flatc --version`` output.

    Raises:
        VersionError: If the output does not look like flatc's.
    """
    lines = output.splitlines()
    if not lines or not lines[0].strip():
        raise VersionError("flatc --version output is empty")

    first = lines[0].strip()
    if not first.startswith(_VERSION_PREFIX):
        raise VersionError(f"unexpected flatc --version output: {first!r}")

    version = first[len(_VERSION_PREFIX):].strip()
    if not version:
        raise VersionError("flatc reported an empty version")
    if not version[0].isdigit():
        raise VersionError(f"flatc version does not start with a digit: {version!r}")

    return FlatcVersion(version=version)


class Flatc:
    """Handle on a flatc executable.

    Stateless apart from the executable path; build one per call or
    share it, it makes no difference.
    """

    def __init__(self, executable: str | os.PathLike[str] = DEFAULT_EXECUTABLE):
        self.executable = os.fspath(executable)

    @classmethod
    def from_env_path(cls) -> Flatc:
        """flatc resolved through ``$PATH``."""
        return cls(DEFAULT_EXECUTABLE)

    @classmethod
    def from_path(cls, path: str | os.PathLike[str]) -> Flatc:
        return cls(path)

    def __repr__(self) -> str:
        return f"<Flatc executable={self.executable!r}>"

    def command(self, request: GenerationRequest) -> list[str]:
        """Full command line (executable + arguments) for a request."""
        return [self.executable, *build_args(request)]

    def version(self) -> FlatcVersion:
        """Query ``flatc --version``.

        Raises:
            SpawnFailed / CompilerFailed / AbnormalTermination: as for ``run``.
            VersionError: If the output cannot be parsed.
        """
        result = self._execute([self.executable, "--version"])
        return parse_version(result.stdout)

    def check(self) -> None:
        """Verify the executable exists and answers like flatc."""
        version = self.version()
        logger.debug("Using flatc %s (%s)", version, self.executable)

    def run(self, request: GenerationRequest, cwd: str | os.PathLike[str] | None = None) -> None:
        """Generate code for a request.

        Args:
            request: What to generate.
            cwd: Working directory for flatc (default: inherit).

        Raises:
            SpawnFailed: The executable cannot be started.
            CompilerFailed: flatc exited with a non-zero status.
            AbnormalTermination: flatc was killed by a signal.
        """
        result = self._execute(self.command(request), cwd=cwd)

        # flatc reports warnings on stderr even when it succeeds
        if result.stderr.strip():
            logger.warning("flatc: %s", result.stderr.strip())
        if result.stdout.strip():
            logger.debug("flatc stdout: %s", result.stdout.strip())

    def _execute(
        self,
        command: list[str],
        cwd: str | os.PathLike[str] | None = None,
    ) -> subprocess.CompletedProcess[str]:
        """Spawn, wait, and map the exit status onto the error taxonomy."""
        logger.info("Spawning %s%s", format_command(command), f" (cwd={cwd})" if cwd else "")

        try:
            result = subprocess.run(
                command,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                errors="replace",
                cwd=cwd,
                check=False,
            )
        except OSError as e:
            raise SpawnFailed(command, e) from e

        if result.returncode < 0:
            raise AbnormalTermination(command, -result.returncode, stderr=result.stderr)
        if result.returncode != 0:
            raise CompilerFailed(
                command,
                exit_code=result.returncode,
                stderr=result.stderr,
                stdout=result.stdout,
            )

        return result


def run(
    compiler_path: str | os.PathLike[str] | None,
    request: GenerationRequest,
    *,
    cwd: str | os.PathLike[str] | None = None,
) -> None:
    """Run flatc once for a request.

    Args:
        compiler_path: Path to flatc, or None for ``flatc`` on ``$PATH``.
        request: What to generate.
        cwd: Working directory for flatc (default: inherit).
    """
    flatc = Flatc.from_path(compiler_path) if compiler_path else Flatc.from_env_path()
    flatc.run(request, cwd=cwd)


def generate(
    request: GenerationRequest,
    compiler_path: str | os.PathLike[str] | None = None,
) -> None:
    """Build-script helper: check the compiler answers, then run it.

    Example::

        from flatcgen import GenerationRequest, generate

        generate(GenerationRequest(
            output_directory="target/flatbuffers/",
            input_schema_paths=["schemas/monster.fbs"],
        ))
    """
    flatc = Flatc.from_path(compiler_path) if compiler_path else Flatc.from_env_path()
    flatc.check()
    flatc.run(request)


def resolve_executable(compiler_path: str | os.PathLike[str] | None) -> Path | None:
    """Best-effort absolute path of the executable, for display only."""
    found = shutil.which(os.fspath(compiler_path) if compiler_path else DEFAULT_EXECUTABLE)
    return Path(found) if found else None
