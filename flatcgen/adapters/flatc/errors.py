"""
Generation errors — what can go wrong when invoking flatc.

Every failure is surfaced to the caller as one of these. Nothing is
retried and nothing is reinterpreted: a non-zero exit carries the
compiler's own stderr so a build script can show it verbatim.
"""

from __future__ import annotations

import signal
from collections.abc import Sequence


class GenerationError(Exception):
    """Base class for all flatc invocation failures."""

    def __init__(self, message: str, command: Sequence[str] = ()):
        super().__init__(message)
        self.command: list[str] = list(command)


class SpawnFailed(GenerationError):
    """The executable could not be located or started."""

    def __init__(self, command: Sequence[str], error: OSError):
        executable = command[0] if command else "?"
        super().__init__(f"failed to spawn `{executable}`: {error}", command)
        self.error = error


class CompilerFailed(GenerationError):
    """flatc ran and exited with a non-zero status."""

    def __init__(
        self,
        command: Sequence[str],
        exit_code: int,
        stderr: str = "",
        stdout: str = "",
    ):
        message = f"flatc exited with code {exit_code}"
        if stderr.strip():
            message = f"{message}: {stderr.strip()}"
        super().__init__(message, command)
        self.exit_code = exit_code
        self.stderr = stderr
        self.stdout = stdout


class AbnormalTermination(GenerationError):
    """flatc was killed by a signal and produced no exit status."""

    def __init__(self, command: Sequence[str], signal_number: int | None = None, stderr: str = ""):
        if signal_number is None:
            message = "flatc terminated abnormally"
        else:
            try:
                name = signal.Signals(signal_number).name
            except ValueError:
                name = str(signal_number)
            message = f"flatc terminated by signal {name}"
        super().__init__(message, command)
        self.signal_number = signal_number
        self.stderr = stderr


class VersionError(GenerationError):
    """``flatc --version`` output could not be understood."""
