"""flatc adapter — argument building and subprocess invocation."""

from flatcgen.adapters.flatc.args import build_args, format_command
from flatcgen.adapters.flatc.compiler import (
    DEFAULT_EXECUTABLE,
    Flatc,
    FlatcVersion,
    generate,
    parse_version,
    resolve_executable,
    run,
)
from flatcgen.adapters.flatc.errors import (
    AbnormalTermination,
    CompilerFailed,
    GenerationError,
    SpawnFailed,
    VersionError,
)

__all__ = [
    "DEFAULT_EXECUTABLE",
    "AbnormalTermination",
    "CompilerFailed",
    "Flatc",
    "FlatcVersion",
    "GenerationError",
    "SpawnFailed",
    "VersionError",
    "build_args",
    "format_command",
    "generate",
    "parse_version",
    "resolve_executable",
    "run",
]
