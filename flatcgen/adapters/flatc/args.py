"""
Argument builder — GenerationRequest to flatc argument vector.

Pure and deterministic: equal requests always give identical vectors,
whatever order the caller set options in. Token order:

    --<lang>  -o <dir>  <options...>  <extra args...>  -I <dir>...  <schemas...>
"""

from __future__ import annotations

import shlex
from collections.abc import Sequence

from flatcgen.core.models.request import GenerationRequest


def build_args(request: GenerationRequest) -> list[str]:
    """Translate a request into flatc arguments (without the executable)."""
    args: list[str] = [request.output_language.token, "-o", request.output_directory]

    args.extend(opt.token for opt in request.sorted_options())
    args.extend(request.extra_args)

    for include in request.include_directories:
        args.extend(("-I", include))

    args.extend(request.input_schema_paths)
    return args


def format_command(command: Sequence[str]) -> str:
    """Shell-quoted rendering of a command, for logs and dry runs."""
    return shlex.join(command)
