"""
flatcgen — invoke the FlatBuffers schema compiler (flatc) from Python.

Typical use from a build script:

    from flatcgen import GenerationRequest, Language, generate

    generate(GenerationRequest(
        output_language=Language.RUST,
        output_directory="target/flatbuffers/",
        input_schema_paths=["schemas/monster.fbs"],
    ))
"""

from flatcgen.adapters.flatc import (
    AbnormalTermination,
    CompilerFailed,
    Flatc,
    FlatcVersion,
    GenerationError,
    SpawnFailed,
    VersionError,
    build_args,
    generate,
    run,
)
from flatcgen.core.models.request import GenerationOption, GenerationRequest, Language

__version__ = "0.1.0"

__all__ = [
    "AbnormalTermination",
    "CompilerFailed",
    "Flatc",
    "FlatcVersion",
    "GenerationError",
    "GenerationOption",
    "GenerationRequest",
    "Language",
    "SpawnFailed",
    "VersionError",
    "__version__",
    "build_args",
    "generate",
    "run",
]
