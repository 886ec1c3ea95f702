"""
Generation request — the description of one ``flatc`` invocation.

A request is a frozen value object: built by the caller right before
invocation, consumed by the runner, then discarded. Validation happens
at construction time so that a bad request never reaches a subprocess.

Flags are a closed vocabulary (``Language`` and ``GenerationOption``),
each member mapping to exactly one compiler token. Tokens the
vocabulary does not know yet go through ``extra_args`` verbatim.
"""

from __future__ import annotations

import os
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Language(StrEnum):
    """Target binding language (``--<value>`` on the flatc command line)."""

    CPP = "cpp"
    JAVA = "java"
    KOTLIN = "kotlin"
    CSHARP = "csharp"
    GO = "go"
    PYTHON = "python"
    TS = "ts"
    PHP = "php"
    DART = "dart"
    LUA = "lua"
    LOBSTER = "lobster"
    RUST = "rust"
    SWIFT = "swift"
    NIM = "nim"
    JSONSCHEMA = "jsonschema"

    @property
    def token(self) -> str:
        return f"--{self.value}"

    @classmethod
    def parse(cls, value: str) -> Language:
        """Accept ``rust``, ``RUST`` or ``--rust``."""
        key = value.strip().lstrip("-").lower()
        try:
            return cls(key)
        except ValueError:
            known = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown language '{value}' (known: {known})") from None


class GenerationOption(StrEnum):
    """Optional compiler flags.

    Declaration order IS the canonical order in which the flags are
    emitted. New members go at the end to keep existing argument
    vectors stable.
    """

    GEN_ALL = "--gen-all"
    GEN_MUTABLE = "--gen-mutable"
    GEN_OBJECT_API = "--gen-object-api"
    GEN_ONEFILE = "--gen-onefile"
    GEN_COMPARE = "--gen-compare"
    GEN_NAME_STRINGS = "--gen-name-strings"
    FORCE_EMPTY = "--force-empty"
    FORCE_EMPTY_VECTORS = "--force-empty-vectors"
    SCOPED_ENUMS = "--scoped-enums"
    NO_INCLUDES = "--no-includes"
    KEEP_PREFIX = "--keep-prefix"
    REFLECT_TYPES = "--reflect-types"
    REFLECT_NAMES = "--reflect-names"
    GRPC = "--grpc"
    BFBS_COMMENTS = "--bfbs-comments"
    BFBS_BUILTINS = "--bfbs-builtins"
    BINARY_SCHEMA = "--schema"
    NO_WARNINGS = "--no-warnings"
    WARNINGS_AS_ERRORS = "--warnings-as-errors"

    @property
    def token(self) -> str:
        return self.value

    @property
    def rank(self) -> int:
        """Position in the canonical ordering."""
        return _OPTION_RANK[self]

    @classmethod
    def parse(cls, value: str) -> GenerationOption:
        """Accept the member name (``GEN_ALL``), kebab form (``gen-all``) or token."""
        raw = value.strip()
        if raw.startswith("-"):
            for member in cls:
                if member.value == raw:
                    return member
        else:
            name = raw.replace("-", "_").upper()
            if name in cls.__members__:
                return cls[name]
        raise ValueError(f"Unknown generation option '{value}'")


_OPTION_RANK: dict[GenerationOption, int] = {
    opt: index for index, opt in enumerate(GenerationOption)
}


def _as_path_str(value: Any) -> str:
    if isinstance(value, (str, os.PathLike)):
        return os.fspath(value)
    raise ValueError(f"Expected a path, got {type(value).__name__}")


class GenerationRequest(BaseModel):
    """One flatc invocation: language, output dir, schemas, flags.

    Paths are stored exactly as given (``"out/"`` stays ``"out/"``) so
    that argument vectors are reproducible.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    output_language: Language = Language.RUST
    output_directory: str
    input_schema_paths: tuple[str, ...]
    include_directories: tuple[str, ...] = ()
    options: frozenset[GenerationOption] = Field(default_factory=frozenset)
    extra_args: tuple[str, ...] = ()

    @field_validator("output_language", mode="before")
    @classmethod
    def _parse_language(cls, v: Any) -> Any:
        if isinstance(v, str) and not isinstance(v, Language):
            return Language.parse(v)
        return v

    @field_validator("output_directory", mode="before")
    @classmethod
    def _check_output_directory(cls, v: Any) -> str:
        path = _as_path_str(v)
        if not path:
            raise ValueError("output_directory must not be empty")
        return path

    @field_validator("input_schema_paths", mode="before")
    @classmethod
    def _check_inputs(cls, v: Any) -> tuple[str, ...]:
        if isinstance(v, (str, os.PathLike)):
            v = [v]
        paths = tuple(_as_path_str(p) for p in v)
        if not paths:
            raise ValueError("input_schema_paths must not be empty")
        if any(not p for p in paths):
            raise ValueError("input_schema_paths must not contain empty paths")
        return paths

    @field_validator("include_directories", mode="before")
    @classmethod
    def _coerce_includes(cls, v: Any) -> tuple[str, ...]:
        if v is None:
            return ()
        if isinstance(v, (str, os.PathLike)):
            v = [v]
        return tuple(_as_path_str(p) for p in v)

    @field_validator("options", mode="before")
    @classmethod
    def _parse_options(cls, v: Any) -> frozenset[GenerationOption]:
        if v is None:
            return frozenset()
        if isinstance(v, str):
            v = [v]
        return frozenset(
            o if isinstance(o, GenerationOption) else GenerationOption.parse(o)
            for o in v
        )

    @field_validator("extra_args", mode="before")
    @classmethod
    def _coerce_extra_args(cls, v: Any) -> tuple[str, ...]:
        if v is None:
            return ()
        if isinstance(v, str):
            v = [v]
        return tuple(v)

    def sorted_options(self) -> list[GenerationOption]:
        """Options in canonical order."""
        return sorted(self.options, key=lambda o: o.rank)
