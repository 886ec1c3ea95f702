"""
Shared test fixtures and configuration.

``stub_flatc`` writes small executables that behave like flatc: they
record their arguments, answer ``--version``, and exit however the test
asks them to.
"""

from __future__ import annotations

import json
import logging
import stat
import sys
import textwrap
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import pytest


@dataclass
class StubCompiler:
    """A fake flatc on disk."""

    path: Path
    record: Path

    def calls(self) -> list[list[str]]:
        """Argument vectors the stub was invoked with, oldest first."""
        if not self.record.exists():
            return []
        return [json.loads(line) for line in self.record.read_text().splitlines() if line]

    def cwds(self) -> list[str]:
        cwd_file = self.record.with_suffix(".cwd")
        if not cwd_file.exists():
            return []
        return cwd_file.read_text().splitlines()


_STUB_TEMPLATE = """\
#!{python}
import json, os, signal, sys

with open({record!r}, "a") as f:
    f.write(json.dumps(sys.argv[1:]) + "\\n")
with open({cwd_record!r}, "a") as f:
    f.write(os.getcwd() + "\\n")

if sys.argv[1:] == ["--version"]:
    sys.stdout.write({version_output!r})
    sys.exit({version_exit!r})

sys.stdout.write({stdout!r})
sys.stderr.write({stderr!r})
sys.stdout.flush()
sys.stderr.flush()
if {kill!r}:
    os.kill(os.getpid(), signal.SIGKILL)
sys.exit({exit_code!r})
"""


@pytest.fixture
def stub_flatc(tmp_path: Path) -> Callable[..., StubCompiler]:
    """Factory for fake flatc executables."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()

    def make(
        exit_code: int = 0,
        stdout: str = "",
        stderr: str = "",
        kill: bool = False,
        version_output: str = "flatc version 24.3.25\n",
        version_exit: int = 0,
        name: str = "flatc",
    ) -> StubCompiler:
        path = bin_dir / name
        record = bin_dir / f"{name}.calls"
        script = _STUB_TEMPLATE.format(
            python=sys.executable,
            record=str(record),
            cwd_record=str(record.with_suffix(".cwd")),
            version_output=version_output,
            version_exit=version_exit,
            stdout=stdout,
            stderr=stderr,
            kill=kill,
            exit_code=exit_code,
        )
        path.write_text(textwrap.dedent(script))
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return StubCompiler(path=path, record=record)

    return make


@pytest.fixture
def schema_file(tmp_path: Path) -> Path:
    """A tiny valid schema on disk."""
    path = tmp_path / "schemas" / "test.fbs"
    path.parent.mkdir()
    path.write_text("table Test { text: string; }\nroot_type Test;\n")
    return path


@pytest.fixture(autouse=True)
def restore_root_logger():
    """The CLI reconfigures the root logger; undo it after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
