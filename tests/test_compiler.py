"""
Tests for spawning flatc — success, failures, version probing.

Uses stub executables from conftest instead of a real flatc.
"""

import logging
import sys
import threading
from pathlib import Path

import pytest

from flatcgen.adapters.flatc import (
    AbnormalTermination,
    CompilerFailed,
    Flatc,
    FlatcVersion,
    GenerationError,
    SpawnFailed,
    VersionError,
    generate,
    parse_version,
    resolve_executable,
    run,
)
from flatcgen.core.models.request import GenerationRequest

pytestmark = pytest.mark.skipif(
    sys.platform == "win32", reason="stub executables need a shebang"
)


def _request(out: str = "out/", *schemas: str) -> GenerationRequest:
    return GenerationRequest(output_directory=out, input_schema_paths=schemas or ("a.fbs",))


# ── run ──────────────────────────────────────────────────────────────


class TestRun:
    def test_success(self, stub_flatc):
        stub = stub_flatc(exit_code=0)
        assert run(stub.path, _request()) is None
        assert stub.calls() == [["--rust", "-o", "out/", "a.fbs"]]

    def test_accepts_string_path(self, stub_flatc):
        stub = stub_flatc()
        run(str(stub.path), _request())
        assert len(stub.calls()) == 1

    def test_compiler_failed(self, stub_flatc):
        stub = stub_flatc(exit_code=1, stderr="bad schema")
        with pytest.raises(CompilerFailed) as excinfo:
            run(stub.path, _request())
        err = excinfo.value
        assert err.exit_code == 1
        assert err.stderr == "bad schema"
        assert "bad schema" in str(err)
        assert err.command[0] == str(stub.path)

    def test_compiler_failed_keeps_stdout(self, stub_flatc):
        stub = stub_flatc(exit_code=3, stdout="partial", stderr="")
        with pytest.raises(CompilerFailed) as excinfo:
            run(stub.path, _request())
        assert excinfo.value.exit_code == 3
        assert excinfo.value.stdout == "partial"
        assert str(excinfo.value) == "flatc exited with code 3"

    def test_spawn_failed(self, tmp_path: Path):
        missing = tmp_path / "no-such-flatc"
        with pytest.raises(SpawnFailed) as excinfo:
            run(missing, _request())
        assert isinstance(excinfo.value.error, OSError)
        assert isinstance(excinfo.value.__cause__, OSError)
        assert str(missing) in str(excinfo.value)

    def test_spawn_failed_not_executable(self, tmp_path: Path):
        plain = tmp_path / "flatc"
        plain.write_text("not a program")
        with pytest.raises(SpawnFailed):
            run(plain, _request())

    def test_abnormal_termination(self, stub_flatc):
        stub = stub_flatc(kill=True)
        with pytest.raises(AbnormalTermination) as excinfo:
            run(stub.path, _request())
        assert excinfo.value.signal_number == 9
        assert "SIGKILL" in str(excinfo.value)

    def test_errors_share_base_class(self, stub_flatc, tmp_path: Path):
        stub = stub_flatc(exit_code=2)
        for compiler in (stub.path, tmp_path / "missing"):
            with pytest.raises(GenerationError):
                run(compiler, _request())

    def test_no_retry(self, stub_flatc):
        stub = stub_flatc(exit_code=1)
        with pytest.raises(CompilerFailed):
            run(stub.path, _request())
        assert len(stub.calls()) == 1

    def test_cwd(self, stub_flatc, tmp_path: Path):
        stub = stub_flatc()
        workdir = tmp_path / "work"
        workdir.mkdir()
        run(stub.path, _request(), cwd=workdir)
        assert stub.cwds() == [str(workdir.resolve())]

    def test_none_uses_path(self, stub_flatc, monkeypatch):
        stub = stub_flatc()
        monkeypatch.setenv("PATH", str(stub.path.parent))
        run(None, _request())
        assert len(stub.calls()) == 1

    def test_success_stderr_logged_as_warning(self, stub_flatc, caplog):
        stub = stub_flatc(stderr="warning: field deprecated")
        with caplog.at_level(logging.WARNING, logger="flatcgen"):
            run(stub.path, _request())
        assert "field deprecated" in caplog.text

    def test_concurrent_invocations(self, stub_flatc):
        stub = stub_flatc()
        errors: list[Exception] = []

        def worker(i: int) -> None:
            try:
                run(stub.path, _request(f"out{i}/"))
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        outputs = sorted(call[2] for call in stub.calls())
        assert outputs == ["out0/", "out1/", "out2/", "out3/"]


# ── version / check ──────────────────────────────────────────────────


class TestParseVersion:
    def test_plain(self):
        assert parse_version("flatc version 24.3.25\n") == FlatcVersion("24.3.25")

    def test_only_first_line(self):
        assert parse_version("flatc version 1.12.0\nextra\n").version == "1.12.0"

    def test_parts(self):
        assert FlatcVersion("23.5.26").parts == (23, 5, 26)
        assert FlatcVersion("2.0.8-git").parts == (2, 0)

    @pytest.mark.parametrize(
        "output",
        ["", "\n", "protoc 3.21.0", "flatc version ", "flatc version v24.3.25"],
    )
    def test_rejects(self, output):
        with pytest.raises(VersionError):
            parse_version(output)


class TestFlatcVersion:
    def test_version(self, stub_flatc):
        stub = stub_flatc(version_output="flatc version 23.5.26\n")
        assert Flatc.from_path(stub.path).version().version == "23.5.26"
        assert stub.calls() == [["--version"]]

    def test_version_bad_output(self, stub_flatc):
        stub = stub_flatc(version_output="something else\n")
        with pytest.raises(VersionError):
            Flatc.from_path(stub.path).check()

    def test_version_nonzero_exit(self, stub_flatc):
        stub = stub_flatc(version_exit=1)
        with pytest.raises(CompilerFailed):
            Flatc.from_path(stub.path).version()

    def test_check_missing(self, tmp_path: Path):
        with pytest.raises(SpawnFailed):
            Flatc.from_path(tmp_path / "missing").check()


class TestGenerate:
    def test_checks_then_runs(self, stub_flatc):
        stub = stub_flatc()
        generate(_request(), compiler_path=stub.path)
        assert stub.calls() == [["--version"], ["--rust", "-o", "out/", "a.fbs"]]

    def test_bad_version_stops_before_run(self, stub_flatc):
        stub = stub_flatc(version_output="nope\n")
        with pytest.raises(VersionError):
            generate(_request(), compiler_path=stub.path)
        assert stub.calls() == [["--version"]]


class TestResolveExecutable:
    def test_found_on_path(self, stub_flatc, monkeypatch):
        stub = stub_flatc()
        monkeypatch.setenv("PATH", str(stub.path.parent))
        assert resolve_executable(None) == stub.path

    def test_missing(self, tmp_path: Path):
        assert resolve_executable(tmp_path / "missing") is None
