"""
Build use case — run the generation jobs declared in flatc.yml.

Loads the config, selects jobs, runs flatc once per job and records a
receipt for each. Jobs run sequentially, in declaration order, with the
config file's directory as working directory. By default the first
failure stops the build; the remaining jobs are recorded as skipped.
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from flatcgen.adapters.flatc import (
    AbnormalTermination,
    CompilerFailed,
    Flatc,
    GenerationError,
    format_command,
)
from flatcgen.core.config.loader import ConfigError, load_config
from flatcgen.core.models.config import BuildConfig, GenerationJob
from flatcgen.core.models.receipt import GenerationReceipt, now_iso

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Result of a build."""

    config: BuildConfig | None = None
    config_path: Path | None = None
    flatc: str | None = None
    dry_run: bool = False
    receipts: list[GenerationReceipt] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and not any(r.failed for r in self.receipts)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.receipts if r.ok)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.receipts if r.failed)

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.receipts if r.skipped)

    def to_dict(self) -> dict:
        result: dict = {"ok": self.ok}
        if self.error:
            result["error"] = self.error
            return result

        result["config_path"] = str(self.config_path) if self.config_path else None
        result["flatc"] = self.flatc
        result["dry_run"] = self.dry_run
        result["summary"] = {
            "total": len(self.receipts),
            "ok": self.succeeded,
            "failed": self.failed,
            "skipped": self.skipped,
        }
        result["jobs"] = [r.model_dump() for r in self.receipts]
        return result


def run_build(
    config_path: Path | None = None,
    only: Sequence[str] = (),
    dry_run: bool = False,
    keep_going: bool = False,
    compiler: str | os.PathLike[str] | None = None,
) -> BuildResult:
    """Run generation jobs from flatc.yml.

    Args:
        config_path: Optional explicit path to flatc.yml.
        only: Job names to run. Empty = all jobs.
        dry_run: Record the commands without spawning flatc.
        keep_going: Keep running jobs after a failure.
        compiler: flatc override. Precedence: this > config ``flatc`` > PATH.

    Returns:
        BuildResult with one receipt per selected job.
    """
    result = BuildResult(dry_run=dry_run)

    # ── Load config ──────────────────────────────────────────────
    try:
        loaded = load_config(config_path)
    except ConfigError as e:
        result.error = str(e)
        return result

    config = loaded.config
    result.config = config
    result.config_path = loaded.path

    # ── Select jobs ──────────────────────────────────────────────
    jobs = config.jobs
    if only:
        unknown = [name for name in only if config.get_job(name) is None]
        if unknown:
            result.error = f"Unknown job(s): {', '.join(unknown)}"
            return result
        jobs = [job for job in config.jobs if job.name in only]

    if not jobs:
        result.error = "No generation jobs to run."
        return result

    # ── Resolve compiler ─────────────────────────────────────────
    # An explicit compiler path is relative to the caller's cwd; the
    # config's ``flatc:`` is relative to the config directory.
    if compiler:
        executable: str | os.PathLike[str] | None = _pin_to_cwd(compiler)
    else:
        executable = config.flatc
    flatc = Flatc.from_path(executable) if executable else Flatc.from_env_path()
    result.flatc = flatc.executable

    cwd = loaded.root
    stopped = False

    for job in jobs:
        command = flatc.command(job.to_request())

        if stopped:
            result.receipts.append(
                GenerationReceipt.skip(
                    job.name,
                    reason="skipped after an earlier failure",
                    command=command,
                )
            )
            continue

        if dry_run:
            result.receipts.append(
                GenerationReceipt.skip(
                    job.name,
                    reason=f"[dry-run] {format_command(command)}",
                    command=command,
                )
            )
            continue

        receipt = _run_job(flatc, job, cwd)
        result.receipts.append(receipt)

        if receipt.failed and not keep_going:
            stopped = True

    logger.info(
        "Build finished: %d ok, %d failed, %d skipped",
        result.succeeded, result.failed, result.skipped,
    )
    return result


def _pin_to_cwd(compiler: str | os.PathLike[str]) -> str | Path:
    """Absolute path for a compiler given as a path; bare names stay PATH lookups."""
    raw = os.fspath(compiler)
    separators = [sep for sep in (os.sep, os.altsep) if sep]
    if any(sep in raw for sep in separators):
        return Path(raw).absolute()
    return raw


def _run_job(flatc: Flatc, job: GenerationJob, cwd: Path) -> GenerationReceipt:
    """Run one job and capture its outcome as a receipt."""
    request = job.to_request()
    command = flatc.command(request)
    started_at = now_iso()
    start = time.monotonic()

    try:
        flatc.run(request, cwd=cwd)
    except GenerationError as e:
        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.error("Job '%s' failed: %s", job.name, e)
        exit_code = e.exit_code if isinstance(e, CompilerFailed) else None
        stderr = e.stderr if isinstance(e, (CompilerFailed, AbnormalTermination)) else ""
        return GenerationReceipt.failure(
            job.name,
            error=str(e),
            command=command,
            exit_code=exit_code,
            stderr=stderr,
            started_at=started_at,
            duration_ms=elapsed_ms,
        )

    elapsed_ms = int((time.monotonic() - start) * 1000)
    logger.info("Job '%s' generated into %s", job.name, job.output_directory)
    return GenerationReceipt.success(
        job.name,
        command=command,
        exit_code=0,
        output=f"generated {job.output_language} into {job.output_directory}",
        started_at=started_at,
        duration_ms=elapsed_ms,
    )
