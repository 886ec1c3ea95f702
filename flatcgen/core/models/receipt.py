"""
Generation receipts — the recorded outcome of one build job.

The library API raises typed errors; the build use case turns every
outcome (success, failure, skip) into a Receipt so a whole build can be
reported at once, as text or JSON.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


def now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class GenerationReceipt(BaseModel):
    """Result of running (or skipping) one generation job."""

    job: str
    status: Literal["ok", "skipped", "failed"] = "ok"

    command: list[str] = Field(default_factory=list)
    started_at: str = Field(default_factory=now_iso)
    ended_at: str = Field(default_factory=now_iso)
    duration_ms: int = 0

    exit_code: int | None = None
    error: str | None = None
    stderr: str = ""
    output: str = ""

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @property
    def skipped(self) -> bool:
        return self.status == "skipped"

    @classmethod
    def success(cls, job: str, **kwargs: Any) -> GenerationReceipt:
        """Create a success receipt."""
        return cls(job=job, status="ok", **kwargs)

    @classmethod
    def failure(cls, job: str, error: str, **kwargs: Any) -> GenerationReceipt:
        """Create a failure receipt."""
        return cls(job=job, status="failed", error=error, **kwargs)

    @classmethod
    def skip(cls, job: str, reason: str = "", **kwargs: Any) -> GenerationReceipt:
        """Create a skip receipt."""
        return cls(job=job, status="skipped", output=reason, **kwargs)
