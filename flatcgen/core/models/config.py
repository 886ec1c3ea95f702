"""
Build configuration model — what ``flatc.yml`` declares.

A config is a list of named jobs, each one a GenerationRequest plus a
name, and an optional compiler path shared by all jobs.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from flatcgen.core.models.request import GenerationRequest


class GenerationJob(GenerationRequest):
    """A named generation request declared in flatc.yml."""

    name: str = Field(min_length=1)
    description: str = ""

    def to_request(self) -> GenerationRequest:
        """Strip the job metadata, keeping only what flatc sees."""
        return GenerationRequest(**self.model_dump(exclude={"name", "description"}))


class BuildConfig(BaseModel):
    """Root of flatc.yml."""

    model_config = ConfigDict(extra="forbid")

    version: int = 1
    flatc: str | None = None
    jobs: list[GenerationJob] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_job_names(self) -> BuildConfig:
        names = self.job_names()
        dupes = sorted({n for n in names if names.count(n) > 1})
        if dupes:
            raise ValueError(f"Duplicate job names: {', '.join(dupes)}")
        return self

    def get_job(self, name: str) -> GenerationJob | None:
        """Look up a job by name."""
        for job in self.jobs:
            if job.name == name:
                return job
        return None

    def job_names(self) -> list[str]:
        return [job.name for job in self.jobs]
