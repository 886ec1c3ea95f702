"""
Domain models — Pydantic types for flatcgen.

    from flatcgen.core.models import GenerationRequest, Language, GenerationOption
"""

from flatcgen.core.models.config import BuildConfig, GenerationJob
from flatcgen.core.models.receipt import GenerationReceipt
from flatcgen.core.models.request import GenerationOption, GenerationRequest, Language

__all__ = [
    "BuildConfig",
    "GenerationJob",
    "GenerationOption",
    "GenerationReceipt",
    "GenerationRequest",
    "Language",
]
