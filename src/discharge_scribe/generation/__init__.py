"""Content-generation collaborators: note synthesis and summary drafting."""

from __future__ import annotations

from discharge_scribe.generation.interfaces import IContentSynthesizer, IDraftGenerator
from discharge_scribe.generation.llm import LLMContentSynthesizer, LLMDraftGenerator

__all__ = [
    "IContentSynthesizer",
    "IDraftGenerator",
    "LLMContentSynthesizer",
    "LLMDraftGenerator",
]
