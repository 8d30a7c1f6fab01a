"""LLM provider clients."""

from __future__ import annotations

from discharge_scribe.providers.client import LLMClient

__all__ = ["LLMClient"]
