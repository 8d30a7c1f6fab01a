"""LLM-backed synthesis and drafting collaborators."""

from __future__ import annotations

import logging

from discharge_scribe.exceptions import DraftGenerationError, LLMClientError, SynthesisError
from discharge_scribe.generation.interfaces import IContentSynthesizer, IDraftGenerator
from discharge_scribe.models import Patient
from discharge_scribe.prompts import SYSTEM_PROMPT, build_draft_prompt, build_synthesis_prompt
from discharge_scribe.providers.client import LLMClient

log = logging.getLogger(__name__)


class LLMContentSynthesizer(IContentSynthesizer):
    """Synthesizes clinical notes from a patient record with one LLM call."""

    def __init__(self, client: LLMClient) -> None:
        self._client = client

    async def synthesize(self, patient: Patient) -> str:
        prompt = build_synthesis_prompt(patient)
        try:
            notes = await self._client.complete(prompt, system_prompt=SYSTEM_PROMPT)
        except LLMClientError as e:
            raise SynthesisError(f"Failed to synthesize clinical notes: {e}") from e

        notes = notes.strip()
        if not notes:
            raise SynthesisError("Failed to synthesize clinical notes: model returned no content.")
        log.debug("Synthesized %d chars of notes for %s", len(notes), patient.id)
        return notes


class LLMDraftGenerator(IDraftGenerator):
    """Drafts (or redrafts, given an edit request) the discharge summary."""

    def __init__(self, client: LLMClient) -> None:
        self._client = client

    async def draft(self, notes: str, patient: Patient, edit_request: str = "") -> str:
        prompt = build_draft_prompt(notes, patient, edit_request)
        try:
            summary = await self._client.complete(prompt, system_prompt=SYSTEM_PROMPT)
        except LLMClientError as e:
            raise DraftGenerationError(f"Failed to generate draft summary: {e}") from e

        summary = summary.strip()
        if not summary:
            raise DraftGenerationError("Failed to generate draft summary: model returned no content.")
        log.debug(
            "Drafted %d chars for %s (edit_request=%s)", len(summary), patient.id, bool(edit_request)
        )
        return summary
