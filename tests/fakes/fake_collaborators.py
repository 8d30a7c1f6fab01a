"""Scripted generation collaborators for tests; no LLM calls."""

from __future__ import annotations

import asyncio
from typing import Any, Optional, Union

from discharge_scribe.exceptions import DraftGenerationError, SynthesisError
from discharge_scribe.generation.interfaces import IContentSynthesizer, IDraftGenerator
from discharge_scribe.models import Patient

Scripted = Union[str, Exception]


class FakeSynthesizer(IContentSynthesizer):
    """Returns ``notes`` (or raises ``error``) and records each call."""

    def __init__(self, notes: str = "Synthesized notes.", error: Optional[Exception] = None) -> None:
        self._notes = notes
        self._error = error
        self.calls: list[Patient] = []

    async def synthesize(self, patient: Patient) -> str:
        self.calls.append(patient)
        if self._error is not None:
            raise self._error
        return self._notes


class FakeDraftGenerator(IDraftGenerator):
    """Replays scripted drafts in order; the last one repeats once the script runs out.

    An ``Exception`` in the script is raised instead of returned.
    """

    def __init__(self, *responses: Scripted) -> None:
        self._responses: list[Scripted] = list(responses) or ["Draft summary."]
        self.calls: list[dict[str, Any]] = []

    async def draft(self, notes: str, patient: Patient, edit_request: str = "") -> str:
        self.calls.append({"notes": notes, "patient": patient, "edit_request": edit_request})
        index = min(len(self.calls) - 1, len(self._responses) - 1)
        response = self._responses[index]
        if isinstance(response, Exception):
            raise response
        return response


class BlockingSynthesizer(IContentSynthesizer):
    """Suspends in ``synthesize`` until ``release`` is called."""

    def __init__(self, notes: str = "Late notes.") -> None:
        self._notes = notes
        self.entered = asyncio.Event()
        self._gate = asyncio.Event()

    def release(self) -> None:
        self._gate.set()

    async def synthesize(self, patient: Patient) -> str:
        self.entered.set()
        await self._gate.wait()
        return self._notes


def failing_synthesizer(message: str = "Synthesis service unavailable") -> FakeSynthesizer:
    return FakeSynthesizer(error=SynthesisError(message))


def failing_drafter(message: str = "Draft service unavailable") -> FakeDraftGenerator:
    return FakeDraftGenerator(DraftGenerationError(message))
