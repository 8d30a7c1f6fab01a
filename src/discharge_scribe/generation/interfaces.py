"""Abstract content-generation collaborators."""

from __future__ import annotations

from abc import ABC, abstractmethod

from discharge_scribe.models import Patient


class IContentSynthesizer(ABC):
    @abstractmethod
    async def synthesize(self, patient: Patient) -> str:
        """Turn a raw patient record into structured clinical notes.

        Raises ``SynthesisError`` with a descriptive message on failure.
        """


class IDraftGenerator(ABC):
    @abstractmethod
    async def draft(self, notes: str, patient: Patient, edit_request: str = "") -> str:
        """Draft a discharge summary; ``edit_request`` is empty on the first draft.

        Raises ``DraftGenerationError`` with a descriptive message on failure.
        """
