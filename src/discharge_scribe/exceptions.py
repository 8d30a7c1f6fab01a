"""Exception hierarchy for discharge-scribe."""

from __future__ import annotations


class ScribeError(Exception):
    """Base exception for all discharge-scribe errors."""


class PatientNotFoundError(ScribeError):
    """Raised when a patient identifier does not resolve to a record."""

    def __init__(self, patient_id: str) -> None:
        super().__init__(f"Patient ID {patient_id} not found.")
        self.patient_id = patient_id


class CollaboratorError(ScribeError):
    """Raised when a content-generation collaborator fails."""


class SynthesisError(CollaboratorError):
    """Raised when clinical note synthesis fails."""


class DraftGenerationError(CollaboratorError):
    """Raised when drafting the discharge summary fails."""


class LLMClientError(ScribeError):
    """Raised when LLM API calls fail after exhausting retries."""


class RetryableError(LLMClientError):
    """Rate limits, timeouts and 5xx responses; safe to retry."""


class NonRetryableError(LLMClientError):
    """Auth errors and other non-429 4xx responses; fail immediately."""


class InvalidTransitionError(ScribeError):
    """Raised when a workflow action is not allowed in the current status."""


class ConfigurationError(ScribeError, ValueError):
    """Raised when settings fail startup validation."""
