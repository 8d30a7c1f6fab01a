"""Patient gateway protocol implemented by every record source."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from discharge_scribe.models import Patient


@runtime_checkable
class IPatientGateway(Protocol):
    """Synchronous lookup of patient records by identifier."""

    def get_patient(self, patient_id: str) -> Optional[Patient]:
        """Return the record for ``patient_id``, or None if it does not exist."""
        ...

    def list_patients(self) -> list[Patient]:
        """All records known to the gateway, in a stable order."""
        ...
