"""In-memory patient gateway: dict-backed, for tests and demos."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from discharge_scribe.models import Patient

log = logging.getLogger(__name__)


class InMemoryPatientGateway:
    """Serves patient records from a plain dict keyed by patient id."""

    def __init__(self, patients: Iterable[Patient] = ()) -> None:
        self._store: dict[str, Patient] = {}
        for patient in patients:
            self.add(patient)

    def add(self, patient: Patient) -> None:
        if patient.id in self._store:
            log.warning("Replacing existing patient record %s", patient.id)
        self._store[patient.id] = patient

    def get_patient(self, patient_id: str) -> Optional[Patient]:
        patient = self._store.get(patient_id)
        if patient is None:
            log.debug("Patient %s not in memory store", patient_id)
        return patient

    def list_patients(self) -> list[Patient]:
        return [self._store[k] for k in sorted(self._store)]
