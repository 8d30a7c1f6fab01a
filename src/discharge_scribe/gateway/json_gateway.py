"""File-based patient gateway reading a JSON array of patient records."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import TypeAdapter

from discharge_scribe.exceptions import ConfigurationError
from discharge_scribe.gateway.memory_gateway import InMemoryPatientGateway
from discharge_scribe.models import Patient

log = logging.getLogger(__name__)

_PATIENT_LIST = TypeAdapter(list[Patient])


class JsonPatientGateway(InMemoryPatientGateway):
    """Loads every record from ``path`` once, then serves lookups from memory."""

    def __init__(self, path: Path) -> None:
        self._path = path
        super().__init__(self._load(path))
        log.info("Loaded %d patient records from %s", len(self._store), path)

    @staticmethod
    def _load(path: Path) -> list[Patient]:
        if not path.is_file():
            raise ConfigurationError(f"Patient file not found: {path}")
        raw = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(raw, list):
            raise ConfigurationError(f"Expected JSON array of patients in {path}")
        return _PATIENT_LIST.validate_python(raw)
