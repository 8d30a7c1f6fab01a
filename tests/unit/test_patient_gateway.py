"""Tests for the patient record gateways."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from discharge_scribe.core.config import DataConfig
from discharge_scribe.exceptions import ConfigurationError
from discharge_scribe.gateway import (
    IPatientGateway,
    InMemoryPatientGateway,
    JsonPatientGateway,
    create_patient_gateway,
    sample_patients,
)
from discharge_scribe.models import Patient


class TestInMemoryPatientGateway:
    def test_lookup_by_id(self, patient: Patient) -> None:
        gateway = InMemoryPatientGateway([patient])
        assert gateway.get_patient("P1") == patient

    def test_unknown_id_returns_none(self, patient: Patient) -> None:
        gateway = InMemoryPatientGateway([patient])
        assert gateway.get_patient("X") is None

    def test_list_is_sorted_by_id(self, patient: Patient) -> None:
        other = patient.model_copy(update={"id": "P0"})
        gateway = InMemoryPatientGateway([patient, other])

        assert [p.id for p in gateway.list_patients()] == ["P0", "P1"]

    def test_add_replaces_existing_record(self, patient: Patient) -> None:
        gateway = InMemoryPatientGateway([patient])
        updated = patient.model_copy(update={"admission_reason": "Fall."})

        gateway.add(updated)

        assert gateway.get_patient("P1").admission_reason == "Fall."
        assert len(gateway.list_patients()) == 1

    def test_satisfies_protocol(self) -> None:
        assert isinstance(InMemoryPatientGateway(), IPatientGateway)


class TestJsonPatientGateway:
    def test_loads_records(self, tmp_path: Path, patient: Patient) -> None:
        path = tmp_path / "patients.json"
        path.write_text(json.dumps([patient.model_dump()]), encoding="utf-8")

        gateway = JsonPatientGateway(path)

        assert gateway.get_patient("P1") == patient
        assert isinstance(gateway, IPatientGateway)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="not found"):
            JsonPatientGateway(tmp_path / "absent.json")

    def test_non_array_payload(self, tmp_path: Path) -> None:
        path = tmp_path / "patients.json"
        path.write_text(json.dumps({"id": "P1"}), encoding="utf-8")

        with pytest.raises(ConfigurationError, match="JSON array"):
            JsonPatientGateway(path)


class TestSamples:
    def test_bundled_patients(self) -> None:
        patients = sample_patients()

        assert [p.id for p in patients] == ["P001", "P002", "P003"]
        assert patients[0].display_name == "Eleanor Vance"
        assert all(p.lab_results and p.medication_changes for p in patients)


class TestCreatePatientGateway:
    def test_defaults_to_samples(self) -> None:
        gateway = create_patient_gateway(DataConfig())

        assert gateway.get_patient("P002") is not None

    def test_uses_configured_file(self, tmp_path: Path, patient: Patient) -> None:
        path = tmp_path / "patients.json"
        path.write_text(json.dumps([patient.model_dump()]), encoding="utf-8")

        gateway = create_patient_gateway(DataConfig(patients_file=path))

        assert isinstance(gateway, JsonPatientGateway)
        assert [p.id for p in gateway.list_patients()] == ["P1"]
