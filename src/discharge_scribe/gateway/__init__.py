"""Pluggable patient record gateways."""

from __future__ import annotations

from typing import TYPE_CHECKING

from discharge_scribe.gateway.json_gateway import JsonPatientGateway
from discharge_scribe.gateway.memory_gateway import InMemoryPatientGateway
from discharge_scribe.gateway.protocols import IPatientGateway
from discharge_scribe.gateway.samples import sample_patients

if TYPE_CHECKING:
    from discharge_scribe.core.config import DataConfig

__all__ = [
    "IPatientGateway",
    "InMemoryPatientGateway",
    "JsonPatientGateway",
    "create_patient_gateway",
    "sample_patients",
]


def create_patient_gateway(config: DataConfig) -> IPatientGateway:
    """Gateway for ``config.patients_file``, or the bundled samples when unset."""
    if config.patients_file is not None:
        return JsonPatientGateway(config.patients_file)
    return InMemoryPatientGateway(sample_patients())
