"""
Synthetic FHIR payloads for the fhir-toolkit benchmarks.

All generators draw from one seeded RNG so runs are reproducible.
Payloads are plain dicts in wire form; benchmarks decide whether to
time model construction separately.
"""

from __future__ import annotations

import random
import string
from typing import Any

_RNG = random.Random(42)

GIVEN = ["Alice", "Bob", "Chen", "Dara", "Eve", "Farid", "Grace", "Hana"]
FAMILY = ["Nguyen", "Smith", "Okafor", "Muñoz", "Kowalski", "Ito"]
CITIES = ["Melbourne", "New York", "London", "Tokyo", "Berlin", "Lagos"]

VITALS = [
    ("8867-4", "Heart rate", "beats/minute", "/min", 50, 120),
    ("8310-5", "Body temperature", "Cel", "Cel", 35, 40),
    ("9279-1", "Respiratory rate", "breaths/minute", "/min", 10, 30),
    ("2708-6", "Oxygen saturation", "%", "%", 88, 100),
]


def _rand_id(prefix: str) -> str:
    suffix = "".join(_RNG.choices(string.ascii_lowercase + string.digits, k=8))
    return f"{prefix}-{suffix}"


def _rand_datetime(year: int = 2024) -> str:
    return (
        f"{year}-{_RNG.randint(1, 12):02d}-{_RNG.randint(1, 28):02d}"
        f"T{_RNG.randint(0, 23):02d}:{_RNG.randint(0, 59):02d}:00Z"
    )


# ── Resources ────────────────────────────────────────────────────


def make_patient(patient_id: str | None = None) -> dict[str, Any]:
    return {
        "resourceType": "Patient",
        "id": patient_id or _rand_id("pat"),
        "identifier": [{"system": "urn:oid:1.2.36.146.595.217.0.1", "value": _rand_id("mrn")}],
        "active": True,
        "name": [{"use": "official", "family": _RNG.choice(FAMILY), "given": [_RNG.choice(GIVEN)]}],
        "gender": _RNG.choice(["male", "female", "other", "unknown"]),
        "birthDate": f"{_RNG.randint(1940, 2010)}-{_RNG.randint(1, 12):02d}-{_RNG.randint(1, 28):02d}",
        "address": [{"city": _RNG.choice(CITIES), "country": "AU"}],
    }


def make_observation(patient_id: str = "pat-1") -> dict[str, Any]:
    """A vital-sign Observation with a Quantity value."""
    code, display, unit, ucum, low, high = _RNG.choice(VITALS)
    return {
        "resourceType": "Observation",
        "id": _rand_id("obs"),
        "status": "final",
        "category": [{
            "coding": [{
                "system": "http://terminology.hl7.org/CodeSystem/observation-category",
                "code": "vital-signs",
            }],
        }],
        "code": {"coding": [{"system": "http://loinc.org", "code": code, "display": display}]},
        "subject": {"reference": f"Patient/{patient_id}"},
        "effectiveDateTime": _rand_datetime(),
        "valueQuantity": {
            "value": round(_RNG.uniform(low, high), 1),
            "unit": unit,
            "system": "http://unitsofmeasure.org",
            "code": ucum,
        },
    }


def make_blood_pressure(patient_id: str = "pat-1") -> dict[str, Any]:
    """A panel Observation carrying two components."""
    def component(code: str, display: str, value: float) -> dict[str, Any]:
        return {
            "code": {"coding": [{"system": "http://loinc.org", "code": code, "display": display}]},
            "valueQuantity": {"value": value, "unit": "mmHg", "system": "http://unitsofmeasure.org", "code": "mm[Hg]"},
        }

    return {
        "resourceType": "Observation",
        "id": _rand_id("bp"),
        "status": "final",
        "code": {"coding": [{"system": "http://loinc.org", "code": "85354-9", "display": "Blood pressure panel"}]},
        "subject": {"reference": f"Patient/{patient_id}"},
        "effectivePeriod": {"start": _rand_datetime()},
        "component": [
            component("8480-6", "Systolic blood pressure", _RNG.randint(95, 170)),
            component("8462-4", "Diastolic blood pressure", _RNG.randint(55, 105)),
        ],
    }


# ── Batches ──────────────────────────────────────────────────────


def make_observation_batch(n: int, patient_id: str = "pat-1") -> list[dict[str, Any]]:
    return [
        make_blood_pressure(patient_id) if i % 5 == 0 else make_observation(patient_id)
        for i in range(n)
    ]


def make_bundle_payload(n_observations: int, bundle_type: str = "searchset") -> dict[str, Any]:
    """A Bundle with one Patient followed by *n_observations* Observations."""
    patient = make_patient()
    resources = [patient] + make_observation_batch(n_observations, patient["id"])
    return {
        "resourceType": "Bundle",
        "type": bundle_type,
        "total": len(resources),
        "entry": [
            {"fullUrl": f"http://fhir.example.org/{r['resourceType']}/{r['id']}", "resource": r}
            for r in resources
        ],
    }
