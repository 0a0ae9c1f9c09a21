"""
Example 02: Fluent Builders and Non-Destructive Evolution
=========================================================

Assemble resources step by step with schema-derived builder methods,
then derive updated copies without touching the original.
"""

from fhir_toolkit.r4 import MedicationRequest, Observation
from fhir_toolkit.validation import FhirValidationError

# ── 1. Builder with generic and generated setters ────────────────

print("=== 1. Builder ===\n")

builder = (
    Observation.builder()
    .set("status", "preliminary")
    .set_code({"coding": [{"system": "http://loinc.org", "code": "8310-5"}]})
    .add_category({"text": "vital-signs"})
    .set_subject({"reference": "Patient/pat-1"})
    .set_effective("DateTime", "2024-05-01T08:30:00Z")
    .set_value("Quantity", {"value": 37.2, "unit": "Cel"})
)
print(builder)
obs = builder.build_or_raise()
print(obs.to_json())

# ── 2. with_changes / apply_transform ────────────────────────────

print("\n=== 2. Evolution ===\n")

final = obs.with_changes({"status": "final", "effectivePeriod": {"start": "2024-05-01"}})
print("original status:", obs.status)
print("new status:", final.status)
print("new effective[x]:", final.choice("effective"))


def bump(view):
    value = view["valueQuantity"]
    return {"valueQuantity": {**value, "value": round(value["value"] + 0.4, 1)}}


print("transformed:", obs.apply_transform(bump).valueQuantity)

# ── 3. Validation on build ───────────────────────────────────────

print("\n=== 3. build_or_raise ===\n")

incomplete = MedicationRequest.builder().set("status", "active")
try:
    incomplete.build_or_raise()
except FhirValidationError as exc:
    print("rejected:", exc)
    for error in exc.result.errors:
        print(f"  {error.path}: {error.constraint}")
