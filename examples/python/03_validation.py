"""
Example 03: Structural Validation
=================================

Check plain payloads and model instances against their declared
cardinality, primitive formats and choice exclusivity, and report the
result as an OperationOutcome.
"""

import json

from fhir_toolkit import r4, set_default_validator
from fhir_toolkit.validation import ValidationResult, validate_entity, validate_resource

# ── 1. Validating a plain payload ────────────────────────────────

print("=== 1. Plain payload ===\n")

payload = {
    "resourceType": "Observation",
    "status": "final",
    "valueString": "a",
    "valueBoolean": True,
    "effectivePeriod": {"start": "2024-02-01", "end": "2024-01-01"},
    "issued": "yesterday",
}
result = validate_resource(payload)
print("valid:", result.valid)
for error in result.errors:
    print(f"  [{error.constraint}] {error.path}: {error.message}")

print(json.dumps(result.to_operation_outcome(), indent=2))

# ── 2. Validating a model instance under another version ─────────

print("\n=== 2. Versions ===\n")

condition = r4.Condition({"subject": {"reference": "Patient/pat-1"}})
print("R4 valid:", condition.validate().valid)
print("R5 errors:", [e.path for e in validate_resource(condition.to_json(), "R5").errors])

# ── 3. Plugging in a custom validator ────────────────────────────


def require_identifier(entity, fhir_version=None) -> ValidationResult:
    result = validate_entity(entity, fhir_version)
    if "identifier" in entity._fhir_schema and not entity.get("identifier"):
        print(f"  note: {type(entity).__name__} has no identifier")
    return result


print("\n=== 3. Custom validator ===\n")

set_default_validator(require_identifier)
try:
    r4.Patient({"id": "pat-1"}).validate()
finally:
    set_default_validator(None)
