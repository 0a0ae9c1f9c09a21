"""
Example 01: Models, Choice Groups and Element Shadows
=====================================================

Construct FHIR resources from partial payloads, read fields by wire
name or attribute access, and see how ``value[x]`` groups
keep exactly one branch.
"""

import json

from fhir_toolkit.r4 import Observation, Patient

# ── 1. Construction from a partial payload ───────────────────────

print("=== 1. Construction ===\n")

patient = Patient({
    "gender": "female",
    "name": [{"family": "Okafor", "given": ["Ada"]}],
    "id": "pat-1",
    "birthDate": "1984-03-09",
    "_birthDate": {"extension": [{
        "url": "http://hl7.org/fhir/StructureDefinition/patient-birthTime",
        "valueDateTime": "1984-03-09T14:35:00+10:00",
    }]},
})

# Keys come back in canonical order, resourceType first.
print(json.dumps(patient.to_json(), indent=2))
print("gender:", patient.gender)
print("birthDate element:", patient["_birthDate"])

# ── 2. Choice groups ─────────────────────────────────────────────

print("\n=== 2. Choice groups ===\n")

obs = Observation({
    "status": "final",
    "code": {"text": "Heart rate"},
    "valueQuantity": {"value": 72, "unit": "beats/minute"},
})
held = obs.choice("value")
print(f"value[x] holds {held.tag}: {held.value}")

# Assigning a different branch replaces the current one.
obs.valueString = "steady"
print("after valueString:", [k for k in obs.to_json() if k.startswith("value")])

obs.set_choice("value", "Boolean", True)
print("after set_choice:", obs.choice("value"))

obs.clear_choice("value")
print("after clear_choice:", obs.choice("value"))

# ── 3. Equality and copies ───────────────────────────────────────

print("\n=== 3. Equality ===\n")

copy = patient.clone()
print("clone equal:", copy == patient)
copy.name[0]["family"] = "Changed"
print("original untouched:", patient.name[0]["family"])
