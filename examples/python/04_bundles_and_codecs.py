"""
Example 04: Bundles, Version Dispatch and Codecs
================================================

Parse a searchset Bundle into typed models, assemble a new collection
Bundle, and compare JSON and CBOR payload sizes.
"""

from fhir_toolkit import list_resource_types, parse_resource, r4
from fhir_toolkit.bundle import make_bundle, parse_bundle
from fhir_toolkit.codec import _HAS_CBOR2, from_json_string, to_json_string

# ── 1. Dispatch by resourceType ──────────────────────────────────

print("=== 1. Dispatch ===\n")

print("R5 resource types:", ", ".join(list_resource_types("R5")))
enc = parse_resource({"resourceType": "Encounter", "status": "planned", "class": [{"text": "AMB"}]}, "R5")
print(type(enc).__module__, type(enc).__name__)

# ── 2. Bundles ───────────────────────────────────────────────────

print("\n=== 2. Bundles ===\n")

searchset = {
    "resourceType": "Bundle",
    "type": "searchset",
    "entry": [
        {"resource": {"resourceType": "Patient", "id": "pat-1"}},
        {"resource": {"resourceType": "Observation", "id": "obs-1", "status": "final",
                      "code": {"text": "Weight"}, "valueQuantity": {"value": 71.5, "unit": "kg"}}},
        {"resource": {"resourceType": "Basic", "id": "b-1"}},
    ],
}
resources, report = parse_bundle(searchset)
print(f"parsed {report.parsed}/{report.total_entries}: {report.counts}")
for skipped in report.skipped:
    print(f"  skipped entry {skipped.index} ({skipped.resource_type}): {skipped.reason}")

bundle = make_bundle(resources, "collection", base_url="http://fhir.example.org")
print(to_json_string(bundle, indent=2))

# ── 3. Codecs ────────────────────────────────────────────────────

print("\n=== 3. Codecs ===\n")

text = to_json_string(bundle)
assert from_json_string(text, r4.Bundle) == bundle

if _HAS_CBOR2:
    from fhir_toolkit.codec import from_cbor, payload_stats, to_cbor

    assert from_cbor(to_cbor(bundle)) == bundle
    stats = payload_stats(bundle)
    print(f"JSON {stats.json_bytes}B, CBOR {stats.cbor_bytes}B ({stats.cbor_ratio:.0%}), "
          f"gzip+CBOR {stats.gzip_cbor_bytes}B ({stats.gzip_cbor_ratio:.0%})")
else:
    print("cbor2 not installed: pip install fhir-toolkit[cbor]")
