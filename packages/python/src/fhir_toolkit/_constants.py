"""
Shared constants for the FHIR model engine.

Version tables, the primitive type catalogue and the open value[x] type
lists are centralised here to avoid circular imports between the engine,
the validator and the per-version model packages.
"""

from __future__ import annotations

# ── Version Constants ──────────────────────────────────────────────

SUPPORTED_FHIR_VERSIONS = ("R4", "R4B", "R5")
"""FHIR versions with shipped model descriptors."""

DEFAULT_FHIR_VERSION = "R4"

FHIR_VERSION_PACKAGES: dict[str, str] = {
    "R4": "fhir_toolkit.r4",
    "R4B": "fhir_toolkit.r4b",
    "R5": "fhir_toolkit.r5",
}
"""Import path of the model package that registers each version."""

# ── Primitive Types ────────────────────────────────────────────────
#
# Fields typed with one of these codes carry a parallel ``_name`` shadow
# slot in FHIR JSON (except where a FieldSpec opts out, e.g. Element.id).

PRIMITIVE_TYPES = frozenset({
    "base64Binary",
    "boolean",
    "canonical",
    "code",
    "date",
    "dateTime",
    "decimal",
    "id",
    "instant",
    "integer",
    "integer64",
    "markdown",
    "oid",
    "positiveInt",
    "string",
    "time",
    "unsignedInt",
    "uri",
    "url",
    "uuid",
    "xhtml",
})

RESOURCE_TYPE_CODE = "Resource"
"""Type code for fields holding an inline resource (contained, entry.resource)."""

# Every data type a polymorphic ``value[x]`` may take (Extension,
# Parameters.parameter).  R5 drops Contributor.  Complex types without a
# shipped descriptor are accepted and passed through untouched.

OPEN_TYPES_R4 = (
    "base64Binary", "boolean", "canonical", "code", "date", "dateTime",
    "decimal", "id", "instant", "integer", "markdown", "oid",
    "positiveInt", "string", "time", "unsignedInt", "uri", "url", "uuid",
    "Address", "Age", "Annotation", "Attachment", "CodeableConcept",
    "Coding", "ContactPoint", "Count", "Distance", "Duration", "HumanName",
    "Identifier", "Money", "Period", "Quantity", "Range", "Ratio",
    "Reference", "SampledData", "Signature", "Timing", "ContactDetail",
    "Contributor", "DataRequirement", "Expression", "ParameterDefinition",
    "RelatedArtifact", "TriggerDefinition", "UsageContext", "Dosage",
    "Meta",
)

OPEN_TYPES_R5 = (
    "base64Binary", "boolean", "canonical", "code", "date", "dateTime",
    "decimal", "id", "instant", "integer", "integer64", "markdown", "oid",
    "positiveInt", "string", "time", "unsignedInt", "uri", "url", "uuid",
    "Address", "Age", "Annotation", "Attachment", "CodeableConcept",
    "CodeableReference", "Coding", "ContactPoint", "Count", "Distance",
    "Duration", "HumanName", "Identifier", "Money", "Period", "Quantity",
    "Range", "Ratio", "RatioRange", "Reference", "SampledData",
    "Signature", "Timing", "ContactDetail", "DataRequirement",
    "Expression", "ParameterDefinition", "RelatedArtifact",
    "TriggerDefinition", "UsageContext", "Availability",
    "ExtendedContactDetail", "MonetaryComponent", "VirtualServiceDetail",
    "Dosage", "Meta",
)

# ── Numeric Limits ─────────────────────────────────────────────────

INTEGER_MIN = -2147483648
INTEGER_MAX = 2147483647
INTEGER64_MIN = -9223372036854775808
INTEGER64_MAX = 9223372036854775807
