"""
FHIR R5 datatypes that differ from R4.

Datatypes R5 kept unchanged live in :mod:`fhir_toolkit.r5.shared`.
"""

from __future__ import annotations

from fhir_toolkit._constants import OPEN_TYPES_R5
from fhir_toolkit.base import BackboneElement, Element
from fhir_toolkit.schema import choice, prop


class Extension(Element):
    elements = (
        prop("url", "uri", "1..1", shadow=False),
        choice("value", *OPEN_TYPES_R5),
    )


class Attachment(Element):
    elements = (
        prop("contentType", "code"),
        prop("language", "code"),
        prop("data", "base64Binary"),
        prop("url", "url"),
        prop("size", "integer64"),
        prop("hash", "base64Binary"),
        prop("title", "string"),
        prop("creation", "dateTime"),
        prop("height", "positiveInt"),
        prop("width", "positiveInt"),
        prop("frames", "positiveInt"),
        prop("duration", "decimal"),
        prop("pages", "positiveInt"),
    )


class CodeableReference(Element):
    """A concept, a reference, or both."""

    elements = (
        prop("concept", "CodeableConcept"),
        prop("reference", "Reference"),
    )


class SampledData(Element):
    elements = (
        prop("origin", "SimpleQuantity", "1..1"),
        prop("interval", "decimal"),
        prop("intervalUnit", "code", "1..1"),
        prop("factor", "decimal"),
        prop("lowerLimit", "decimal"),
        prop("upperLimit", "decimal"),
        prop("dimensions", "positiveInt", "1..1"),
        prop("codeMap", "canonical"),
        prop("offsets", "string"),
        prop("data", "string"),
    )


class ExtendedContactDetail(Element):
    elements = (
        prop("purpose", "CodeableConcept"),
        prop("name", "HumanName", "0..*"),
        prop("telecom", "ContactPoint", "0..*"),
        prop("address", "Address"),
        prop("organization", "Reference"),
        prop("period", "Period"),
    )


class Dosage(BackboneElement):
    elements = (
        prop("sequence", "integer"),
        prop("text", "string"),
        prop("additionalInstruction", "CodeableConcept", "0..*"),
        prop("patientInstruction", "string"),
        prop("timing", "Timing"),
        prop("asNeeded", "boolean"),
        prop("asNeededFor", "CodeableConcept", "0..*"),
        prop("site", "CodeableConcept"),
        prop("route", "CodeableConcept"),
        prop("method", "CodeableConcept"),
        prop("doseAndRate", "DosageDoseAndRate", "0..*"),
        prop("maxDosePerPeriod", "Ratio", "0..*"),
        prop("maxDosePerAdministration", "SimpleQuantity"),
        prop("maxDosePerLifetime", "SimpleQuantity"),
    )


DATATYPES = (
    Extension,
    Attachment,
    CodeableReference,
    SampledData,
    ExtendedContactDetail,
    Dosage,
)
