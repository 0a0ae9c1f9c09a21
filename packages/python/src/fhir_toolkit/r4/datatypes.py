"""
FHIR R4 general-purpose and metadata datatypes.

https://hl7.org/fhir/R4/datatypes.html
"""

from __future__ import annotations

from fhir_toolkit._constants import OPEN_TYPES_R4
from fhir_toolkit.base import BackboneElement, Element
from fhir_toolkit.schema import choice, prop


# ── Extensibility / metadata ───────────────────────────────────────


class Extension(Element):
    elements = (
        prop("url", "uri", "1..1", shadow=False),
        choice("value", *OPEN_TYPES_R4),
    )


class Narrative(Element):
    elements = (
        prop("status", "code", "1..1"),
        prop("div", "xhtml", "1..1"),
    )


class Meta(Element):
    elements = (
        prop("versionId", "id"),
        prop("lastUpdated", "instant"),
        prop("source", "uri"),
        prop("profile", "canonical", "0..*"),
        prop("security", "Coding", "0..*"),
        prop("tag", "Coding", "0..*"),
    )


# ── Terminology / identification ───────────────────────────────────


class Coding(Element):
    elements = (
        prop("system", "uri"),
        prop("version", "string"),
        prop("code", "code"),
        prop("display", "string"),
        prop("userSelected", "boolean"),
    )


class CodeableConcept(Element):
    elements = (
        prop("coding", "Coding", "0..*"),
        prop("text", "string"),
    )


class Identifier(Element):
    elements = (
        prop("use", "code"),
        prop("type", "CodeableConcept"),
        prop("system", "uri"),
        prop("value", "string"),
        prop("period", "Period"),
        prop("assigner", "Reference"),
    )


class Reference(Element):
    elements = (
        prop("reference", "string"),
        prop("type", "uri"),
        prop("identifier", "Identifier"),
        prop("display", "string"),
    )


# ── Quantities ─────────────────────────────────────────────────────


class Quantity(Element):
    elements = (
        prop("value", "decimal"),
        prop("comparator", "code"),
        prop("unit", "string"),
        prop("system", "uri"),
        prop("code", "code"),
    )


# Profiles of Quantity share its structure.
class Age(Quantity):
    pass


class Count(Quantity):
    pass


class Distance(Quantity):
    pass


class Duration(Quantity):
    pass


class MoneyQuantity(Quantity):
    pass


class SimpleQuantity(Quantity):
    pass


class Money(Element):
    elements = (
        prop("value", "decimal"),
        prop("currency", "code"),
    )


class Range(Element):
    elements = (
        prop("low", "SimpleQuantity"),
        prop("high", "SimpleQuantity"),
    )


class Ratio(Element):
    elements = (
        prop("numerator", "Quantity"),
        prop("denominator", "Quantity"),
    )


class Period(Element):
    elements = (
        prop("start", "dateTime"),
        prop("end", "dateTime"),
    )


class SampledData(Element):
    elements = (
        prop("origin", "SimpleQuantity", "1..1"),
        prop("period", "decimal", "1..1"),
        prop("factor", "decimal"),
        prop("lowerLimit", "decimal"),
        prop("upperLimit", "decimal"),
        prop("dimensions", "positiveInt", "1..1"),
        prop("data", "string"),
    )


# ── People / contact ───────────────────────────────────────────────


class HumanName(Element):
    elements = (
        prop("use", "code"),
        prop("text", "string"),
        prop("family", "string"),
        prop("given", "string", "0..*"),
        prop("prefix", "string", "0..*"),
        prop("suffix", "string", "0..*"),
        prop("period", "Period"),
    )


class Address(Element):
    elements = (
        prop("use", "code"),
        prop("type", "code"),
        prop("text", "string"),
        prop("line", "string", "0..*"),
        prop("city", "string"),
        prop("district", "string"),
        prop("state", "string"),
        prop("postalCode", "string"),
        prop("country", "string"),
        prop("period", "Period"),
    )


class ContactPoint(Element):
    elements = (
        prop("system", "code"),
        prop("value", "string"),
        prop("use", "code"),
        prop("rank", "positiveInt"),
        prop("period", "Period"),
    )


class ContactDetail(Element):
    elements = (
        prop("name", "string"),
        prop("telecom", "ContactPoint", "0..*"),
    )


class Annotation(Element):
    elements = (
        choice("author", "Reference", "string"),
        prop("time", "dateTime"),
        prop("text", "markdown", "1..1"),
    )


class Attachment(Element):
    elements = (
        prop("contentType", "code"),
        prop("language", "code"),
        prop("data", "base64Binary"),
        prop("url", "url"),
        prop("size", "unsignedInt"),
        prop("hash", "base64Binary"),
        prop("title", "string"),
        prop("creation", "dateTime"),
    )


# ── Scheduling / dosage ────────────────────────────────────────────


class TimingRepeat(Element):
    elements = (
        choice("bounds", "Duration", "Range", "Period"),
        prop("count", "positiveInt"),
        prop("countMax", "positiveInt"),
        prop("duration", "decimal"),
        prop("durationMax", "decimal"),
        prop("durationUnit", "code"),
        prop("frequency", "positiveInt"),
        prop("frequencyMax", "positiveInt"),
        prop("period", "decimal"),
        prop("periodMax", "decimal"),
        prop("periodUnit", "code"),
        prop("dayOfWeek", "code", "0..*"),
        prop("timeOfDay", "time", "0..*"),
        prop("when", "code", "0..*"),
        prop("offset", "unsignedInt"),
    )


class Timing(BackboneElement):
    elements = (
        prop("event", "dateTime", "0..*"),
        prop("repeat", "TimingRepeat"),
        prop("code", "CodeableConcept"),
    )


class DosageDoseAndRate(Element):
    # doseQuantity / rateQuantity are SimpleQuantity profiles on the wire
    # name "Quantity".
    elements = (
        prop("type", "CodeableConcept"),
        choice("dose", "Range", "Quantity"),
        choice("rate", "Ratio", "Range", "Quantity"),
    )


class Dosage(BackboneElement):
    elements = (
        prop("sequence", "integer"),
        prop("text", "string"),
        prop("additionalInstruction", "CodeableConcept", "0..*"),
        prop("patientInstruction", "string"),
        prop("timing", "Timing"),
        choice("asNeeded", "boolean", "CodeableConcept"),
        prop("site", "CodeableConcept"),
        prop("route", "CodeableConcept"),
        prop("method", "CodeableConcept"),
        prop("doseAndRate", "DosageDoseAndRate", "0..*"),
        prop("maxDosePerPeriod", "Ratio"),
        prop("maxDosePerAdministration", "SimpleQuantity"),
        prop("maxDosePerLifetime", "SimpleQuantity"),
    )


DATATYPES = (
    Extension,
    Narrative,
    Meta,
    Coding,
    CodeableConcept,
    Identifier,
    Reference,
    Quantity,
    Age,
    Count,
    Distance,
    Duration,
    MoneyQuantity,
    SimpleQuantity,
    Money,
    Range,
    Ratio,
    Period,
    SampledData,
    HumanName,
    Address,
    ContactPoint,
    ContactDetail,
    Annotation,
    Attachment,
    TimingRepeat,
    Timing,
    DosageDoseAndRate,
    Dosage,
)
