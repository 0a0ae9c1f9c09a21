"""
FHIR R5 resources that differ from R4.

https://hl7.org/fhir/R5/diff.html
"""

from __future__ import annotations

from fhir_toolkit._constants import OPEN_TYPES_R5
from fhir_toolkit.base import BackboneElement, DomainResource, Resource
from fhir_toolkit.schema import choice, prop


# ═══════════════════════════════════════════════════════════════════
# CLINICAL
# ═══════════════════════════════════════════════════════════════════


OBSERVATION_VALUE_TYPES = (
    "Quantity", "CodeableConcept", "string", "boolean", "integer", "Range",
    "Ratio", "SampledData", "time", "dateTime", "Period", "Attachment",
    "Reference",
)


class ObservationTriggeredBy(BackboneElement):
    elements = (
        prop("observation", "Reference", "1..1"),
        prop("type", "code", "1..1"),
        prop("reason", "string"),
    )


class ObservationReferenceRange(BackboneElement):
    elements = (
        prop("low", "SimpleQuantity"),
        prop("high", "SimpleQuantity"),
        prop("normalValue", "CodeableConcept"),
        prop("type", "CodeableConcept"),
        prop("appliesTo", "CodeableConcept", "0..*"),
        prop("age", "Range"),
        prop("text", "markdown"),
    )


class ObservationComponent(BackboneElement):
    elements = (
        prop("code", "CodeableConcept", "1..1"),
        choice("value", *OBSERVATION_VALUE_TYPES),
        prop("dataAbsentReason", "CodeableConcept"),
        prop("interpretation", "CodeableConcept", "0..*"),
        prop("referenceRange", "ObservationReferenceRange", "0..*"),
    )


class Observation(DomainResource):
    resource_type = "Observation"
    elements = (
        prop("identifier", "Identifier", "0..*"),
        choice("instantiates", "canonical", "Reference"),
        prop("basedOn", "Reference", "0..*"),
        prop("triggeredBy", "ObservationTriggeredBy", "0..*"),
        prop("partOf", "Reference", "0..*"),
        prop("status", "code", "1..1"),
        prop("category", "CodeableConcept", "0..*"),
        prop("code", "CodeableConcept", "1..1"),
        prop("subject", "Reference"),
        prop("focus", "Reference", "0..*"),
        prop("encounter", "Reference"),
        choice("effective", "dateTime", "Period", "Timing", "instant"),
        prop("issued", "instant"),
        prop("performer", "Reference", "0..*"),
        choice("value", *OBSERVATION_VALUE_TYPES),
        prop("dataAbsentReason", "CodeableConcept"),
        prop("interpretation", "CodeableConcept", "0..*"),
        prop("note", "Annotation", "0..*"),
        prop("bodySite", "CodeableConcept"),
        prop("bodyStructure", "Reference"),
        prop("method", "CodeableConcept"),
        prop("specimen", "Reference"),
        prop("device", "Reference"),
        prop("referenceRange", "ObservationReferenceRange", "0..*"),
        prop("hasMember", "Reference", "0..*"),
        prop("derivedFrom", "Reference", "0..*"),
        prop("component", "ObservationComponent", "0..*"),
    )


class ConditionParticipant(BackboneElement):
    elements = (
        prop("function", "CodeableConcept"),
        prop("actor", "Reference", "1..1"),
    )


class ConditionStage(BackboneElement):
    elements = (
        prop("summary", "CodeableConcept"),
        prop("assessment", "Reference", "0..*"),
        prop("type", "CodeableConcept"),
    )


class Condition(DomainResource):
    resource_type = "Condition"
    elements = (
        prop("identifier", "Identifier", "0..*"),
        prop("clinicalStatus", "CodeableConcept", "1..1"),
        prop("verificationStatus", "CodeableConcept"),
        prop("category", "CodeableConcept", "0..*"),
        prop("severity", "CodeableConcept"),
        prop("code", "CodeableConcept"),
        prop("bodySite", "CodeableConcept", "0..*"),
        prop("subject", "Reference", "1..1"),
        prop("encounter", "Reference"),
        choice("onset", "dateTime", "Age", "Period", "Range", "string"),
        choice("abatement", "dateTime", "Age", "Period", "Range", "string"),
        prop("recordedDate", "dateTime"),
        prop("participant", "ConditionParticipant", "0..*"),
        prop("stage", "ConditionStage", "0..*"),
        prop("evidence", "CodeableReference", "0..*"),
        prop("note", "Annotation", "0..*"),
    )


class EncounterParticipant(BackboneElement):
    elements = (
        prop("type", "CodeableConcept", "0..*"),
        prop("period", "Period"),
        prop("actor", "Reference"),
    )


class EncounterReason(BackboneElement):
    elements = (
        prop("use", "CodeableConcept", "0..*"),
        prop("value", "CodeableReference", "0..*"),
    )


class EncounterDiagnosis(BackboneElement):
    elements = (
        prop("condition", "CodeableReference", "0..*"),
        prop("use", "CodeableConcept", "0..*"),
    )


class EncounterAdmission(BackboneElement):
    elements = (
        prop("preAdmissionIdentifier", "Identifier"),
        prop("origin", "Reference"),
        prop("admitSource", "CodeableConcept"),
        prop("reAdmission", "CodeableConcept"),
        prop("destination", "Reference"),
        prop("dischargeDisposition", "CodeableConcept"),
    )


class EncounterLocation(BackboneElement):
    elements = (
        prop("location", "Reference", "1..1"),
        prop("status", "code"),
        prop("form", "CodeableConcept"),
        prop("period", "Period"),
    )


class Encounter(DomainResource):
    resource_type = "Encounter"
    elements = (
        prop("identifier", "Identifier", "0..*"),
        prop("status", "code", "1..1"),
        prop("class", "CodeableConcept", "0..*"),
        prop("priority", "CodeableConcept"),
        prop("type", "CodeableConcept", "0..*"),
        prop("serviceType", "CodeableReference", "0..*"),
        prop("subject", "Reference"),
        prop("subjectStatus", "CodeableConcept"),
        prop("episodeOfCare", "Reference", "0..*"),
        prop("basedOn", "Reference", "0..*"),
        prop("careTeam", "Reference", "0..*"),
        prop("partOf", "Reference"),
        prop("serviceProvider", "Reference"),
        prop("participant", "EncounterParticipant", "0..*"),
        prop("appointment", "Reference", "0..*"),
        prop("virtualService", "VirtualServiceDetail", "0..*"),
        prop("actualPeriod", "Period"),
        prop("plannedStartDate", "dateTime"),
        prop("plannedEndDate", "dateTime"),
        prop("length", "Duration"),
        prop("reason", "EncounterReason", "0..*"),
        prop("diagnosis", "EncounterDiagnosis", "0..*"),
        prop("account", "Reference", "0..*"),
        prop("dietPreference", "CodeableConcept", "0..*"),
        prop("specialArrangement", "CodeableConcept", "0..*"),
        prop("specialCourtesy", "CodeableConcept", "0..*"),
        prop("admission", "EncounterAdmission"),
        prop("location", "EncounterLocation", "0..*"),
    )


# ═══════════════════════════════════════════════════════════════════
# PROCEDURES / ORDERS
# ═══════════════════════════════════════════════════════════════════


class ProcedurePerformer(BackboneElement):
    elements = (
        prop("function", "CodeableConcept"),
        prop("actor", "Reference", "1..1"),
        prop("onBehalfOf", "Reference"),
        prop("period", "Period"),
    )


class Procedure(DomainResource):
    resource_type = "Procedure"
    elements = (
        prop("identifier", "Identifier", "0..*"),
        prop("instantiatesCanonical", "canonical", "0..*"),
        prop("instantiatesUri", "uri", "0..*"),
        prop("basedOn", "Reference", "0..*"),
        prop("partOf", "Reference", "0..*"),
        prop("status", "code", "1..1"),
        prop("statusReason", "CodeableConcept"),
        prop("category", "CodeableConcept", "0..*"),
        prop("code", "CodeableConcept"),
        prop("subject", "Reference", "1..1"),
        prop("focus", "Reference"),
        prop("encounter", "Reference"),
        choice("occurrence", "dateTime", "Period", "string", "Age", "Range", "Timing"),
        prop("recorded", "dateTime"),
        prop("recorder", "Reference"),
        choice("reported", "boolean", "Reference"),
        prop("performer", "ProcedurePerformer", "0..*"),
        prop("location", "Reference"),
        prop("reason", "CodeableReference", "0..*"),
        prop("bodySite", "CodeableConcept", "0..*"),
        prop("outcome", "CodeableConcept"),
        prop("report", "Reference", "0..*"),
        prop("complication", "CodeableReference", "0..*"),
        prop("followUp", "CodeableConcept", "0..*"),
        prop("note", "Annotation", "0..*"),
        prop("focalDevice", "ProcedureFocalDevice", "0..*"),
        prop("used", "CodeableReference", "0..*"),
        prop("supportingInfo", "Reference", "0..*"),
    )


class MedicationRequestDispenseRequest(BackboneElement):
    elements = (
        prop("initialFill", "MedicationRequestDispenseRequestInitialFill"),
        prop("dispenseInterval", "Duration"),
        prop("validityPeriod", "Period"),
        prop("numberOfRepeatsAllowed", "unsignedInt"),
        prop("quantity", "SimpleQuantity"),
        prop("expectedSupplyDuration", "Duration"),
        prop("dispenser", "Reference"),
        prop("dispenserInstruction", "Annotation", "0..*"),
        prop("doseAdministrationAid", "CodeableConcept"),
    )


class MedicationRequestSubstitution(BackboneElement):
    elements = (
        choice("allowed", "boolean", "CodeableConcept", card="1..1"),
        prop("reason", "CodeableConcept"),
    )


class MedicationRequest(DomainResource):
    """R5 request: ``medication`` and ``reason`` are CodeableReferences."""

    resource_type = "MedicationRequest"
    elements = (
        prop("identifier", "Identifier", "0..*"),
        prop("basedOn", "Reference", "0..*"),
        prop("priorPrescription", "Reference"),
        prop("groupIdentifier", "Identifier"),
        prop("status", "code", "1..1"),
        prop("statusReason", "CodeableConcept"),
        prop("statusChanged", "dateTime"),
        prop("intent", "code", "1..1"),
        prop("category", "CodeableConcept", "0..*"),
        prop("priority", "code"),
        prop("doNotPerform", "boolean"),
        prop("medication", "CodeableReference", "1..1"),
        prop("subject", "Reference", "1..1"),
        prop("informationSource", "Reference", "0..*"),
        prop("encounter", "Reference"),
        prop("supportingInformation", "Reference", "0..*"),
        prop("authoredOn", "dateTime"),
        prop("requester", "Reference"),
        prop("reported", "boolean"),
        prop("performerType", "CodeableConcept"),
        prop("performer", "Reference", "0..*"),
        prop("device", "CodeableReference", "0..*"),
        prop("recorder", "Reference"),
        prop("reason", "CodeableReference", "0..*"),
        prop("courseOfTherapyType", "CodeableConcept"),
        prop("insurance", "Reference", "0..*"),
        prop("note", "Annotation", "0..*"),
        prop("renderedDosageInstruction", "markdown"),
        prop("effectiveDosePeriod", "Period"),
        prop("dosageInstruction", "Dosage", "0..*"),
        prop("dispenseRequest", "MedicationRequestDispenseRequest"),
        prop("substitution", "MedicationRequestSubstitution"),
        prop("eventHistory", "Reference", "0..*"),
    )


class ImmunizationProgramEligibility(BackboneElement):
    elements = (
        prop("program", "CodeableConcept", "1..1"),
        prop("programStatus", "CodeableConcept", "1..1"),
    )


class ImmunizationReaction(BackboneElement):
    elements = (
        prop("date", "dateTime"),
        prop("manifestation", "CodeableReference"),
        prop("reported", "boolean"),
    )


class ImmunizationProtocolApplied(BackboneElement):
    elements = (
        prop("series", "string"),
        prop("authority", "Reference"),
        prop("targetDisease", "CodeableConcept", "0..*"),
        prop("doseNumber", "string", "1..1"),
        prop("seriesDoses", "string"),
    )


class Immunization(DomainResource):
    resource_type = "Immunization"
    elements = (
        prop("identifier", "Identifier", "0..*"),
        prop("basedOn", "Reference", "0..*"),
        prop("status", "code", "1..1"),
        prop("statusReason", "CodeableConcept"),
        prop("vaccineCode", "CodeableConcept", "1..1"),
        prop("administeredProduct", "CodeableReference"),
        prop("manufacturer", "CodeableReference"),
        prop("lotNumber", "string"),
        prop("expirationDate", "date"),
        prop("patient", "Reference", "1..1"),
        prop("encounter", "Reference"),
        prop("supportingInformation", "Reference", "0..*"),
        choice("occurrence", "dateTime", "string", card="1..1"),
        prop("primarySource", "boolean"),
        prop("informationSource", "CodeableReference"),
        prop("location", "Reference"),
        prop("site", "CodeableConcept"),
        prop("route", "CodeableConcept"),
        prop("doseQuantity", "SimpleQuantity"),
        prop("performer", "ImmunizationPerformer", "0..*"),
        prop("note", "Annotation", "0..*"),
        prop("reason", "CodeableReference", "0..*"),
        prop("isSubpotent", "boolean"),
        prop("subpotentReason", "CodeableConcept", "0..*"),
        prop("programEligibility", "ImmunizationProgramEligibility", "0..*"),
        prop("fundingSource", "CodeableConcept"),
        prop("reaction", "ImmunizationReaction", "0..*"),
        prop("protocolApplied", "ImmunizationProtocolApplied", "0..*"),
    )


class ServiceRequestOrderDetailParameter(BackboneElement):
    elements = (
        prop("code", "CodeableConcept", "1..1"),
        choice(
            "value", "Quantity", "Ratio", "Range", "boolean", "CodeableConcept",
            "string", "Period", card="1..1",
        ),
    )


class ServiceRequestOrderDetail(BackboneElement):
    elements = (
        prop("parameterFocus", "CodeableReference"),
        prop("parameter", "ServiceRequestOrderDetailParameter", "1..*"),
    )


class ServiceRequestPatientInstruction(BackboneElement):
    elements = (
        choice("instruction", "markdown", "Reference"),
    )


class ServiceRequest(DomainResource):
    resource_type = "ServiceRequest"
    elements = (
        prop("identifier", "Identifier", "0..*"),
        prop("instantiatesCanonical", "canonical", "0..*"),
        prop("instantiatesUri", "uri", "0..*"),
        prop("basedOn", "Reference", "0..*"),
        prop("replaces", "Reference", "0..*"),
        prop("requisition", "Identifier"),
        prop("status", "code", "1..1"),
        prop("intent", "code", "1..1"),
        prop("category", "CodeableConcept", "0..*"),
        prop("priority", "code"),
        prop("doNotPerform", "boolean"),
        prop("code", "CodeableReference"),
        prop("orderDetail", "ServiceRequestOrderDetail", "0..*"),
        choice("quantity", "Quantity", "Ratio", "Range"),
        prop("subject", "Reference", "1..1"),
        prop("focus", "Reference", "0..*"),
        prop("encounter", "Reference"),
        choice("occurrence", "dateTime", "Period", "Timing"),
        choice("asNeeded", "boolean", "CodeableConcept"),
        prop("authoredOn", "dateTime"),
        prop("requester", "Reference"),
        prop("performerType", "CodeableConcept"),
        prop("performer", "Reference", "0..*"),
        prop("location", "CodeableReference", "0..*"),
        prop("reason", "CodeableReference", "0..*"),
        prop("insurance", "Reference", "0..*"),
        prop("supportingInfo", "CodeableReference", "0..*"),
        prop("specimen", "Reference", "0..*"),
        prop("bodySite", "CodeableConcept", "0..*"),
        prop("bodyStructure", "Reference"),
        prop("note", "Annotation", "0..*"),
        prop("patientInstruction", "ServiceRequestPatientInstruction", "0..*"),
        prop("relevantHistory", "Reference", "0..*"),
    )


# ═══════════════════════════════════════════════════════════════════
# ADMINISTRATIVE
# ═══════════════════════════════════════════════════════════════════


class PractitionerQualification(BackboneElement):
    elements = (
        prop("identifier", "Identifier", "0..*"),
        prop("code", "CodeableConcept", "1..1"),
        prop("period", "Period"),
        prop("issuer", "Reference"),
    )


class PractitionerCommunication(BackboneElement):
    elements = (
        prop("language", "CodeableConcept", "1..1"),
        prop("preferred", "boolean"),
    )


class Practitioner(DomainResource):
    resource_type = "Practitioner"
    elements = (
        prop("identifier", "Identifier", "0..*"),
        prop("active", "boolean"),
        prop("name", "HumanName", "0..*"),
        prop("telecom", "ContactPoint", "0..*"),
        prop("gender", "code"),
        prop("birthDate", "date"),
        choice("deceased", "boolean", "dateTime"),
        prop("address", "Address", "0..*"),
        prop("photo", "Attachment", "0..*"),
        prop("qualification", "PractitionerQualification", "0..*"),
        prop("communication", "PractitionerCommunication", "0..*"),
    )


class OrganizationQualification(BackboneElement):
    elements = (
        prop("identifier", "Identifier", "0..*"),
        prop("code", "CodeableConcept", "1..1"),
        prop("period", "Period"),
        prop("issuer", "Reference"),
    )


class Organization(DomainResource):
    """R5 folds telecom and address into ``contact``."""

    resource_type = "Organization"
    elements = (
        prop("identifier", "Identifier", "0..*"),
        prop("active", "boolean"),
        prop("type", "CodeableConcept", "0..*"),
        prop("name", "string"),
        prop("alias", "string", "0..*"),
        prop("description", "markdown"),
        prop("contact", "ExtendedContactDetail", "0..*"),
        prop("partOf", "Reference"),
        prop("endpoint", "Reference", "0..*"),
        prop("qualification", "OrganizationQualification", "0..*"),
    )


# ═══════════════════════════════════════════════════════════════════
# INFRASTRUCTURE
# ═══════════════════════════════════════════════════════════════════


class BundleLink(BackboneElement):
    elements = (
        prop("relation", "code", "1..1"),
        prop("url", "uri", "1..1"),
    )


class BundleEntry(BackboneElement):
    elements = (
        prop("link", "BundleLink", "0..*"),
        prop("fullUrl", "uri"),
        prop("resource", "Resource"),
        prop("search", "BundleEntrySearch"),
        prop("request", "BundleEntryRequest"),
        prop("response", "BundleEntryResponse"),
    )


class Bundle(Resource):
    resource_type = "Bundle"
    elements = (
        prop("identifier", "Identifier"),
        prop("type", "code", "1..1"),
        prop("timestamp", "instant"),
        prop("total", "unsignedInt"),
        prop("link", "BundleLink", "0..*"),
        prop("entry", "BundleEntry", "0..*"),
        prop("signature", "Signature"),
        prop("issues", "Resource"),
    )


class ParametersParameter(BackboneElement):
    elements = (
        prop("name", "string", "1..1"),
        choice("value", *OPEN_TYPES_R5),
        prop("resource", "Resource"),
        prop("part", "ParametersParameter", "0..*"),
    )


class Parameters(Resource):
    resource_type = "Parameters"
    elements = (
        prop("parameter", "ParametersParameter", "0..*"),
    )


RESOURCE_MODELS = (
    ObservationTriggeredBy,
    ObservationReferenceRange,
    ObservationComponent,
    Observation,
    ConditionParticipant,
    ConditionStage,
    Condition,
    EncounterParticipant,
    EncounterReason,
    EncounterDiagnosis,
    EncounterAdmission,
    EncounterLocation,
    Encounter,
    ProcedurePerformer,
    Procedure,
    MedicationRequestDispenseRequest,
    MedicationRequestSubstitution,
    MedicationRequest,
    ImmunizationProgramEligibility,
    ImmunizationReaction,
    ImmunizationProtocolApplied,
    Immunization,
    ServiceRequestOrderDetailParameter,
    ServiceRequestOrderDetail,
    ServiceRequestPatientInstruction,
    ServiceRequest,
    PractitionerQualification,
    PractitionerCommunication,
    Practitioner,
    OrganizationQualification,
    Organization,
    BundleLink,
    BundleEntry,
    Bundle,
    ParametersParameter,
    Parameters,
)
