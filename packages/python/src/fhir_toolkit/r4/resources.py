"""
FHIR R4 resources and their backbone elements.

Backbone element classes are named after their path
(``Observation.component`` → :class:`ObservationComponent`), which is also
the type code the owning resource uses for them.
"""

from __future__ import annotations

from fhir_toolkit._constants import OPEN_TYPES_R4
from fhir_toolkit.base import BackboneElement, DomainResource, Resource
from fhir_toolkit.schema import choice, prop


# ═══════════════════════════════════════════════════════════════════
# ADMINISTRATIVE
# ═══════════════════════════════════════════════════════════════════


class PatientContact(BackboneElement):
    elements = (
        prop("relationship", "CodeableConcept", "0..*"),
        prop("name", "HumanName"),
        prop("telecom", "ContactPoint", "0..*"),
        prop("address", "Address"),
        prop("gender", "code"),
        prop("organization", "Reference"),
        prop("period", "Period"),
    )


class PatientCommunication(BackboneElement):
    elements = (
        prop("language", "CodeableConcept", "1..1"),
        prop("preferred", "boolean"),
    )


class PatientLink(BackboneElement):
    elements = (
        prop("other", "Reference", "1..1"),
        prop("type", "code", "1..1"),
    )


class Patient(DomainResource):
    resource_type = "Patient"
    elements = (
        prop("identifier", "Identifier", "0..*"),
        prop("active", "boolean"),
        prop("name", "HumanName", "0..*"),
        prop("telecom", "ContactPoint", "0..*"),
        prop("gender", "code"),
        prop("birthDate", "date"),
        choice("deceased", "boolean", "dateTime"),
        prop("address", "Address", "0..*"),
        prop("maritalStatus", "CodeableConcept"),
        choice("multipleBirth", "boolean", "integer"),
        prop("photo", "Attachment", "0..*"),
        prop("contact", "PatientContact", "0..*"),
        prop("communication", "PatientCommunication", "0..*"),
        prop("generalPractitioner", "Reference", "0..*"),
        prop("managingOrganization", "Reference"),
        prop("link", "PatientLink", "0..*"),
    )


class PractitionerQualification(BackboneElement):
    elements = (
        prop("identifier", "Identifier", "0..*"),
        prop("code", "CodeableConcept", "1..1"),
        prop("period", "Period"),
        prop("issuer", "Reference"),
    )


class Practitioner(DomainResource):
    resource_type = "Practitioner"
    elements = (
        prop("identifier", "Identifier", "0..*"),
        prop("active", "boolean"),
        prop("name", "HumanName", "0..*"),
        prop("telecom", "ContactPoint", "0..*"),
        prop("address", "Address", "0..*"),
        prop("gender", "code"),
        prop("birthDate", "date"),
        prop("photo", "Attachment", "0..*"),
        prop("qualification", "PractitionerQualification", "0..*"),
        prop("communication", "CodeableConcept", "0..*"),
    )


class OrganizationContact(BackboneElement):
    elements = (
        prop("purpose", "CodeableConcept"),
        prop("name", "HumanName"),
        prop("telecom", "ContactPoint", "0..*"),
        prop("address", "Address"),
    )


class Organization(DomainResource):
    resource_type = "Organization"
    elements = (
        prop("identifier", "Identifier", "0..*"),
        prop("active", "boolean"),
        prop("type", "CodeableConcept", "0..*"),
        prop("name", "string"),
        prop("alias", "string", "0..*"),
        prop("telecom", "ContactPoint", "0..*"),
        prop("address", "Address", "0..*"),
        prop("partOf", "Reference"),
        prop("contact", "OrganizationContact", "0..*"),
        prop("endpoint", "Reference", "0..*"),
    )


# ═══════════════════════════════════════════════════════════════════
# CLINICAL
# ═══════════════════════════════════════════════════════════════════


OBSERVATION_VALUE_TYPES = (
    "Quantity", "CodeableConcept", "string", "boolean", "integer", "Range",
    "Ratio", "SampledData", "time", "dateTime", "Period",
)


class ObservationReferenceRange(BackboneElement):
    elements = (
        prop("low", "SimpleQuantity"),
        prop("high", "SimpleQuantity"),
        prop("type", "CodeableConcept"),
        prop("appliesTo", "CodeableConcept", "0..*"),
        prop("age", "Range"),
        prop("text", "string"),
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
        prop("basedOn", "Reference", "0..*"),
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
        prop("method", "CodeableConcept"),
        prop("specimen", "Reference"),
        prop("device", "Reference"),
        prop("referenceRange", "ObservationReferenceRange", "0..*"),
        prop("hasMember", "Reference", "0..*"),
        prop("derivedFrom", "Reference", "0..*"),
        prop("component", "ObservationComponent", "0..*"),
    )


class ConditionStage(BackboneElement):
    elements = (
        prop("summary", "CodeableConcept"),
        prop("assessment", "Reference", "0..*"),
        prop("type", "CodeableConcept"),
    )


class ConditionEvidence(BackboneElement):
    elements = (
        prop("code", "CodeableConcept", "0..*"),
        prop("detail", "Reference", "0..*"),
    )


class Condition(DomainResource):
    resource_type = "Condition"
    elements = (
        prop("identifier", "Identifier", "0..*"),
        prop("clinicalStatus", "CodeableConcept"),
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
        prop("recorder", "Reference"),
        prop("asserter", "Reference"),
        prop("stage", "ConditionStage", "0..*"),
        prop("evidence", "ConditionEvidence", "0..*"),
        prop("note", "Annotation", "0..*"),
    )


class EncounterStatusHistory(BackboneElement):
    elements = (
        prop("status", "code", "1..1"),
        prop("period", "Period", "1..1"),
    )


class EncounterClassHistory(BackboneElement):
    elements = (
        prop("class", "Coding", "1..1"),
        prop("period", "Period", "1..1"),
    )


class EncounterParticipant(BackboneElement):
    elements = (
        prop("type", "CodeableConcept", "0..*"),
        prop("period", "Period"),
        prop("individual", "Reference"),
    )


class EncounterDiagnosis(BackboneElement):
    elements = (
        prop("condition", "Reference", "1..1"),
        prop("use", "CodeableConcept"),
        prop("rank", "positiveInt"),
    )


class EncounterHospitalization(BackboneElement):
    elements = (
        prop("preAdmissionIdentifier", "Identifier"),
        prop("origin", "Reference"),
        prop("admitSource", "CodeableConcept"),
        prop("reAdmission", "CodeableConcept"),
        prop("dietPreference", "CodeableConcept", "0..*"),
        prop("specialCourtesy", "CodeableConcept", "0..*"),
        prop("specialArrangement", "CodeableConcept", "0..*"),
        prop("destination", "Reference"),
        prop("dischargeDisposition", "CodeableConcept"),
    )


class EncounterLocation(BackboneElement):
    elements = (
        prop("location", "Reference", "1..1"),
        prop("status", "code"),
        prop("physicalType", "CodeableConcept"),
        prop("period", "Period"),
    )


class Encounter(DomainResource):
    resource_type = "Encounter"
    elements = (
        prop("identifier", "Identifier", "0..*"),
        prop("status", "code", "1..1"),
        prop("statusHistory", "EncounterStatusHistory", "0..*"),
        prop("class", "Coding", "1..1"),
        prop("classHistory", "EncounterClassHistory", "0..*"),
        prop("type", "CodeableConcept", "0..*"),
        prop("serviceType", "CodeableConcept"),
        prop("priority", "CodeableConcept"),
        prop("subject", "Reference"),
        prop("episodeOfCare", "Reference", "0..*"),
        prop("basedOn", "Reference", "0..*"),
        prop("participant", "EncounterParticipant", "0..*"),
        prop("appointment", "Reference", "0..*"),
        prop("period", "Period"),
        prop("length", "Duration"),
        prop("reasonCode", "CodeableConcept", "0..*"),
        prop("reasonReference", "Reference", "0..*"),
        prop("diagnosis", "EncounterDiagnosis", "0..*"),
        prop("account", "Reference", "0..*"),
        prop("hospitalization", "EncounterHospitalization"),
        prop("location", "EncounterLocation", "0..*"),
        prop("serviceProvider", "Reference"),
        prop("partOf", "Reference"),
    )


class ProcedurePerformer(BackboneElement):
    elements = (
        prop("function", "CodeableConcept"),
        prop("actor", "Reference", "1..1"),
        prop("onBehalfOf", "Reference"),
    )


class ProcedureFocalDevice(BackboneElement):
    elements = (
        prop("action", "CodeableConcept"),
        prop("manipulated", "Reference", "1..1"),
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
        prop("category", "CodeableConcept"),
        prop("code", "CodeableConcept"),
        prop("subject", "Reference", "1..1"),
        prop("encounter", "Reference"),
        choice("performed", "dateTime", "Period", "string", "Age", "Range"),
        prop("recorder", "Reference"),
        prop("asserter", "Reference"),
        prop("performer", "ProcedurePerformer", "0..*"),
        prop("location", "Reference"),
        prop("reasonCode", "CodeableConcept", "0..*"),
        prop("reasonReference", "Reference", "0..*"),
        prop("bodySite", "CodeableConcept", "0..*"),
        prop("outcome", "CodeableConcept"),
        prop("report", "Reference", "0..*"),
        prop("complication", "CodeableConcept", "0..*"),
        prop("complicationDetail", "Reference", "0..*"),
        prop("followUp", "CodeableConcept", "0..*"),
        prop("note", "Annotation", "0..*"),
        prop("focalDevice", "ProcedureFocalDevice", "0..*"),
        prop("usedReference", "Reference", "0..*"),
        prop("usedCode", "CodeableConcept", "0..*"),
    )


# ═══════════════════════════════════════════════════════════════════
# MEDICATIONS / ORDERS
# ═══════════════════════════════════════════════════════════════════


class MedicationRequestDispenseRequestInitialFill(BackboneElement):
    elements = (
        prop("quantity", "SimpleQuantity"),
        prop("duration", "Duration"),
    )


class MedicationRequestDispenseRequest(BackboneElement):
    elements = (
        prop("initialFill", "MedicationRequestDispenseRequestInitialFill"),
        prop("dispenseInterval", "Duration"),
        prop("validityPeriod", "Period"),
        prop("numberOfRepeatsAllowed", "unsignedInt"),
        prop("quantity", "SimpleQuantity"),
        prop("expectedSupplyDuration", "Duration"),
        prop("performer", "Reference"),
    )


class MedicationRequestSubstitution(BackboneElement):
    elements = (
        choice("allowed", "boolean", "CodeableConcept", card="1..1"),
        prop("reason", "CodeableConcept"),
    )


class MedicationRequest(DomainResource):
    resource_type = "MedicationRequest"
    elements = (
        prop("identifier", "Identifier", "0..*"),
        prop("status", "code", "1..1"),
        prop("statusReason", "CodeableConcept"),
        prop("intent", "code", "1..1"),
        prop("category", "CodeableConcept", "0..*"),
        prop("priority", "code"),
        prop("doNotPerform", "boolean"),
        choice("reported", "boolean", "Reference"),
        choice("medication", "CodeableConcept", "Reference", card="1..1"),
        prop("subject", "Reference", "1..1"),
        prop("encounter", "Reference"),
        prop("supportingInformation", "Reference", "0..*"),
        prop("authoredOn", "dateTime"),
        prop("requester", "Reference"),
        prop("performer", "Reference"),
        prop("performerType", "CodeableConcept"),
        prop("recorder", "Reference"),
        prop("reasonCode", "CodeableConcept", "0..*"),
        prop("reasonReference", "Reference", "0..*"),
        prop("instantiatesCanonical", "canonical", "0..*"),
        prop("instantiatesUri", "uri", "0..*"),
        prop("basedOn", "Reference", "0..*"),
        prop("groupIdentifier", "Identifier"),
        prop("courseOfTherapyType", "CodeableConcept"),
        prop("insurance", "Reference", "0..*"),
        prop("note", "Annotation", "0..*"),
        prop("dosageInstruction", "Dosage", "0..*"),
        prop("dispenseRequest", "MedicationRequestDispenseRequest"),
        prop("substitution", "MedicationRequestSubstitution"),
        prop("priorPrescription", "Reference"),
        prop("detectedIssue", "Reference", "0..*"),
        prop("eventHistory", "Reference", "0..*"),
    )


class ImmunizationPerformer(BackboneElement):
    elements = (
        prop("function", "CodeableConcept"),
        prop("actor", "Reference", "1..1"),
    )


class ImmunizationEducation(BackboneElement):
    elements = (
        prop("documentType", "string"),
        prop("reference", "uri"),
        prop("publicationDate", "dateTime"),
        prop("presentationDate", "dateTime"),
    )


class ImmunizationReaction(BackboneElement):
    elements = (
        prop("date", "dateTime"),
        prop("detail", "Reference"),
        prop("reported", "boolean"),
    )


class ImmunizationProtocolApplied(BackboneElement):
    elements = (
        prop("series", "string"),
        prop("authority", "Reference"),
        prop("targetDisease", "CodeableConcept", "0..*"),
        choice("doseNumber", "positiveInt", "string", card="1..1"),
        choice("seriesDoses", "positiveInt", "string"),
    )


class Immunization(DomainResource):
    resource_type = "Immunization"
    elements = (
        prop("identifier", "Identifier", "0..*"),
        prop("status", "code", "1..1"),
        prop("statusReason", "CodeableConcept"),
        prop("vaccineCode", "CodeableConcept", "1..1"),
        prop("patient", "Reference", "1..1"),
        prop("encounter", "Reference"),
        choice("occurrence", "dateTime", "string", card="1..1"),
        prop("recorded", "dateTime"),
        prop("primarySource", "boolean"),
        prop("reportOrigin", "CodeableConcept"),
        prop("location", "Reference"),
        prop("manufacturer", "Reference"),
        prop("lotNumber", "string"),
        prop("expirationDate", "date"),
        prop("site", "CodeableConcept"),
        prop("route", "CodeableConcept"),
        prop("doseQuantity", "SimpleQuantity"),
        prop("performer", "ImmunizationPerformer", "0..*"),
        prop("note", "Annotation", "0..*"),
        prop("reasonCode", "CodeableConcept", "0..*"),
        prop("reasonReference", "Reference", "0..*"),
        prop("isSubpotent", "boolean"),
        prop("subpotentReason", "CodeableConcept", "0..*"),
        prop("education", "ImmunizationEducation", "0..*"),
        prop("programEligibility", "CodeableConcept", "0..*"),
        prop("fundingSource", "CodeableConcept"),
        prop("reaction", "ImmunizationReaction", "0..*"),
        prop("protocolApplied", "ImmunizationProtocolApplied", "0..*"),
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
        prop("code", "CodeableConcept"),
        prop("orderDetail", "CodeableConcept", "0..*"),
        choice("quantity", "Quantity", "Ratio", "Range"),
        prop("subject", "Reference", "1..1"),
        prop("encounter", "Reference"),
        choice("occurrence", "dateTime", "Period", "Timing"),
        choice("asNeeded", "boolean", "CodeableConcept"),
        prop("authoredOn", "dateTime"),
        prop("requester", "Reference"),
        prop("performerType", "CodeableConcept"),
        prop("performer", "Reference", "0..*"),
        prop("locationCode", "CodeableConcept", "0..*"),
        prop("locationReference", "Reference", "0..*"),
        prop("reasonCode", "CodeableConcept", "0..*"),
        prop("reasonReference", "Reference", "0..*"),
        prop("insurance", "Reference", "0..*"),
        prop("supportingInfo", "Reference", "0..*"),
        prop("specimen", "Reference", "0..*"),
        prop("bodySite", "CodeableConcept", "0..*"),
        prop("note", "Annotation", "0..*"),
        prop("patientInstruction", "string"),
        prop("relevantHistory", "Reference", "0..*"),
    )


# ═══════════════════════════════════════════════════════════════════
# INFRASTRUCTURE
# ═══════════════════════════════════════════════════════════════════


class OperationOutcomeIssue(BackboneElement):
    elements = (
        prop("severity", "code", "1..1"),
        prop("code", "code", "1..1"),
        prop("details", "CodeableConcept"),
        prop("diagnostics", "string"),
        prop("location", "string", "0..*"),
        prop("expression", "string", "0..*"),
    )


class OperationOutcome(DomainResource):
    resource_type = "OperationOutcome"
    elements = (
        prop("issue", "OperationOutcomeIssue", "1..*"),
    )


class BundleLink(BackboneElement):
    elements = (
        prop("relation", "string", "1..1"),
        prop("url", "uri", "1..1"),
    )


class BundleEntrySearch(BackboneElement):
    elements = (
        prop("mode", "code"),
        prop("score", "decimal"),
    )


class BundleEntryRequest(BackboneElement):
    elements = (
        prop("method", "code", "1..1"),
        prop("url", "uri", "1..1"),
        prop("ifNoneMatch", "string"),
        prop("ifModifiedSince", "instant"),
        prop("ifMatch", "string"),
        prop("ifNoneExist", "string"),
    )


class BundleEntryResponse(BackboneElement):
    elements = (
        prop("status", "string", "1..1"),
        prop("location", "uri"),
        prop("etag", "string"),
        prop("lastModified", "instant"),
        prop("outcome", "Resource"),
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
    )


class ParametersParameter(BackboneElement):
    elements = (
        prop("name", "string", "1..1"),
        choice("value", *OPEN_TYPES_R4),
        prop("resource", "Resource"),
        prop("part", "ParametersParameter", "0..*"),
    )


class Parameters(Resource):
    resource_type = "Parameters"
    elements = (
        prop("parameter", "ParametersParameter", "0..*"),
    )


RESOURCE_MODELS = (
    PatientContact,
    PatientCommunication,
    PatientLink,
    Patient,
    PractitionerQualification,
    Practitioner,
    OrganizationContact,
    Organization,
    ObservationReferenceRange,
    ObservationComponent,
    Observation,
    ConditionStage,
    ConditionEvidence,
    Condition,
    EncounterStatusHistory,
    EncounterClassHistory,
    EncounterParticipant,
    EncounterDiagnosis,
    EncounterHospitalization,
    EncounterLocation,
    Encounter,
    ProcedurePerformer,
    ProcedureFocalDevice,
    Procedure,
    MedicationRequestDispenseRequestInitialFill,
    MedicationRequestDispenseRequest,
    MedicationRequestSubstitution,
    MedicationRequest,
    ImmunizationPerformer,
    ImmunizationEducation,
    ImmunizationReaction,
    ImmunizationProtocolApplied,
    Immunization,
    ServiceRequest,
    OperationOutcomeIssue,
    OperationOutcome,
    BundleLink,
    BundleEntrySearch,
    BundleEntryRequest,
    BundleEntryResponse,
    BundleEntry,
    Bundle,
    ParametersParameter,
    Parameters,
)
