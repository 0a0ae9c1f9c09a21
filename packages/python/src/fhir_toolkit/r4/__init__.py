"""FHIR R4 (4.0.1) models."""

from fhir_toolkit.registry import index_models
from fhir_toolkit.r4.datatypes import (
    DATATYPES,
    Address,
    Age,
    Annotation,
    Attachment,
    CodeableConcept,
    Coding,
    ContactDetail,
    ContactPoint,
    Count,
    Distance,
    Dosage,
    DosageDoseAndRate,
    Duration,
    Extension,
    HumanName,
    Identifier,
    Meta,
    Money,
    MoneyQuantity,
    Narrative,
    Period,
    Quantity,
    Range,
    Ratio,
    Reference,
    SampledData,
    SimpleQuantity,
    Timing,
    TimingRepeat,
)
from fhir_toolkit.r4.resources import (
    RESOURCE_MODELS,
    Bundle,
    BundleEntry,
    BundleEntryRequest,
    BundleEntryResponse,
    BundleEntrySearch,
    BundleLink,
    Condition,
    ConditionEvidence,
    ConditionStage,
    Encounter,
    EncounterClassHistory,
    EncounterDiagnosis,
    EncounterHospitalization,
    EncounterLocation,
    EncounterParticipant,
    EncounterStatusHistory,
    Immunization,
    ImmunizationEducation,
    ImmunizationPerformer,
    ImmunizationProtocolApplied,
    ImmunizationReaction,
    MedicationRequest,
    MedicationRequestDispenseRequest,
    MedicationRequestDispenseRequestInitialFill,
    MedicationRequestSubstitution,
    Observation,
    ObservationComponent,
    ObservationReferenceRange,
    OperationOutcome,
    OperationOutcomeIssue,
    Organization,
    OrganizationContact,
    Parameters,
    ParametersParameter,
    Patient,
    PatientCommunication,
    PatientContact,
    PatientLink,
    Practitioner,
    PractitionerQualification,
    Procedure,
    ProcedureFocalDevice,
    ProcedurePerformer,
    ServiceRequest,
)

FHIR_VERSION = "R4"

TYPES, RESOURCES = index_models(DATATYPES + RESOURCE_MODELS)
