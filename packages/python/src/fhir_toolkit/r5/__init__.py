"""FHIR R5 (5.0.0) models.

Types R5 redefined live in :mod:`.datatypes` and :mod:`.resources`; types
it kept unchanged are R5 subclasses of the R4 ones (:mod:`.shared`).
"""

from fhir_toolkit.registry import index_models
from fhir_toolkit.r5.datatypes import (
    DATATYPES,
    Attachment,
    CodeableReference,
    Dosage,
    ExtendedContactDetail,
    Extension,
    SampledData,
)
from fhir_toolkit.r5.resources import (
    RESOURCE_MODELS,
    Bundle,
    BundleEntry,
    BundleLink,
    Condition,
    ConditionParticipant,
    ConditionStage,
    Encounter,
    EncounterAdmission,
    EncounterDiagnosis,
    EncounterLocation,
    EncounterParticipant,
    EncounterReason,
    Immunization,
    ImmunizationProgramEligibility,
    ImmunizationProtocolApplied,
    ImmunizationReaction,
    MedicationRequest,
    MedicationRequestDispenseRequest,
    MedicationRequestSubstitution,
    Observation,
    ObservationComponent,
    ObservationReferenceRange,
    ObservationTriggeredBy,
    Organization,
    OrganizationQualification,
    Parameters,
    ParametersParameter,
    Practitioner,
    PractitionerCommunication,
    PractitionerQualification,
    Procedure,
    ProcedurePerformer,
    ServiceRequest,
    ServiceRequestOrderDetail,
    ServiceRequestOrderDetailParameter,
    ServiceRequestPatientInstruction,
)
from fhir_toolkit.r5.shared import (
    SHARED_DATATYPES,
    SHARED_RESOURCE_MODELS,
    Address,
    Age,
    Annotation,
    BundleEntryRequest,
    BundleEntryResponse,
    BundleEntrySearch,
    CodeableConcept,
    Coding,
    ContactDetail,
    ContactPoint,
    Count,
    Distance,
    DosageDoseAndRate,
    Duration,
    HumanName,
    Identifier,
    ImmunizationPerformer,
    MedicationRequestDispenseRequestInitialFill,
    Meta,
    Money,
    MoneyQuantity,
    Narrative,
    OperationOutcome,
    OperationOutcomeIssue,
    Patient,
    PatientCommunication,
    PatientContact,
    PatientLink,
    Period,
    ProcedureFocalDevice,
    Quantity,
    Range,
    Ratio,
    Reference,
    SimpleQuantity,
    Timing,
    TimingRepeat,
)

FHIR_VERSION = "R5"

TYPES, RESOURCES = index_models(
    SHARED_DATATYPES + SHARED_RESOURCE_MODELS + DATATYPES + RESOURCE_MODELS
)
