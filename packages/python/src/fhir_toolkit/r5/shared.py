"""
R4 models whose structure R5 kept unchanged.

Each is re-declared as an R5 subclass so that instances know their
version: :func:`fhir_toolkit.registry.version_of` reports ``"R5"`` and
validation resolves nested types against the R5 tables.
"""

from __future__ import annotations

from fhir_toolkit.r4 import datatypes as _dt
from fhir_toolkit.r4 import resources as _rs


# ── Datatypes ──────────────────────────────────────────────────────


class Narrative(_dt.Narrative):
    pass


class Meta(_dt.Meta):
    pass


class Coding(_dt.Coding):
    pass


class CodeableConcept(_dt.CodeableConcept):
    pass


class Identifier(_dt.Identifier):
    pass


class Reference(_dt.Reference):
    pass


class Quantity(_dt.Quantity):
    pass


class Age(_dt.Age):
    pass


class Count(_dt.Count):
    pass


class Distance(_dt.Distance):
    pass


class Duration(_dt.Duration):
    pass


class MoneyQuantity(_dt.MoneyQuantity):
    pass


class SimpleQuantity(_dt.SimpleQuantity):
    pass


class Money(_dt.Money):
    pass


class Range(_dt.Range):
    pass


class Ratio(_dt.Ratio):
    pass


class Period(_dt.Period):
    pass


class HumanName(_dt.HumanName):
    pass


class Address(_dt.Address):
    pass


class ContactPoint(_dt.ContactPoint):
    pass


class ContactDetail(_dt.ContactDetail):
    pass


class Annotation(_dt.Annotation):
    pass


class TimingRepeat(_dt.TimingRepeat):
    pass


class Timing(_dt.Timing):
    pass


class DosageDoseAndRate(_dt.DosageDoseAndRate):
    pass


# ── Resources and backbone elements ────────────────────────────────


class PatientContact(_rs.PatientContact):
    pass


class PatientCommunication(_rs.PatientCommunication):
    pass


class PatientLink(_rs.PatientLink):
    pass


class Patient(_rs.Patient):
    pass


class ProcedureFocalDevice(_rs.ProcedureFocalDevice):
    pass


class MedicationRequestDispenseRequestInitialFill(_rs.MedicationRequestDispenseRequestInitialFill):
    pass


class ImmunizationPerformer(_rs.ImmunizationPerformer):
    pass


class OperationOutcomeIssue(_rs.OperationOutcomeIssue):
    pass


class OperationOutcome(_rs.OperationOutcome):
    pass


class BundleEntrySearch(_rs.BundleEntrySearch):
    pass


class BundleEntryRequest(_rs.BundleEntryRequest):
    pass


class BundleEntryResponse(_rs.BundleEntryResponse):
    pass


SHARED_DATATYPES = (
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
    HumanName,
    Address,
    ContactPoint,
    ContactDetail,
    Annotation,
    TimingRepeat,
    Timing,
    DosageDoseAndRate,
)

SHARED_RESOURCE_MODELS = (
    PatientContact,
    PatientCommunication,
    PatientLink,
    Patient,
    ProcedureFocalDevice,
    MedicationRequestDispenseRequestInitialFill,
    ImmunizationPerformer,
    OperationOutcomeIssue,
    OperationOutcome,
    BundleEntrySearch,
    BundleEntryRequest,
    BundleEntryResponse,
)
