"""Tests for per-version model lookup and resource dispatch."""

import pytest

import fhir_toolkit.r4 as r4
import fhir_toolkit.r4b as r4b
import fhir_toolkit.r5 as r5
from fhir_toolkit.base import Resource
from fhir_toolkit.registry import (
    find_resource_class,
    find_type_class,
    get_resource_class,
    index_models,
    is_resource,
    list_resource_types,
    list_types,
    normalize_version,
    parse_resource,
    version_of,
)


class TestVersions:
    @pytest.mark.parametrize("given, expected", [("R4", "R4"), ("r4b", "R4B"), ("r5", "R5"), (None, "R4")])
    def test_normalize(self, given, expected):
        assert normalize_version(given) == expected

    def test_unsupported(self):
        with pytest.raises(ValueError, match="Unsupported FHIR version"):
            normalize_version("STU3")

    def test_version_of(self):
        assert version_of(r4.Observation) == "R4"
        assert version_of(r5.Observation) == "R5"
        assert version_of(r5.CodeableReference) == "R5"
        # R4B reuses the R4 classes outright.
        assert version_of(r4b.Patient) == "R4"
        assert version_of(r5.Patient) == "R5"
        assert version_of(r5.Coding) == "R5"

    def test_every_r5_model_reports_r5(self):
        for cls in list(r5.TYPES.values()) + list(r5.RESOURCES.values()):
            assert version_of(cls) == "R5", cls


class TestLookup:
    def test_resource_class_per_version(self):
        assert get_resource_class("Observation", "R4") is r4.Observation
        assert get_resource_class("Observation", "R4B") is r4.Observation
        assert get_resource_class("Observation", "R5") is r5.Observation
        assert get_resource_class("Observation", "R5") is not r4.Observation

    def test_unchanged_resource_is_r5_subclass(self):
        cls = get_resource_class("Patient", "R5")
        assert cls is r5.Patient
        assert issubclass(cls, r4.Patient)
        assert cls._fhir_schema.keys == r4.Patient._fhir_schema.keys

    def test_unknown_resource(self):
        assert find_resource_class("Basic") is None
        with pytest.raises(ValueError, match="No R4 model"):
            get_resource_class("Basic")

    def test_type_lookup(self):
        assert find_type_class("Coding") is r4.Coding
        assert find_type_class("Extension", "R5") is r5.Extension
        assert find_type_class("CodeableReference", "R4") is None
        assert find_type_class("ObservationComponent") is r4.ObservationComponent

    def test_listings(self):
        resources = list_resource_types("R4")
        assert "Patient" in resources
        assert "Bundle" in resources
        assert resources == sorted(resources)
        assert "CodeableReference" in list_types("R5")
        assert "Patient" not in list_types("R4")

    def test_r5_encounter_differs(self):
        assert "class" in r4.Encounter._fhir_schema.fields
        assert r4.Encounter._fhir_schema.fields["class"].type_code == "Coding"
        assert r5.Encounter._fhir_schema.fields["class"].type_code == "CodeableConcept"
        assert "actualPeriod" in r5.Encounter._fhir_schema

    def test_index_models_rejects_untyped_resource(self):
        class Untyped(Resource):
            pass

        with pytest.raises(ValueError, match="does not set resource_type"):
            index_models([Untyped])


class TestParseResource:
    def test_dispatch(self):
        resource = parse_resource({"resourceType": "Patient", "id": "p1"})
        assert isinstance(resource, r4.Patient)
        assert resource.id == "p1"

    def test_dispatch_r5(self):
        obs = parse_resource(
            {"resourceType": "Observation", "status": "final", "instantiatesCanonical": "http://x"},
            "R5",
        )
        assert isinstance(obs, r5.Observation)
        assert obs.instantiatesCanonical == "http://x"

    def test_missing_resource_type(self):
        with pytest.raises(ValueError, match="no 'resourceType'"):
            parse_resource({"id": "x"})

    def test_not_a_mapping(self):
        with pytest.raises(TypeError):
            parse_resource(["Patient"])

    def test_unknown_resource_type(self):
        with pytest.raises(ValueError):
            parse_resource({"resourceType": "Basic"})


class TestIsResource:
    def test_models(self):
        patient = r4.Patient()
        assert is_resource(patient)
        assert is_resource(patient, "Patient")
        assert not is_resource(patient, "Observation")

    def test_plain_payloads(self):
        assert is_resource({"resourceType": "Observation"}, "Observation")
        assert not is_resource({"id": "x"})

    def test_datatypes_and_other_values(self):
        assert not is_resource(r4.Coding({"code": "x"}))
        assert not is_resource("Patient")
        assert not is_resource(None)
