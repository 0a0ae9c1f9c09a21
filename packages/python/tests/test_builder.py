"""Tests for the fluent EntityBuilder."""

import pytest

from fhir_toolkit.builder import EntityBuilder
from fhir_toolkit.r4 import Encounter, Observation, Patient
from fhir_toolkit.validation import FhirValidationError


class TestFluentSetters:
    def test_scalar_and_complex_fields(self):
        obs = (
            Observation.builder()
            .set_status("final")
            .set_code({"text": "Heart rate"})
            .build()
        )
        assert obs.to_json() == {
            "resourceType": "Observation",
            "status": "final",
            "code": {"text": "Heart rate"},
        }

    def test_last_choice_branch_wins(self):
        obs = (
            Observation.builder()
            .set_effective_date_time("2024-01-01")
            .set_effective_period({"start": "2024-01-01", "end": "2024-01-02"})
            .build()
        )
        data = obs.to_json()
        assert "effectiveDateTime" not in data
        assert data["effectivePeriod"] == {"start": "2024-01-01", "end": "2024-01-02"}

    def test_group_setter_takes_tag(self):
        obs = Observation.builder().set_effective("DateTime", "2024-01-01").build()
        assert obs.effectiveDateTime == "2024-01-01"

    def test_group_setter_replaces_previous_branch(self):
        builder = Observation.builder()
        builder.set_value("Quantity", {"value": 1}).set_value("string", "high")
        assert builder.to_json() == {"valueString": "high"}

    def test_unknown_choice_tag(self):
        with pytest.raises(ValueError):
            Observation.builder().set_effective("Quantity", {})

    def test_add_accumulates_in_order(self):
        patient = (
            Patient.builder()
            .add_identifier({"system": "urn:a", "value": "1"})
            .add_identifier({"system": "urn:b", "value": "2"})
            .build()
        )
        assert [i["value"] for i in patient.identifier] == ["1", "2"]

    def test_keyword_field_name(self):
        enc = Encounter.builder().set_class({"code": "AMB"}).set_status("finished").build()
        assert enc["class"] == {"code": "AMB"}

    def test_unknown_method(self):
        builder = Patient.builder()
        with pytest.raises(AttributeError):
            builder.set_colour("blue")
        with pytest.raises(AttributeError):
            builder.frob_gender("male")
        with pytest.raises(AttributeError):
            builder._private


class TestExplicitMutators:
    def test_set_unknown_key(self):
        with pytest.raises(KeyError):
            Patient.builder().set("colour", "blue")

    def test_set_none_removes(self):
        builder = Patient.builder().set("gender", "male").set("gender", None)
        assert builder.to_json() == {}

    def test_set_branch_key_clears_siblings(self):
        builder = Observation.builder()
        builder.set("effectiveDateTime", "2024").set("_effectiveDateTime", {"id": "x"})
        builder.set("effectiveInstant", "2024-01-01T00:00:00Z")
        assert builder.to_json() == {"effectiveInstant": "2024-01-01T00:00:00Z"}

    def test_branch_shadow_clears_other_branches(self):
        builder = Observation.builder().set("effectivePeriod", {"start": "2024"})
        builder.set("_effectiveDateTime", {"id": "x"})
        assert builder.to_json() == {"_effectiveDateTime": {"id": "x"}}

    def test_add_on_singular_field(self):
        with pytest.raises(KeyError, match="not an array field"):
            Patient.builder().add("gender", "male")

    def test_set_choice_unknown_group(self):
        with pytest.raises(KeyError):
            Patient.builder().set_choice("effective", "DateTime", "2024")

    def test_set_element(self):
        patient = (
            Patient.builder()
            .set_gender("male")
            .set_element("gender", {"id": "g1"})
            .build()
        )
        assert patient["_gender"] == {"id": "g1"}

    def test_set_element_on_complex_field(self):
        with pytest.raises(KeyError):
            Observation.builder().set_element("code", {"id": "x"})

    def test_update(self):
        builder = Patient.builder().update({"gender": "male", "active": True})
        assert builder.to_json() == {"gender": "male", "active": True}


class TestBuild:
    def test_builds_are_independent(self):
        builder = Patient.builder().add_identifier({"value": "1"})
        first = builder.build()
        second = builder.build()
        first.identifier.append({"value": "2"})
        assert len(second.identifier) == 1
        assert len(builder.to_json()["identifier"]) == 1

    def test_from_entity(self):
        original = Observation({"id": "o1", "status": "preliminary", "code": {"text": "x"}})
        updated = EntityBuilder.from_entity(original).set_status("final").build()
        assert updated.status == "final"
        assert updated.id == "o1"
        assert original.status == "preliminary"

    def test_build_or_raise_valid(self):
        obs = (
            Observation.builder()
            .set_status("final")
            .set_code({"text": "Heart rate"})
            .build_or_raise()
        )
        assert isinstance(obs, Observation)

    def test_build_or_raise_missing_required(self):
        with pytest.raises(FhirValidationError, match="status"):
            Observation.builder().set_code({"text": "x"}).build_or_raise()

    def test_requires_entity_model(self):
        with pytest.raises(TypeError):
            EntityBuilder(dict)

    def test_model_and_repr(self):
        builder = Patient.builder().set_gender("male")
        assert builder.model is Patient
        assert repr(builder) == "EntityBuilder(Patient, 1 fields)"
