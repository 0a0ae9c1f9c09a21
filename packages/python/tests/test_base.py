"""Tests for the generic entity engine: construction, access, serialization."""

import copy
import logging
import pickle

import pytest

from fhir_toolkit.base import (
    ChoiceValue,
    Entity,
    apply_fn,
    assign_fields,
    deep_clone,
    serialize_ordered,
    set_choice_value,
    with_patch,
)
from fhir_toolkit.r4 import (
    Coding,
    Encounter,
    Extension,
    Observation,
    Organization,
    Patient,
    Practitioner,
)


# ── Fixtures ────────────────────────────────────────────────────


@pytest.fixture
def observation_payload():
    return {
        "resourceType": "Observation",
        "id": "obs-1",
        "status": "final",
        "code": {"coding": [{"system": "http://loinc.org", "code": "8867-4"}]},
        "subject": {"reference": "Patient/p1"},
        "effectiveDateTime": "2024-01-01T10:00:00Z",
        "valueQuantity": {"value": 72, "unit": "beats/minute"},
    }


@pytest.fixture
def observation(observation_payload):
    return Observation(observation_payload)


# ═══════════════════════════════════════════════════════════════════
# Base contract helpers
# ═══════════════════════════════════════════════════════════════════


class TestAssignFields:
    def test_copies_declared_keys_only(self):
        patient = Patient()
        assign_fields(patient, {"gender": "male", "active": True}, ["gender"])
        assert patient.gender == "male"
        assert patient.active is None

    def test_none_is_treated_as_absent(self):
        patient = Patient()
        assign_fields(patient, {"gender": None, "active": False})
        assert "gender" not in patient
        assert patient.active is False

    def test_values_are_not_copied(self):
        names = [{"family": "Doe"}]
        patient = Patient()
        assign_fields(patient, {"name": names})
        assert patient.name is names

    def test_unknown_keys_logged_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="fhir_toolkit.base"):
            Patient({"gender": "male", "favouriteColour": "blue"})
        assert "favouriteColour" in caplog.text


class TestSetChoiceValue:
    SIBLINGS = ["effectiveDateTime", "_effectiveDateTime", "effectiveTiming"]

    def test_clears_siblings_and_shadows(self):
        data = {"effectiveDateTime": "2024", "_effectiveDateTime": {"id": "x"}}
        set_choice_value(data, "effectivePeriod", {"start": "2024"}, self.SIBLINGS)
        assert data == {"effectivePeriod": {"start": "2024"}}

    def test_idempotent(self):
        data = {}
        set_choice_value(data, "effectivePeriod", {"start": "2024"}, self.SIBLINGS)
        set_choice_value(data, "effectivePeriod", {"start": "2024"}, self.SIBLINGS)
        assert data == {"effectivePeriod": {"start": "2024"}}

    def test_none_leaves_group_empty(self):
        data = {"effectiveDateTime": "2024", "effectivePeriod": {"start": "2024"}}
        set_choice_value(data, "effectivePeriod", None, self.SIBLINGS)
        assert data == {}


class TestSerializeOrdered:
    def test_follows_declared_order(self):
        result = serialize_ordered({"b": 2, "a": 1, "c": 3}, ["c", "a", "b"])
        assert list(result) == ["c", "a", "b"]

    def test_skips_missing_and_none(self):
        assert serialize_ordered({"a": None, "b": 0}, ["a", "b", "c"]) == {"b": 0}

    def test_copies_nested_containers(self):
        source = {"a": {"inner": [1, 2]}}
        result = serialize_ordered(source, ["a"])
        result["a"]["inner"].append(3)
        assert source["a"]["inner"] == [1, 2]

    def test_serializes_nested_entities(self):
        result = serialize_ordered({"coding": Coding({"code": "x"})}, ["coding"])
        assert result == {"coding": {"code": "x"}}


class TestPatchHelpers:
    def test_with_patch_patch_wins(self):
        assert with_patch({"a": 1, "b": 2}, {"b": 3}) == {"a": 1, "b": 3}

    def test_with_patch_replaces_nested_wholesale(self):
        merged = with_patch({"a": {"x": 1, "y": 2}}, {"a": {"x": 9}})
        assert merged == {"a": {"x": 9}}

    def test_apply_fn(self):
        assert apply_fn({"n": 1}, lambda cur: {"n": cur["n"] + 1}) == {"n": 2}

    def test_deep_clone_is_independent(self):
        original = {"a": [{"b": 1}]}
        cloned = deep_clone(original)
        cloned["a"][0]["b"] = 2
        assert original["a"][0]["b"] == 1


# ═══════════════════════════════════════════════════════════════════
# Entity construction and serialization
# ═══════════════════════════════════════════════════════════════════


class TestConstruction:
    def test_round_trip(self, observation, observation_payload):
        assert observation.to_json() == observation_payload

    def test_empty(self):
        assert Patient().to_json() == {"resourceType": "Patient"}

    def test_from_json(self, observation_payload):
        assert Observation.from_json(observation_payload) == Observation(observation_payload)

    def test_from_entity(self, observation):
        assert Observation(observation) == observation

    def test_unknown_keys_dropped(self):
        patient = Patient({"resourceType": "Patient", "gender": "male", "foo": 1})
        assert patient.to_json() == {"resourceType": "Patient", "gender": "male"}

    def test_resource_type_mismatch_ignored(self, caplog):
        with caplog.at_level(logging.WARNING, logger="fhir_toolkit.base"):
            patient = Patient({"resourceType": "Observation", "gender": "male"})
        assert patient.to_json() == {"resourceType": "Patient", "gender": "male"}
        assert "resourceType is ignored" in caplog.text

    def test_datatype_has_no_resource_type(self):
        assert Coding({"code": "x"}).to_json() == {"code": "x"}

    def test_shadow_fields_stored_independently(self):
        patient = Patient({
            "birthDate": "1970-01-01",
            "_birthDate": {"extension": [{"url": "http://x", "valueString": "approx"}]},
        })
        assert patient["_birthDate"]["extension"][0]["valueString"] == "approx"
        assert patient.to_json()["_birthDate"] == {
            "extension": [{"url": "http://x", "valueString": "approx"}]
        }

    def test_shadow_without_value(self):
        patient = Patient({"_gender": {"id": "g"}})
        assert patient.gender is None
        assert patient.to_json() == {"resourceType": "Patient", "_gender": {"id": "g"}}


class TestSerializationOrder:
    def test_resource_type_first_then_canonical_order(self):
        obs = Observation({
            "valueString": "x",
            "status": "final",
            "code": {"text": "c"},
            "id": "o",
            "resourceType": "Observation",
        })
        assert list(obs.to_json()) == [
            "resourceType", "id", "status", "code", "valueString",
        ]

    def test_inherited_fields_first(self):
        patient = Patient({"gender": "male", "text": {"status": "generated", "div": "<div>x</div>"}, "meta": {"versionId": "1"}})
        assert list(patient.to_json()) == ["resourceType", "meta", "text", "gender"]

    def test_mutation_order_does_not_matter(self):
        first = Patient()
        first.gender = "female"
        first.active = True
        second = Patient()
        second.active = True
        second.gender = "female"
        assert list(first.to_json()) == list(second.to_json())

    def test_nested_entities_serialized(self):
        org = Organization({"id": "o1", "name": "Acme"})
        patient = Patient({"contained": [org]})
        assert patient.to_json()["contained"] == [
            {"resourceType": "Organization", "id": "o1", "name": "Acme"}
        ]

    def test_to_json_is_independent(self, observation):
        data = observation.to_json()
        data["code"]["coding"].clear()
        assert observation.code["coding"]


# ═══════════════════════════════════════════════════════════════════
# Choice groups
# ═══════════════════════════════════════════════════════════════════


class TestChoiceGroups:
    def test_choice_accessor(self, observation):
        held = observation.choice("effective")
        assert held == ChoiceValue("DateTime", "2024-01-01T10:00:00Z")
        assert observation.effective == held

    def test_setting_branch_clears_sibling(self, observation):
        observation.effectivePeriod = {"start": "2024-01-01"}
        assert observation.effectiveDateTime is None
        data = observation.to_json()
        assert "effectiveDateTime" not in data
        assert data["effectivePeriod"] == {"start": "2024-01-01"}

    def test_setting_branch_clears_sibling_shadow(self):
        obs = Observation({
            "effectiveDateTime": "2024-01-01",
            "_effectiveDateTime": {"id": "e"},
        })
        obs["effectivePeriod"] = {"start": "2024-01-01"}
        data = obs.to_json()
        assert "_effectiveDateTime" not in data
        assert "effectiveDateTime" not in data

    def test_branch_shadow_kept_with_its_value(self):
        obs = Observation()
        obs.effectiveDateTime = "2024-01-01"
        obs["_effectiveDateTime"] = {"id": "e"}
        assert obs.choice("effective") == ChoiceValue("DateTime", "2024-01-01", {"id": "e"})

    def test_set_choice(self):
        obs = Observation()
        obs.set_choice("value", "Quantity", {"value": 1})
        obs.set_choice("value", "string", "high")
        assert obs.to_json() == {"resourceType": "Observation", "valueString": "high"}

    def test_set_choice_unknown_group(self):
        with pytest.raises(KeyError):
            Observation().set_choice("onset", "DateTime", "2024")

    def test_set_choice_unknown_tag(self):
        with pytest.raises(ValueError):
            Observation().set_choice("effective", "Quantity", {})

    def test_assign_choice_value(self):
        obs = Observation()
        obs.effective = ChoiceValue("Period", {"start": "2024"})
        assert obs.effectivePeriod == {"start": "2024"}

    def test_assign_non_choice_value_rejected(self):
        with pytest.raises(TypeError):
            Observation().effective = "2024"

    def test_clear_choice(self, observation):
        observation.effective = None
        assert observation.choice("effective") is None
        assert "effectiveDateTime" not in observation.to_json()

    def test_clearing_branch_value(self, observation):
        del observation.effectiveDateTime
        assert observation.effective is None

    def test_multiple_branches_in_payload_keep_first(self, caplog):
        with caplog.at_level(logging.WARNING, logger="fhir_toolkit.base"):
            obs = Observation({
                "effectivePeriod": {"start": "2024"},
                "effectiveDateTime": "2024-01-01",
            })
        assert obs.effectiveDateTime == "2024-01-01"
        assert obs.effectivePeriod is None
        assert "discarding effectivePeriod" in caplog.text


# ═══════════════════════════════════════════════════════════════════
# Field access
# ═══════════════════════════════════════════════════════════════════


class TestFieldAccess:
    def test_attribute_and_item_access(self, observation):
        assert observation.status == "final"
        assert observation["status"] == "final"
        assert observation.get("status") == "final"

    def test_unset_declared_field_reads_none(self):
        assert Patient().gender is None
        assert Patient()["gender"] is None
        assert Patient().get("gender", "unknown") == "unknown"

    def test_undeclared_attribute(self):
        with pytest.raises(AttributeError):
            Patient().colour
        with pytest.raises(AttributeError):
            Patient().colour = "blue"

    def test_undeclared_item(self):
        with pytest.raises(KeyError):
            Patient()["colour"]
        with pytest.raises(KeyError):
            Patient()["colour"] = "blue"

    def test_keyword_named_field(self):
        enc = Encounter()
        enc["class"] = {"code": "AMB"}
        assert enc["class"] == {"code": "AMB"}
        assert enc.to_json()["class"] == {"code": "AMB"}

    def test_none_deletes(self):
        patient = Patient({"gender": "male"})
        patient.gender = None
        assert "gender" not in patient
        patient["active"] = True
        del patient["active"]
        assert patient.to_json() == {"resourceType": "Patient"}

    def test_resource_type_is_read_only(self):
        patient = Patient()
        assert patient.resourceType == "Patient"
        assert patient["resourceType"] == "Patient"
        with pytest.raises(AttributeError):
            patient.resourceType = "Practitioner"
        with pytest.raises(AttributeError):
            patient["resourceType"] = "Practitioner"

    def test_contains(self, observation):
        assert "status" in observation
        assert "issued" not in observation
        assert 42 not in observation

    def test_element_roles(self):
        ext = Extension({"id": "e1", "url": "http://x", "valueBoolean": True})
        assert ext.id == "e1"
        assert "_url" not in Extension._fhir_schema
        assert "_id" not in Extension._fhir_schema


# ═══════════════════════════════════════════════════════════════════
# Equality, display, copying
# ═══════════════════════════════════════════════════════════════════


class TestEntityProtocols:
    def test_structural_equality(self):
        assert Patient({"id": "a"}) == Patient({"id": "a"})
        assert Patient({"id": "a"}) != Patient({"id": "b"})

    def test_different_types_not_equal(self):
        assert Patient({"id": "a"}) != Practitioner({"id": "a"})

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(Patient())

    def test_repr(self):
        assert repr(Observation({"id": "obs-1"})) == "Observation(id='obs-1')"
        assert repr(Observation()) == "Observation()"
        assert repr(Coding()) == "Coding()"

    def test_pickle(self, observation):
        restored = pickle.loads(pickle.dumps(observation))
        assert restored == observation
        assert type(restored) is Observation

    def test_deepcopy(self, observation):
        copied = copy.deepcopy(observation)
        assert copied == observation
        copied.code["coding"][0]["code"] = "changed"
        assert observation.code["coding"][0]["code"] == "8867-4"

    def test_subclass_schema_inherits(self):
        assert isinstance(Patient(), Entity)
        assert Patient._fhir_schema.keys[0] == "id"
