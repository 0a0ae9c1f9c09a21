"""Tests for clone, with_changes and apply_transform.

All three return new instances; the receiver must never change.
"""

import pytest

from fhir_toolkit.r4 import Observation, Patient


@pytest.fixture
def patient():
    return Patient({
        "resourceType": "Patient",
        "id": "p1",
        "active": True,
        "name": [{"family": "Doe", "given": ["Jane"]}],
        "birthDate": "1980-05-01",
    })


class TestClone:
    def test_equal_but_distinct(self, patient):
        cloned = patient.clone()
        assert cloned == patient
        assert cloned is not patient

    def test_deeply_independent(self, patient):
        cloned = patient.clone()
        cloned.name[0]["given"].append("Q")
        cloned.active = False
        assert patient.name[0]["given"] == ["Jane"]
        assert patient.active is True

    def test_clone_of_clone(self, patient):
        assert patient.clone().clone().to_json() == patient.to_json()


class TestWithChanges:
    def test_returns_new_instance(self, patient):
        updated = patient.with_changes({"active": False})
        assert updated.active is False
        assert patient.active is True
        assert type(updated) is Patient

    def test_none_removes_field(self, patient):
        updated = patient.with_changes({"birthDate": None})
        assert "birthDate" not in updated.to_json()
        assert patient.birthDate == "1980-05-01"

    def test_nested_values_replaced_wholesale(self, patient):
        updated = patient.with_changes({"name": [{"family": "Roe"}]})
        assert updated.name == [{"family": "Roe"}]

    def test_patch_branch_displaces_current_branch(self):
        obs = Observation({"status": "final", "effectiveDateTime": "2024-01-01"})
        updated = obs.with_changes({"effectivePeriod": {"start": "2024-01-01"}})
        data = updated.to_json()
        assert "effectiveDateTime" not in data
        assert data["effectivePeriod"] == {"start": "2024-01-01"}
        assert obs.effectiveDateTime == "2024-01-01"

    def test_clearing_unheld_branch_keeps_held_branch(self):
        obs = Observation({"status": "final", "code": {"text": "x"}, "effectivePeriod": {"start": "2024"}})
        updated = obs.with_changes({"effectiveDateTime": None})
        assert updated.to_json() == obs.to_json()
        assert updated.effective.tag == "Period"

    def test_clearing_held_branch_empties_group(self):
        obs = Observation({"status": "final", "effectivePeriod": {"start": "2024"}})
        assert obs.with_changes({"effectivePeriod": None}).effective is None

    def test_unknown_keys_ignored(self, patient):
        assert patient.with_changes({"colour": "blue"}) == patient

    def test_empty_patch(self, patient):
        assert patient.with_changes({}) == patient


class TestApplyTransform:
    def test_function_sees_plain_view(self, patient):
        seen = {}

        def transform(view):
            seen.update(view)
            return {"active": not view["active"]}

        updated = patient.apply_transform(transform)
        assert seen["resourceType"] == "Patient"
        assert updated.active is False
        assert patient.active is True

    def test_partial_patch_keeps_other_fields(self, patient):
        updated = patient.apply_transform(lambda view: {"gender": "female"})
        assert updated.gender == "female"
        assert updated.name == patient.name

    def test_mutating_view_does_not_touch_receiver(self, patient):
        def transform(view):
            view["name"][0]["family"] = "Changed"
            return {}

        patient.apply_transform(transform)
        assert patient.name[0]["family"] == "Doe"

    def test_branch_displacement(self):
        obs = Observation({"valueString": "high"})
        updated = obs.apply_transform(lambda view: {"valueQuantity": {"value": 9}})
        assert updated.valueString is None
        assert updated.valueQuantity == {"value": 9}

    def test_none_in_patch_keeps_held_branch(self):
        obs = Observation({"valueString": "high"})
        updated = obs.apply_transform(lambda view: {"valueQuantity": None})
        assert updated.valueString == "high"
