"""Tests for the declarative field descriptors and compiled schemas."""

import pytest

from fhir_toolkit.schema import (
    ChoiceSpec,
    FieldSpec,
    Schema,
    choice,
    parse_cardinality,
    prop,
    snake_case,
    type_tag,
)


class TestCardinality:
    @pytest.mark.parametrize(
        "card, expected",
        [("0..1", (0, 1)), ("1..1", (1, 1)), ("0..*", (0, None)), ("1..*", (1, None)), ("2..5", (2, 5))],
    )
    def test_parses(self, card, expected):
        assert parse_cardinality(card) == expected

    @pytest.mark.parametrize("card", ["", "1", "0..", "*..1", "2..1", "a..b"])
    def test_rejects_malformed(self, card):
        with pytest.raises(ValueError, match="Invalid cardinality"):
            parse_cardinality(card)


class TestNaming:
    def test_type_tag_capitalizes_first_letter(self):
        assert type_tag("dateTime") == "DateTime"
        assert type_tag("Period") == "Period"
        assert type_tag("base64Binary") == "Base64Binary"

    def test_snake_case(self):
        assert snake_case("identifier") == "identifier"
        assert snake_case("effectiveDateTime") == "effective_date_time"
        assert snake_case("birthDate") == "birth_date"


class TestFieldSpec:
    def test_prop_defaults(self):
        spec = prop("status", "code")
        assert spec == FieldSpec("status", "code", 0, 1, True)
        assert not spec.is_array
        assert not spec.is_required

    def test_required_array(self):
        spec = prop("issue", "OperationOutcomeIssue", "1..*")
        assert spec.is_array
        assert spec.is_required

    def test_primitive_has_shadow(self):
        assert prop("status", "code").shadow_key == "_status"
        assert prop("status", "code").wire_keys == ("status", "_status")

    def test_complex_has_no_shadow(self):
        spec = prop("code", "CodeableConcept")
        assert spec.shadow_key is None
        assert spec.wire_keys == ("code",)

    def test_shadow_opt_out(self):
        assert prop("url", "uri", shadow=False).shadow_key is None

    def test_xhtml_has_no_shadow(self):
        assert prop("div", "xhtml", "1..1").shadow_key is None


class TestChoiceSpec:
    @pytest.fixture
    def effective(self):
        return choice("effective", "dateTime", "Period", "Timing", "instant")

    def test_branches(self, effective):
        keys = [b.key for b in effective.branches]
        assert keys == [
            "effectiveDateTime",
            "effectivePeriod",
            "effectiveTiming",
            "effectiveInstant",
        ]

    def test_only_primitive_branches_have_shadows(self, effective):
        shadows = {b.key: b.shadow_key for b in effective.branches}
        assert shadows["effectiveDateTime"] == "_effectiveDateTime"
        assert shadows["effectivePeriod"] is None

    def test_wire_keys_interleave_shadows(self, effective):
        assert effective.wire_keys == (
            "effectiveDateTime",
            "_effectiveDateTime",
            "effectivePeriod",
            "effectiveTiming",
            "effectiveInstant",
            "_effectiveInstant",
        )

    def test_branch_accepts_tag_or_type_code(self, effective):
        assert effective.branch("DateTime").key == "effectiveDateTime"
        assert effective.branch("dateTime").key == "effectiveDateTime"

    def test_unknown_branch(self, effective):
        with pytest.raises(ValueError, match="no 'Quantity' alternative"):
            effective.branch("Quantity")

    def test_sibling_keys_exclude_chosen_branch(self, effective):
        siblings = effective.sibling_keys("Period")
        assert "effectivePeriod" not in siblings
        assert "effectiveDateTime" in siblings
        assert "_effectiveDateTime" in siblings
        assert "_effectiveInstant" in siblings

    def test_choice_requires_types(self):
        with pytest.raises(ValueError):
            choice("value")

    def test_required_choice(self):
        spec = choice("medication", "CodeableConcept", "Reference", card="1..1")
        assert isinstance(spec, ChoiceSpec)
        assert spec.is_required
        assert not spec.is_array


class TestSchema:
    @pytest.fixture
    def schema(self):
        return Schema((
            prop("status", "code", "1..1"),
            choice("value", "Quantity", "string"),
            prop("note", "Annotation", "0..*"),
        ))

    def test_canonical_key_order(self, schema):
        assert schema.keys == (
            "status", "_status", "valueQuantity", "valueString", "_valueString", "note",
        )

    def test_lookup_plain_field(self, schema):
        info = schema.lookup("status")
        assert info.spec.name == "status"
        assert info.branch is None
        assert not info.is_shadow

    def test_lookup_shadow_of_branch(self, schema):
        info = schema.lookup("_valueString")
        assert info.spec.name == "value"
        assert info.branch.tag == "String"
        assert info.is_shadow

    def test_lookup_unknown(self, schema):
        assert schema.lookup("nope") is None
        assert "nope" not in schema

    def test_snake_names(self, schema):
        assert schema.snake_names["status"] == "status"
        assert schema.snake_names["value"] == "value"
        assert schema.snake_names["value_quantity"] == "valueQuantity"

    def test_extend_appends(self, schema):
        extended = schema.extend((prop("issued", "instant"),))
        assert extended.keys[-2:] == ("issued", "_issued")
        assert "issued" not in schema

    def test_duplicate_names_rejected(self):
        with pytest.raises(ValueError, match="Duplicate field"):
            Schema((prop("a", "string"), prop("a", "code")))

    def test_len(self, schema):
        assert len(schema) == 3
