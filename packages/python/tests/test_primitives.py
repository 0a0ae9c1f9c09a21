"""Tests for FHIR primitive type checks."""

from decimal import Decimal

import pytest

from fhir_toolkit.primitives import check_primitive, is_valid_primitive


class TestValid:
    @pytest.mark.parametrize(
        "value, type_code",
        [
            (True, "boolean"),
            (0, "integer"),
            (-5, "integer"),
            (1, "positiveInt"),
            (0, "unsignedInt"),
            (3.14, "decimal"),
            (Decimal("1.50"), "decimal"),
            (7, "decimal"),
            ("9007199254740993", "integer64"),
            (12, "integer64"),
            ("hello", "string"),
            ("final", "code"),
            ("abc-123.x", "id"),
            ("2024", "date"),
            ("2024-02", "date"),
            ("2024-02-29", "date"),
            ("2024-02-29T10:00:00Z", "dateTime"),
            ("2024-02-29T10:00:00.123+05:30", "dateTime"),
            ("2024-02-29T10:00:00Z", "instant"),
            ("23:59:59", "time"),
            ("http://example.org/fhir", "uri"),
            ("urn:oid:1.2.840.10008", "oid"),
            ("urn:uuid:c757873d-ec9a-4326-a141-556f43239520", "uuid"),
            ("https://example.org/a", "url"),
            ("http://hl7.org/fhir/StructureDefinition/x|1.0", "canonical"),
            ("aGVsbG8=", "base64Binary"),
            ('<div xmlns="http://www.w3.org/1999/xhtml">x</div>', "xhtml"),
            ("# heading", "markdown"),
        ],
    )
    def test_accepts(self, value, type_code):
        assert check_primitive(value, type_code) is None
        assert is_valid_primitive(value, type_code)


class TestInvalid:
    @pytest.mark.parametrize(
        "value, type_code",
        [
            ("true", "boolean"),
            (1, "boolean"),
            (True, "integer"),
            (1.5, "integer"),
            (2**31, "integer"),
            (0, "positiveInt"),
            (-1, "unsignedInt"),
            ("1.5", "decimal"),
            (float("nan"), "decimal"),
            (True, "decimal"),
            ("12a", "integer64"),
            (2**63, "integer64"),
            ("", "string"),
            (42, "string"),
            (" leading", "code"),
            ("has space", "id"),
            ("x" * 65, "id"),
            ("2024-13", "date"),
            ("2024-01-01T10:00", "dateTime"),
            ("2024-01-01T10:00:00", "dateTime"),
            ("2024-01-01", "instant"),
            ("24:00:00", "time"),
            ("has space", "uri"),
            ("1.2.3", "oid"),
            ("not-a-url", "url"),
            ("abc", "base64Binary"),
            ("<p>x</p>", "xhtml"),
        ],
    )
    def test_rejects(self, value, type_code):
        assert check_primitive(value, type_code) is not None
        assert not is_valid_primitive(value, type_code)


class TestNonPrimitive:
    def test_complex_types_pass_through(self):
        assert check_primitive({"text": "x"}, "CodeableConcept") is None
        assert check_primitive("anything", "Reference") is None

    def test_messages_are_descriptive(self):
        assert check_primitive("x", "integer") == "Expected integer, got str"
        assert check_primitive("2024-13", "date") == "Invalid date: '2024-13'"
