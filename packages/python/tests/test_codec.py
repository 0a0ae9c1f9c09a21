"""Tests for the JSON and CBOR codecs."""

import json

import pytest

from fhir_toolkit import r4, r5
from fhir_toolkit.codec import from_json_string, to_json_string


@pytest.fixture
def observation():
    return r4.Observation({
        "resourceType": "Observation",
        "id": "obs-1",
        "status": "final",
        "code": {"text": "Heart rate"},
        "valueQuantity": {"value": 72, "unit": "beats/minute"},
    })


# ═══════════════════════════════════════════════════════════════════
# JSON
# ═══════════════════════════════════════════════════════════════════


class TestJson:
    def test_compact_by_default(self, observation):
        text = to_json_string(observation)
        assert text.startswith('{"resourceType":"Observation","id":"obs-1","status":"final"')
        assert " " not in text.replace("Heart rate", "").replace("beats/minute", "")

    def test_indent(self, observation):
        text = to_json_string(observation, indent=2)
        assert text.splitlines()[1] == '  "resourceType": "Observation",'

    def test_key_order_preserved(self):
        obs = r4.Observation({"valueString": "x", "status": "final", "id": "o"})
        keys = list(json.loads(to_json_string(obs)))
        assert keys == ["resourceType", "id", "status", "valueString"]

    def test_non_ascii_kept(self):
        patient = r4.Patient({"name": [{"family": "Muñoz"}]})
        assert "Muñoz" in to_json_string(patient)

    def test_round_trip_dispatch(self, observation):
        restored = from_json_string(to_json_string(observation))
        assert isinstance(restored, r4.Observation)
        assert restored == observation

    def test_explicit_model(self):
        coding = from_json_string('{"system":"http://loinc.org","code":"1"}', r4.Coding)
        assert coding == r4.Coding({"system": "http://loinc.org", "code": "1"})

    def test_version(self, observation):
        restored = from_json_string(to_json_string(observation), fhir_version="R5")
        assert isinstance(restored, r5.Observation)

    def test_plain_mapping_input(self):
        assert to_json_string({"resourceType": "Patient"}) == '{"resourceType":"Patient"}'

    def test_malformed(self):
        with pytest.raises(ValueError):
            from_json_string("{not json")

    def test_non_object(self):
        with pytest.raises(ValueError, match="Expected a JSON object"):
            from_json_string("[1, 2]")

    def test_unknown_resource(self):
        with pytest.raises(ValueError):
            from_json_string('{"resourceType":"Basic"}')


# ═══════════════════════════════════════════════════════════════════
# CBOR
# ═══════════════════════════════════════════════════════════════════


class TestCbor:
    @pytest.fixture(autouse=True)
    def _cbor2(self):
        pytest.importorskip("cbor2", reason="cbor2 required for CBOR tests")

    def test_round_trip(self, observation):
        from fhir_toolkit.codec import from_cbor, to_cbor

        data = to_cbor(observation)
        assert isinstance(data, bytes)
        assert from_cbor(data) == observation

    def test_round_trip_keeps_order(self, observation):
        from fhir_toolkit.codec import from_cbor, to_cbor

        restored = from_cbor(to_cbor(observation))
        assert list(restored.to_json()) == list(observation.to_json())

    def test_explicit_model(self):
        from fhir_toolkit.codec import from_cbor, to_cbor

        period = r4.Period({"start": "2024-01-01"})
        assert from_cbor(to_cbor(period), r4.Period) == period

    def test_payload_stats(self, observation):
        from fhir_toolkit.codec import PayloadStats, payload_stats

        stats = payload_stats(observation)
        assert isinstance(stats, PayloadStats)
        assert stats.json_bytes == len(to_json_string(observation).encode("utf-8"))
        assert 0 < stats.cbor_bytes < stats.json_bytes
        assert 0.0 < stats.cbor_ratio < 1.0

    def test_zero_length_ratios(self):
        from fhir_toolkit.codec import PayloadStats

        stats = PayloadStats(0, 0, 0, 0)
        assert stats.cbor_ratio == 0.0
        assert stats.gzip_cbor_ratio == 0.0
