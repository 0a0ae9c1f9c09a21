"""
Text and binary encodings of FHIR models.

JSON is the FHIR wire format; key order follows each type's canonical
schema order.  CBOR (RFC 8949) is offered as a compact binary transport
for the same plain structure and requires the ``cbor2`` package::

    pip install fhir-toolkit[cbor]
"""

from __future__ import annotations

import gzip
import json
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from fhir_toolkit.base import Entity, to_plain
from fhir_toolkit.registry import parse_resource

try:
    import cbor2

    _HAS_CBOR2 = True
except ImportError:
    _HAS_CBOR2 = False


def _require_cbor2() -> None:
    if not _HAS_CBOR2:
        raise ImportError(
            "cbor2 is required for CBOR encoding. "
            "Install it with: pip install fhir-toolkit[cbor]"
        )


Encodable = Union[Entity, Mapping[str, Any]]


@dataclass
class PayloadStats:
    """Encoded sizes of one entity."""

    json_bytes: int
    cbor_bytes: int
    gzip_json_bytes: int
    gzip_cbor_bytes: int

    @property
    def cbor_ratio(self) -> float:
        """CBOR size as a fraction of JSON size (lower = better)."""
        if self.json_bytes == 0:
            return 0.0
        return self.cbor_bytes / self.json_bytes

    @property
    def gzip_cbor_ratio(self) -> float:
        if self.json_bytes == 0:
            return 0.0
        return self.gzip_cbor_bytes / self.json_bytes


# ═══════════════════════════════════════════════════════════════════
# JSON
# ═══════════════════════════════════════════════════════════════════


def to_json_string(entity: Encodable, indent: Optional[int] = None) -> str:
    """Encode *entity* as FHIR JSON text.

    Compact separators are used unless *indent* is given.
    """
    separators = (",", ":") if indent is None else None
    return json.dumps(
        to_plain(entity),
        indent=indent,
        separators=separators,
        ensure_ascii=False,
    )


def _decode(
    data: Any,
    model: Optional[type[Entity]],
    fhir_version: Optional[str],
) -> Entity:
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    if model is not None:
        return model(data)
    return parse_resource(data, fhir_version)


def from_json_string(
    text: Union[str, bytes],
    model: Optional[type[Entity]] = None,
    fhir_version: Optional[str] = None,
) -> Entity:
    """Decode FHIR JSON text into a model.

    Without *model* the text must hold a resource; its class is chosen
    from ``resourceType`` in *fhir_version*.

    Raises:
        ValueError: On malformed JSON, a non-object document, or an
            unknown ``resourceType``.
    """
    return _decode(json.loads(text), model, fhir_version)


# ═══════════════════════════════════════════════════════════════════
# CBOR
# ═══════════════════════════════════════════════════════════════════


def to_cbor(entity: Encodable) -> bytes:
    """Encode *entity* as CBOR.

    Raises:
        ImportError: If ``cbor2`` is not installed.
    """
    _require_cbor2()
    return cbor2.dumps(to_plain(entity))


def from_cbor(
    data: bytes,
    model: Optional[type[Entity]] = None,
    fhir_version: Optional[str] = None,
) -> Entity:
    """Decode CBOR bytes produced by :func:`to_cbor`.

    Raises:
        ImportError: If ``cbor2`` is not installed.
        ValueError: If the payload is not a map or has an unknown
            ``resourceType``.
    """
    _require_cbor2()
    return _decode(cbor2.loads(data), model, fhir_version)


def payload_stats(entity: Encodable) -> PayloadStats:
    """Compare JSON, CBOR and gzipped sizes of *entity*.

    Raises:
        ImportError: If ``cbor2`` is not installed.
    """
    _require_cbor2()
    json_bytes = to_json_string(entity).encode("utf-8")
    cbor_bytes = to_cbor(entity)
    return PayloadStats(
        json_bytes=len(json_bytes),
        cbor_bytes=len(cbor_bytes),
        gzip_json_bytes=len(gzip.compress(json_bytes)),
        gzip_cbor_bytes=len(gzip.compress(cbor_bytes)),
    )
