"""
Bundle parsing and assembly.

:func:`parse_bundle` turns the entries of a plain Bundle payload into typed
resource models, reporting (instead of raising on) entries it cannot
handle.  :func:`make_bundle` goes the other way.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Union

from fhir_toolkit.base import Resource, to_plain
from fhir_toolkit.registry import get_resource_class, normalize_version

logger = logging.getLogger(__name__)

BUNDLE_TYPES = frozenset({
    "document",
    "message",
    "transaction",
    "transaction-response",
    "batch",
    "batch-response",
    "history",
    "searchset",
    "collection",
    "subscription-notification",
})


@dataclass
class SkippedEntry:
    index: int
    resource_type: Optional[str]
    reason: str


@dataclass
class BundleReport:
    """Outcome of :func:`parse_bundle`."""

    fhir_version: str
    bundle_type: Optional[str] = None
    total_entries: int = 0
    parsed: int = 0
    skipped: list[SkippedEntry] = field(default_factory=list)
    counts: dict[str, int] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.skipped


def parse_bundle(
    bundle: Union[Mapping[str, Any], Resource],
    fhir_version: Optional[str] = None,
    *,
    strict: bool = False,
) -> tuple[list[Resource], BundleReport]:
    """Parse every ``entry[].resource`` into its model class.

    Entries without a resource, without a ``resourceType``, or with a type
    the version ships no model for are skipped and listed in the report.

    Args:
        bundle: A plain Bundle payload or a Bundle model.
        fhir_version: Version whose models are used (default ``R4``).
        strict: Raise on the first entry that cannot be parsed.

    Returns:
        ``(resources, report)`` with resources in entry order.

    Raises:
        TypeError: If *bundle* is not a mapping or Bundle model.
        ValueError: If *bundle* is not a Bundle, or in strict mode on an
            unparseable entry.
    """
    if isinstance(bundle, Resource):
        bundle = bundle.to_json()
    if not isinstance(bundle, Mapping):
        raise TypeError(f"Expected a Bundle payload, got {type(bundle).__name__}")
    if bundle.get("resourceType") != "Bundle":
        raise ValueError(
            f"Expected resourceType 'Bundle', got {bundle.get('resourceType')!r}"
        )

    version = normalize_version(fhir_version)
    entries = bundle.get("entry") or []
    report = BundleReport(
        fhir_version=version,
        bundle_type=bundle.get("type"),
        total_entries=len(entries),
    )
    resources: list[Resource] = []

    for index, entry in enumerate(entries):
        payload = entry.get("resource") if isinstance(entry, Mapping) else None
        resource_type = payload.get("resourceType") if isinstance(payload, Mapping) else None
        try:
            if not isinstance(payload, Mapping):
                raise ValueError("entry has no resource")
            if not isinstance(resource_type, str):
                raise ValueError("resource has no resourceType")
            resource = get_resource_class(resource_type, version)(payload)
        except (TypeError, ValueError) as exc:
            if strict:
                raise ValueError(f"Bundle entry {index}: {exc}") from exc
            logger.warning(f"Skipping bundle entry {index}: {exc}")
            report.skipped.append(SkippedEntry(index, resource_type, str(exc)))
            continue
        resources.append(resource)
        report.parsed += 1
        report.counts[resource_type] = report.counts.get(resource_type, 0) + 1

    return resources, report


def make_bundle(
    resources: Iterable[Union[Resource, Mapping[str, Any]]],
    bundle_type: str = "collection",
    *,
    fhir_version: Optional[str] = None,
    base_url: Optional[str] = None,
    timestamp: Optional[str] = None,
) -> Resource:
    """Wrap *resources* in a Bundle model of the given version.

    With *base_url*, every entry whose resource has an ``id`` gets a
    ``fullUrl`` of ``{base_url}/{resourceType}/{id}``.  A ``searchset``
    bundle also records ``total``.

    Raises:
        ValueError: If *bundle_type* is not a FHIR bundle type.
    """
    if bundle_type not in BUNDLE_TYPES:
        raise ValueError(
            f"Invalid bundle type {bundle_type!r}; expected one of "
            f"{sorted(BUNDLE_TYPES)}"
        )
    entries: list[dict[str, Any]] = []
    for resource in resources:
        payload = to_plain(resource)
        entry: dict[str, Any] = {}
        if base_url and payload.get("id"):
            entry["fullUrl"] = (
                f"{base_url.rstrip('/')}/{payload['resourceType']}/{payload['id']}"
            )
        entry["resource"] = payload
        entries.append(entry)

    data: dict[str, Any] = {"type": bundle_type}
    if timestamp is not None:
        data["timestamp"] = timestamp
    if bundle_type == "searchset":
        data["total"] = len(entries)
    if entries:
        data["entry"] = entries
    return get_resource_class("Bundle", fhir_version)(data)
