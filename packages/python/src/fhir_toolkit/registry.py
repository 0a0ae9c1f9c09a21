"""
Per-version model registry.

Each version package (``fhir_toolkit.r4``, ``.r4b``, ``.r5``) exposes two
mappings, ``TYPES`` (datatypes and backbone elements by type name) and
``RESOURCES`` (resource classes by ``resourceType``).  They are imported
lazily, on first use, so importing :mod:`fhir_toolkit` stays cheap.
"""

from __future__ import annotations

import importlib
from types import ModuleType
from typing import Any, Iterable, Mapping, Optional

from fhir_toolkit._constants import (
    DEFAULT_FHIR_VERSION,
    FHIR_VERSION_PACKAGES,
    SUPPORTED_FHIR_VERSIONS,
)
from fhir_toolkit.base import Entity, Resource


_PACKAGE_VERSIONS = {
    package.rsplit(".", 1)[1]: version
    for version, package in FHIR_VERSION_PACKAGES.items()
}


def normalize_version(fhir_version: Optional[str]) -> str:
    """Return the canonical spelling of *fhir_version* (``"r4b"`` → ``"R4B"``).

    Raises:
        ValueError: If the version is not supported.
    """
    if fhir_version is None:
        return DEFAULT_FHIR_VERSION
    version = fhir_version.upper()
    if version not in SUPPORTED_FHIR_VERSIONS:
        raise ValueError(
            f"Unsupported FHIR version {fhir_version!r}; "
            f"expected one of {SUPPORTED_FHIR_VERSIONS}"
        )
    return version


def _package(fhir_version: Optional[str]) -> ModuleType:
    return importlib.import_module(FHIR_VERSION_PACKAGES[normalize_version(fhir_version)])


def index_models(
    classes: Iterable[type[Entity]],
) -> tuple[dict[str, type[Entity]], dict[str, type[Resource]]]:
    """Split model classes into ``(TYPES, RESOURCES)`` lookup tables."""
    types: dict[str, type[Entity]] = {}
    resources: dict[str, type[Resource]] = {}
    for cls in classes:
        if issubclass(cls, Resource):
            if cls.resource_type is None:
                raise ValueError(f"{cls.__name__} does not set resource_type")
            resources[cls.resource_type] = cls
        else:
            types[cls.__name__] = cls
    return types, resources


# ── Lookup ─────────────────────────────────────────────────────────


def find_resource_class(
    resource_type: str,
    fhir_version: Optional[str] = None,
) -> Optional[type[Resource]]:
    return _package(fhir_version).RESOURCES.get(resource_type)


def get_resource_class(
    resource_type: str,
    fhir_version: Optional[str] = None,
) -> type[Resource]:
    """Return the model class for *resource_type*.

    Raises:
        ValueError: If the version has no model for that resource type.
    """
    cls = find_resource_class(resource_type, fhir_version)
    if cls is None:
        raise ValueError(
            f"No {normalize_version(fhir_version)} model for resourceType "
            f"{resource_type!r}"
        )
    return cls


def find_type_class(
    type_code: str,
    fhir_version: Optional[str] = None,
) -> Optional[type[Entity]]:
    return _package(fhir_version).TYPES.get(type_code)


def list_resource_types(fhir_version: Optional[str] = None) -> list[str]:
    return sorted(_package(fhir_version).RESOURCES)


def list_types(fhir_version: Optional[str] = None) -> list[str]:
    return sorted(_package(fhir_version).TYPES)


def version_of(cls: type[Entity]) -> str:
    """Return the FHIR version whose package defines *cls*.

    Models shared between versions report the version that defines them
    (R4B reuses the R4 classes, so they report ``"R4"``).  R5 re-declares
    the types it kept in :mod:`fhir_toolkit.r5.shared`, so those report
    ``"R5"``.
    """
    for part in cls.__module__.split("."):
        if part in _PACKAGE_VERSIONS:
            return _PACKAGE_VERSIONS[part]
    return DEFAULT_FHIR_VERSION


# ── Dispatch ───────────────────────────────────────────────────────


def parse_resource(
    data: Mapping[str, Any],
    fhir_version: Optional[str] = None,
) -> Resource:
    """Construct the model matching ``data["resourceType"]``.

    Raises:
        TypeError: If *data* is not a mapping.
        ValueError: If ``resourceType`` is missing or has no model.
    """
    if not isinstance(data, Mapping):
        raise TypeError(f"Resource payload must be a mapping, got {type(data).__name__}")
    resource_type = data.get("resourceType")
    if not isinstance(resource_type, str):
        raise ValueError("Resource payload has no 'resourceType'")
    cls = get_resource_class(resource_type, fhir_version)
    return cls(data)


def is_resource(obj: Any, resource_type: Optional[str] = None) -> bool:
    """Type guard for resources, accepting models and plain payloads.

    ``is_resource(x)`` is true for any resource; ``is_resource(x,
    "Patient")`` only for Patients.
    """
    if isinstance(obj, Resource):
        actual = obj.resource_type
    elif isinstance(obj, Mapping):
        actual = obj.get("resourceType")
    else:
        return False
    if not isinstance(actual, str):
        return False
    return resource_type is None or actual == resource_type
