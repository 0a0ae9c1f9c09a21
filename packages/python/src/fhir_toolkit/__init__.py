"""
fhir-toolkit: typed FHIR R4 / R4B / R5 models for Python

Declarative per-type schemas drive one generic entity engine: ordered
construction from partial payloads, mutually exclusive choice groups,
canonical-order serialization, cloning, non-destructive evolution, fluent
builders and structural validation.
"""

__version__ = "0.3.0"

import logging

from fhir_toolkit.base import (
    BackboneElement,
    ChoiceValue,
    DomainResource,
    Element,
    Entity,
    Resource,
    apply_fn,
    assign_fields,
    deep_clone,
    serialize_ordered,
    set_choice_value,
    with_patch,
)
from fhir_toolkit.builder import EntityBuilder
from fhir_toolkit.schema import (
    ChoiceSpec,
    FieldSpec,
    Schema,
    choice,
    parse_cardinality,
    prop,
)
from fhir_toolkit.primitives import check_primitive, is_valid_primitive
from fhir_toolkit.validation import (
    FhirValidationError,
    ValidationError,
    ValidationResult,
    ValidationWarning,
    get_default_validator,
    set_default_validator,
    validate_entity,
    validate_or_raise,
    validate_resource,
)
from fhir_toolkit.registry import (
    find_resource_class,
    find_type_class,
    get_resource_class,
    is_resource,
    list_resource_types,
    list_types,
    normalize_version,
    parse_resource,
    version_of,
)
from fhir_toolkit.bundle import BundleReport, SkippedEntry, make_bundle, parse_bundle
from fhir_toolkit.codec import (
    PayloadStats,
    from_cbor,
    from_json_string,
    payload_stats,
    to_cbor,
    to_json_string,
)
from fhir_toolkit._constants import DEFAULT_FHIR_VERSION, SUPPORTED_FHIR_VERSIONS

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Engine
    "Entity",
    "Element",
    "BackboneElement",
    "Resource",
    "DomainResource",
    "ChoiceValue",
    "assign_fields",
    "set_choice_value",
    "serialize_ordered",
    "deep_clone",
    "with_patch",
    "apply_fn",
    "EntityBuilder",
    # Schema
    "FieldSpec",
    "ChoiceSpec",
    "Schema",
    "prop",
    "choice",
    "parse_cardinality",
    # Validation
    "check_primitive",
    "is_valid_primitive",
    "FhirValidationError",
    "ValidationError",
    "ValidationWarning",
    "ValidationResult",
    "validate_entity",
    "validate_resource",
    "validate_or_raise",
    "get_default_validator",
    "set_default_validator",
    # Registry
    "find_resource_class",
    "find_type_class",
    "get_resource_class",
    "is_resource",
    "list_resource_types",
    "list_types",
    "normalize_version",
    "parse_resource",
    "version_of",
    # Bundles / codecs
    "BundleReport",
    "SkippedEntry",
    "make_bundle",
    "parse_bundle",
    "PayloadStats",
    "to_json_string",
    "from_json_string",
    "to_cbor",
    "from_cbor",
    "payload_stats",
    # Configuration
    "DEFAULT_FHIR_VERSION",
    "SUPPORTED_FHIR_VERSIONS",
]
