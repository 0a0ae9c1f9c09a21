"""
Structural validation of FHIR models.

The default validator walks an entity (and any plain nested payloads it
holds) against the per-version descriptors and reports:

- missing required fields and choice groups (``required``),
- arrays on singular fields and cardinality overruns (``maxCount`` /
  ``minCount``),
- malformed primitives (``type`` / ``format``),
- more than one populated branch of a choice group (``choice``),
- a ``resourceType`` that does not match the model (``resourceType``),
- a handful of core invariants (``ele-1``, ``ext-1``, ``per-1``).

Unknown keys in plain nested payloads and resources with no shipped model
produce warnings, not errors.  Profile, terminology and FHIRPath rules are
outside its scope; plug a richer validator in with
:func:`set_default_validator`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

from fhir_toolkit._constants import RESOURCE_TYPE_CODE
from fhir_toolkit.base import Entity, Resource
from fhir_toolkit.primitives import check_primitive
from fhir_toolkit.registry import (
    find_resource_class,
    find_type_class,
    normalize_version,
    version_of,
)
from fhir_toolkit.schema import ChoiceSpec, FieldSpec, Schema

logger = logging.getLogger(__name__)


@dataclass
class ValidationError:
    path: str
    constraint: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    path: str
    code: str
    message: str


@dataclass
class ValidationResult:
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    def to_operation_outcome(self) -> dict[str, Any]:
        """Render the result as a plain FHIR OperationOutcome payload."""
        issues: list[dict[str, Any]] = []
        for error in self.errors:
            issues.append({
                "severity": "error",
                "code": _ISSUE_CODES.get(error.constraint, "invariant"),
                "diagnostics": error.message,
                "expression": [error.path],
            })
        for warning in self.warnings:
            issues.append({
                "severity": "warning",
                "code": "informational",
                "diagnostics": warning.message,
                "expression": [warning.path],
            })
        if not issues:
            issues.append({
                "severity": "information",
                "code": "informational",
                "diagnostics": "Validation successful",
            })
        return {"resourceType": "OperationOutcome", "issue": issues}


_NON_STRING_PRIMITIVES = frozenset({
    "boolean", "integer", "positiveInt", "unsignedInt", "decimal",
})

_ISSUE_CODES = {
    "required": "required",
    "minCount": "required",
    "maxCount": "structure",
    "type": "value",
    "format": "value",
    "choice": "structure",
    "resourceType": "structure",
}


class FhirValidationError(ValueError):
    """Raised by ``validate_or_raise`` / ``build_or_raise``.

    The message describes the first error; :attr:`result` holds them all.
    """

    def __init__(self, result: ValidationResult):
        self.result = result
        first = result.errors[0]
        super().__init__(f"{first.path}: {first.message}")


Validator = Callable[[Entity, Optional[str]], ValidationResult]


# ═══════════════════════════════════════════════════════════════════
# PUBLIC API
# ═══════════════════════════════════════════════════════════════════


def validate_entity(
    entity: Entity,
    fhir_version: Optional[str] = None,
) -> ValidationResult:
    """Validate a model instance against its schema.

    Nested datatypes are resolved in *fhir_version*, which defaults to the
    version that defines ``type(entity)``.
    """
    version = normalize_version(fhir_version or version_of(type(entity)))
    walker = _Walker(version)
    root = entity.resource_type or type(entity).__name__
    walker.node(entity, type(entity), root)
    return walker.result()


def validate_resource(
    data: Mapping[str, Any],
    fhir_version: Optional[str] = None,
    *,
    expected_type: Optional[str] = None,
) -> ValidationResult:
    """Validate a plain resource payload without constructing a model.

    With *expected_type*, a payload of any other ``resourceType`` is an
    error.
    """
    version = normalize_version(fhir_version)
    walker = _Walker(version)
    actual = data.get("resourceType") if isinstance(data, Mapping) else None
    if expected_type is not None and actual != expected_type:
        walker.error(actual if isinstance(actual, str) else ".", "resourceType",
                     f"Expected resourceType {expected_type!r}, got {actual!r}")
        return walker.result()
    walker.resource(data, "")
    return walker.result()


def validate_or_raise(
    entity: Entity,
    fhir_version: Optional[str] = None,
    validator: Optional[Validator] = None,
) -> None:
    """Run *validator* (default: the configured one) and raise on errors.

    Raises:
        FhirValidationError: If the result holds at least one error.
    """
    result = (validator or _default_validator)(entity, fhir_version)
    if not result.valid:
        logger.debug(
            f"{type(entity).__name__} failed validation with "
            f"{len(result.errors)} error(s)"
        )
        raise FhirValidationError(result)


_default_validator: Validator = validate_entity


def get_default_validator() -> Validator:
    return _default_validator


def set_default_validator(validator: Optional[Validator]) -> None:
    """Replace the process-wide validator; ``None`` restores the built-in."""
    global _default_validator
    _default_validator = validator or validate_entity


# ═══════════════════════════════════════════════════════════════════
# WALKER
# ═══════════════════════════════════════════════════════════════════


class _Walker:
    def __init__(self, version: str):
        self.version = version
        self.errors: list[ValidationError] = []
        self.warnings: list[ValidationWarning] = []

    def result(self) -> ValidationResult:
        return ValidationResult(len(self.errors) == 0, self.errors, self.warnings)

    def error(self, path: str, constraint: str, message: str, value: Any = None) -> None:
        self.errors.append(ValidationError(path, constraint, message, value))

    def warn(self, path: str, code: str, message: str) -> None:
        self.warnings.append(ValidationWarning(path, code, message))

    # -- Nodes ----------------------------------------------------------------

    def resource(self, data: Any, path: str) -> None:
        if isinstance(data, Resource):
            self.node(data, type(data), _join(path, data.resource_type))
            return
        if not isinstance(data, Mapping):
            self.error(path or ".", "type", "Expected a resource object", data)
            return
        resource_type = data.get("resourceType")
        if not isinstance(resource_type, str):
            self.error(path or ".", "resourceType", "Resource has no resourceType")
            return
        here = _join(path, resource_type)
        cls = find_resource_class(resource_type, self.version)
        if cls is None:
            self.warn(here, "unknown-resource",
                      f"No {self.version} model for {resource_type}; not checked")
            return
        self.node(data, cls, here)

    def node(
        self,
        node: Any,
        model: type[Entity],
        path: str,
        nested: bool = False,
    ) -> None:
        schema: Schema = model._fhir_schema
        if isinstance(node, Mapping):
            declared_type = node.get("resourceType")
            if declared_type is not None and declared_type != model.resource_type:
                self.error(path, "resourceType",
                           f"Expected {model.resource_type or model.__name__}, "
                           f"got resourceType {declared_type!r}")
            for key in node:
                if key not in schema and key != "resourceType":
                    self.warn(f"{path}.{key}", "unknown-element",
                              f"Unknown element {key!r}")
        if nested and not any(node.get(k) is not None for k in schema.keys):
            self.error(path, "ele-1", "Element must have a value or children")
            return
        for spec in schema.specs:
            if isinstance(spec, ChoiceSpec):
                self.choice(node, spec, path)
            else:
                self.field(node, spec, path)
        invariant = _INVARIANTS.get(model.__name__)
        if invariant is not None:
            invariant(self, node, path)

    def field(self, node: Any, spec: FieldSpec, path: str) -> None:
        value = node.get(spec.name)
        shadow = node.get(spec.shadow_key) if spec.shadow_key else None
        here = f"{path}.{spec.name}"
        if value is None:
            if shadow is None and spec.is_required:
                self.error(here, "required", f"Missing required field {spec.name!r}")
            return

        if spec.is_array:
            if not isinstance(value, list):
                self.error(here, "type", f"Expected an array for {spec.name!r}", value)
                return
            if len(value) < spec.min:
                self.error(here, "minCount",
                           f"Expected at least {spec.min} value(s), found {len(value)}")
            if spec.max is not None and len(value) > spec.max:
                self.error(here, "maxCount",
                           f"Expected at most {spec.max} value(s), found {len(value)}")
            for i, item in enumerate(value):
                if item is not None:
                    self.value(item, spec.type_code, f"{here}[{i}]")
        elif isinstance(value, list):
            self.error(here, "maxCount",
                       f"Expected a single value for {spec.name!r}, found an array", value)
        else:
            self.value(value, spec.type_code, here)

    def choice(self, node: Any, spec: ChoiceSpec, path: str) -> None:
        present = [
            b for b in spec.branches
            if node.get(b.key) is not None
            or (b.shadow_key is not None and node.get(b.shadow_key) is not None)
        ]
        if len(present) > 1:
            keys = ", ".join(b.key for b in present)
            self.error(f"{path}.{spec.name}[x]", "choice",
                       f"Only one of {keys} may be present")
        if not present:
            if spec.is_required:
                self.error(f"{path}.{spec.name}[x]", "required",
                           f"Missing required field {spec.name}[x]")
            return
        for branch in present:
            value = node.get(branch.key)
            if value is not None:
                self.value(value, branch.type_code, f"{path}.{branch.key}")

    def value(self, value: Any, type_code: str, path: str) -> None:
        message = check_primitive(value, type_code)
        if message is not None:
            string_typed = type_code not in _NON_STRING_PRIMITIVES
            constraint = "format" if string_typed and isinstance(value, str) else "type"
            self.error(path, constraint, message, value)
            return
        if type_code == RESOURCE_TYPE_CODE:
            self.resource(value, path)
            return
        cls = find_type_class(type_code, self.version)
        if cls is None:
            # Primitive already checked, or a complex type with no model.
            return
        if isinstance(value, Entity):
            if isinstance(value, cls):
                self.node(value, type(value), path, nested=True)
            elif any(base.__name__ == cls.__name__ for base in type(value).__mro__):
                # Same type from another version's package.
                self.node(value, cls, path, nested=True)
            else:
                self.error(path, "type",
                           f"Expected {type_code}, got {type(value).__name__}")
        elif isinstance(value, Mapping):
            self.node(value, cls, path, nested=True)
        else:
            self.error(path, "type",
                       f"Expected a {type_code} object, got {type(value).__name__}", value)


def _join(path: str, name: str) -> str:
    return name if not path else f"{path}.{name}"


# ── Core invariants ────────────────────────────────────────────────


def _ext_1(walker: _Walker, node: Any, path: str) -> None:
    has_value = any(
        key.startswith("value") and node.get(key) is not None
        for key in _keys(node)
    )
    if has_value and node.get("extension"):
        walker.error(path, "ext-1", "Must have either extensions or value[x], not both")


def _per_1(walker: _Walker, node: Any, path: str) -> None:
    start, end = node.get("start"), node.get("end")
    if not (isinstance(start, str) and isinstance(end, str)):
        return
    # Only comparable without timezone arithmetic at equal precision.
    comparable = len(start) == len(end) and (len(start) <= 10 or start.endswith("Z"))
    if comparable and start > end:
        walker.error(path, "per-1", "If present, start SHALL have a lower value than end")


def _keys(node: Any) -> list[str]:
    if isinstance(node, Entity):
        return list(node.to_json())
    return list(node)


_INVARIANTS: dict[str, Callable[[_Walker, Any, str], None]] = {
    "Extension": _ext_1,
    "Period": _per_1,
}

