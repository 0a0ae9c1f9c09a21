"""
Generic entity engine for FHIR models.

Every FHIR model class is a closed record described by an ordered tuple
of :mod:`~fhir_toolkit.schema` descriptors.  This module provides the one
piece of shared behaviour all of them rely on:

- ordered field assignment from a partial plain payload
  (:func:`assign_fields`),
- mutually exclusive choice groups (:func:`set_choice_value` for plain
  payloads, :class:`ChoiceValue` tagged-union storage inside entities),
- deterministic serialization in canonical schema order
  (:func:`serialize_ordered`),
- structural deep cloning (:func:`deep_clone`), and
- non-destructive evolution (:func:`with_patch`, :func:`apply_fn`).

The structural roles FHIR builds every type from are the classes
:class:`Element`, :class:`BackboneElement`, :class:`Resource` and
:class:`DomainResource`.  A concrete model subclasses one of them and
lists only its own fields::

    class Period(Element):
        elements = (
            prop("start", "dateTime"),
            prop("end", "dateTime"),
        )

Inherited fields come first in serialization order, matching FHIR JSON.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, replace
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    ClassVar,
    Iterable,
    Mapping,
    MutableMapping,
    Optional,
    Sequence,
)

from fhir_toolkit.schema import ChoiceSpec, Schema, Spec, prop

if TYPE_CHECKING:
    from fhir_toolkit.builder import EntityBuilder
    from fhir_toolkit.validation import ValidationResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChoiceValue:
    """The populated branch of a choice group.

    Attributes:
        tag:     Type suffix of the branch (``"DateTime"``, ``"Period"``).
        value:   The branch value, or ``None`` when only ``element`` is set.
        element: Shadow metadata for a primitive branch (``_effectiveDateTime``).
    """

    tag: str
    value: Any = None
    element: Any = None


# ═══════════════════════════════════════════════════════════════════
# BASE CONTRACT
# ═══════════════════════════════════════════════════════════════════


def assign_fields(
    entity: "Entity",
    source: Mapping[str, Any],
    declared_keys: Optional[Sequence[str]] = None,
) -> None:
    """Copy declared fields from *source* onto *entity* as-is.

    Keys that are absent and keys whose value is ``None`` are treated the
    same way: skipped.  Keys *entity* does not declare are ignored, which
    keeps payloads from newer schema versions parseable.  Values are not
    copied; callers hand over ownership.

    This models trusted construction, so choice-group consistency is not
    validated.  Entities store a choice group as a single tagged value; if
    *source* populates more than one branch of the same group, the first
    branch in canonical order is kept and the rest are discarded with a
    warning.

    Args:
        entity: Target entity, normally freshly constructed.
        source: Partial plain payload (for example a prior ``to_json()``).
        declared_keys: Wire keys to copy.  Defaults to every key the
            entity's schema declares, in canonical order.
    """
    schema = type(entity)._fhir_schema
    keys = schema.keys if declared_keys is None else declared_keys
    for key in keys:
        value = source.get(key)
        if value is None or key not in schema:
            continue
        entity._assign(key, value)

    if logger.isEnabledFor(logging.DEBUG):
        unknown = [k for k in source if k not in schema and k != "resourceType"]
        if unknown:
            logger.debug(
                f"{type(entity).__name__}: ignoring undeclared keys {unknown}"
            )


def set_choice_value(
    data: MutableMapping[str, Any],
    branch_key: str,
    value: Any,
    sibling_keys: Iterable[str],
) -> None:
    """Populate one branch of a choice group in a plain payload.

    Every key in *sibling_keys* (other branches and their ``_`` shadows)
    is removed first, then *value* is stored under *branch_key*.  A
    ``None`` value leaves the whole group empty.  Calling it again with a
    different branch simply replaces the previous one.
    """
    for key in sibling_keys:
        data.pop(key, None)
    if value is None:
        data.pop(branch_key, None)
    else:
        data[branch_key] = value


def serialize_ordered(
    source: Any,
    declared_keys: Sequence[str],
) -> dict[str, Any]:
    """Build a plain dict from *source* in exactly *declared_keys* order.

    *source* is anything with a mapping-style ``get`` (an entity or a
    dict).  Missing and ``None`` values are omitted entirely.  Nested
    entities are serialized with ``to_json()`` and nested containers are
    copied, so the result shares no mutable state with *source*.
    """
    result: dict[str, Any] = {}
    for key in declared_keys:
        value = source.get(key)
        if value is None:
            continue
        result[key] = to_plain(value)
    return result


def to_plain(value: Any) -> Any:
    """Recursively convert entities and containers to plain structures."""
    if isinstance(value, Entity):
        return value.to_json()
    if isinstance(value, Mapping):
        return {k: to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    return value


def deep_clone(value: Any) -> Any:
    """Return an independent deep copy of a plain value tree."""
    return copy.deepcopy(value)


def with_patch(
    current: Mapping[str, Any],
    patch: Mapping[str, Any],
) -> dict[str, Any]:
    """Shallow-merge *patch* over *current*; patch keys win.

    Nested values are replaced wholesale, never merged.
    """
    return {**current, **patch}


def apply_fn(
    current: Mapping[str, Any],
    fn: Callable[[dict[str, Any]], Mapping[str, Any]],
) -> dict[str, Any]:
    """Shallow-merge the patch returned by ``fn(current)`` over *current*."""
    view = dict(current)
    return with_patch(view, fn(view))


# ═══════════════════════════════════════════════════════════════════
# ENTITY
# ═══════════════════════════════════════════════════════════════════


class Entity:
    """Base class of every FHIR model.

    Fields are addressed by their FHIR wire names, either as items
    (``obs["status"]``, ``obs["_status"]``, ``enc["class"]``) or as
    attributes where the name is a valid identifier (``obs.status``).
    Unset fields read as ``None``; assigning ``None`` clears a field.
    Assigning an undeclared name raises, because the field set of an
    entity is fixed by its type.

    Choice groups are readable as a whole through the group name
    (``obs.effective`` → :class:`ChoiceValue`) or branch by branch
    (``obs.effectiveDateTime``).  Assigning any branch replaces whatever
    branch the group held before.
    """

    elements: ClassVar[tuple[Spec, ...]] = ()
    resource_type: ClassVar[Optional[str]] = None
    _fhir_schema: ClassVar[Schema] = Schema(())

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        parent = Schema(())
        for base in cls.__mro__[1:]:
            if "_fhir_schema" in base.__dict__:
                parent = base._fhir_schema
                break
        cls._fhir_schema = parent.extend(cls.__dict__.get("elements", ()))

    def __init__(self, data: Optional[Mapping[str, Any]] = None):
        object.__setattr__(self, "_fhir_values", {})
        object.__setattr__(self, "_fhir_choices", {})
        if data is None:
            return
        if isinstance(data, Entity):
            data = data.to_json()
        declared_type = data.get("resourceType")
        if declared_type is not None and declared_type != self.resource_type:
            logger.warning(
                f"Building {type(self).__name__} from a {declared_type!r} "
                f"payload; its resourceType is ignored"
            )
        assign_fields(self, data)

    # ── Factory / evolution ──────────────────────────────────────

    @classmethod
    def from_json(cls, data: Mapping[str, Any]):
        """Construct an instance from a plain payload (same as ``cls(data)``)."""
        return cls(data)

    @classmethod
    def builder(cls) -> "EntityBuilder":
        """Return a fluent builder for this model."""
        from fhir_toolkit.builder import EntityBuilder

        return EntityBuilder(cls)

    def with_changes(self, changes: Mapping[str, Any]):
        """Return a new instance with *changes* shallow-merged over this one.

        The original is left untouched.  A ``None`` value in *changes*
        removes that field.  Setting a branch of a choice group to a value
        drops the branch the group currently holds; clearing a branch that
        is not held leaves the group as it is.
        """
        current = self.to_json()
        self._drop_displaced_branches(current, changes)
        return type(self)(with_patch(current, changes))

    def apply_transform(
        self,
        fn: Callable[[dict[str, Any]], Mapping[str, Any]],
    ):
        """Return a new instance patched with ``fn(self.to_json())``.

        *fn* receives the current plain view and returns a partial patch,
        merged exactly as in :meth:`with_changes`.
        """

        def patch_fn(view: dict[str, Any]) -> Mapping[str, Any]:
            patch = fn(view)
            self._drop_displaced_branches(view, patch)
            return patch

        return type(self)(apply_fn(self.to_json(), patch_fn))

    def clone(self):
        """Return a fully independent deep copy."""
        return type(self)(deep_clone(self.to_json()))

    def _drop_displaced_branches(
        self,
        current: dict[str, Any],
        patch: Mapping[str, Any],
    ) -> None:
        schema = self._fhir_schema
        for key, value in patch.items():
            if value is None:
                continue
            info = schema.lookup(key)
            if info is None or info.branch is None:
                continue
            for sibling in info.spec.sibling_keys(info.branch.tag):
                current.pop(sibling, None)

    # ── Serialization ────────────────────────────────────────────

    def to_json(self) -> dict[str, Any]:
        """Return a plain dict in the type's canonical field order."""
        result: dict[str, Any] = {}
        if self.resource_type is not None:
            result["resourceType"] = self.resource_type
        result.update(serialize_ordered(self, self._fhir_schema.keys))
        return result

    def __reduce__(self):
        return (type(self), (self.to_json(),))

    # ── Validation ───────────────────────────────────────────────

    def validate(self, fhir_version: Optional[str] = None) -> "ValidationResult":
        """Run the configured validator and return its result."""
        from fhir_toolkit.validation import get_default_validator

        return get_default_validator()(self, fhir_version)

    def validate_or_raise(self, fhir_version: Optional[str] = None) -> None:
        """Validate and raise :class:`FhirValidationError` on the first error."""
        from fhir_toolkit.validation import validate_or_raise

        validate_or_raise(self, fhir_version)

    # ── Field access ─────────────────────────────────────────────

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under wire *key*, or *default*."""
        info = self._fhir_schema.lookup(key)
        if info is None:
            if key == "resourceType" and self.resource_type is not None:
                return self.resource_type
            return default
        if info.branch is None:
            value = self._fhir_values.get(key)
        else:
            held = self._fhir_choices.get(info.spec.name)
            if held is None or held.tag != info.branch.tag:
                return default
            value = held.element if info.is_shadow else held.value
        return default if value is None else value

    def choice(self, group: str) -> Optional[ChoiceValue]:
        """Return the populated branch of choice *group*, if any."""
        self._choice_spec(group)
        return self._fhir_choices.get(group)

    def set_choice(
        self,
        group: str,
        tag: str,
        value: Any,
        element: Any = None,
    ) -> None:
        """Populate branch *tag* of *group*, clearing any other branch.

        Raises:
            KeyError: If *group* is not a choice group of this type.
            ValueError: If *tag* is not one of its alternatives.
        """
        spec = self._choice_spec(group)
        branch = spec.branch(tag)
        if value is None and element is None:
            self._fhir_choices.pop(group, None)
        else:
            self._fhir_choices[group] = ChoiceValue(branch.tag, value, element)

    def clear_choice(self, group: str) -> None:
        self._choice_spec(group)
        self._fhir_choices.pop(group, None)

    def _choice_spec(self, group: str) -> ChoiceSpec:
        spec = self._fhir_schema.choices.get(group)
        if spec is None:
            raise KeyError(f"{type(self).__name__} has no choice group {group!r}")
        return spec

    def _assign(self, key: str, value: Any) -> None:
        info = self._fhir_schema.lookup(key)
        if info.branch is None:
            self._fhir_values[key] = value
            return
        group = info.spec.name
        held = self._fhir_choices.get(group)
        if held is not None and held.tag != info.branch.tag:
            logger.warning(
                f"{type(self).__name__}: {group}[x] already holds "
                f"{group}{held.tag}, discarding {key}"
            )
            return
        if held is None:
            held = ChoiceValue(info.branch.tag)
        if info.is_shadow:
            self._fhir_choices[group] = replace(held, element=value)
        else:
            self._fhir_choices[group] = replace(held, value=value)

    def _set(self, key: str, value: Any) -> None:
        if key in ("resourceType", "resource_type"):
            raise AttributeError("resourceType is immutable")
        info = self._fhir_schema.lookup(key)
        if info is None:
            raise KeyError(f"{type(self).__name__} has no field {key!r}")
        if info.branch is None:
            if value is None:
                self._fhir_values.pop(key, None)
            else:
                self._fhir_values[key] = value
            return
        held = self._fhir_choices.get(info.spec.name)
        if held is None or held.tag != info.branch.tag:
            held = ChoiceValue(info.branch.tag)
        if info.is_shadow:
            held = replace(held, element=value)
        else:
            held = replace(held, value=value)
        self.set_choice(info.spec.name, held.tag, held.value, held.element)

    def __getitem__(self, key: str) -> Any:
        if key not in self._fhir_schema and key != "resourceType":
            raise KeyError(key)
        return self.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self._set(key, value)

    def __delitem__(self, key: str) -> None:
        self._set(key, None)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails.
        if name.startswith("__"):
            raise AttributeError(name)
        schema = type(self)._fhir_schema
        if name in schema:
            return self.get(name)
        if name in schema.choices:
            return self._fhir_choices.get(name)
        if name == "resourceType" and self.resource_type is not None:
            return self.resource_type
        raise AttributeError(f"{type(self).__name__} has no field {name!r}")

    def __setattr__(self, name: str, value: Any) -> None:
        schema = self._fhir_schema
        if name in schema.choices:
            if value is None:
                self.clear_choice(name)
            elif isinstance(value, ChoiceValue):
                self.set_choice(name, value.tag, value.value, value.element)
            else:
                raise TypeError(
                    f"{name}[x] must be assigned a ChoiceValue, "
                    f"got {type(value).__name__}"
                )
            return
        try:
            self._set(name, value)
        except KeyError:
            raise AttributeError(
                f"{type(self).__name__} has no field {name!r}"
            ) from None

    def __delattr__(self, name: str) -> None:
        self.__setattr__(name, None)

    # ── Comparison / display ─────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.to_json() == other.to_json()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        entity_id = self.get("id")
        if entity_id is None:
            return f"{type(self).__name__}()"
        return f"{type(self).__name__}(id={entity_id!r})"


# ═══════════════════════════════════════════════════════════════════
# STRUCTURAL ROLES
# ═══════════════════════════════════════════════════════════════════


class Element(Entity):
    """Base of every datatype: ``id`` plus ``extension``."""

    elements = (
        prop("id", "string", shadow=False),
        prop("extension", "Extension", "0..*"),
    )


class BackboneElement(Element):
    """Element that may carry modifier extensions."""

    elements = (
        prop("modifierExtension", "Extension", "0..*"),
    )


class Resource(Entity):
    """Root of every resource; ``resourceType`` is fixed per subclass."""

    elements = (
        prop("id", "id", shadow=False),
        prop("meta", "Meta"),
        prop("implicitRules", "uri"),
        prop("language", "code"),
    )


class DomainResource(Resource):
    """Resource with narrative, contained resources and extensions."""

    elements = (
        prop("text", "Narrative"),
        prop("contained", "Resource", "0..*"),
        prop("extension", "Extension", "0..*"),
        prop("modifierExtension", "Extension", "0..*"),
    )
