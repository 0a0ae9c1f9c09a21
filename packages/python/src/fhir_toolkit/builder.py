"""
Fluent builders for FHIR models.

A single generic :class:`EntityBuilder` serves every model: it accumulates
a plain payload and turns it into an entity on :meth:`~EntityBuilder.build`.
Besides the explicit ``set`` / ``add`` / ``set_choice`` calls it answers
snake_case convenience methods derived from the model's schema::

    obs = (
        Observation.builder()
        .set_status("final")
        .set_code({"text": "Heart rate"})
        .set_effective("DateTime", "2024-01-01")
        .add_identifier({"system": "urn:ids", "value": "1"})
        .build()
    )
"""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING, Any, Callable, Optional

from fhir_toolkit.base import Entity, deep_clone, set_choice_value

if TYPE_CHECKING:
    from fhir_toolkit.schema import Schema


class EntityBuilder:
    """Accumulates fields for one model type.

    Every mutator returns the builder so calls chain.  ``build()`` hands
    the model an independent copy of the accumulated data, so one builder
    can produce several unrelated instances.
    """

    def __init__(self, model: type[Entity]):
        if not (isinstance(model, type) and issubclass(model, Entity)):
            raise TypeError(f"Expected an Entity subclass, got {model!r}")
        self._model = model
        self._data: dict[str, Any] = {}

    @classmethod
    def from_entity(cls, entity: Entity) -> "EntityBuilder":
        """Start a builder pre-filled with *entity*'s current fields."""
        builder = cls(type(entity))
        data = entity.to_json()
        data.pop("resourceType", None)
        builder._data = data
        return builder

    @property
    def model(self) -> type[Entity]:
        return self._model

    @property
    def _schema(self) -> "Schema":
        return self._model._fhir_schema

    # ── Mutators ─────────────────────────────────────────────────

    def set(self, key: str, value: Any) -> "EntityBuilder":
        """Assign wire field *key*; ``None`` removes it.

        Choice branch keys (``effectivePeriod``) and their shadows clear
        the other branches of the group.

        Raises:
            KeyError: If the model does not declare *key*.
        """
        info = self._schema.lookup(key)
        if info is None:
            raise KeyError(f"{self._model.__name__} has no field {key!r}")
        if info.branch is not None:
            siblings = info.spec.sibling_keys(info.branch.tag)
            if info.is_shadow:
                for sibling in siblings:
                    self._data.pop(sibling, None)
            else:
                set_choice_value(self._data, key, value, siblings)
                return self
        if value is None:
            self._data.pop(key, None)
        else:
            self._data[key] = value
        return self

    def add(self, key: str, value: Any) -> "EntityBuilder":
        """Append *value* to array field *key*, creating the array if needed.

        Raises:
            KeyError: If *key* is not an array field of the model.
        """
        spec = self._schema.fields.get(key)
        if spec is None or not spec.is_array:
            raise KeyError(f"{self._model.__name__}.{key} is not an array field")
        self._data.setdefault(key, []).append(value)
        return self

    def set_choice(self, group: str, tag: str, value: Any) -> "EntityBuilder":
        """Populate branch *tag* of choice *group*, clearing the others.

        Raises:
            KeyError: If *group* is not a choice group of the model.
            ValueError: If *tag* is not one of its alternatives.
        """
        spec = self._schema.choices.get(group)
        if spec is None:
            raise KeyError(f"{self._model.__name__} has no choice group {group!r}")
        branch = spec.branch(tag)
        set_choice_value(self._data, branch.key, value, spec.sibling_keys(branch.tag))
        return self

    def set_element(self, key: str, element: Any) -> "EntityBuilder":
        """Attach shadow metadata (``_key``) to primitive field *key*."""
        shadow = f"_{key}"
        if shadow not in self._schema:
            raise KeyError(f"{self._model.__name__}.{key} has no element slot")
        return self.set(shadow, element)

    def update(self, data: dict[str, Any]) -> "EntityBuilder":
        """Apply :meth:`set` for every item of *data*, in order."""
        for key, value in data.items():
            self.set(key, value)
        return self

    # ── Terminal operations ──────────────────────────────────────

    def to_json(self) -> dict[str, Any]:
        """Snapshot of the accumulated payload."""
        return deep_clone(self._data)

    def build(self) -> Entity:
        return self._model(deep_clone(self._data))

    def build_or_raise(self, fhir_version: Optional[str] = None) -> Entity:
        """Build, then validate; raises ``FhirValidationError`` on failure."""
        entity = self.build()
        entity.validate_or_raise(fhir_version)
        return entity

    # ── Schema-derived convenience methods ───────────────────────

    def __getattr__(self, name: str) -> Callable[..., "EntityBuilder"]:
        if name.startswith("_"):
            raise AttributeError(name)
        verb, _, field_name = name.partition("_")
        target = self._schema.snake_names.get(field_name)
        if target is not None:
            if verb == "set":
                if target in self._schema.choices:
                    return partial(self.set_choice, target)
                return partial(self.set, target)
            if verb == "add":
                return partial(self.add, target)
        raise AttributeError(
            f"{type(self).__name__} for {self._model.__name__} has no method {name!r}"
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._model.__name__}, {len(self._data)} fields)"
