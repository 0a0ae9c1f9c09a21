"""
Declarative field descriptors for FHIR entity types.

Each concrete model declares an ordered tuple of descriptors; the generic
engine in :mod:`fhir_toolkit.base` derives everything else from it: the
canonical wire-key order, shadow ``_field`` slots, choice-group branch
names, and the snake_case aliases used by builders.

Two descriptor kinds exist:

- :class:`FieldSpec`: a named field of a single type (scalar, nested
  entity, inline resource, or an array of any of these).
- :class:`ChoiceSpec`: a polymorphic ``name[x]`` property expanded on
  the wire into one field per alternative type (``effectiveDateTime``,
  ``effectivePeriod``, ...), of which at most one may be populated.

Descriptors are normally written with the :func:`prop` and :func:`choice`
helpers using FHIR cardinality strings::

    prop("status", "code", "1..1")
    prop("identifier", "Identifier", "0..*")
    choice("effective", "dateTime", "Period", "Timing", "instant")
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, NamedTuple, Optional, Union

from fhir_toolkit._constants import PRIMITIVE_TYPES

_CARDINALITY = re.compile(r"^(\d+)\.\.(\d+|\*)$")
_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def parse_cardinality(card: str) -> tuple[int, Optional[int]]:
    """Parse a FHIR cardinality string into ``(min, max)``.

    ``max`` is ``None`` for an unbounded (``*``) upper limit.

    Raises:
        ValueError: If *card* is not of the form ``"n..m"`` or ``"n..*"``.
    """
    match = _CARDINALITY.match(card)
    if match is None:
        raise ValueError(f"Invalid cardinality: {card!r}")
    low = int(match.group(1))
    high = None if match.group(2) == "*" else int(match.group(2))
    if high is not None and high < low:
        raise ValueError(f"Invalid cardinality: {card!r}")
    return low, high


def type_tag(type_code: str) -> str:
    """Return the wire suffix for a type code (``dateTime`` → ``DateTime``)."""
    return type_code[:1].upper() + type_code[1:]


def snake_case(name: str) -> str:
    """Convert a camelCase FHIR element name to snake_case."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def is_primitive_type(type_code: str) -> bool:
    return type_code in PRIMITIVE_TYPES


# ── Descriptors ────────────────────────────────────────────────────


@dataclass(frozen=True)
class FieldSpec:
    """A single-typed field of an entity."""

    name: str
    type_code: str
    min: int = 0
    max: Optional[int] = 1
    shadow: bool = True

    @property
    def is_array(self) -> bool:
        return self.max is None or self.max > 1

    @property
    def is_required(self) -> bool:
        return self.min > 0

    @property
    def is_primitive(self) -> bool:
        return is_primitive_type(self.type_code)

    @property
    def shadow_key(self) -> Optional[str]:
        """Name of the ``_field`` slot, or ``None`` if the field has none."""
        if self.shadow and self.is_primitive and self.type_code != "xhtml":
            return f"_{self.name}"
        return None

    @property
    def wire_keys(self) -> tuple[str, ...]:
        shadow = self.shadow_key
        return (self.name,) if shadow is None else (self.name, shadow)


class Branch(NamedTuple):
    """One alternative of a choice group."""

    tag: str
    type_code: str
    key: str
    shadow_key: Optional[str]


@dataclass(frozen=True)
class ChoiceSpec:
    """A polymorphic ``name[x]`` property with mutually exclusive branches."""

    name: str
    type_codes: tuple[str, ...]
    min: int = 0
    max: Optional[int] = 1

    @property
    def is_array(self) -> bool:
        return False

    @property
    def is_required(self) -> bool:
        return self.min > 0

    @property
    def branches(self) -> tuple[Branch, ...]:
        result = []
        for code in self.type_codes:
            tag = type_tag(code)
            key = f"{self.name}{tag}"
            shadow = f"_{key}" if is_primitive_type(code) else None
            result.append(Branch(tag, code, key, shadow))
        return tuple(result)

    @property
    def wire_keys(self) -> tuple[str, ...]:
        keys: list[str] = []
        for branch in self.branches:
            keys.append(branch.key)
            if branch.shadow_key is not None:
                keys.append(branch.shadow_key)
        return tuple(keys)

    def branch(self, tag: str) -> Branch:
        """Look up a branch by tag (``DateTime``) or type code (``dateTime``).

        Raises:
            ValueError: If the group has no such alternative.
        """
        wanted = type_tag(tag)
        for branch in self.branches:
            if branch.tag == wanted:
                return branch
        allowed = ", ".join(b.tag for b in self.branches)
        raise ValueError(
            f"{self.name}[x] has no {tag!r} alternative (allowed: {allowed})"
        )

    def sibling_keys(self, tag: str) -> list[str]:
        """Every wire key of every branch other than *tag*."""
        chosen = self.branch(tag)
        keys: list[str] = []
        for branch in self.branches:
            if branch.tag == chosen.tag:
                continue
            keys.append(branch.key)
            if branch.shadow_key is not None:
                keys.append(branch.shadow_key)
        return keys


Spec = Union[FieldSpec, ChoiceSpec]


def prop(
    name: str,
    type_code: str,
    card: str = "0..1",
    *,
    shadow: bool = True,
) -> FieldSpec:
    """Declare a field: ``prop("code", "CodeableConcept", "1..1")``."""
    low, high = parse_cardinality(card)
    return FieldSpec(name, type_code, low, high, shadow)


def choice(name: str, *type_codes: str, card: str = "0..1") -> ChoiceSpec:
    """Declare a choice group: ``choice("onset", "dateTime", "Age")``."""
    if not type_codes:
        raise ValueError(f"Choice group {name!r} needs at least one type")
    low, high = parse_cardinality(card)
    return ChoiceSpec(name, tuple(type_codes), low, high)


# ── Compiled schema ────────────────────────────────────────────────


class KeyInfo(NamedTuple):
    """What a wire key refers to within a schema."""

    spec: Spec
    branch: Optional[Branch]
    is_shadow: bool


class Schema:
    """Compiled lookup tables for an ordered tuple of descriptors."""

    def __init__(self, specs: Iterable[Spec]):
        self.specs: tuple[Spec, ...] = tuple(specs)
        self.keys: tuple[str, ...] = ()
        self.fields: dict[str, FieldSpec] = {}
        self.choices: dict[str, ChoiceSpec] = {}
        self.snake_names: dict[str, str] = {}
        self._index: dict[str, KeyInfo] = {}

        keys: list[str] = []
        for spec in self.specs:
            if spec.name in self.fields or spec.name in self.choices:
                raise ValueError(f"Duplicate field {spec.name!r}")
            if isinstance(spec, ChoiceSpec):
                self.choices[spec.name] = spec
                for branch in spec.branches:
                    self._index[branch.key] = KeyInfo(spec, branch, False)
                    self.snake_names[snake_case(branch.key)] = branch.key
                    if branch.shadow_key is not None:
                        self._index[branch.shadow_key] = KeyInfo(spec, branch, True)
            else:
                self.fields[spec.name] = spec
                self._index[spec.name] = KeyInfo(spec, None, False)
                if spec.shadow_key is not None:
                    self._index[spec.shadow_key] = KeyInfo(spec, None, True)
            self.snake_names[snake_case(spec.name)] = spec.name
            keys.extend(spec.wire_keys)
        self.keys = tuple(keys)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __len__(self) -> int:
        return len(self.specs)

    def lookup(self, key: str) -> Optional[KeyInfo]:
        return self._index.get(key)

    def extend(self, specs: Iterable[Spec]) -> "Schema":
        """Return a new schema with *specs* appended after this one's."""
        return Schema(self.specs + tuple(specs))

    def __repr__(self) -> str:
        names = ", ".join(spec.name for spec in self.specs)
        return f"Schema({names})"
