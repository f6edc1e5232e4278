"""Attribute schema for the DOT subset.

A static table mapping each whitelisted attribute name to the entity kinds it
applies to, its value type and its default. Defaults are never injected into a
parsed graph; consumers that need a resolved value ask ``default_for``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from simpledot.types import AttributeName, EntityKind, ValueType

G = EntityKind.Graph
N = EntityKind.Node
E = EntityKind.Edge


@dataclass(frozen=True)
class AttributeSpec:
    name: AttributeName
    kinds: frozenset[EntityKind]
    value_type: ValueType
    default: str | None
    # Per-kind overrides of ``default``, e.g. node labels default to "\N".
    kind_defaults: Mapping[EntityKind, str] = field(default_factory=dict, hash=False)

    def applies_to(self, kind: EntityKind) -> bool:
        return kind in self.kinds

    def default_for(self, kind: EntityKind) -> str | None:
        return self.kind_defaults.get(kind, self.default)


def _spec(
    name: AttributeName,
    kinds: set[EntityKind],
    value_type: ValueType,
    default: str | None,
    **kind_defaults: str,
) -> AttributeSpec:
    overrides = {EntityKind[k.capitalize()]: v for k, v in kind_defaults.items()}
    return AttributeSpec(name, frozenset(kinds), value_type, default, MappingProxyType(overrides))


_TABLE: tuple[AttributeSpec, ...] = (
    _spec(AttributeName.bgcolor, {G}, ValueType.ColorList, None),
    _spec(AttributeName.color, {E, N}, ValueType.ColorList, "black"),
    _spec(AttributeName.comment, {E, N, G}, ValueType.String, ""),
    _spec(AttributeName.fontcolor, {G}, ValueType.Color, "black"),
    _spec(AttributeName.fontname, {G}, ValueType.String, "Times-Roman"),
    _spec(AttributeName.fontsize, {G}, ValueType.Double, "14.0"),
    _spec(AttributeName.height, {N}, ValueType.Double, "0.5"),
    _spec(AttributeName.image, {N}, ValueType.String, ""),
    _spec(AttributeName.imagepos, {N}, ValueType.String, ""),
    _spec(AttributeName.imagescale, {N}, ValueType.BoolOrString, "false"),
    _spec(AttributeName.label, {E, N, G}, ValueType.LblString, "", node="\\N"),
    _spec(AttributeName.width, {N}, ValueType.Double, "0.75"),
)

ATTRIBUTES: Mapping[AttributeName, AttributeSpec] = MappingProxyType({s.name: s for s in _TABLE})


def lookup(name: str | AttributeName) -> AttributeSpec | None:
    """Return the spec for ``name``, or None if it is not whitelisted."""
    key = name if isinstance(name, AttributeName) else AttributeName.lookup(name)
    if key is None:
        return None
    return ATTRIBUTES[key]


def default_for(kind: EntityKind, name: str | AttributeName) -> str | None:
    """Default value of ``name`` for an entity of ``kind``.

    Returns None when the attribute has no default, is unknown, or does not
    apply to ``kind``.
    """
    spec = lookup(name)
    if spec is None or not spec.applies_to(kind):
        return None
    return spec.default_for(kind)


def names_for(kind: EntityKind) -> list[AttributeName]:
    """Attribute names applicable to ``kind``, in table order."""
    return [s.name for s in _TABLE if s.applies_to(kind)]
