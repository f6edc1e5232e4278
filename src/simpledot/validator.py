"""Attribute validation against the schema in ``simpledot.schema``."""

from __future__ import annotations

from simpledot import schema
from simpledot.errors import AttributeErrorKind, DotAttributeError, SourcePosition
from simpledot.syntax.lexer import NUMERAL_RE
from simpledot.types import AttributeName, EntityKind, ValueType

_BOOL_WORDS = frozenset({"true", "false", "yes", "no"})


def _is_double(value: str) -> bool:
    return NUMERAL_RE.fullmatch(value) is not None


def _is_bool(value: str) -> bool:
    return value.lower() in _BOOL_WORDS


def _is_present(value: str) -> bool:
    return value != ""


def _accept_any(value: str) -> bool:
    return True


_CHECKS = {
    ValueType.Double: _is_double,
    ValueType.Bool: _is_bool,
    ValueType.Color: _is_present,
    ValueType.ColorList: _is_present,
    ValueType.String: _accept_any,
    ValueType.LblString: _accept_any,
    ValueType.BoolOrString: _accept_any,
}


def resolve_name(name: str, position: SourcePosition | None = None) -> AttributeName:
    """Map a raw attribute name onto the whitelist.

    Raises:
        DotAttributeError: UnknownAttribute if ``name`` is not whitelisted.
    """
    key = AttributeName.lookup(name)
    if key is None:
        raise DotAttributeError(
            AttributeErrorKind.UnknownAttribute,
            f"unknown attribute {name!r}",
            position,
            name=name,
        )
    return key


def validate_attribute(
    name: str | AttributeName,
    kind: EntityKind,
    value: str,
    position: SourcePosition | None = None,
) -> str:
    """Check ``name = value`` on an entity of ``kind``; return ``value`` unchanged.

    Args:
        name: Raw or already-resolved attribute name.
        kind: The entity the attribute is attached to.
        value: The raw attribute value.
        position: Source location reported on failure, if known.

    Raises:
        DotAttributeError: UnknownAttribute, WrongEntityKind or MalformedValue.
    """
    key = name if isinstance(name, AttributeName) else resolve_name(name, position)
    spec = schema.ATTRIBUTES[key]
    if not spec.applies_to(kind):
        allowed = ", ".join(sorted(k.name.lower() for k in spec.kinds))
        raise DotAttributeError(
            AttributeErrorKind.WrongEntityKind,
            f"attribute {key.value!r} does not apply to {kind.name.lower()}s (only {allowed})",
            position,
            name=key.value,
        )
    if not _CHECKS[spec.value_type](value):
        raise DotAttributeError(
            AttributeErrorKind.MalformedValue,
            f"attribute {key.value!r} expects a {spec.value_type.name} value, got {value!r}",
            position,
            name=key.value,
        )
    return value
