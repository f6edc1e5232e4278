"""Tests for simpledot.schema — the attribute whitelist table and default lookup."""

import pytest

from simpledot import schema
from simpledot.types import AttributeName, EntityKind, ValueType

G, N, E = EntityKind.Graph, EntityKind.Node, EntityKind.Edge


def test_table_covers_every_name():
    assert set(schema.ATTRIBUTES) == set(AttributeName)
    assert len(AttributeName) == 12


@pytest.mark.parametrize(
    "name,kinds,value_type",
    [
        (AttributeName.bgcolor, {G}, ValueType.ColorList),
        (AttributeName.color, {E, N}, ValueType.ColorList),
        (AttributeName.comment, {E, N, G}, ValueType.String),
        (AttributeName.fontcolor, {G}, ValueType.Color),
        (AttributeName.fontname, {G}, ValueType.String),
        (AttributeName.fontsize, {G}, ValueType.Double),
        (AttributeName.height, {N}, ValueType.Double),
        (AttributeName.image, {N}, ValueType.String),
        (AttributeName.imagepos, {N}, ValueType.String),
        (AttributeName.imagescale, {N}, ValueType.BoolOrString),
        (AttributeName.label, {E, N, G}, ValueType.LblString),
        (AttributeName.width, {N}, ValueType.Double),
    ],
)
def test_kinds_and_types(name, kinds, value_type):
    spec = schema.ATTRIBUTES[name]
    assert spec.kinds == frozenset(kinds)
    assert spec.value_type == value_type


def test_defaults():
    assert schema.default_for(N, "color") == "black"
    assert schema.default_for(E, "color") == "black"
    assert schema.default_for(G, "fontname") == "Times-Roman"
    assert schema.default_for(G, "fontsize") == "14.0"
    assert schema.default_for(N, "height") == "0.5"
    assert schema.default_for(N, "width") == "0.75"
    assert schema.default_for(N, "imagescale") == "false"
    assert schema.default_for(G, "comment") == ""


def test_bgcolor_has_no_default():
    assert schema.default_for(G, AttributeName.bgcolor) is None


def test_label_default_depends_on_kind():
    assert schema.default_for(N, "label") == "\\N"
    assert schema.default_for(E, "label") == ""
    assert schema.default_for(G, "label") == ""


def test_default_for_inapplicable_or_unknown():
    assert schema.default_for(G, "color") is None
    assert schema.default_for(N, "rankdir") is None


def test_lookup():
    assert schema.lookup("width").name == AttributeName.width
    assert schema.lookup(AttributeName.width) is schema.ATTRIBUTES[AttributeName.width]
    assert schema.lookup("Width") is None
    assert schema.lookup("shape") is None


def test_names_for_kind():
    assert schema.names_for(E) == [AttributeName.color, AttributeName.comment, AttributeName.label]
    assert AttributeName.bgcolor in schema.names_for(G)
    assert AttributeName.bgcolor not in schema.names_for(N)


def test_table_is_read_only():
    with pytest.raises(TypeError):
        schema.ATTRIBUTES[AttributeName.color] = None  # type: ignore[index]
