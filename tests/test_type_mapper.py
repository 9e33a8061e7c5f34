from __future__ import annotations

import pytest

pytest.importorskip("google.protobuf")

from protoc_gen_odin import model
from protoc_gen_odin.naming import NameResolver
from protoc_gen_odin.type_mapper import TypeMapper

WireType = model.WireType


def _field(
    name: str,
    wire_type: int,
    *,
    kind: model.FieldKind = model.FieldKind.SCALAR,
    cardinality: model.FieldCardinality = model.FieldCardinality.OPTIONAL,
    type_name: str | None = None,
    map_entry: model.MapEntry | None = None,
) -> model.Field:
    return model.Field(
        name=name,
        number=1,
        wire_type=wire_type,
        cardinality=cardinality,
        kind=kind,
        type_name=type_name,
        map_entry=map_entry,
    )


@pytest.mark.parametrize(
    ("wire_types", "expected"),
    [
        ((WireType.INT32, WireType.SINT32, WireType.SFIXED32), "i32"),
        ((WireType.INT64, WireType.SINT64, WireType.SFIXED64), "i64"),
        ((WireType.UINT32, WireType.FIXED32), "u32"),
        ((WireType.UINT64, WireType.FIXED64), "u64"),
        ((WireType.DOUBLE,), "f64"),
        ((WireType.FLOAT,), "f32"),
        ((WireType.BOOL,), "bool"),
        ((WireType.STRING,), "string"),
        ((WireType.BYTES,), "[]u8"),
    ],
)
def test_builtin_type_name_groups_wire_types(wire_types, expected) -> None:
    assert {TypeMapper.builtin_type_name(wire_type) for wire_type in wire_types} == {expected}


@pytest.mark.parametrize(
    "wire_type",
    [WireType.MESSAGE, WireType.GROUP, WireType.ENUM, 0, 99],
)
def test_builtin_type_name_is_empty_for_composite_and_unknown_types(wire_type) -> None:
    assert TypeMapper.builtin_type_name(wire_type) == ""


def test_field_type_name_resolves_composites_against_package() -> None:
    types = TypeMapper(NameResolver("demo.pkg"))

    message_field = _field(
        "inner",
        WireType.MESSAGE,
        kind=model.FieldKind.MESSAGE,
        type_name="demo.pkg.Outer.Inner",
    )
    enum_field = _field(
        "color",
        WireType.ENUM,
        kind=model.FieldKind.ENUM,
        type_name="other.Color",
    )

    assert types.field_type_name(message_field) == "Outer_Inner"
    assert types.field_type_name(enum_field) == "other_Color"


def test_field_type_name_wraps_repeated_fields() -> None:
    types = TypeMapper(NameResolver(None))

    scores = _field("scores", WireType.FLOAT, cardinality=model.FieldCardinality.REPEATED)
    blobs = _field("blobs", WireType.BYTES, cardinality=model.FieldCardinality.REPEATED)

    assert types.field_type_name(scores) == "[]f32"
    assert types.field_type_name(blobs) == "[][]u8"


def test_field_type_name_renders_native_maps() -> None:
    types = TypeMapper(NameResolver("demo"))
    entry = model.MapEntry(
        key=_field("key", WireType.STRING),
        value=_field(
            "value",
            WireType.MESSAGE,
            kind=model.FieldKind.MESSAGE,
            type_name="demo.Meta",
        ),
    )
    labels = _field(
        "labels",
        WireType.MESSAGE,
        kind=model.FieldKind.MAP,
        cardinality=model.FieldCardinality.REPEATED,
        type_name="demo.Thing.LabelsEntry",
        map_entry=entry,
    )

    assert types.field_type_name(labels) == "map[string]Meta"
