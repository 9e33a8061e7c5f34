"""Mapping utilities from protobuf wire types to Odin type spellings."""

from __future__ import annotations

from typing import Dict

from . import model
from .naming import NameResolver

WireType = model.WireType


class TypeMapper:
    """Maps `protoc_gen_odin.model` fields onto Odin type names."""

    _BUILTIN_MAPPING: Dict[int, str] = {
        WireType.INT32: "i32",
        WireType.SINT32: "i32",
        WireType.SFIXED32: "i32",
        WireType.INT64: "i64",
        WireType.SINT64: "i64",
        WireType.SFIXED64: "i64",
        WireType.UINT32: "u32",
        WireType.FIXED32: "u32",
        WireType.UINT64: "u64",
        WireType.FIXED64: "u64",
        WireType.DOUBLE: "f64",
        WireType.FLOAT: "f32",
        WireType.BOOL: "bool",
        WireType.STRING: "string",
        WireType.BYTES: "[]u8",
    }

    def __init__(self, names: NameResolver) -> None:
        self._names = names

    @property
    def names(self) -> NameResolver:
        return self._names

    @classmethod
    def builtin_type_name(cls, wire_type: int) -> str:
        """Return the Odin builtin for *wire_type*.

        Messages, groups, enums and unrecognized tags have no builtin spelling
        and map to ``""``.
        """

        return cls._BUILTIN_MAPPING.get(wire_type, "")

    def base_type_name(self, field: model.Field) -> str:
        """Odin spelling of *field*'s element type, ignoring cardinality."""

        if field.kind in (model.FieldKind.MESSAGE, model.FieldKind.ENUM) and field.type_name:
            return self._names.resolve(field.type_name)
        return self.builtin_type_name(field.wire_type)

    def field_type_name(self, field: model.Field) -> str:
        """Odin spelling of *field*'s declared type."""

        if field.map_entry is not None:
            key = self.field_type_name(field.map_entry.key)
            value = self.field_type_name(field.map_entry.value)
            return f"map[{key}]{value}"

        type_name = self.base_type_name(field)
        if field.is_repeated:
            return f"[]{type_name}"
        return type_name


__all__ = ["TypeMapper"]
