"""Rendering of individual struct fields and their runtime metadata tags."""

from __future__ import annotations

from typing import List

from .. import model
from ..type_mapper import TypeMapper

INDENT = "  "


def field_metadata(field: model.Field) -> str:
    """Return the struct tag read by the odin-protobuf runtime.

    Key names and the raw integer wire types must match the runtime exactly.
    """

    parts = [f'id:"{field.number}"', f'type:"{int(field.wire_type)}"']
    if field.packable:
        parts.append(f'packed:"{str(field.packed).lower()}"')
    if field.map_entry is not None:
        parts.append(f'key_type:"{int(field.map_entry.key.wire_type)}"')
        parts.append(f'value_type:"{int(field.map_entry.value.wire_type)}"')
    return " ".join(parts)


def render_field(field: model.Field, types: TypeMapper) -> str:
    return f"{field.name} : {types.field_type_name(field)} `{field_metadata(field)}`,"


def emit_field(lines: List[str], field: model.Field, types: TypeMapper, *, depth: int = 1) -> None:
    lines.append(f"{INDENT * depth}{render_field(field, types)}")


__all__ = ["INDENT", "emit_field", "field_metadata", "render_field"]
