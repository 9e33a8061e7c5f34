"""Odin representations for protobuf ``oneof`` groups.

A oneof becomes a tagged ``union`` when every member spells a different Odin
type. Otherwise it falls back to a ``struct #raw_union`` whose members keep
their field metadata, followed by a ``<name>_variant`` discriminant enum.
Members using the ``(odin)`` option force the tagged representation; a
duplicate variant type is then an error instead of a fallback.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Set, Tuple

from .. import model
from ..errors import GeneratorError
from ..type_mapper import TypeMapper
from .fields import INDENT, emit_field

logger = logging.getLogger(__name__)


class AliasRegistry:
    """Distinct type aliases requested through ``(odin).typedef``.

    One registry is owned by the traversal of a single file. Aliases are kept
    in first-registration order and never change once defined.
    """

    def __init__(self) -> None:
        self._aliases: Dict[str, str] = {}

    def define(self, alias: str, underlying: str) -> str:
        """Register *alias* and return the underlying type it refers to.

        A return value different from *underlying* means *alias* was already
        bound to another type; the registry is left unchanged in that case.
        """

        existing = self._aliases.setdefault(alias, underlying)
        if existing == underlying:
            logger.debug("Registered alias %s -> %s", alias, underlying)
        return existing

    def items(self) -> Iterator[Tuple[str, str]]:
        return iter(list(self._aliases.items()))


@dataclass(frozen=True, slots=True)
class OneofPlan:
    """Outcome of the eligibility scan for one oneof."""

    tagged_union: bool
    duplicate: Optional[str] = None


def _discriminating_type(field: model.Field, types: TypeMapper) -> Tuple[str, bool]:
    override = field.override
    if override is not None:
        if override.external is not None and not override.external:
            raise GeneratorError.for_field(
                field, f"(odin).external must not be empty (field {field.name})"
            )
        if override.typedef is not None and not override.typedef:
            raise GeneratorError.for_field(
                field, f"(odin).typedef must not be empty (field {field.name})"
            )
        if override.external is not None:
            return override.external, True
        return override.typedef or "", True
    if field.wire_type == model.WireType.MESSAGE:
        return field.type_name or "", False
    return types.builtin_type_name(field.wire_type), False


def plan_oneof(oneof: model.Oneof, types: TypeMapper) -> OneofPlan:
    """Decide how *oneof* is represented.

    Members are scanned in declaration order. The first unforced duplicate
    stops the scan; later members are not validated.
    """

    forced = False
    seen: Set[str] = set()
    for field in oneof.fields:
        key, overridden = _discriminating_type(field, types)
        forced = forced or overridden
        if key in seen:
            if forced:
                raise GeneratorError.for_field(
                    field,
                    f"Duplicate Odin union type {key} for field {field.name} "
                    "after applying (odin).external/typedef overrides",
                )
            return OneofPlan(tagged_union=False, duplicate=key)
        seen.add(key)
    return OneofPlan(tagged_union=True)


def _variant_spelling(field: model.Field, types: TypeMapper, aliases: AliasRegistry) -> str:
    natural = types.field_type_name(field)
    override = field.override
    if override is None:
        return natural
    if override.external is not None:
        return override.external
    if override.typedef is not None:
        existing = aliases.define(override.typedef, natural)
        if existing != natural:
            raise GeneratorError.for_field(
                field,
                f"Type alias '{override.typedef}' already refers to '{existing}', "
                f"cannot redefine as '{natural}'",
            )
        return override.typedef
    return natural


def emit_oneof(
    lines: List[str],
    oneof: model.Oneof,
    types: TypeMapper,
    aliases: AliasRegistry,
    *,
    depth: int = 1,
) -> None:
    """Append the declaration(s) for *oneof* to *lines*."""

    plan = plan_oneof(oneof, types)
    indent = INDENT * depth
    lines.append("")

    if plan.tagged_union:
        lines.append(f"{indent}{oneof.name}: union {{")
        for field in oneof.fields:
            lines.append(f"{indent}{INDENT}{_variant_spelling(field, types, aliases)},")
        lines.append(f"{indent}}},")
        return

    logger.debug(
        "Oneof %s repeats variant type %s; emitting #raw_union",
        oneof.full_name,
        plan.duplicate,
    )
    lines.append(f"{indent}{oneof.name}: struct #raw_union {{")
    for field in oneof.fields:
        emit_field(lines, field, types, depth=depth + 1)
    lines.append(f"{indent}}},")

    # Discriminant values are member indices, not field numbers.
    lines.append(f"{indent}{oneof.name}_variant: enum {{")
    for index, field in enumerate(oneof.fields):
        lines.append(f"{indent}{INDENT}{field.name} = {index},")
    lines.append(f"{indent}}},")


__all__ = ["AliasRegistry", "OneofPlan", "emit_oneof", "plan_oneof"]
