"""Odin source rendering for messages, enums and whole proto files."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from .. import model
from ..config import GeneratorConfig
from ..naming import NameResolver, package_identifier
from ..type_mapper import TypeMapper
from .fields import INDENT, emit_field
from .oneof import AliasRegistry, emit_oneof

logger = logging.getLogger(__name__)

GENERATOR_URL = "https://github.com/lordhippo/odin-protoc-plugin"
RUNTIME_URL = "https://github.com/lordhippo/odin-protobuf"
OUTPUT_SUFFIX = ".pb.odin"


@dataclass(frozen=True, slots=True)
class CompilerVersion:
    """Version of protoc that produced the request."""

    major: int = 0
    minor: int = 0
    patch: int = 0

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def output_filename(proto_name: str) -> str:
    """Return the generated file name for *proto_name*."""

    for suffix in (".protodevel", ".proto"):
        if proto_name.endswith(suffix):
            proto_name = proto_name[: -len(suffix)]
            break
    return f"{proto_name}{OUTPUT_SUFFIX}"


def emit_enum(lines: List[str], enum: model.Enum, names: NameResolver) -> None:
    lines.append("")
    lines.append(f"{names.resolve(enum.full_name)} :: enum {{")
    for value in enum.values:
        lines.append(f"{INDENT}{value.name} = {value.number},")
    lines.append("}")


def emit_message(
    lines: List[str],
    message: model.Message,
    types: TypeMapper,
    aliases: AliasRegistry,
) -> None:
    """Append *message*, then its nested messages and enums, to *lines*.

    Map entry messages are never emitted; map fields render as native maps.
    """

    if message.is_map_entry:
        raise ValueError(f"Map entry message '{message.full_name}' cannot be emitted")

    lines.append("")
    lines.append(f"{types.names.resolve(message.full_name)} :: struct {{")
    for field in message.fields:
        if field.oneof is not None:
            continue
        emit_field(lines, field, types)
    for oneof in message.oneofs:
        emit_oneof(lines, oneof, types, aliases)
    lines.append("}")

    for nested in message.nested_messages:
        if nested.is_map_entry:
            continue
        emit_message(lines, nested, types, aliases)
    for enum in message.nested_enums:
        emit_enum(lines, enum, types.names)


class OdinFileRenderer:
    """Render one :class:`model.ProtoFile` into Odin source text."""

    def __init__(
        self,
        *,
        config: GeneratorConfig | None = None,
        compiler_version: Optional[CompilerVersion] = None,
    ) -> None:
        self._config = config or GeneratorConfig()
        self._compiler_version = compiler_version or CompilerVersion()

    def header(self) -> List[str]:
        return [
            f"// Auto-generated by odin-protoc-plugin ({GENERATOR_URL})",
            f"// protoc version: {self._compiler_version}",
            f"// Use with the runtime odin-protobuf library ({RUNTIME_URL})",
        ]

    def render(self, proto_file: model.ProtoFile) -> str:
        """Return the full Odin source for *proto_file*.

        Raises :class:`~protoc_gen_odin.errors.GeneratorError` on the first
        invalid declaration; nothing is returned in that case.
        """

        logger.debug("Rendering %s", proto_file.name)
        names = NameResolver(proto_file.package)
        types = TypeMapper(names)
        aliases = AliasRegistry()

        lines = self.header()
        lines.append("")
        lines.append(f"package {package_identifier(self._config.base_package, proto_file.package)}")

        for message in proto_file.messages:
            emit_message(lines, message, types, aliases)
        for alias, underlying in aliases.items():
            lines.append(f"{alias} :: distinct {underlying}")
        for enum in proto_file.enums:
            emit_enum(lines, enum, names)

        return "\n".join(lines) + "\n"


__all__ = [
    "CompilerVersion",
    "OdinFileRenderer",
    "OUTPUT_SUFFIX",
    "emit_enum",
    "emit_message",
    "output_filename",
]
