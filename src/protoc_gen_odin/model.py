from __future__ import annotations

"""Dataclasses representing a protobuf schema in a plugin-friendly format."""

from dataclasses import dataclass, field
from enum import Enum as _Enum, IntEnum
from typing import List, Optional

from google.protobuf import descriptor_pb2

_FieldType = descriptor_pb2.FieldDescriptorProto


class WireType(IntEnum):
    """Raw ``FieldDescriptorProto.Type`` tags."""

    DOUBLE = _FieldType.TYPE_DOUBLE
    FLOAT = _FieldType.TYPE_FLOAT
    INT64 = _FieldType.TYPE_INT64
    UINT64 = _FieldType.TYPE_UINT64
    INT32 = _FieldType.TYPE_INT32
    FIXED64 = _FieldType.TYPE_FIXED64
    FIXED32 = _FieldType.TYPE_FIXED32
    BOOL = _FieldType.TYPE_BOOL
    STRING = _FieldType.TYPE_STRING
    GROUP = _FieldType.TYPE_GROUP
    MESSAGE = _FieldType.TYPE_MESSAGE
    BYTES = _FieldType.TYPE_BYTES
    UINT32 = _FieldType.TYPE_UINT32
    ENUM = _FieldType.TYPE_ENUM
    SFIXED32 = _FieldType.TYPE_SFIXED32
    SFIXED64 = _FieldType.TYPE_SFIXED64
    SINT32 = _FieldType.TYPE_SINT32
    SINT64 = _FieldType.TYPE_SINT64


class FieldCardinality(str, _Enum):
    """Cardinality for message fields."""

    OPTIONAL = "optional"
    REQUIRED = "required"
    REPEATED = "repeated"


class FieldKind(str, _Enum):
    """Different underlying kinds for a field."""

    SCALAR = "scalar"
    ENUM = "enum"
    MESSAGE = "message"
    MAP = "map"


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Position of a declaration in the original ``.proto`` text (0-based)."""

    start_line: int
    start_column: int = 0

    @property
    def line(self) -> int:
        return self.start_line + 1


@dataclass(frozen=True, slots=True)
class OdinOverride:
    """Value of the ``(odin)`` field option.

    ``external`` and ``typedef`` share a oneof in ``odin.proto`` so at most one
    of them is set. Both are ``None`` when the option is present but empty.
    """

    external: Optional[str] = None
    typedef: Optional[str] = None


@dataclass(slots=True)
class MapEntry:
    """Synthetic key/value fields backing a protobuf map field."""

    key: Field
    value: Field


@dataclass(slots=True)
class Field:
    """Represents a message field."""

    name: str
    number: int
    wire_type: int
    cardinality: FieldCardinality
    kind: FieldKind
    type_name: Optional[str] = None
    map_entry: Optional[MapEntry] = None
    oneof: Optional[str] = None
    oneof_index: Optional[int] = None
    packable: bool = False
    packed: bool = False
    override: Optional[OdinOverride] = None
    location: Optional[SourceLocation] = None

    @property
    def is_repeated(self) -> bool:
        return self.cardinality is FieldCardinality.REPEATED


@dataclass(slots=True)
class EnumValue:
    """Represents a value within an enum."""

    name: str
    number: int


@dataclass(slots=True)
class Enum:
    """Represents an enum type."""

    name: str
    full_name: str
    values: List[EnumValue] = field(default_factory=list)


@dataclass(slots=True)
class Oneof:
    """Represents a oneof declaration."""

    name: str
    full_name: str
    fields: List[Field] = field(default_factory=list)


@dataclass(slots=True)
class Message:
    """Represents a message type."""

    name: str
    full_name: str
    fields: List[Field] = field(default_factory=list)
    nested_messages: List[Message] = field(default_factory=list)
    nested_enums: List[Enum] = field(default_factory=list)
    oneofs: List[Oneof] = field(default_factory=list)
    is_map_entry: bool = False


@dataclass(slots=True)
class ProtoFile:
    """Represents a protobuf file and its declarations."""

    name: str
    package: Optional[str]
    syntax: str = "proto2"
    dependencies: List[str] = field(default_factory=list)
    messages: List[Message] = field(default_factory=list)
    enums: List[Enum] = field(default_factory=list)


ProtoType = Message | Enum
