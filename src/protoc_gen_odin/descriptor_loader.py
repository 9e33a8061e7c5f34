from __future__ import annotations

"""Utilities to convert CodeGeneratorRequest payloads into model dataclasses."""

import logging
from typing import Dict, List, MutableMapping, Optional, Sequence, Tuple

from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2

from . import model
from .options import parse_field_override

logger = logging.getLogger(__name__)

_FieldType = descriptor_pb2.FieldDescriptorProto

# Field numbers used in SourceCodeInfo.Location.path.
_FILE_MESSAGE_TYPE = 4
_MESSAGE_FIELD = 2
_MESSAGE_NESTED_TYPE = 3

_NON_PACKABLE_TYPES = frozenset(
    {
        _FieldType.TYPE_STRING,
        _FieldType.TYPE_BYTES,
        _FieldType.TYPE_MESSAGE,
        _FieldType.TYPE_GROUP,
    }
)

LocationIndex = Dict[Tuple[int, ...], model.SourceLocation]


class DescriptorLoader:
    """Load FileDescriptorProto messages into higher level dataclasses."""

    def __init__(self, request: plugin_pb2.CodeGeneratorRequest) -> None:
        self._request = request
        self._loaded_files: MutableMapping[str, model.ProtoFile] = {}
        self._type_index: Dict[str, model.ProtoType] = {}
        self._pending_field_resolutions: List[Tuple[model.Field, str]] = []
        self._map_entry_messages: Dict[str, model.Message] = {}
        self._loaded = False

    @property
    def files(self) -> MutableMapping[str, model.ProtoFile]:
        """Mapping of file name to :class:`ProtoFile` after :meth:`load`."""

        self.load()
        return self._loaded_files

    @property
    def files_to_generate(self) -> List[str]:
        """Return the list of files requested for generation."""

        return list(self._request.file_to_generate)

    def get_file(self, name: str) -> model.ProtoFile:
        """Return a loaded :class:`ProtoFile` by name."""

        self.load()
        return self._loaded_files[name]

    def load(self) -> MutableMapping[str, model.ProtoFile]:
        """Load every file in the request and return the mapping of filenames to :class:`ProtoFile`.

        Subsequent calls return cached results.
        """

        if not self._loaded:
            for file_proto in self._request.proto_file:
                proto_file = self._convert_file(file_proto)
                self._loaded_files[file_proto.name] = proto_file

            self._validate_type_references()
            self._loaded = True
            logger.debug("Loaded %d proto file(s) from request", len(self._loaded_files))

        return self._loaded_files

    def _convert_file(
        self,
        file_proto: descriptor_pb2.FileDescriptorProto,
    ) -> model.ProtoFile:
        package = file_proto.package or None
        locations = _index_locations(file_proto.source_code_info)

        proto_file = model.ProtoFile(
            name=file_proto.name,
            package=package,
            syntax=file_proto.syntax or "proto2",
            dependencies=list(file_proto.dependency),
        )

        for enum_proto in file_proto.enum_type:
            enum = self._convert_enum(enum_proto, package, [])
            proto_file.enums.append(enum)

        for idx, message_proto in enumerate(file_proto.message_type):
            message = self._convert_message(
                message_proto,
                proto_file,
                [],
                path=(_FILE_MESSAGE_TYPE, idx),
                locations=locations,
            )
            proto_file.messages.append(message)

        return proto_file

    def _convert_enum(
        self,
        enum_proto: descriptor_pb2.EnumDescriptorProto,
        package: Optional[str],
        parents: List[str],
    ) -> model.Enum:
        full_name = self._qualify_name(package, parents, enum_proto.name)
        enum = model.Enum(name=enum_proto.name, full_name=full_name)
        self._register_type(full_name, enum)

        for value_proto in enum_proto.value:
            enum.values.append(model.EnumValue(name=value_proto.name, number=value_proto.number))

        return enum

    def _convert_message(
        self,
        message_proto: descriptor_pb2.DescriptorProto,
        proto_file: model.ProtoFile,
        parents: List[str],
        *,
        path: Tuple[int, ...],
        locations: LocationIndex,
    ) -> model.Message:
        full_name = self._qualify_name(proto_file.package, parents, message_proto.name)
        message = model.Message(
            name=message_proto.name,
            full_name=full_name,
            is_map_entry=message_proto.options.map_entry,
        )
        self._register_type(full_name, message)

        parents_chain = parents + [message_proto.name]

        for oneof_proto in message_proto.oneof_decl:
            oneof = model.Oneof(name=oneof_proto.name, full_name=f"{full_name}.{oneof_proto.name}")
            message.oneofs.append(oneof)

        for idx, nested_proto in enumerate(message_proto.nested_type):
            nested_message = self._convert_message(
                nested_proto,
                proto_file,
                parents_chain,
                path=path + (_MESSAGE_NESTED_TYPE, idx),
                locations=locations,
            )
            if nested_message.is_map_entry:
                self._map_entry_messages[nested_message.full_name] = nested_message
            message.nested_messages.append(nested_message)

        for enum_proto in message_proto.enum_type:
            nested_enum = self._convert_enum(enum_proto, proto_file.package, parents_chain)
            message.nested_enums.append(nested_enum)

        for idx, field_proto in enumerate(message_proto.field):
            field = self._convert_field(
                field_proto,
                message,
                proto_file.syntax,
                location=locations.get(path + (_MESSAGE_FIELD, idx)),
            )
            message.fields.append(field)

        for field in message.fields:
            if field.oneof_index is not None:
                message.oneofs[field.oneof_index].fields.append(field)

        return message

    def _convert_field(
        self,
        field_proto: descriptor_pb2.FieldDescriptorProto,
        message: model.Message,
        syntax: str,
        *,
        location: Optional[model.SourceLocation],
    ) -> model.Field:
        field = self._build_field(field_proto, syntax, location=location)

        if (
            field.kind is model.FieldKind.MESSAGE
            and field.is_repeated
            and field.type_name in self._map_entry_messages
        ):
            entry_message = self._map_entry_messages[field.type_name]
            field.map_entry = self._build_map_entry(entry_message)
            field.kind = model.FieldKind.MAP

        oneof_index = field_proto.oneof_index if field_proto.HasField("oneof_index") else None
        if oneof_index is not None:
            field.oneof_index = oneof_index
            field.oneof = message.oneofs[oneof_index].name

        field.override = parse_field_override(field_proto.options)
        return field

    def _build_field(
        self,
        field_proto: descriptor_pb2.FieldDescriptorProto,
        syntax: str,
        *,
        location: Optional[model.SourceLocation],
    ) -> model.Field:
        cardinality = {
            _FieldType.LABEL_OPTIONAL: model.FieldCardinality.OPTIONAL,
            _FieldType.LABEL_REQUIRED: model.FieldCardinality.REQUIRED,
            _FieldType.LABEL_REPEATED: model.FieldCardinality.REPEATED,
        }.get(field_proto.label, model.FieldCardinality.OPTIONAL)

        kind, type_name = self._classify_field_type(field_proto)
        packable = (
            cardinality is model.FieldCardinality.REPEATED
            and field_proto.type not in _NON_PACKABLE_TYPES
        )

        field = model.Field(
            name=field_proto.name,
            number=field_proto.number,
            wire_type=field_proto.type,
            cardinality=cardinality,
            kind=kind,
            type_name=type_name,
            packable=packable,
            packed=packable and _is_packed(field_proto, syntax),
            location=location,
        )

        if field.kind in (model.FieldKind.MESSAGE, model.FieldKind.ENUM) and field.type_name:
            self._pending_field_resolutions.append((field, field.type_name))

        return field

    def _build_map_entry(self, entry_message: model.Message) -> model.MapEntry:
        # Key and value are synthesized by protoc and have no source location.
        key_field, value_field = entry_message.fields[0], entry_message.fields[1]
        return model.MapEntry(key=key_field, value=value_field)

    def _classify_field_type(
        self, field_proto: descriptor_pb2.FieldDescriptorProto
    ) -> Tuple[model.FieldKind, Optional[str]]:
        field_type = field_proto.type
        if field_type == _FieldType.TYPE_ENUM:
            return model.FieldKind.ENUM, self._normalize_type_name(field_proto.type_name)
        if field_type in (_FieldType.TYPE_MESSAGE, _FieldType.TYPE_GROUP):
            return model.FieldKind.MESSAGE, self._normalize_type_name(field_proto.type_name)
        return model.FieldKind.SCALAR, None

    def _normalize_type_name(self, type_name: str) -> Optional[str]:
        if not type_name:
            return None
        return type_name[1:] if type_name.startswith(".") else type_name

    def _register_type(self, full_name: str, obj: model.ProtoType) -> None:
        self._type_index[full_name] = obj

    def _qualify_name(
        self, package: Optional[str], parents: List[str], name: str
    ) -> str:
        segments: List[str] = []
        if package:
            segments.append(package)
        segments.extend(parents)
        segments.append(name)
        return ".".join(segment for segment in segments if segment)

    def _validate_type_references(self) -> None:
        for field, type_name in self._pending_field_resolutions:
            if field.kind is model.FieldKind.MAP:
                continue
            if type_name not in self._type_index:
                raise KeyError(f"Unable to resolve type reference '{type_name}' for field '{field.name}'")


def _is_packed(field_proto: descriptor_pb2.FieldDescriptorProto, syntax: str) -> bool:
    if field_proto.options.HasField("packed"):
        return field_proto.options.packed
    return syntax != "proto2"


def _index_locations(source_code_info: descriptor_pb2.SourceCodeInfo) -> LocationIndex:
    index: LocationIndex = {}
    for location in source_code_info.location:
        span: Sequence[int] = location.span
        if len(span) < 2:
            continue
        index.setdefault(
            tuple(location.path),
            model.SourceLocation(start_line=span[0], start_column=span[1]),
        )
    return index


__all__ = ["DescriptorLoader"]
