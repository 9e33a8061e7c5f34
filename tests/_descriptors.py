"""Helpers to assemble descriptor protos the way protoc hands them to plugins."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2

from protoc_gen_odin.options import FieldOptions, ODIN_EXTENSION

FieldType = descriptor_pb2.FieldDescriptorProto


def add_field(
    message: descriptor_pb2.DescriptorProto,
    name: str,
    number: int,
    field_type: int,
    *,
    label: int = FieldType.LABEL_OPTIONAL,
    type_name: Optional[str] = None,
    oneof_index: Optional[int] = None,
) -> descriptor_pb2.FieldDescriptorProto:
    field = message.field.add()
    field.name = name
    field.number = number
    field.label = label
    field.type = field_type
    if type_name is not None:
        field.type_name = type_name
    if oneof_index is not None:
        field.oneof_index = oneof_index
    return field


def add_map_entry(
    message: descriptor_pb2.DescriptorProto,
    entry_name: str,
    key_type: int,
    value_type: int,
    *,
    value_type_name: Optional[str] = None,
) -> descriptor_pb2.DescriptorProto:
    entry = message.nested_type.add()
    entry.name = entry_name
    entry.options.map_entry = True
    add_field(entry, "key", 1, key_type)
    add_field(entry, "value", 2, value_type, type_name=value_type_name)
    return entry


def set_odin_option(
    field: descriptor_pb2.FieldDescriptorProto,
    *,
    external: Optional[str] = None,
    typedef: Optional[str] = None,
) -> None:
    """Attach ``(odin)`` to *field* as raw extension bytes, like protoc does."""

    options = FieldOptions()
    odin = options.Extensions[ODIN_EXTENSION]
    if external is not None:
        odin.external = external
    elif typedef is not None:
        odin.typedef = typedef
    else:
        odin.SetInParent()
    field.options.MergeFromString(options.SerializeToString())


def add_location(
    file_proto: descriptor_pb2.FileDescriptorProto,
    path: Sequence[int],
    line: int,
) -> None:
    """Record a 0-based *line* for the element at *path*."""

    location = file_proto.source_code_info.location.add()
    location.path.extend(path)
    location.span.extend([line, 2, 20])


def locate_all_fields(file_proto: descriptor_pb2.FileDescriptorProto, *, first_line: int = 10) -> None:
    """Give every non-synthetic field a distinct line, in declaration order."""

    line = first_line

    def visit(message: descriptor_pb2.DescriptorProto, path: Sequence[int]) -> None:
        nonlocal line
        if message.options.map_entry:
            return
        for idx in range(len(message.field)):
            add_location(file_proto, list(path) + [2, idx], line)
            line += 1
        for idx, nested in enumerate(message.nested_type):
            visit(nested, list(path) + [3, idx])

    for idx, message in enumerate(file_proto.message_type):
        visit(message, [4, idx])


def build_request(
    file_protos: Iterable[descriptor_pb2.FileDescriptorProto],
    *,
    parameter: Optional[str] = None,
    compiler_version: Optional[Sequence[int]] = None,
) -> plugin_pb2.CodeGeneratorRequest:
    request = plugin_pb2.CodeGeneratorRequest()
    for file_proto in file_protos:
        request.proto_file.append(file_proto)
        request.file_to_generate.append(file_proto.name)
    if parameter is not None:
        request.parameter = parameter
    if compiler_version is not None:
        major, minor, patch = compiler_version
        request.compiler_version.major = major
        request.compiler_version.minor = minor
        request.compiler_version.patch = patch
    return request
