"""Access to the ``(odin)`` field option declared in ``data/odin.proto``."""

from __future__ import annotations

from typing import Optional

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

from . import model

ODIN_PROTO_NAME = "odin.proto"
ODIN_EXTENSION_NUMBER = 51617

_FieldType = descriptor_pb2.FieldDescriptorProto


def _build_odin_file() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto()
    file_proto.name = ODIN_PROTO_NAME
    file_proto.syntax = "proto2"
    file_proto.dependency.append("google/protobuf/descriptor.proto")

    options_message = file_proto.message_type.add()
    options_message.name = "OdinOptions"
    options_message.oneof_decl.add(name="override")
    for number, name in ((1, "external"), (2, "typedef")):
        member = options_message.field.add()
        member.name = name
        member.number = number
        member.label = _FieldType.LABEL_OPTIONAL
        member.type = _FieldType.TYPE_STRING
        member.oneof_index = 0

    extension = file_proto.extension.add()
    extension.name = "odin"
    extension.number = ODIN_EXTENSION_NUMBER
    extension.label = _FieldType.LABEL_OPTIONAL
    extension.type = _FieldType.TYPE_MESSAGE
    extension.type_name = ".OdinOptions"
    extension.extendee = ".google.protobuf.FieldOptions"
    return file_proto


# A private pool keeps the extension out of the default pool, which protoc
# requests are parsed with; the extension then arrives as unknown fields.
_POOL = descriptor_pool.DescriptorPool()
_POOL.AddSerializedFile(descriptor_pb2.DESCRIPTOR.serialized_pb)
_POOL.AddSerializedFile(_build_odin_file().SerializeToString())

_CLASSES = message_factory.GetMessageClassesForFiles(
    ["google/protobuf/descriptor.proto", ODIN_PROTO_NAME], _POOL
)

FieldOptions = _CLASSES["google.protobuf.FieldOptions"]
OdinOptions = _CLASSES["OdinOptions"]
ODIN_EXTENSION = _POOL.FindExtensionByName("odin")


def parse_field_override(options: descriptor_pb2.FieldOptions) -> Optional[model.OdinOverride]:
    """Return the ``(odin)`` option attached to a field, if any."""

    extended = FieldOptions.FromString(options.SerializeToString())
    if not extended.HasExtension(ODIN_EXTENSION):
        return None

    odin_options = extended.Extensions[ODIN_EXTENSION]
    active = odin_options.WhichOneof("override")
    if active == "external":
        return model.OdinOverride(external=odin_options.external)
    if active == "typedef":
        return model.OdinOverride(typedef=odin_options.typedef)
    return model.OdinOverride()


__all__ = [
    "FieldOptions",
    "ODIN_EXTENSION",
    "ODIN_EXTENSION_NUMBER",
    "ODIN_PROTO_NAME",
    "OdinOptions",
    "parse_field_override",
]
