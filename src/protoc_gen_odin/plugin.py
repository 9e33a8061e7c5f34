"""Protocol Buffers compiler plugin entry point for protoc-gen-odin."""
from __future__ import annotations

import logging
import sys
from typing import Iterable

from google.protobuf.compiler import plugin_pb2

from .codegen import CompilerVersion, DefaultTemplateRenderer, GeneratedFile, ITemplateRenderer
from .config import GeneratorConfig
from .descriptor_loader import DescriptorLoader
from .errors import GeneratorError

logger = logging.getLogger(__name__)


def _compiler_version(request: plugin_pb2.CodeGeneratorRequest) -> CompilerVersion:
    if not request.HasField("compiler_version"):
        return CompilerVersion()
    version = request.compiler_version
    return CompilerVersion(major=version.major, minor=version.minor, patch=version.patch)


def generate_code(
    request: plugin_pb2.CodeGeneratorRequest,
    *,
    renderer: ITemplateRenderer | None = None,
) -> plugin_pb2.CodeGeneratorResponse:
    """Run the Odin pipeline and return a populated response message.

    The first :class:`GeneratorError` stops generation; the response then
    carries the error and no files.
    """

    response = plugin_pb2.CodeGeneratorResponse()
    response.supported_features = plugin_pb2.CodeGeneratorResponse.FEATURE_PROTO3_OPTIONAL

    try:
        config = GeneratorConfig.from_parameter_string(request.parameter)
    except ValueError as exc:
        response.error = f"Invalid configuration: {exc}"
        return response
    config.apply_logging()

    loader = DescriptorLoader(request)
    loader.load()

    files_to_generate = loader.files_to_generate
    if not files_to_generate:
        files_to_generate = list(loader.files.keys())

    renderer = renderer or DefaultTemplateRenderer(
        config=config,
        compiler_version=_compiler_version(request),
    )

    for file_name in files_to_generate:
        proto_file = loader.get_file(file_name)
        try:
            generated_files: Iterable[GeneratedFile] = list(renderer.render(proto_file))
        except GeneratorError as exc:
            logger.debug("Generation of %s failed: %s", file_name, exc)
            del response.file[:]
            response.error = f"{file_name}: {exc}"
            return response
        for generated in generated_files:
            response_file = response.file.add()
            response_file.name = generated.name
            response_file.content = generated.content

    return response


def main() -> None:
    """Execute the protoc plugin workflow."""

    logging.basicConfig(stream=sys.stderr, level=logging.WARNING)

    request_payload = sys.stdin.buffer.read()

    request = plugin_pb2.CodeGeneratorRequest()
    if request_payload:
        request.ParseFromString(request_payload)

    response = generate_code(request)
    sys.stdout.buffer.write(response.SerializeToString())


if __name__ == "__main__":  # pragma: no cover - convenience execution entry.
    main()
