from __future__ import annotations

"""Command-line helpers for generating Odin sources from a descriptor set."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Sequence

from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2

from protoc_gen_odin.plugin import generate_code

logger = logging.getLogger(__name__)


class GeneratorErrorReport(RuntimeError):
    """Raised when the plugin pipeline reports an error for a descriptor set."""


def _build_request(
    descriptor_set: descriptor_pb2.FileDescriptorSet,
    targets: Sequence[str] | None,
    parameter: str | None,
) -> plugin_pb2.CodeGeneratorRequest:
    request = plugin_pb2.CodeGeneratorRequest()
    request.proto_file.extend(descriptor_set.file)
    if parameter:
        request.parameter = parameter

    if targets:
        request.file_to_generate.extend(targets)
    else:
        request.file_to_generate.extend(file_proto.name for file_proto in descriptor_set.file)

    return request


def generate_sources(
    descriptor_set_path: Path | str,
    targets: Sequence[str] | None,
    output_dir: Path | str,
    *,
    parameter: str | None = None,
) -> List[Path]:
    """Generate ``.pb.odin`` files for the given targets.

    Parameters
    ----------
    descriptor_set_path:
        Path to a serialized :class:`~google.protobuf.descriptor_pb2.FileDescriptorSet`.
        Build it with ``--include_source_info`` so errors can report lines.
    targets:
        Proto filenames (as understood by ``protoc``) to generate. ``None`` means "all".
    output_dir:
        Directory that will receive the generated files.
    parameter:
        Plugin parameter string, as passed through ``--odin_opt``.
    """

    descriptor_set_path = Path(descriptor_set_path)
    output_dir = Path(output_dir)

    descriptor_set = descriptor_pb2.FileDescriptorSet()
    descriptor_set.ParseFromString(descriptor_set_path.read_bytes())

    request = _build_request(descriptor_set, targets, parameter)
    response = generate_code(request)
    if response.error:
        raise GeneratorErrorReport(response.error)

    generated_paths: List[Path] = []
    for generated in response.file:
        path = output_dir / Path(generated.name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(generated.content, encoding="utf-8")
        logger.debug("Wrote %s", path)
        generated_paths.append(path)

    return generated_paths


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate .pb.odin files from a descriptor set produced by protoc."
    )
    parser.add_argument(
        "descriptor_set",
        type=Path,
        help=(
            "Path to a serialized FileDescriptorSet (output of protoc --descriptor_set_out "
            "--include_imports --include_source_info)"
        ),
    )
    parser.add_argument(
        "--proto",
        dest="protos",
        action="append",
        help=(
            "Proto file to generate (relative to the descriptor). Repeat for multiple files. "
            "Defaults to all entries in the descriptor set."
        ),
    )
    parser.add_argument(
        "--out",
        dest="output",
        required=True,
        type=Path,
        help="Directory to write the generated Odin sources to",
    )
    parser.add_argument(
        "--parameter",
        dest="parameter",
        default=None,
        help="Generator parameter string, e.g. 'base_package=pb,log_level=debug'",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point used by ``python -m protoc_gen_odin.tools.generate``."""

    logging.basicConfig(stream=sys.stderr, level=logging.WARNING)

    parser = _build_argument_parser()
    args = parser.parse_args(argv)

    try:
        generated_paths = generate_sources(
            args.descriptor_set,
            args.protos,
            args.output,
            parameter=args.parameter,
        )
    except GeneratorErrorReport as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except ValueError as exc:
        # Raised when an error needs a line number the descriptor set does not carry.
        print(
            f"error: {exc}; rebuild the descriptor set with --include_source_info",
            file=sys.stderr,
        )
        return 1

    for path in generated_paths:
        print(path)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
