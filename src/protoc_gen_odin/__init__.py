"""protoc_gen_odin package initialization."""

from __future__ import annotations

from . import model

__all__ = [
    "AliasRegistry",
    "DefaultTemplateRenderer",
    "DescriptorLoader",
    "GeneratedFile",
    "GeneratorConfig",
    "GeneratorError",
    "ITemplateRenderer",
    "NameResolver",
    "OdinFileRenderer",
    "TypeMapper",
    "generate_code",
    "model",
]


def __getattr__(name: str):
    if name == "DescriptorLoader":
        from .descriptor_loader import DescriptorLoader

        return DescriptorLoader

    if name in {
        "AliasRegistry",
        "DefaultTemplateRenderer",
        "GeneratedFile",
        "ITemplateRenderer",
        "OdinFileRenderer",
    }:
        from .codegen import (
            AliasRegistry,
            DefaultTemplateRenderer,
            GeneratedFile,
            ITemplateRenderer,
            OdinFileRenderer,
        )

        mapping = {
            "AliasRegistry": AliasRegistry,
            "DefaultTemplateRenderer": DefaultTemplateRenderer,
            "GeneratedFile": GeneratedFile,
            "ITemplateRenderer": ITemplateRenderer,
            "OdinFileRenderer": OdinFileRenderer,
        }
        return mapping[name]

    if name == "GeneratorConfig":
        from .config import GeneratorConfig

        return GeneratorConfig

    if name == "GeneratorError":
        from .errors import GeneratorError

        return GeneratorError

    if name == "NameResolver":
        from .naming import NameResolver

        return NameResolver

    if name == "TypeMapper":
        from .type_mapper import TypeMapper

        return TypeMapper

    if name == "generate_code":
        from .plugin import generate_code

        return generate_code

    raise AttributeError(name)
