"""Code generation entry points for Odin sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol

from .. import model
from ..config import GeneratorConfig
from .oneof import AliasRegistry
from .renderer import CompilerVersion, OdinFileRenderer, output_filename


@dataclass(frozen=True, slots=True)
class GeneratedFile:
    """A rendered output file returned to protoc."""

    name: str
    content: str


class ITemplateRenderer(Protocol):
    """Interface implemented by renderers driven by the plugin."""

    def render(self, proto_file: model.ProtoFile) -> Iterable[GeneratedFile]:
        ...


class DefaultTemplateRenderer:
    """Render one ``<name>.pb.odin`` file per proto file."""

    def __init__(
        self,
        *,
        config: GeneratorConfig | None = None,
        compiler_version: Optional[CompilerVersion] = None,
    ) -> None:
        self._renderer = OdinFileRenderer(config=config, compiler_version=compiler_version)

    def render(self, proto_file: model.ProtoFile) -> List[GeneratedFile]:
        content = self._renderer.render(proto_file)
        return [GeneratedFile(name=output_filename(proto_file.name), content=content)]


__all__ = [
    "AliasRegistry",
    "CompilerVersion",
    "DefaultTemplateRenderer",
    "GeneratedFile",
    "ITemplateRenderer",
    "OdinFileRenderer",
    "output_filename",
]
