"""Errors surfaced to protoc by the Odin generator."""

from __future__ import annotations

from . import model


class GeneratorError(Exception):
    """Fatal error attributed to a line of the schema being generated.

    Raising it aborts the traversal of the current file. The plugin entry point
    reports ``str(error)`` back to protoc.
    """

    def __init__(self, line: int, message: str) -> None:
        super().__init__(line, message)
        self.line = line
        self.message = message

    def __str__(self) -> str:
        return f"line {self.line}: {self.message}"

    @classmethod
    def for_field(cls, field: model.Field, message: str) -> "GeneratorError":
        """Build an error located at *field*'s declaration.

        Only fields declared in the schema text carry a location; synthetic
        fields (map keys and values) must never be passed here.
        """

        if field.location is None:
            raise ValueError(f"Field '{field.name}' has no source location (synthetic field passed)")
        return cls(field.location.line, message)


__all__ = ["GeneratorError"]
