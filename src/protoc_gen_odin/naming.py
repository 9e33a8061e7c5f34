"""Name resolution utilities used across the Odin generator."""

from __future__ import annotations

from typing import Optional


def flatten_type_name(full_name: str, package: Optional[str]) -> str:
    """Flatten a fully-qualified proto name into a single Odin identifier.

    ``pkg.Outer.Inner`` under package ``pkg`` becomes ``Outer_Inner``. Names
    outside *package* keep all of their segments. Distinct types that flatten
    to the same identifier are not detected.
    """

    name = full_name[1:] if full_name.startswith(".") else full_name
    if package and name.startswith(f"{package}."):
        name = name[len(package) + 1 :]
    return name.replace(".", "_")


def package_identifier(base: str, package: Optional[str]) -> str:
    """Return the Odin package name for a proto file in *package*."""

    if not package:
        return base
    return f"{base}_{flatten_type_name(package, None)}"


class NameResolver:
    """Resolve Odin type names relative to the package of one proto file."""

    def __init__(self, package: Optional[str]) -> None:
        self._package = package or None

    @property
    def package(self) -> Optional[str]:
        return self._package

    def resolve(self, full_name: str) -> str:
        return flatten_type_name(full_name, self._package)


__all__ = ["NameResolver", "flatten_type_name", "package_identifier"]
