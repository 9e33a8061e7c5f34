from __future__ import annotations

from protoc_gen_odin.naming import NameResolver, flatten_type_name, package_identifier


def test_flatten_type_name_strips_package_prefix() -> None:
    assert flatten_type_name("A.B.C", "A") == "B_C"
    assert flatten_type_name("A.B.C", "") == "A_B_C"
    assert flatten_type_name("A.B.C", None) == "A_B_C"


def test_flatten_type_name_keeps_foreign_packages() -> None:
    assert flatten_type_name("other.Thing", "demo") == "other_Thing"
    # Only whole segments count as a package prefix.
    assert flatten_type_name("demonstration.Thing", "demo") == "demonstration_Thing"


def test_flatten_type_name_accepts_leading_dot() -> None:
    assert flatten_type_name(".demo.Outer.Inner", "demo") == "Outer_Inner"


def test_flatten_type_name_does_not_detect_collisions() -> None:
    assert flatten_type_name("demo.A_B", "demo") == flatten_type_name("demo.A.B", "demo")


def test_package_identifier() -> None:
    assert package_identifier("proto", None) == "proto"
    assert package_identifier("proto", "") == "proto"
    assert package_identifier("proto", "example.v1") == "proto_example_v1"


def test_name_resolver_is_bound_to_package() -> None:
    resolver = NameResolver("example.v1")

    assert resolver.package == "example.v1"
    assert resolver.resolve("example.v1.Person.Attributes") == "Person_Attributes"
    assert NameResolver("").package is None
