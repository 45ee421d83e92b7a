"""Shared type descriptor fixtures for reflector tests."""

from pathlib import Path

import pytest

from helpers import declared

from domain_model_generator.models.schema import (
    ENUM,
    FUNCTION,
    GENERIC,
    Member,
    TypeDescriptor,
    TypeRef,
)

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir():
    return FIXTURES_DIR


@pytest.fixture
def public_class():
    return TypeDescriptor("PublicClass", members=[Member("MyProperty", TypeRef("int"))])


@pytest.fixture
def internal_class():
    return TypeDescriptor("InternalClass", is_public=False, members=[Member("MyProperty", TypeRef("int"))])


@pytest.fixture
def anonymous_type():
    return TypeDescriptor(
        "<>f__AnonymousType0",
        is_anonymous=True,
        members=[Member("A", TypeRef("string")), Member("B", TypeRef("int"))],
    )


@pytest.fixture
def direct_reference(public_class):
    return TypeDescriptor("DirectReferenceToPublicClass", members=[Member("TestClass1", declared(public_class))])


@pytest.fixture
def indirect_reference():
    return TypeDescriptor("IndirectReferenceToPublicClass", members=[Member("PublicClassId", TypeRef("Guid"))])


@pytest.fixture
def nesting_pair():
    nesting = TypeDescriptor("NestingClass")
    nested = TypeDescriptor("NestedClass", is_nested=True, namespace="NestingClass")
    nesting.members.append(Member("NestedProperty", declared(nested)))
    return nesting, nested


@pytest.fixture
def public_enum():
    return TypeDescriptor(
        "PublicEnum",
        kind=ENUM,
        members=[Member(n, TypeRef("int")) for n in ("One", "Two", "Three")],
    )


@pytest.fixture
def derived_pair():
    base = TypeDescriptor(
        "BaseClass",
        members=[
            Member(
                "BaseProperty",
                TypeRef("IReadOnlyCollection", kind=GENERIC, arguments=[TypeRef("Func", kind=FUNCTION)]),
            )
        ],
    )
    derived = TypeDescriptor(
        "DerivedBaseClass",
        base=base,
        members=[
            Member(
                "BaseProperty",
                TypeRef("IReadOnlyCollection", kind=GENERIC, arguments=[TypeRef("Predicate", kind=FUNCTION)]),
                hides_base=True,
            )
        ],
    )
    return base, derived
