"""Importable fixture module used by the module loader tests."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional


class _InternalClass:
    my_property: int


class PublicClass:
    my_property: int


class DirectReferenceToPublicClass:
    test_class1: PublicClass


class IndirectReferenceToPublicClass:
    PublicClassId: uuid.UUID


class NestingClass:
    class NestedClass:
        pass

    nested_property: NestingClass.NestedClass


class CountHolder:
    count: List[int]


class PublicEnum(Enum):
    ONE = 1
    TWO = 2
    THREE = 3


class BaseClass:
    @property
    def base_property(self) -> List[Callable[[bool], int]]:
        return []


class DerivedBaseClass(BaseClass):
    @property
    def base_property(self) -> List[Callable[[int], bool]]:
        return []


@dataclass
class Customer:
    id: uuid.UUID
    name: str


@dataclass
class OrderLine:
    sku: str
    quantity: int


@dataclass
class Order:
    customer_id: uuid.UUID
    status: PublicEnum
    lines: list[OrderLine] = field(default_factory=list)
    parent: Optional[Order] = None
    on_change: Optional[Callable[[Order], None]] = None


def _make_local():
    class LocalClass:
        value: int

    return LocalClass


LocalClass = _make_local()
Synthesized = type("<synthesized>", (), {"__module__": __name__, "__annotations__": {"a": str}})
