from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Optional, Tuple

from ...config.options import ReflectionSettings
from ...models.schema import (
    DECLARED,
    DIRECT,
    FUNCTION,
    GENERIC,
    INDIRECT,
    PRIMITIVE,
    Attribute,
    TypeDescriptor,
    TypeRef,
)

logger = logging.getLogger(__name__)

_SNAKE_PART = re.compile(r"[A-Za-z0-9]+")


def snake_to_pascal(name: str) -> str:
    return "".join(p[:1].upper() + p[1:] for p in _SNAKE_PART.findall(name))


def match_foreign_key_name(
    attr_name: str,
    names: Dict[str, List[TypeDescriptor]],
    suffix: str = "Id",
    snake_case: bool = False,
) -> Optional[TypeDescriptor]:
    """
    Naming-convention heuristic: ``CustomerId`` points at a type named
    ``Customer``.

    The trailing ``suffix`` is matched case-sensitively and the remaining stem
    must equal a candidate name exactly. With ``snake_case`` enabled,
    ``customer_id`` is also accepted and its stem is PascalCased first.

    This is a guess, not a type fact: it can miss keys that do not follow the
    convention and it can link unrelated types that happen to share a name.
    A stem shared by several candidates is ambiguous and never matches.
    """
    stems: List[str] = []
    if suffix and attr_name.endswith(suffix) and len(attr_name) > len(suffix):
        stems.append(attr_name[: -len(suffix)])
    if snake_case and attr_name.lower().endswith("_id") and len(attr_name) > 3:
        stems.append(snake_to_pascal(attr_name[:-3]))

    for stem in stems:
        hits = names.get(stem) or []
        if len(hits) == 1:
            return hits[0]
        if len(hits) > 1:
            logger.debug("Ambiguous key name %s: %d types named %s", attr_name, len(hits), stem)
    return None


class ReferenceResolver:
    """
    Decides whether an attribute refers to another eligible type.

    Only the attribute's own declared type is inspected; the target's members
    are never visited, so self-referencing or mutually-referencing types
    resolve in constant time.
    """

    def __init__(self, eligible: Iterable[TypeDescriptor], settings: Optional[ReflectionSettings] = None):
        self.settings = settings or ReflectionSettings()
        self._eligible = set()
        self._by_name: Dict[str, List[TypeDescriptor]] = {}
        for t in eligible:
            if t in self._eligible:
                continue
            self._eligible.add(t)
            self._by_name.setdefault(t.name, []).append(t)
        self._identifier_types = set(self.settings.identifier_types)
        self._function_wrappers = set(self.settings.function_wrappers)

    def _is_function(self, ref: TypeRef) -> bool:
        return ref.kind == FUNCTION or (ref.kind != DECLARED and ref.name in self._function_wrappers)

    def direct_target(self, ref: Optional[TypeRef]) -> Optional[TypeDescriptor]:
        if ref is None or self._is_function(ref):
            return None
        if ref.kind == DECLARED:
            return ref.declared if ref.declared in self._eligible else None
        if ref.kind == GENERIC:
            # one level only: List[Order] matches, List[List[Order]] does not
            for arg in ref.arguments:
                if arg.kind == DECLARED and arg.declared in self._eligible:
                    return arg.declared
        return None

    def indirect_target(self, attr: Attribute) -> Optional[TypeDescriptor]:
        ref = attr.type_ref
        if ref is None or ref.kind != PRIMITIVE or ref.arguments:
            return None
        if ref.name not in self._identifier_types:
            return None
        return match_foreign_key_name(
            attr.name,
            self._by_name,
            suffix=self.settings.id_suffix,
            snake_case=self.settings.snake_case_keys,
        )

    def resolve(self, owner: TypeDescriptor, attr: Attribute) -> Optional[Tuple[TypeDescriptor, str]]:
        """Return ``(target, mode)`` or None. Self references are returned as-is."""
        target = self.direct_target(attr.type_ref)
        if target is not None:
            return target, DIRECT
        target = self.indirect_target(attr)
        if target is not None:
            logger.debug("%s.%s inferred as key of %s", owner.full_name, attr.name, target.full_name)
            return target, INDIRECT
        return None

    def resolve_reference(self, owner: TypeDescriptor, attr: Attribute) -> Optional[TypeDescriptor]:
        hit = self.resolve(owner, attr)
        return hit[0] if hit else None
