import logging
from typing import Dict, List

from ..errors import MalformedTypeError
from ...models.schema import CLASS, ENUM, Attribute, Member, TypeDescriptor

logger = logging.getLogger(__name__)


def iter_hierarchy(t: TypeDescriptor):
    """Yield the type and then each ancestor, most-derived first."""
    visited = set()
    cur = t
    while cur is not None:
        if cur in visited:
            raise MalformedTypeError(f"Cyclic base chain detected at {cur.full_name} (starting from {t.full_name})")
        visited.add(cur)
        yield cur
        cur = cur.base


def _to_attribute(m: Member) -> Attribute:
    return Attribute(name=m.name, type_name=m.type_ref.display(), type_ref=m.type_ref)


def collect_attributes(t: TypeDescriptor) -> List[Attribute]:
    """
    Ordered, name-deduplicated attributes of an eligible type.

    Enums expose one attribute per enumerant. Classes expose their own members
    followed by inherited ones; a name declared at several levels keeps only
    its most-derived declaration.
    """
    if t.kind == ENUM:
        return [_to_attribute(m) for m in t.members]
    if t.kind != CLASS:
        raise MalformedTypeError(f"Unknown type kind {t.kind!r} for {t.full_name}")

    declared: Dict[str, Member] = {}
    for level in iter_hierarchy(t):
        for m in level.members:
            if m.name in declared:
                winner = declared[m.name]
                if not winner.hides_base:
                    logger.debug("%s.%s shadows an inherited member without hides_base", t.full_name, m.name)
                continue
            declared[m.name] = m
    return [_to_attribute(m) for m in declared.values()]
