from typing import Iterable, List

from ...models.schema import TypeDescriptor


def is_eligible(t: TypeDescriptor) -> bool:
    """
    A type becomes a node when it is named in source, declared at top level
    and publicly visible. Classes and enums follow the same rules.
    """
    if t.is_anonymous:
        return False
    if t.is_nested:
        return False
    if not t.is_public:
        return False
    return True


def eligible_types(types: Iterable[TypeDescriptor]) -> List[TypeDescriptor]:
    # first-seen order; a descriptor listed twice yields one entry
    seen = set()
    out: List[TypeDescriptor] = []
    for t in types or []:
        if t in seen or not is_eligible(t):
            continue
        seen.add(t)
        out.append(t)
    return out
