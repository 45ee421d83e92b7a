from __future__ import annotations

import abc
import collections.abc
import dataclasses
import enum
import importlib
import importlib.util
import inspect
import logging
import sys
import types
import typing
from pathlib import Path
from types import ModuleType
from typing import Any, Dict, List, Optional

from ..errors import TypeLoadError
from ...models.schema import (
    CLASS,
    DECLARED,
    ENUM,
    FUNCTION,
    GENERIC,
    PRIMITIVE,
    Member,
    TypeDescriptor,
    TypeRef,
)

logger = logging.getLogger(__name__)

# bases that never contribute members of their own
_STOP_BASES = (object, abc.ABC, enum.Enum, enum.IntEnum, enum.Flag, typing.Generic)


def import_module_path(module_path: str) -> ModuleType:
    """Import ``pkg.module`` by name or ``path/to/module.py`` by file location."""
    try:
        if module_path.endswith(".py"):
            p = Path(module_path).resolve()
            if not p.is_file():
                raise TypeLoadError(f"Module file does not exist: {module_path}")
            name = f"_domain_model_{p.stem}"
            spec = importlib.util.spec_from_file_location(name, p)
            if spec is None or spec.loader is None:
                raise TypeLoadError(f"Cannot load module from {module_path}")
            module = importlib.util.module_from_spec(spec)
            # dataclasses and get_type_hints look the module up by name
            sys.modules[name] = module
            spec.loader.exec_module(module)
            return module
        return importlib.import_module(module_path)
    except TypeLoadError:
        raise
    except Exception as e:
        raise TypeLoadError(f"Cannot import {module_path}: {e}") from e


def _is_anonymous(cls: type) -> bool:
    return "<locals>" in cls.__qualname__ or not cls.__name__.isidentifier()


def _is_public(cls: type, module: ModuleType) -> bool:
    parts = cls.__qualname__.split(".")
    if any(p.startswith("_") for p in parts):
        return False
    exported = getattr(module, "__all__", None)
    if exported is not None and parts[0] not in exported:
        return False
    return True


def _is_class_level(ann: Any) -> bool:
    """ClassVar and InitVar annotations do not describe instance attributes."""
    if isinstance(ann, str):
        head = ann.split("[", 1)[0].strip()
        return head.rsplit(".", 1)[-1] in ("ClassVar", "InitVar")
    if ann is typing.ClassVar or typing.get_origin(ann) is typing.ClassVar:
        return True
    return ann is dataclasses.InitVar or isinstance(ann, dataclasses.InitVar)


def _discover_classes(module: ModuleType) -> List[type]:
    """Classes defined in the module, in definition order, nested ones included."""
    found: List[type] = []
    seen = set()

    def visit(namespace: Dict[str, Any]):
        for value in list(namespace.values()):
            if not inspect.isclass(value) or value in seen:
                continue
            if value.__module__ != module.__name__:
                continue
            seen.add(value)
            found.append(value)
            visit(vars(value))

    visit(vars(module))
    return found


class _Introspector:
    def __init__(self, module: ModuleType):
        self.module = module
        self.descriptors: Dict[type, TypeDescriptor] = {}
        self._filled = set()

    def descriptor_for(self, cls: type) -> TypeDescriptor:
        t = self.descriptors.get(cls)
        if t is None:
            t = TypeDescriptor(
                name=cls.__name__,
                kind=ENUM if issubclass(cls, enum.Enum) else CLASS,
                is_public=_is_public(cls, self.module),
                is_nested="." in cls.__qualname__ and "<locals>" not in cls.__qualname__,
                is_anonymous=_is_anonymous(cls),
                namespace=cls.__module__,
            )
            self.descriptors[cls] = t
        return t

    def _base_of(self, cls: type) -> Optional[type]:
        for b in cls.__bases__:
            if b in _STOP_BASES or b.__module__ == "typing":
                continue
            return b
        return None

    def _evaluate(self, cls: type, ann: Any) -> Any:
        """Resolve one string annotation in the defining module; unresolvable ones stay strings."""
        if not isinstance(ann, str):
            return ann
        module = sys.modules.get(cls.__module__, self.module)
        try:
            return eval(ann, dict(vars(module)), dict(vars(cls)))
        except Exception as e:
            logger.debug("Cannot resolve %s annotation %r (%s)", cls.__qualname__, ann, e)
            return ann

    def _own_annotations(self, cls: type) -> Dict[str, Any]:
        raw = inspect.get_annotations(cls)
        try:
            # every class in the MRO resolves against its own module
            hints = typing.get_type_hints(cls)
        except Exception as e:
            logger.debug("get_type_hints failed for %s (%s); resolving members one by one", cls.__qualname__, e)
            hints = {name: self._evaluate(cls, ann) for name, ann in raw.items()}
        out: Dict[str, Any] = {}
        for name, ann in raw.items():
            hint = hints.get(name, ann)
            if name.startswith("_") or _is_class_level(hint):
                continue
            out[name] = hint
        return out

    def _properties(self, cls: type) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for name, value in cls.__dict__.items():
            if name.startswith("_") or not isinstance(value, property) or value.fget is None:
                continue
            try:
                hints = typing.get_type_hints(value.fget)
            except Exception:
                hints = getattr(value.fget, "__annotations__", {})
            out[name] = hints.get("return", Any)
        return out

    def to_type_ref(self, ann: Any) -> TypeRef:
        if isinstance(ann, str):
            target = getattr(self.module, ann, None)
            if inspect.isclass(target):
                return self.to_type_ref(target)
            return TypeRef(name=ann)
        if isinstance(ann, typing.ForwardRef):
            return self.to_type_ref(ann.__forward_arg__)

        origin = typing.get_origin(ann)
        if origin is not None:
            if origin is collections.abc.Callable:
                return TypeRef(name="Callable", kind=FUNCTION)
            args = [a for a in typing.get_args(ann) if a is not type(None) and a is not Ellipsis]
            name = getattr(origin, "__name__", None) or getattr(ann, "_name", None) or str(origin)
            if origin is typing.Union or origin is types.UnionType:
                name = "Optional" if len(args) == 1 else "Union"
            return TypeRef(name=name, kind=GENERIC, arguments=[self.to_type_ref(a) for a in args])

        if inspect.isclass(ann):
            if ann in self.descriptors:
                return TypeRef(name=ann.__name__, kind=DECLARED, declared=self.descriptors[ann])
            return TypeRef(name=ann.__name__)
        if ann is Any:
            return TypeRef(name="Any")
        return TypeRef(name=getattr(ann, "__name__", None) or str(ann), kind=PRIMITIVE)

    def fill(self, cls: type) -> None:
        t = self.descriptor_for(cls)
        if cls in self._filled:
            return
        self._filled.add(cls)
        if t.kind == ENUM:
            t.members = [Member(name=m.name, type_ref=TypeRef(name=type(m.value).__name__)) for m in cls]
            return

        base = self._base_of(cls)
        inherited = set()
        if base is not None:
            t.base = self.descriptor_for(base)
            self.fill(base)
            for b in base.__mro__:
                inherited.update(inspect.get_annotations(b))
                inherited.update(n for n, v in b.__dict__.items() if isinstance(v, property))

        members = dict(self._own_annotations(cls))
        for name, ann in self._properties(cls).items():
            members.setdefault(name, ann)
        for name, ann in members.items():
            t.members.append(Member(name=name, type_ref=self.to_type_ref(ann), hides_base=name in inherited))


def descriptors_from_module(module: ModuleType) -> List[TypeDescriptor]:
    classes = _discover_classes(module)
    intro = _Introspector(module)
    # register everything first so members can point at later classes
    for cls in classes:
        intro.descriptor_for(cls)
    for cls in classes:
        intro.fill(cls)
    logger.debug("Introspected %d classes from %s", len(classes), module.__name__)
    return [intro.descriptors[cls] for cls in classes]


def load_module_types(module_path: str) -> List[TypeDescriptor]:
    return descriptors_from_module(import_module_path(module_path))
