from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from ..errors import TypeLoadError
from ...config.options import ReflectionSettings
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

_TOKEN_RE = re.compile(r"\s*(?:([A-Za-z_][\w.`]*)|(.))")
_CLOSERS = {"[": "]", "<": ">"}


def tokenize(expr: str) -> List[str]:
    tokens: List[str] = []
    for ident, punct in _TOKEN_RE.findall(expr):
        if ident:
            tokens.append(ident)
        elif punct and not punct.isspace():
            tokens.append(punct)
    return tokens


class _TypeExprParser:
    """
    Parses ``Name``, ``Name[Arg, ...]`` and ``Name<Arg, ...>``. A bare bracket
    group (``Callable[[bool], int]``) becomes an unnamed generic.
    """

    def __init__(self, expr: str, resolve_name):
        self.expr = expr
        self.tokens = tokenize(expr)
        self.pos = 0
        self.resolve_name = resolve_name

    def _peek(self) -> Optional[str]:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def _take(self) -> str:
        tok = self._peek()
        if tok is None:
            raise TypeLoadError(f"Unexpected end of type expression: {self.expr!r}")
        self.pos += 1
        return tok

    def parse(self) -> TypeRef:
        ref = self._parse_type()
        if self._peek() is not None:
            raise TypeLoadError(f"Unexpected {self._peek()!r} in type expression: {self.expr!r}")
        return ref

    def _parse_args(self, opener: str) -> List[TypeRef]:
        closer = _CLOSERS[opener]
        args: List[TypeRef] = []
        if self._peek() == closer:
            self._take()
            return args
        while True:
            args.append(self._parse_type())
            tok = self._take()
            if tok == closer:
                return args
            if tok != ",":
                raise TypeLoadError(f"Expected ',' or {closer!r} but got {tok!r} in type expression: {self.expr!r}")

    def _parse_type(self) -> TypeRef:
        tok = self._take()
        if tok in _CLOSERS:
            return TypeRef(name="", kind=GENERIC, arguments=self._parse_args(tok))
        if not (tok[0].isalpha() or tok[0] == "_"):
            raise TypeLoadError(f"Unexpected {tok!r} in type expression: {self.expr!r}")
        args: List[TypeRef] = []
        if self._peek() in _CLOSERS:
            args = self._parse_args(self._take())
        return self.resolve_name(tok, args)


def parse_type_expression(expr: str, declared: Dict[str, TypeDescriptor], settings: Optional[ReflectionSettings] = None) -> TypeRef:
    settings = settings or ReflectionSettings()
    wrappers = set(settings.function_wrappers)

    def resolve_name(name: str, args: List[TypeRef]) -> TypeRef:
        # generic arity markers from .NET metadata (List`1) are dropped
        name = name.split("`", 1)[0]
        if name in wrappers:
            return TypeRef(name=name, kind=FUNCTION, arguments=args)
        if name in declared and not args:
            return TypeRef(name=name, kind=DECLARED, declared=declared[name])
        if args:
            return TypeRef(name=name, kind=GENERIC, arguments=args)
        return TypeRef(name=name, kind=PRIMITIVE)

    if not isinstance(expr, str) or not expr.strip():
        raise TypeLoadError(f"Empty or invalid type expression: {expr!r}")
    return _TypeExprParser(expr, resolve_name).parse()


def _index_by_name(entries: List[Tuple[Dict[str, Any], TypeDescriptor]]) -> Dict[str, TypeDescriptor]:
    by_full: Dict[str, TypeDescriptor] = {}
    by_name: Dict[str, List[TypeDescriptor]] = {}
    for _, t in entries:
        if t.full_name in by_full:
            raise TypeLoadError(f"Duplicate type name in descriptor file: {t.full_name}")
        by_full[t.full_name] = t
        by_name.setdefault(t.name, []).append(t)
    index = dict(by_full)
    for name, hits in by_name.items():
        if len(hits) == 1:
            index.setdefault(name, hits[0])
    return index


def descriptors_from_data(data: Any, settings: Optional[ReflectionSettings] = None, source: str = "<data>") -> List[TypeDescriptor]:
    """
    Build descriptors from the ``types:`` document described in the README.
    Descriptors are created first and wired second, so members and bases may
    refer to any entry regardless of order, including the owner itself.
    """
    if not isinstance(data, dict) or not isinstance(data.get("types"), list):
        raise TypeLoadError(f"{source}: expected a mapping with a 'types' list")

    entries: List[Tuple[Dict[str, Any], TypeDescriptor]] = []
    for i, raw in enumerate(data["types"]):
        if not isinstance(raw, dict) or not raw.get("name"):
            raise TypeLoadError(f"{source}: types[{i}] needs a 'name'")
        kind = raw.get("kind", CLASS)
        if kind not in (CLASS, ENUM):
            raise TypeLoadError(f"{source}: types[{i}] has unknown kind {kind!r}")
        t = TypeDescriptor(
            name=str(raw["name"]),
            kind=kind,
            is_public=bool(raw.get("public", True)),
            is_nested=bool(raw.get("nested", False)),
            is_anonymous=bool(raw.get("anonymous", False)),
            namespace=raw.get("namespace"),
        )
        entries.append((raw, t))

    index = _index_by_name(entries)

    for raw, t in entries:
        if t.kind == ENUM:
            underlying = TypeRef(name=str(raw.get("underlying", "int")))
            t.members = [Member(name=str(v), type_ref=underlying) for v in raw.get("values") or []]
            continue

        base_name = raw.get("base")
        if base_name:
            if base_name not in index:
                raise TypeLoadError(f"{source}: {t.full_name} has unknown base {base_name!r}")
            t.base = index[base_name]

        for m in raw.get("members") or []:
            if not isinstance(m, dict) or not m.get("name") or "type" not in m:
                raise TypeLoadError(f"{source}: every member of {t.full_name} needs 'name' and 'type'")
            t.members.append(
                Member(
                    name=str(m["name"]),
                    type_ref=parse_type_expression(str(m["type"]), index, settings),
                    hides_base=bool(m.get("hides", False)),
                )
            )

    return [t for _, t in entries]


def load_descriptor_file(path: Path, settings: Optional[ReflectionSettings] = None) -> List[TypeDescriptor]:
    try:
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise TypeLoadError(f"Cannot read descriptor file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise TypeLoadError(f"Cannot parse descriptor file {path}: {e}") from e
    return descriptors_from_data(data, settings, source=str(path))
