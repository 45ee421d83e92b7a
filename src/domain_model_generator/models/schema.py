import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

CLASS = "class"
ENUM = "enum"

# TypeRef kinds
PRIMITIVE = "primitive"
DECLARED = "declared"
GENERIC = "generic"
FUNCTION = "function"

DIRECT = "direct"
INDIRECT = "indirect"

_NON_WORD = re.compile(r"\W+")


def safe_id(name: str) -> str:
    return _NON_WORD.sub("_", name).strip("_") or "_"


@dataclass(eq=False)
class TypeRef:
    name: str
    kind: str = PRIMITIVE
    declared: Optional["TypeDescriptor"] = None
    arguments: List["TypeRef"] = field(default_factory=list)

    def display(self) -> str:
        if self.kind == DECLARED and self.declared is not None:
            base = self.declared.name
        else:
            base = self.name
        if not self.arguments:
            return base
        return f"{base}[{', '.join(a.display() for a in self.arguments)}]"


@dataclass(eq=False)
class Member:
    name: str
    type_ref: TypeRef
    hides_base: bool = False


# eq=False keeps identity semantics: two descriptors sharing a name are
# still two distinct types.
@dataclass(eq=False)
class TypeDescriptor:
    name: str
    kind: str = CLASS
    is_public: bool = True
    is_nested: bool = False
    is_anonymous: bool = False
    members: List[Member] = field(default_factory=list)
    base: Optional["TypeDescriptor"] = None
    namespace: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.namespace}.{self.name}" if self.namespace else self.name

    def __repr__(self) -> str:
        return f"TypeDescriptor({self.full_name!r}, kind={self.kind!r})"


@dataclass
class Attribute:
    name: str
    type_name: str
    type_ref: Optional[TypeRef] = field(default=None, repr=False, compare=False)


@dataclass(eq=False)
class Node:
    descriptor: TypeDescriptor = field(repr=False)
    name: str
    kind: str = CLASS
    attributes: List[Attribute] = field(default_factory=list)
    # unique within one graph; renderers use it as the diagram identifier
    id: str = ""


@dataclass(frozen=True, eq=False)
class Edge:
    src: Node
    dst: Node
    mode: str = DIRECT
    via: Optional[str] = None

    @property
    def key(self):
        return (self.src, self.dst)


@dataclass
class Graph:
    nodes: List[Node] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)
    _lookup: Dict[TypeDescriptor, Node] = field(default_factory=dict, repr=False)

    def _unique_id(self, node: Node) -> str:
        taken = {n.id for n in self.nodes}
        for candidate in (safe_id(node.name), safe_id(node.descriptor.full_name)):
            if candidate not in taken:
                return candidate
        base = safe_id(node.descriptor.full_name)
        i = 2
        while f"{base}_{i}" in taken:
            i += 1
        return f"{base}_{i}"

    def add_node(self, node: Node) -> Node:
        node.id = self._unique_id(node)
        self.nodes.append(node)
        self._lookup[node.descriptor] = node
        return node

    def node_for(self, descriptor: TypeDescriptor) -> Optional[Node]:
        return self._lookup.get(descriptor)

    def __contains__(self, descriptor: object) -> bool:
        return descriptor in self._lookup


def graph_to_dict(graph: Graph) -> Dict[str, Any]:
    """JSON-friendly view of a graph; edges reference nodes by their graph id."""
    return {
        "nodes": [
            {
                "id": n.id,
                "name": n.name,
                "kind": n.kind,
                "full_name": n.descriptor.full_name,
                "attributes": [{"name": a.name, "type": a.type_name} for a in n.attributes],
            }
            for n in graph.nodes
        ],
        "edges": [
            {"src": e.src.id, "dst": e.dst.id, "mode": e.mode, "via": e.via}
            for e in graph.edges
        ],
    }
