import logging
from typing import Any, Iterable, Optional

from ..reflection.attribute_collector import collect_attributes
from ..reflection.reference_resolver import ReferenceResolver
from ..reflection.type_filter import eligible_types
from ...config.options import Options, ReflectionSettings
from ...models.schema import DIRECT, Edge, Graph, Node, TypeDescriptor

logger = logging.getLogger(__name__)

def ensure_node(g: Graph, t: TypeDescriptor) -> Node:
    node = g.node_for(t)
    if node is None:
        node = g.add_node(Node(descriptor=t, name=t.name, kind=t.kind))
    return node

def add_edge(g: Graph, src: Node, dst: Node, mode: str = DIRECT, via: Optional[str] = None, seen: Optional[set] = None) -> bool:
    edge = Edge(src=src, dst=dst, mode=mode, via=via)
    if seen is not None:
        if edge.key in seen:
            return False
        seen.add(edge.key)
    g.edges.append(edge)
    return True


class ModelReflector:
    """
    Turns a sequence of type descriptors into a diagram graph.

    Node order follows the first eligible appearance in the input. Edges are
    appended while walking nodes and their attributes in that order; the edge
    set and every edge's direction do not depend on input order.

    Policy: one edge per (src, dst) pair; self-loops only when
    ``include_self_references`` is set.
    """

    def __init__(self, options: Optional[Options] = None, settings: Optional[ReflectionSettings] = None, log: Any = None):
        if settings is None:
            settings = options.reflection if options is not None else ReflectionSettings()
        self.options = options
        self.settings = settings
        self.log = log or logger

    def reflect_types(self, types: Iterable[TypeDescriptor]) -> Graph:
        g = Graph()

        eligible = eligible_types(types)
        for t in eligible:
            ensure_node(g, t)

        for t in eligible:
            g.node_for(t).attributes = collect_attributes(t)

        resolver = ReferenceResolver(eligible, self.settings)
        seen = set()
        for t in eligible:
            src = g.node_for(t)
            for attr in src.attributes:
                hit = resolver.resolve(t, attr)
                if hit is None:
                    continue
                target, mode = hit
                if target is t and not self.settings.include_self_references:
                    continue
                add_edge(g, src, g.node_for(target), mode=mode, via=attr.name, seen=seen)

        self.log.debug("Reflected %d nodes and %d edges", len(g.nodes), len(g.edges))
        return g


def reflect_types(types: Iterable[TypeDescriptor], settings: Optional[ReflectionSettings] = None) -> Graph:
    return ModelReflector(settings=settings).reflect_types(types)
