from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..config.options import DIAGRAM_TYPES, OUTPUT_FORMATS, GenerateOptions
from ..core.errors import UnsupportedOptionError
from ..models.schema import FUNCTION, Attribute, Graph, TypeRef, graph_to_dict, safe_id

_TEMPLATES = {"class": "class_diagram.mmd.j2", "er": "er_diagram.mmd.j2"}
_NON_WORD = re.compile(r"\W+")


def mermaid_id(name: str) -> str:
    return safe_id(name)


def _ref_to_mermaid(ref: TypeRef) -> str:
    base = ref.declared.name if ref.declared is not None else ref.name
    # parameter lists of callables have no Mermaid spelling
    if ref.kind == FUNCTION or not ref.arguments:
        return base or "?"
    args = ",".join(_ref_to_mermaid(a) for a in ref.arguments)
    return f"{base}~{args}~" if base else args


def mermaid_type(value) -> str:
    """Mermaid spelling of a type: ``List~int~``, ``Dictionary~string,Order~``."""
    if isinstance(value, Attribute):
        if value.type_ref is not None:
            return _ref_to_mermaid(value.type_ref)
        value = value.type_name
    if isinstance(value, TypeRef):
        return _ref_to_mermaid(value)
    return str(value).replace(" ", "").replace("[", "~").replace("]", "~")


def er_type(type_name: str) -> str:
    return _NON_WORD.sub("_", type_name).strip("_") or "unknown"


def _environment() -> Environment:
    templates_dir = Path(__file__).parent / "templates"
    # Mermaid is plain text; HTML escaping would mangle <<enumeration>>
    env = Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )
    env.filters["mermaid_id"] = mermaid_id
    env.filters["mermaid_type"] = mermaid_type
    env.filters["er_type"] = er_type
    return env


def render_mermaid(graph: Graph, diagram_type: str = "class") -> str:
    if diagram_type not in DIAGRAM_TYPES:
        raise UnsupportedOptionError(f"Unknown diagram type: {diagram_type}")
    tpl = _environment().get_template(_TEMPLATES[diagram_type])
    return tpl.render(nodes=graph.nodes, edges=graph.edges).rstrip() + "\n"


def render_diagram(graph: Graph, generate_options: GenerateOptions, title: str = "Domain model") -> str:
    """
    Render the graph as text in the requested output format.

    Args:
        graph: Reflected graph
        generate_options: Diagram type and output format
        title: Heading used by the markdown format
    """
    fmt = generate_options.output_format
    if fmt not in OUTPUT_FORMATS:
        raise UnsupportedOptionError(f"Unknown output format: {fmt}")
    if fmt == "json":
        payload: Dict[str, Any] = graph_to_dict(graph)
        payload["diagram_type"] = generate_options.diagram_type
        return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"

    diagram = render_mermaid(graph, generate_options.diagram_type)
    if fmt == "markdown":
        tpl = _environment().get_template("markdown.md.j2")
        return tpl.render(title=title, diagram=diagram.rstrip())
    return diagram


def write_diagram(graph: Graph, generate_options: GenerateOptions, title: str = "Domain model") -> Path:
    out_path = Path(generate_options.output_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(render_diagram(graph, generate_options, title=title), encoding="utf-8")
    return out_path
