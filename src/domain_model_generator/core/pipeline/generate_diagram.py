from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any

from ..discovery.type_loader import load_types
from ..dependency.graph import ModelReflector
from ...config.options import Options
from ...models.schema import Graph, graph_to_dict
from ...reporting.render import write_diagram
from ...runtime.paths import module_stem


def _write_json(path: Path, obj: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj, indent=2, ensure_ascii=False), encoding="utf-8")


def generate_diagram(
    options: Options,
    log: Any | None = None,
    json_artifact: str | None = None,
) -> Graph:
    t0 = time.time()

    # 1) load type descriptors
    types = load_types(options.module_path, options.reflection)
    if log:
        log.info("Loaded %d types from %s", len(types), options.module_path)

    # 2) reflect into a graph
    graph = ModelReflector(options, log=log).reflect_types(types)
    if log:
        skipped = len(types) - len(graph.nodes)
        log.info("Graph has %d nodes (%d types skipped) and %d edges", len(graph.nodes), skipped, len(graph.edges))

    # 3) diagram
    title = module_stem(options.module_path)
    out_path = write_diagram(graph, options.generate_options, title=title)
    if log:
        log.info("Diagram written: %s", str(out_path))

    # 4) optional JSON artifact
    if json_artifact:
        _write_json(Path(json_artifact), graph_to_dict(graph))
        if log:
            log.info("Graph artifact written: %s", json_artifact)

    if log:
        log.debug("Elapsed %.2fs", time.time() - t0)
    return graph
