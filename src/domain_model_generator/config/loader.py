import yaml
from pathlib import Path
from typing import Any, Dict, Optional

from .options import (
    DIAGRAM_TYPES,
    OUTPUT_FORMATS,
    GenerateOptions,
    Options,
    ReflectionSettings,
)
from ..core.errors import UnsupportedOptionError
from ..runtime.paths import default_output_path

def load_yaml(path: Path) -> Dict[str,Any]:
    return yaml.safe_load(path.read_text(encoding="utf-8")) or {}

def load_defaults(pkg_root: Path) -> Dict[str,Any]:
    return load_yaml(pkg_root / "config" / "defaults.yml")

def build_options(module_path: str, defaults: Dict[str,Any], overrides: Optional[Dict[str,Any]] = None) -> Options:
    """
    Merge CLI overrides (None values are ignored) on top of the YAML defaults.
    """
    merged = dict(defaults or {})
    for k, v in (overrides or {}).items():
        if v is not None:
            merged[k] = v

    diagram_type = merged.get("diagram_type") or "class"
    output_format = merged.get("output_format") or "mermaid"
    if diagram_type not in DIAGRAM_TYPES:
        raise UnsupportedOptionError(f"Unknown diagram type: {diagram_type} (expected one of {', '.join(DIAGRAM_TYPES)})")
    if output_format not in OUTPUT_FORMATS:
        raise UnsupportedOptionError(f"Unknown output format: {output_format} (expected one of {', '.join(OUTPUT_FORMATS)})")

    reflection = ReflectionSettings()
    reflection = ReflectionSettings(
        identifier_types=list(merged.get("identifier_types") or reflection.identifier_types),
        id_suffix=merged.get("id_suffix") or reflection.id_suffix,
        snake_case_keys=bool(merged.get("snake_case_keys", False)),
        include_self_references=bool(merged.get("include_self_references", False)),
        function_wrappers=list(merged.get("function_wrappers") or reflection.function_wrappers),
    )

    return Options(
        module_path=module_path,
        generate_options=GenerateOptions(
            output_path=merged.get("output") or default_output_path(module_path, output_format),
            diagram_type=diagram_type,
            output_format=output_format,
        ),
        reflection=reflection,
        log_level=merged.get("log_level"),
    )
