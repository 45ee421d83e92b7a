from dataclasses import dataclass, field
from typing import List, Optional

DIAGRAM_TYPES = ("class", "er")
OUTPUT_FORMATS = ("mermaid", "markdown", "json")

FILE_EXTENSIONS = {"mermaid": ".mmd", "markdown": ".md", "json": ".json"}


@dataclass(frozen=True)
class ReflectionSettings:
    identifier_types: List[str] = field(default_factory=lambda: ["Guid", "UUID", "uuid.UUID"])
    id_suffix: str = "Id"
    snake_case_keys: bool = False
    include_self_references: bool = False
    function_wrappers: List[str] = field(default_factory=lambda: ["Callable", "Func", "Action", "Predicate"])


@dataclass(frozen=True)
class GenerateOptions:
    output_path: str
    diagram_type: str = "class"
    output_format: str = "mermaid"


@dataclass(frozen=True)
class Options:
    module_path: str
    generate_options: GenerateOptions
    reflection: ReflectionSettings = field(default_factory=ReflectionSettings)
    log_level: Optional[str] = None
