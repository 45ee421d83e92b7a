from pathlib import Path
from typing import List, Tuple

DESCRIPTOR_FILE = "descriptor_file"
PYTHON_FILE = "python_file"
PYTHON_MODULE = "python_module"

def classify(module_path: str) -> Tuple[str, List[str]]:
    """
    Decide how a module path is loaded. Returns the source kind and the
    signals that decided it.
    """
    p = Path(module_path)
    ext = p.suffix.lower()

    # by extension
    mapping = {
        ".yml": DESCRIPTOR_FILE,
        ".yaml": DESCRIPTOR_FILE,
        ".json": DESCRIPTOR_FILE,
        ".py": PYTHON_FILE,
    }
    if ext in mapping:
        return mapping[ext], [f"ext:{ext}"]

    return PYTHON_MODULE, ["sig:dotted-name"]
