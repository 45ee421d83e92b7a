import os
import re
from pathlib import Path, PurePosixPath, PureWindowsPath

from ..config.options import FILE_EXTENSIONS

_SOURCE_SUFFIXES = (".py", ".yml", ".yaml", ".json")
_WIN_DRIVE = re.compile(r"^[A-Za-z]:\\")

def normalize_module_path(p: str) -> str:
    """Strip shell quoting and expand ``~`` for file paths; dotted names pass through."""
    if not p or not p.strip():
        raise ValueError("Module path is empty")
    raw = p.strip().strip('"').strip("'")
    if raw.lower().endswith(_SOURCE_SUFFIXES):
        return os.path.expanduser(raw)
    return raw

def module_stem(module_path: str) -> str:
    """``models/orders.py`` -> ``orders``; ``shop.domain.orders`` -> ``orders``."""
    if module_path.lower().endswith(_SOURCE_SUFFIXES):
        if _WIN_DRIVE.match(module_path) or "\\" in module_path:
            return PureWindowsPath(module_path).stem
        return PurePosixPath(module_path).stem
    return module_path.rsplit(".", 1)[-1]

def default_output_path(module_path: str, output_format: str, output_dir: str = ".") -> str:
    return str(Path(output_dir) / (module_stem(module_path) + FILE_EXTENSIONS[output_format]))
