import logging
from pathlib import Path
from typing import List, Optional

from .descriptor_loader import load_descriptor_file
from .module_loader import load_module_types
from .source_classifier import DESCRIPTOR_FILE, classify
from ...config.options import ReflectionSettings
from ...models.schema import TypeDescriptor

logger = logging.getLogger(__name__)

def load_types(module_path: str, settings: Optional[ReflectionSettings] = None) -> List[TypeDescriptor]:
    """
    Entry point for the upstream side of the pipeline: returns every type
    found at ``module_path`` (eligible or not) in declaration order.
    """
    kind, signals = classify(module_path)
    logger.info("Loading types from %s (%s, %s)", module_path, kind, ",".join(signals))
    if kind == DESCRIPTOR_FILE:
        return load_descriptor_file(Path(module_path), settings)
    return load_module_types(module_path)
