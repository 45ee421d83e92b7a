import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

def setup_logger(log_path: Optional[Path] = None, level: str = "INFO", quiet: bool = False) -> logging.Logger:
    """
    Configure the package logger. Library modules log through child loggers
    (``domain_model_generator.core...``) and reach these handlers by
    propagation.
    """
    logger = logging.getLogger("domain_model_generator")
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    logger.handlers.clear()
    logger.propagate = False

    fmt = logging.Formatter(LOG_FORMAT)
    if not quiet:
        sh = logging.StreamHandler()
        sh.setFormatter(fmt)
        logger.addHandler(sh)

    if log_path:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_path), encoding="utf-8")
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    return logger
