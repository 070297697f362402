"""
Logging setup for the wave planner.
"""

import logging
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def setup_logging(level: int = logging.INFO,
                  log_file: Optional[Union[str, Path]] = None,
                  name: str = "") -> logging.Logger:
    """
    Configure console (and optional file) logging.

    Args:
        level: Log level for the logger and its handlers
        log_file: Optional path of a log file
        name: Logger to configure (root logger by default)

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    fmt = logging.Formatter(LOG_FORMAT)

    # Avoid duplicate handlers on reruns
    if not logger.handlers:
        ch = logging.StreamHandler()
        ch.setFormatter(fmt)
        logger.addHandler(ch)

    if log_file is not None:
        log_file = Path(log_file).resolve()
        file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
        if all(Path(h.baseFilename).resolve() != log_file for h in file_handlers):
            log_file.parent.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(log_file)
            fh.setFormatter(fmt)
            logger.addHandler(fh)

    for handler in logger.handlers:
        handler.setLevel(level)

    return logger
