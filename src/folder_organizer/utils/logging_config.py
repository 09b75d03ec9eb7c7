import logging
import sys
from pathlib import Path
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    log_level: str = "WARNING",
    log_file: Optional[str] = None,
    log_format: str = DEFAULT_FORMAT,
):
    """Configure logging for the application.

    Log records go to stderr (stdout carries the per-entry action lines) and,
    when log_file is given, to that file as well.
    """
    handlers = [logging.StreamHandler(sys.stderr)]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=log_format,
        handlers=handlers,
        force=True,
    )

    logger = logging.getLogger(__name__)
    if log_file:
        logger.info(f"Logging initialized. Log file: {log_file}")

    return logger
