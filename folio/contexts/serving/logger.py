"""
Serving context logger.

Provides logging interface for serving context with automatic [serve] prefix.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from folio.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[serve]"


def setup_serving_logger(
    log_dir: Optional[Path], root: Path, port: int, verbose: bool = False
) -> Optional[Path]:
    """Setup logger for serving context."""
    return _setup_logger(
        context_name="serve",
        log_dir=log_dir,
        extra_provenance={"Root": root, "Port": port},
        console_level="DEBUG" if verbose else "INFO",
    )


def _log_info(message: str) -> None:
    """Log info message with [serve] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [serve] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
