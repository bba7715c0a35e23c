"""
Building context logger.

Provides logging interface for building context with automatic [build] prefix.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from folio.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[build]"


def setup_building_logger(log_dir: Optional[Path], build_command: str) -> Optional[Path]:
    """Setup logger for building context."""
    return _setup_logger(
        context_name="build",
        log_dir=log_dir,
        extra_provenance={"Build command": build_command},
    )


def _log_info(message: str) -> None:
    """Log info message with [build] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [build] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [build] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")
