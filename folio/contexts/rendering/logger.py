"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from folio.utils.logger import setup_logger as _setup_logger
from folio.utils.timestamp import format_elapsed

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(
    log_dir: Optional[Path], renderer_command: str, verbose: bool = False
) -> Optional[Path]:
    """
    Setup logger for rendering context.

    Args:
        log_dir: Directory for this rendering session (None = console only)
        renderer_command: Headless renderer invocation, recorded in provenance
        verbose: Echo DEBUG messages to the console

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={"Renderer": renderer_command},
        console_level="DEBUG" if verbose else "INFO",
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_render_start(html_path: Path, pdf_path: Path, url: str) -> None:
    """Log start of a single render."""
    _log_info(f"Generating {pdf_path} from {html_path}")
    _log_debug(f"  URL: {url}")


def log_render_result(result, verbose: bool = False) -> None:  # RenderResult
    """
    Log a single render result with diagnostics.

    On failure the renderer's own output is written raw so the operator sees
    exactly what the tool printed.
    """
    elapsed = format_elapsed(result.elapsed_s)
    if result.success:
        pages = f"{result.page_count} pages" if result.page_count is not None else "? pages"
        _log_success(f"{result.pdf_path.name}: {pages} ({elapsed})")
    else:
        _log_error(f"{result.html_path.name}: renderer exited {result.returncode} ({elapsed})")
        for i, err in enumerate(result.errors[:5], 1):
            _log_error(f"  Error {i}: {err}")
        if len(result.errors) > 5:
            _log_error(f"  ... and {len(result.errors) - 5} more errors")

    if verbose or not result.success:
        if result.stdout:
            logger.opt(raw=True).debug(
                f"\n{'=' * 80}\nRENDERER STDOUT:\n{'=' * 80}\n{result.stdout}\n"
            )
        if result.stderr:
            logger.opt(raw=True).error(
                f"\n{'=' * 80}\nRENDERER STDERR:\n{'=' * 80}\n{result.stderr}\n"
            )


def log_pass_summary(pass_result) -> None:  # RenderPassResult
    """Log the outcome of a whole render pass."""
    total = len(pass_result.jobs)
    rendered = sum(1 for r in pass_result.results if r.success)

    if pass_result.success:
        _log_success(f"Render pass complete: {rendered}/{total} PDFs generated")
        return

    _log_error(f"Render pass aborted: {rendered}/{total} PDFs generated")
    if pass_result.failed is not None:
        _log_error(f"  Failed on: {pass_result.failed.html_path}")
    for job in pass_result.skipped:
        _log_warning(f"  Not rendered: {job.html_path}")
