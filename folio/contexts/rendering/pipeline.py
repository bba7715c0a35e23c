"""
Render pass orchestration.

A pass plans one job per HTML page, removes every derived PDF, then prints
each page in turn, stopping at the first failure.
"""

import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Union

from dotenv import load_dotenv

from folio.contexts.rendering.cleanup import remove_derived_pdfs
from folio.contexts.rendering.discovery import (
    BUILD_DIR,
    SERVER_HOST,
    SERVER_PORT,
    RenderJob,
    plan_render_jobs,
)
from folio.contexts.rendering.exceptions import ExternalToolError
from folio.contexts.rendering.logger import (
    _log_error,
    _log_info,
    _log_warning,
    log_pass_summary,
    setup_rendering_logger,
)
from folio.contexts.rendering.renderer import RENDER_COMMAND, RenderResult, render_pdf
from folio.contexts.serving.server import server_is_reachable
from folio.utils.exit_codes import shell_exit_code
from folio.utils.timestamp import format_elapsed, now

load_dotenv()

LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))


@dataclass
class RenderPassResult:
    """
    Outcome of one render pass.

    Attributes:
        jobs: Every page discovered for this pass
        results: Results for the pages actually attempted, in order
        removed: Derived PDFs deleted before rendering
        log_file: Session log file (None when logging to console only)
    """

    jobs: List[RenderJob] = field(default_factory=list)
    results: List[RenderResult] = field(default_factory=list)
    removed: List[Path] = field(default_factory=list)
    log_file: Optional[Path] = None

    @property
    def success(self) -> bool:
        return self.failed is None and len(self.results) == len(self.jobs)

    @property
    def failed(self) -> Optional[RenderResult]:
        """First failing render, if any."""
        return next((r for r in self.results if not r.success), None)

    @property
    def skipped(self) -> List[RenderJob]:
        """Jobs never attempted because an earlier render failed."""
        return self.jobs[len(self.results) :]

    @property
    def pdf_paths(self) -> List[Path]:
        return [r.pdf_path for r in self.results if r.success]

    @property
    def exit_code(self) -> int:
        failed = self.failed
        return shell_exit_code(failed.returncode) if failed is not None else 0

    def raise_for_status(self) -> None:
        """Raise ExternalToolError if the pass failed."""
        failed = self.failed
        if failed is not None:
            raise ExternalToolError(
                tool="renderer",
                returncode=failed.returncode,
                stderr=failed.stderr or "\n".join(failed.errors),
                target=str(failed.html_path),
            )


def generate_pdfs(
    build_dir: Path = BUILD_DIR,
    port: int = SERVER_PORT,
    host: str = SERVER_HOST,
    renderer_command: Union[str, Sequence[str]] = RENDER_COMMAND,
    server_root: Optional[Path] = None,
    log_dir: Optional[Path] = None,
    verbose: bool = False,
) -> RenderPassResult:
    """
    Regenerate every PDF in build_dir from its HTML source.

    Steps:
        1. Discover HTML pages and plan one job each
        2. Delete derived PDFs (missing ones are fine)
        3. Render sequentially, aborting on the first failure

    Jobs are planned before anything is deleted, so a build directory the
    server cannot expose fails without touching existing PDFs. Pages after a
    failure are left without PDFs and reported as skipped. Nothing is retried.

    Args:
        build_dir: Directory holding the HTML pages
        port: Static server port
        host: Static server host used in page URLs
        renderer_command: Headless renderer invocation
        server_root: Directory the static server is rooted at (default: cwd)
        log_dir: Session log directory (default: LOGS_PATH/render_<timestamp>)
        verbose: Echo debug output and renderer output

    Returns:
        RenderPassResult describing what was removed, rendered and skipped

    Raises:
        ValueError: If build_dir lies outside server_root
    """
    build_dir = Path(build_dir)
    if log_dir is None:
        log_dir = LOGS_PATH / f"render_{now()}"

    command_text = (
        renderer_command if isinstance(renderer_command, str) else " ".join(renderer_command)
    )
    log_file = setup_rendering_logger(log_dir, command_text, verbose=verbose)

    pass_result = RenderPassResult(log_file=log_file)

    try:
        pass_result.jobs = plan_render_jobs(
            build_dir, port=port, host=host, server_root=server_root
        )
    except ValueError as e:
        _log_error(f"Cannot serve {build_dir}: {e}")
        raise

    pass_result.removed = remove_derived_pdfs(build_dir)
    _log_info(f"Removed {len(pass_result.removed)} derived PDFs from {build_dir}")

    if not pass_result.jobs:
        _log_info(f"No HTML files found in {build_dir}")
        log_pass_summary(pass_result)
        return pass_result

    _log_info(f"Rendering {len(pass_result.jobs)} HTML files via http://{host}:{port}/")
    if not server_is_reachable(host, port):
        _log_warning(f"Nothing is listening on {host}:{port}; start the server first")

    start_time = time.time()
    for job in pass_result.jobs:
        result = render_pdf(job, renderer_command=renderer_command, verbose=verbose)
        pass_result.results.append(result)
        if not result.success:
            break

    _log_info(f"Elapsed: {format_elapsed(time.time() - start_time)}")
    log_pass_summary(pass_result)
    return pass_result
