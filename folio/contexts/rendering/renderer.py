"""
Headless Renderer Module

Prints one served HTML page to PDF using an external headless-browser tool
(chrome-headless-render-pdf by default) with a page-number footer.
"""

import os
import re
import shlex
import subprocess
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Union

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, StrictUndefined

from folio.contexts.rendering.discovery import RenderJob
from folio.contexts.rendering.logger import _log_debug, log_render_result, log_render_start
from folio.utils.exit_codes import COMMAND_NOT_FOUND, shell_exit_code
from folio.utils.pdf_processing import looks_like_pdf, page_count

load_dotenv()

RENDER_COMMAND = os.getenv("FOLIO_RENDER_COMMAND", "npx chrome-headless-render-pdf")

TEMPLATES_PATH = Path(__file__).parent / "templates"

# Non-empty so Chrome does not print its default title/date header
HEADER_TEMPLATE = " "

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_PATH)),
    undefined=StrictUndefined,
    autoescape=False,
)


@dataclass
class RenderResult:
    """
    Result of printing one HTML file.

    Attributes:
        success: Whether the renderer exited 0 and the PDF exists
        html_path: Source HTML file
        pdf_path: Path to generated PDF (None if failed)
        returncode: Renderer exit code
        stdout: Standard output from the renderer
        stderr: Standard error from the renderer
        errors: Error lines picked out of the renderer's output
        page_count: Number of pages in generated PDF (None if not available)
        elapsed_s: Wall time of the renderer invocation
    """

    success: bool
    html_path: Path
    pdf_path: Optional[Path] = None
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""
    errors: List[str] = field(default_factory=list)
    page_count: Optional[int] = None
    elapsed_s: float = 0.0

def build_footer_template(
    font_size: str = "12px",
    color: str = "#000",
    padding_left: str = "0.65cm",
    separator: str = " / ",
) -> str:
    """
    Render the footer HTML passed to the headless browser.

    Produces a centered `.footer` block reading "<pageNumber> / <totalPages>".
    """
    template = _env.get_template("footer.html.jinja")
    return template.render(
        font_size=font_size,
        color=color,
        padding_left=padding_left,
        separator=separator,
    )

FOOTER_TEMPLATE = build_footer_template()

def _split_command(command: Union[str, Sequence[str]]) -> List[str]:
    if isinstance(command, str):
        return shlex.split(command)
    return list(command)

def build_render_command(
    url: str,
    pdf_path: Path,
    renderer_command: Union[str, Sequence[str]] = RENDER_COMMAND,
    header_template: str = HEADER_TEMPLATE,
    footer_template: str = FOOTER_TEMPLATE,
) -> List[str]:
    """
    Build the argv for one renderer invocation.

    Args:
        url: Page URL on the static server
        pdf_path: Destination PDF
        renderer_command: Renderer executable plus leading arguments
        header_template: HTML for the page header
        footer_template: HTML for the page footer

    Returns:
        Argument list suitable for subprocess.run
    """
    return _split_command(renderer_command) + [
        "--pdf",
        str(pdf_path),
        "--url",
        url,
        "--display-header-footer",
        "--header-template",
        header_template,
        "--footer-template",
        footer_template,
    ]

def _parse_renderer_output(output: str) -> List[str]:
    """
    Pick error lines out of renderer output.

    Matches thrown errors ("Error: ...") and Chrome network failures
    ("net::ERR_CONNECTION_REFUSED").
    """
    errors = []
    patterns = [
        re.compile(r"^\s*(?:\w+)?Error: (.+)$", re.MULTILINE),
        re.compile(r"(net::ERR_[A-Z_]+)"),
        re.compile(r"(ECONNREFUSED\S*)"),
    ]
    for pattern in patterns:
        for match in pattern.finditer(output):
            message = match.group(1).strip()
            if message not in errors:
                errors.append(message)
    return errors

def render_pdf(
    job: RenderJob,
    renderer_command: Union[str, Sequence[str]] = RENDER_COMMAND,
    verbose: bool = False,
) -> RenderResult:
    """
    Print one page to PDF with the headless renderer.

    Runs exactly once; there is no retry. Any existing PDF at the destination
    is removed first, so success (a zero exit code and a PDF file present
    afterwards) always means a freshly written file. A process killed by
    signal N is reported with return code 128 + N.

    Args:
        job: Page to print
        renderer_command: Renderer executable plus leading arguments
        verbose: Log the renderer's output even on success

    Returns:
        RenderResult with success status and diagnostic information
    """
    log_render_start(job.html_path, job.pdf_path, job.url)

    cmd = build_render_command(job.url, job.pdf_path, renderer_command)
    _log_debug(f"  Command: {shlex.join(cmd[:5])} ...")

    # A stale PDF would otherwise pass for this run's output
    job.pdf_path.unlink(missing_ok=True)

    start_time = time.time()
    try:
        proc = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError:
        result = RenderResult(
            success=False,
            html_path=job.html_path,
            returncode=COMMAND_NOT_FOUND,
            errors=[f"Renderer not found: {cmd[0]}"],
            elapsed_s=time.time() - start_time,
        )
        log_render_result(result, verbose=verbose)
        return result

    elapsed_s = time.time() - start_time
    errors = _parse_renderer_output(proc.stderr + "\n" + proc.stdout)
    returncode = shell_exit_code(proc.returncode)

    if returncode == 0 and not job.pdf_path.exists():
        returncode = 1
        errors.append("PDF file was not generated")
    elif returncode == 0 and not looks_like_pdf(job.pdf_path):
        returncode = 1
        errors.append(f"Output is not a PDF: {job.pdf_path}")
    elif returncode != 0 and not errors:
        errors.append(f"Renderer exited with code {returncode}")

    success = returncode == 0
    result = RenderResult(
        success=success,
        html_path=job.html_path,
        pdf_path=job.pdf_path if success else None,
        returncode=returncode,
        stdout=proc.stdout,
        stderr=proc.stderr,
        errors=[] if success else errors,
        page_count=page_count(job.pdf_path) if success else None,
        elapsed_s=elapsed_s,
    )
    log_render_result(result, verbose=verbose)
    return result
