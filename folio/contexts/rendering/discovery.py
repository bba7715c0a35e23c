"""
HTML discovery and job planning.

Maps each `<build-dir>/*.html` page to its derived PDF and to the URL the
static server exposes it at.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional
from urllib.parse import quote

from dotenv import load_dotenv

load_dotenv()

BUILD_DIR = Path(os.getenv("FOLIO_BUILD_DIR", "build"))
SERVER_PORT = int(os.getenv("FOLIO_PORT", "8888"))
SERVER_HOST = os.getenv("FOLIO_HOST", "localhost")

HTML_PATTERN = "*.html"
PDF_SUFFIX = ".pdf"


@dataclass(frozen=True)
class RenderJob:
    """
    One page to print.

    Attributes:
        html_path: Source HTML file
        pdf_path: Derived PDF written next to it
        url: Where the static server exposes the HTML file
    """

    html_path: Path
    pdf_path: Path
    url: str


def discover_html_files(build_dir: Path = BUILD_DIR) -> List[Path]:
    """
    List HTML files directly inside build_dir (non-recursive).

    Sorted for stable logs only; callers should not rely on the order.
    A missing directory yields an empty list.
    """
    build_dir = Path(build_dir)
    return sorted(p for p in build_dir.glob(HTML_PATTERN) if p.is_file())


def derive_pdf_path(html_path: Path) -> Path:
    """Same directory and stem as the HTML file, with a .pdf extension."""
    return Path(html_path).with_suffix(PDF_SUFFIX)


def derived_pdf_paths(build_dir: Path = BUILD_DIR) -> List[Path]:
    """PDF paths derived from every HTML file in build_dir."""
    return [derive_pdf_path(html) for html in discover_html_files(build_dir)]


def source_url(
    html_path: Path,
    port: int = SERVER_PORT,
    host: str = SERVER_HOST,
    server_root: Optional[Path] = None,
) -> str:
    """
    Build the URL the static server serves html_path at.

    The server is rooted at server_root (default: working directory), so the
    URL path is the HTML path relative to that root. Symlinks are not
    followed: the server serves a symlinked directory under its own name.

    Raises:
        ValueError: If html_path is not under server_root
    """
    root = Path(os.path.abspath(server_root if server_root is not None else Path.cwd()))
    page = Path(os.path.abspath(html_path))
    try:
        relative = page.relative_to(root)
    except ValueError:
        raise ValueError(f"{html_path} is outside the server root {root}") from None
    return f"http://{host}:{port}/{quote(relative.as_posix())}"


def plan_render_jobs(
    build_dir: Path = BUILD_DIR,
    port: int = SERVER_PORT,
    host: str = SERVER_HOST,
    server_root: Optional[Path] = None,
) -> List[RenderJob]:
    """One RenderJob per HTML file in build_dir."""
    return [
        RenderJob(
            html_path=html,
            pdf_path=derive_pdf_path(html),
            url=source_url(html, port=port, host=host, server_root=server_root),
        )
        for html in discover_html_files(build_dir)
    ]
