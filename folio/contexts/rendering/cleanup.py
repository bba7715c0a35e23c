"""Removal of previously derived PDFs."""

from pathlib import Path
from typing import List

from folio.contexts.rendering.discovery import BUILD_DIR, derived_pdf_paths
from folio.contexts.rendering.logger import _log_debug


def remove_derived_pdfs(build_dir: Path = BUILD_DIR) -> List[Path]:
    """
    Delete every PDF derived from an HTML file in build_dir.

    Missing PDFs are skipped silently, so repeated calls are no-ops. PDFs with
    no HTML sibling are not derived and are left alone.

    Args:
        build_dir: Directory holding the HTML sources

    Returns:
        Paths that were actually removed
    """
    removed = []
    for pdf_path in derived_pdf_paths(build_dir):
        try:
            pdf_path.unlink()
        except FileNotFoundError:
            continue
        removed.append(pdf_path)
        _log_debug(f"Removed {pdf_path}")

    return removed
