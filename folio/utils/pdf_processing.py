"""PDF inspection helpers for rendered output."""

from pathlib import Path
from typing import Optional

from PyPDF2 import PdfReader
from PyPDF2.errors import PdfReadError


def page_count(pdf_path: Path) -> Optional[int]:
    """Get page count from PDF, or None if unreadable."""
    try:
        reader = PdfReader(str(pdf_path))
        return len(reader.pages)
    except (OSError, PdfReadError, ValueError):
        return None


def looks_like_pdf(pdf_path: Path) -> bool:
    """Check the file starts with the %PDF- magic bytes."""
    try:
        with open(pdf_path, "rb") as f:
            return f.read(5) == b"%PDF-"
    except OSError:
        return False
