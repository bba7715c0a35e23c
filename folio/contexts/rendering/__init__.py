"""
Rendering Context

Responsibilities:
- Discovers HTML pages in the build directory
- Removes previously derived PDFs before each pass
- Prints each page to a sibling PDF through the headless renderer
- Reports renderer failures with diagnostic output

Owns: PDF generation, derived-PDF lifecycle
Never: Generates or modifies HTML
"""

from folio.contexts.rendering.cleanup import remove_derived_pdfs
from folio.contexts.rendering.discovery import (
    RenderJob,
    derive_pdf_path,
    derived_pdf_paths,
    discover_html_files,
    plan_render_jobs,
    source_url,
)
from folio.contexts.rendering.exceptions import ExternalToolError
from folio.contexts.rendering.pipeline import RenderPassResult, generate_pdfs
from folio.contexts.rendering.renderer import RenderResult, build_render_command, render_pdf

__all__ = [
    "ExternalToolError",
    "RenderJob",
    "RenderPassResult",
    "RenderResult",
    "build_render_command",
    "derive_pdf_path",
    "derived_pdf_paths",
    "discover_html_files",
    "generate_pdfs",
    "plan_render_jobs",
    "remove_derived_pdfs",
    "render_pdf",
    "source_url",
]
