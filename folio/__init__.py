"""
FOLIO - render a build directory of HTML pages to PDF

Sequences three external collaborators: a build command that generates HTML,
a static file server that exposes the build directory over HTTP, and a
headless-browser renderer that prints each page to a sibling PDF.

Architecture:
- Building Context: Runs the external build command
- Serving Context: Static HTTP server over the working directory
- Rendering Context: HTML discovery, PDF cleanup, per-file rendering
"""

__version__ = "0.1.0"
