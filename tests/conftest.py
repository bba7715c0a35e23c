"""Shared fixtures: a build directory of pages and a stand-in headless renderer."""

import socket
import sys
from pathlib import Path

import pytest
from loguru import logger

FAIL_MARKER = "RENDER-FAIL"

# Fetches --url like the real renderer would, then writes a one-page PDF to --pdf.
# Pages containing FAIL_MARKER make it exit 3, like a crashed browser tab.
FAKE_RENDERER = f'''
import sys
import urllib.request

from PyPDF2 import PdfWriter

args = sys.argv[1:]
pdf_path = args[args.index("--pdf") + 1]
url = args[args.index("--url") + 1]
assert "--display-header-footer" in args
assert "pageNumber" in args[args.index("--footer-template") + 1]

try:
    with urllib.request.urlopen(url, timeout=5) as response:
        body = response.read().decode("utf-8")
except OSError as e:
    print(f"Error: Failed to load {{url}}: {{e}}", file=sys.stderr)
    sys.exit(2)

if "{FAIL_MARKER}" in body:
    print("Error: Page crashed!", file=sys.stderr)
    sys.exit(3)

writer = PdfWriter()
writer.add_blank_page(width=595, height=842)
with open(pdf_path, "wb") as f:
    writer.write(f)
print(f"Saved {{pdf_path}}")
'''

# Exits 0 without writing anything
SILENT_RENDERER = "import sys\nsys.exit(0)\n"


def _write_page(path: Path, title: str, body: str = "") -> Path:
    path.write_text(f"<html><head><title>{title}</title></head><body>{body}</body></html>")
    return path


@pytest.fixture(autouse=True)
def _reset_logger():
    yield
    logger.remove()


@pytest.fixture
def build_dir(tmp_path):
    """tmp_path/build with a.html and b.html."""
    directory = tmp_path / "build"
    directory.mkdir()
    _write_page(directory / "a.html", "A")
    _write_page(directory / "b.html", "B")
    return directory


@pytest.fixture
def write_page():
    return _write_page


@pytest.fixture
def fake_renderer(tmp_path):
    """argv prefix for a renderer that fetches the page and writes a real PDF."""
    script = tmp_path / "fake_renderer.py"
    script.write_text(FAKE_RENDERER)
    return [sys.executable, str(script)]


@pytest.fixture
def silent_renderer(tmp_path):
    """argv prefix for a renderer that succeeds without producing a PDF."""
    script = tmp_path / "silent_renderer.py"
    script.write_text(SILENT_RENDERER)
    return [sys.executable, str(script)]


@pytest.fixture
def free_port():
    """A port nothing is listening on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.fixture
def fail_marker():
    """Page content that makes the stand-in renderer crash."""
    return FAIL_MARKER
