"""Unit tests for the headless renderer invocation."""

import sys

import pytest

from folio.contexts.rendering.discovery import RenderJob
from folio.contexts.rendering.renderer import (
    COMMAND_NOT_FOUND,
    FOOTER_TEMPLATE,
    HEADER_TEMPLATE,
    _parse_renderer_output,
    build_footer_template,
    build_render_command,
    render_pdf,
)

EXPECTED_FOOTER = (
    '<style type="text/css">.footer{font-size:12px;width:100%;text-align:center;'
    "color:#000;padding-left:0.65cm;}</style>"
    '<div class="footer"><span class="pageNumber"></span> / '
    '<span class="totalPages"></span></div>'
)


def _script(tmp_path, name, body):
    path = tmp_path / name
    path.write_text(body)
    return [sys.executable, str(path)]


@pytest.fixture
def job(build_dir):
    html = build_dir / "a.html"
    return RenderJob(html_path=html, pdf_path=build_dir / "a.pdf", url="http://localhost:8888/build/a.html")


@pytest.mark.unit
def test_footer_template_default():
    assert FOOTER_TEMPLATE == EXPECTED_FOOTER
    assert build_footer_template() == EXPECTED_FOOTER


@pytest.mark.unit
def test_footer_template_custom_style():
    footer = build_footer_template(font_size="10px", color="#333")
    assert "font-size:10px;" in footer
    assert "color:#333;" in footer
    assert '<span class="pageNumber"></span> / <span class="totalPages"></span>' in footer


@pytest.mark.unit
def test_header_template_is_blank():
    assert HEADER_TEMPLATE == " "


@pytest.mark.unit
def test_build_render_command_default_renderer(tmp_path):
    pdf = tmp_path / "a.pdf"
    cmd = build_render_command("http://localhost:8888/build/a.html", pdf, "npx chrome-headless-render-pdf")

    assert cmd == [
        "npx",
        "chrome-headless-render-pdf",
        "--pdf",
        str(pdf),
        "--url",
        "http://localhost:8888/build/a.html",
        "--display-header-footer",
        "--header-template",
        " ",
        "--footer-template",
        EXPECTED_FOOTER,
    ]


@pytest.mark.unit
def test_build_render_command_accepts_argv(tmp_path):
    cmd = build_render_command("http://x/a.html", tmp_path / "a.pdf", ["/opt/render", "--no-sandbox"])
    assert cmd[:3] == ["/opt/render", "--no-sandbox", "--pdf"]


@pytest.mark.unit
def test_parse_renderer_output():
    output = (
        "Loading page\n"
        "Error: net::ERR_CONNECTION_REFUSED at http://localhost:8888/build/a.html\n"
        "    at navigate (index.js:10:5)\n"
    )
    errors = _parse_renderer_output(output)

    assert errors[0].startswith("net::ERR_CONNECTION_REFUSED at")
    assert "net::ERR_CONNECTION_REFUSED" in errors


@pytest.mark.unit
def test_parse_renderer_output_clean():
    assert _parse_renderer_output("Saved build/a.pdf\n") == []


@pytest.mark.unit
def test_render_pdf_success(tmp_path, job):
    renderer = _script(
        tmp_path,
        "ok_renderer.py",
        "import sys\n"
        "from PyPDF2 import PdfWriter\n"
        "pdf = sys.argv[sys.argv.index('--pdf') + 1]\n"
        "w = PdfWriter()\n"
        "w.add_blank_page(width=595, height=842)\n"
        "w.add_blank_page(width=595, height=842)\n"
        "with open(pdf, 'wb') as f:\n"
        "    w.write(f)\n",
    )

    result = render_pdf(job, renderer_command=renderer)

    assert result.success
    assert result.returncode == 0
    assert result.pdf_path == job.pdf_path
    assert result.page_count == 2
    assert result.errors == []


@pytest.mark.unit
def test_render_pdf_propagates_exit_code(tmp_path, job):
    renderer = _script(
        tmp_path,
        "crash_renderer.py",
        "import sys\nprint('Error: Protocol error (Page.printToPDF): Target closed.', file=sys.stderr)\nsys.exit(5)\n",
    )

    result = render_pdf(job, renderer_command=renderer)

    assert not result.success
    assert result.returncode == 5
    assert result.pdf_path is None
    assert "Target closed" in result.stderr
    assert result.errors == ["Protocol error (Page.printToPDF): Target closed."]
    assert not job.pdf_path.exists()


@pytest.mark.unit
def test_render_pdf_nonzero_without_message(tmp_path, job):
    renderer = _script(tmp_path, "mute_renderer.py", "import sys\nsys.exit(9)\n")

    result = render_pdf(job, renderer_command=renderer)

    assert result.returncode == 9
    assert result.errors == ["Renderer exited with code 9"]


@pytest.mark.unit
def test_render_pdf_zero_exit_without_pdf(silent_renderer, job):
    """A clean exit that leaves no PDF still counts as a failure."""
    result = render_pdf(job, renderer_command=silent_renderer)

    assert not result.success
    assert result.returncode == 1
    assert "PDF file was not generated" in result.errors


@pytest.mark.unit
def test_render_pdf_missing_renderer(job, tmp_path):
    result = render_pdf(job, renderer_command=[str(tmp_path / "no-such-renderer")])

    assert not result.success
    assert result.returncode == COMMAND_NOT_FOUND
    assert result.errors[0].startswith("Renderer not found")


@pytest.mark.unit
def test_render_pdf_rejects_non_pdf_output(tmp_path, job):
    renderer = _script(
        tmp_path,
        "html_renderer.py",
        "import sys\n"
        "pdf = sys.argv[sys.argv.index('--pdf') + 1]\n"
        "open(pdf, 'w').write('<html>not a pdf</html>')\n",
    )

    result = render_pdf(job, renderer_command=renderer)

    assert not result.success
    assert result.returncode == 1
    assert result.errors[-1].startswith("Output is not a PDF")


@pytest.mark.unit
def test_render_pdf_stale_pdf_is_not_success(silent_renderer, job):
    """A PDF left over from an earlier run does not count as this run's output."""
    job.pdf_path.write_bytes(b"%PDF-1.4 stale")

    result = render_pdf(job, renderer_command=silent_renderer)

    assert not result.success
    assert "PDF file was not generated" in result.errors
    assert not job.pdf_path.exists()


@pytest.mark.unit
@pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals")
def test_render_pdf_killed_by_signal(tmp_path, job):
    renderer = _script(
        tmp_path,
        "killed_renderer.py",
        "import os, signal\nos.kill(os.getpid(), signal.SIGKILL)\n",
    )

    result = render_pdf(job, renderer_command=renderer)

    assert not result.success
    assert result.returncode == 137
