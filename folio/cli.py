#!/usr/bin/env python3
"""
FOLIO command line

Runs the HTML build, serves the working directory, and prints every HTML page
in the build directory to PDF.

Commands:
    run           - Run the external build command
    start-server  - Serve the working directory over HTTP (port 8888)
    generate-pdf  - Delete derived PDFs, then render one PDF per HTML page

Examples:\n

    folio run                               # Build the HTML pages

    folio start-server                      # Serve . on http://localhost:8888/

    folio generate-pdf                      # Render build/*.html (server must be up)

    folio generate-pdf --serve              # Start a server for the duration of the pass
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from folio.contexts.building import BUILD_COMMAND, run_build
from folio.contexts.building.logger import setup_building_logger
from folio.contexts.rendering import generate_pdfs
from folio.contexts.rendering.discovery import BUILD_DIR, SERVER_HOST, SERVER_PORT
from folio.contexts.rendering.renderer import RENDER_COMMAND
from folio.contexts.serving import StaticServer, serve_directory
from folio.contexts.serving.logger import setup_serving_logger
from folio.contexts.serving.server import BIND_HOST
from folio.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))


def display_path(path: Path) -> str:
    """Return path relative to the working directory for cleaner display."""
    try:
        return str(Path(os.path.abspath(path)).relative_to(Path.cwd()))
    except ValueError:
        return str(path)


app = typer.Typer(
    help="Render a build directory of HTML pages to PDF through a local static server",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("run")
def run_command(
    command: Annotated[
        str,
        typer.Option(
            "--command",
            "-c",
            help="Build command line (default: FOLIO_BUILD_COMMAND or 'cargo run --release')",
        ),
    ] = BUILD_COMMAND,
):
    """
    Run the external build command that generates the HTML pages.

    Exits with the build command's own exit code.
    """
    setup_building_logger(LOGS_PATH / f"build_{now()}", command)
    raise typer.Exit(code=run_build(command))


@app.command("start-server")
def start_server_command(
    port: Annotated[
        int,
        typer.Option("--port", "-p", help="Port to bind", min=0, max=65535),
    ] = SERVER_PORT,
    host: Annotated[
        str,
        typer.Option("--host", help="Address to bind (default: all interfaces)"),
    ] = BIND_HOST,
    root: Annotated[
        Path,
        typer.Option("--root", "-r", help="Directory to serve (default: working directory)"),
    ] = Path("."),
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log every request"),
    ] = False,
):
    """
    Serve a directory over plain HTTP until interrupted.

    Examples:\n

        $ folio start-server                     # http://localhost:8888/

        $ folio start-server --port 9000         # Different port
    """
    setup_serving_logger(None, root, port, verbose=verbose)
    try:
        serve_directory(root, port=port, host=host)
    except (FileNotFoundError, OSError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.command("generate-pdf")
def generate_pdf_command(
    build_dir: Annotated[
        Path,
        typer.Option("--build-dir", "-b", help="Directory holding the HTML pages"),
    ] = BUILD_DIR,
    port: Annotated[
        int,
        typer.Option("--port", "-p", help="Static server port", min=0, max=65535),
    ] = SERVER_PORT,
    host: Annotated[
        str,
        typer.Option("--host", help="Static server host used in page URLs"),
    ] = SERVER_HOST,
    renderer: Annotated[
        str,
        typer.Option("--renderer", help="Headless renderer command"),
    ] = RENDER_COMMAND,
    serve: Annotated[
        bool,
        typer.Option("--serve", "-s", help="Start a static server for the duration of the pass"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show renderer output and debug logs"),
    ] = False,
    log_dir: Annotated[
        Optional[Path],
        typer.Option("--log-dir", help="Session log directory (default: LOGS_PATH/render_<time>)"),
    ] = None,
):
    """
    Delete derived PDFs, then render one PDF per HTML page.

    Pages are fetched from http://<host>:<port>/<path>, so a static server
    rooted at the working directory must be running (or pass --serve).
    Stops at the first failing page and exits with the renderer's exit code.

    Examples:\n

        $ folio generate-pdf                        # Render build/*.html

        $ folio generate-pdf --serve                # Bring up a server too

        $ folio generate-pdf -b site --verbose      # Other directory, full output
    """
    typer.secho(f"\nRendering: {display_path(build_dir)}/*.html", fg=typer.colors.BLUE, bold=True)
    typer.echo("")

    try:
        if serve:
            with StaticServer(Path.cwd(), port=port, host="127.0.0.1") as server:
                result = generate_pdfs(
                    build_dir,
                    port=server.port,
                    host=host,
                    renderer_command=renderer,
                    log_dir=log_dir,
                    verbose=verbose,
                )
        else:
            result = generate_pdfs(
                build_dir,
                port=port,
                host=host,
                renderer_command=renderer,
                log_dir=log_dir,
                verbose=verbose,
            )
    except (ValueError, OSError) as e:
        # ValueError: build directory outside the served root, nothing was deleted
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo("")
    if result.success:
        typer.secho(
            f"✓ Generated {len(result.pdf_paths)} PDFs", fg=typer.colors.GREEN, bold=True
        )
        for pdf_path in result.pdf_paths:
            typer.echo(f"  {display_path(pdf_path)}")
    else:
        failed = result.failed
        typer.secho(
            f"✗ Rendering failed on {display_path(failed.html_path)} (exit {result.exit_code})",
            fg=typer.colors.RED,
            bold=True,
        )
        for error in failed.errors[:10]:
            typer.secho(f"  - {error}", fg=typer.colors.RED)
        if result.skipped:
            typer.echo(f"  {len(result.skipped)} pages not rendered")

    if result.log_file:
        typer.echo(f"  Log: {display_path(result.log_file)}")
    typer.echo("")

    raise typer.Exit(code=result.exit_code)


if __name__ == "__main__":
    app()
