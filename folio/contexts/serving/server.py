"""
Static HTTP server over a directory.

No authentication, no TLS. Paths in request URLs map directly onto files
under the served root.
"""

import os
import socket
import threading
from functools import partial
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from folio.contexts.serving.logger import _log_debug, _log_info

load_dotenv()

SERVER_PORT = int(os.getenv("FOLIO_PORT", "8888"))
BIND_HOST = os.getenv("FOLIO_BIND_HOST", "")


class StaticRequestHandler(SimpleHTTPRequestHandler):
    """SimpleHTTPRequestHandler with request lines routed to the app logger."""

    def log_message(self, format, *args):  # noqa: A002 - http.server signature
        _log_debug(f"{self.address_string()} {format % args}")


def _make_server(root: Path, port: int, host: str) -> ThreadingHTTPServer:
    root = Path(root).resolve()
    if not root.is_dir():
        raise FileNotFoundError(f"Server root not found: {root}")

    handler = partial(StaticRequestHandler, directory=str(root))
    return ThreadingHTTPServer((host, port), handler)


def serve_directory(root: Path = Path("."), port: int = SERVER_PORT, host: str = BIND_HOST) -> None:
    """
    Serve root over HTTP until interrupted (Ctrl+C).

    Args:
        root: Directory to serve
        port: TCP port to bind
        host: Address to bind ("" = all interfaces)

    Raises:
        FileNotFoundError: If root is not a directory
        OSError: If the port is already in use
    """
    with _make_server(root, port, host) as httpd:
        display_host = host or "localhost"
        _log_info(f"Serving {Path(root).resolve()} at http://{display_host}:{port}/")
        _log_info("Press Ctrl+C to stop")
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            _log_info("Shutting down server...")


class StaticServer:
    """
    Static server running on a background thread.

    Example:
        with StaticServer(Path("."), port=0) as server:
            generate_pdfs(build_dir, port=server.port)
    """

    def __init__(self, root: Path = Path("."), port: int = SERVER_PORT, host: str = "127.0.0.1"):
        self.root = Path(root).resolve()
        self.host = host
        self._requested_port = port
        self._httpd: Optional[ThreadingHTTPServer] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def port(self) -> int:
        """Bound port (differs from the requested one when 0 was requested)."""
        if self._httpd is None:
            return self._requested_port
        return self._httpd.server_address[1]

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}/"

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> "StaticServer":
        if self.running:
            return self
        self._httpd = _make_server(self.root, self._requested_port, self.host)
        self._thread = threading.Thread(
            target=self._httpd.serve_forever, name="folio-static-server", daemon=True
        )
        self._thread.start()
        _log_info(f"Serving {self.root} at {self.url}")
        return self

    def stop(self) -> None:
        if self._httpd is None:
            return
        self._httpd.shutdown()
        self._httpd.server_close()
        if self._thread is not None:
            self._thread.join()
        _log_debug(f"Stopped server at {self.url}")
        self._httpd = None
        self._thread = None

    def __enter__(self) -> "StaticServer":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()


def server_is_reachable(host: str, port: int, timeout: float = 1.0) -> bool:
    """Check whether something accepts TCP connections on host:port."""
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError:
        return False
