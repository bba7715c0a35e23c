"""
Serving Context

Responsibilities:
- Serves a directory verbatim over plain HTTP on a fixed port
- Runs in the foreground for operators or on a background thread for a render pass

Owns: The static server and its port
Never: Modifies served files
"""

from folio.contexts.serving.server import (
    StaticServer,
    serve_directory,
    server_is_reachable,
)

__all__ = ["StaticServer", "serve_directory", "server_is_reachable"]
