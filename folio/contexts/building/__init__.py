"""
Building Context

Responsibilities:
- Runs the external build command that generates the HTML pages

Owns: Nothing beyond the process invocation
Never: Inspects or generates HTML itself
"""

from folio.contexts.building.builder import BUILD_COMMAND, run_build

__all__ = ["BUILD_COMMAND", "run_build"]
