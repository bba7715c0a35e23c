"""
Shared utilities for FOLIO.

Common functionality used across contexts:
- Logger setup with provenance
- Timestamps for log directories
- PDF inspection
- Exit codes of external processes
"""

from folio.utils.exit_codes import shell_exit_code
from folio.utils.timestamp import format_elapsed, now

__all__ = ["format_elapsed", "now", "shell_exit_code"]
