"""Runs the external build command that produces the HTML pages."""

import os
import shlex
import subprocess
from pathlib import Path
from typing import Optional, Sequence, Union

from dotenv import load_dotenv

from folio.contexts.building.logger import _log_error, _log_info, _log_success
from folio.utils.exit_codes import COMMAND_NOT_FOUND, shell_exit_code

load_dotenv()

BUILD_COMMAND = os.getenv("FOLIO_BUILD_COMMAND", "cargo run --release")


def run_build(
    command: Union[str, Sequence[str]] = BUILD_COMMAND, cwd: Optional[Path] = None
) -> int:
    """
    Run the build command with inherited stdio.

    Args:
        command: Build command line or argv
        cwd: Working directory (default: current)

    Returns:
        The exit code a shell would report (127 if the executable is missing,
        128 + N if killed by signal N)
    """
    argv = shlex.split(command) if isinstance(command, str) else list(command)
    _log_info(f"Running: {shlex.join(argv)}")

    try:
        returncode = shell_exit_code(subprocess.run(argv, cwd=cwd).returncode)
    except FileNotFoundError:
        _log_error(f"Build command not found: {argv[0]}")
        return COMMAND_NOT_FOUND

    if returncode == 0:
        _log_success("Build finished.")
    else:
        _log_error(f"Build exited with code {returncode}")
    return returncode
