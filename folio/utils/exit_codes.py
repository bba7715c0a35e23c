"""Exit code helpers for external processes."""

# Exit code a shell reports when the command cannot be found
COMMAND_NOT_FOUND = 127


def shell_exit_code(returncode: int) -> int:
    """
    Map a subprocess return code to what a shell would report.

    subprocess reports death by signal N as -N; shells report 128 + N.
    """
    if returncode < 0:
        return 128 + abs(returncode)
    return returncode
