"""Exceptions raised when an external collaborator fails."""

from typing import Optional


class ExternalToolError(Exception):
    """
    Exception raised when an external tool exits nonzero.

    Attributes:
        tool: Name of the tool that failed (e.g., "renderer", "build")
        returncode: Exit code returned by the tool
        stderr: Diagnostic text the tool printed to standard error
        target: What the tool was working on (e.g., the HTML file), if any
    """

    def __init__(
        self,
        tool: str,
        returncode: int,
        stderr: str = "",
        target: Optional[str] = None,
    ):
        self.tool = tool
        self.returncode = returncode
        self.stderr = stderr
        self.target = target

        parts = [f"{tool} exited with code {returncode}"]
        if target:
            parts[0] += f" for {target}"

        if stderr:
            snippet = stderr.strip()
            snippet = snippet[:500] + "..." if len(snippet) > 500 else snippet
            parts.append(f"\n{snippet}")

        super().__init__("\n".join(parts))
