"""Contains exceptions raised when querying the build graph."""


class BuildGraphCommandError(Exception):
    """Raised when the build graph CLI exits with a non-zero status."""

    def __init__(self, command: list[str], returncode: int, stderr: str) -> None:
        """Initializes the exception with the failed command and its output."""
        super().__init__(f"Build graph command {' '.join(command)!r} failed with exit code {returncode}: {stderr.strip()}")
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class BuildGraphOutputError(Exception):
    """Raised when the build graph CLI output cannot be understood."""

    pass
