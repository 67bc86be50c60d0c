"""
This module contains the exceptions raised by the modvendor framework.
"""

from typing import List, Optional


class ModvendorException(Exception):
    """
    Base exception for all modvendor errors.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(ModvendorException):
    """Raised when vendor.toml (or a config dict) holds invalid values."""

    pass


class InvalidSpecifierError(ModvendorException):
    """Raised when a module specifier cannot be parsed as a URL."""

    pass


class ToolInvocationError(ModvendorException):
    """
    Raised when the external vendoring tool exits with a non-zero status.

    Carries everything needed to diagnose the failure: the captured stderr,
    the specifier being vendored, the exit status and the command line.
    """

    def __init__(
        self,
        specifier: str,
        returncode: Optional[int],
        stderr: str,
        command: List[str],
    ):
        self.specifier = specifier
        self.returncode = returncode
        self.stderr = stderr
        self.command = list(command)
        super().__init__(self._format_message())

    @property
    def tool_name(self) -> str:
        return f"{self.command[0]} {self.command[1]}" if len(self.command) > 1 else self.command[0]

    def _format_message(self) -> str:
        return (
            f"{self.stderr}\n\n"
            f"Failed to vendor files for {self.specifier}. "
            f"'{self.tool_name}' exited with status {self.returncode}.\n"
            f"The output of the '{self.tool_name}' command is shown above.\n\n"
            f"The error occurred while running:\n"
            f"  {' '.join(self.command)}"
        )


class ToolTimeoutError(ToolInvocationError):
    """Raised when the vendoring tool runs longer than the configured timeout."""

    def __init__(self, specifier: str, timeout: float, stderr: str, command: List[str]):
        self.timeout = timeout
        super().__init__(specifier, None, stderr, command)

    def _format_message(self) -> str:
        return (
            f"{self.stderr}\n\n"
            f"Failed to vendor files for {self.specifier}. "
            f"'{self.tool_name}' did not finish within {self.timeout} seconds and was killed.\n\n"
            f"The error occurred while running:\n"
            f"  {' '.join(self.command)}"
        )
