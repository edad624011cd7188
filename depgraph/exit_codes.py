"""
Standard exit codes and command errors for depgraph.

Following Unix/POSIX conventions for command-line tools.
"""
from typing import Optional

# Standard POSIX exit codes
SUCCESS = 0              # Successful termination
GENERAL_ERROR = 1        # General errors
USAGE_ERROR = 2          # Misuse of shell command (wrong arguments, etc.)

# Application-specific exit codes (64-113 are typically available)
PACKAGE_NOT_FOUND = 64   # Root package absent from the universe
REPOSITORY_ERROR = 65    # A repository could not be fetched or read
CONFIG_ERROR = 66        # Configuration file error
DATA_ERROR = 70          # Data format or validation error
PARTIAL_SUCCESS = 71     # Graph description written, rendering failed
INTERRUPTED = 130        # Terminated by Ctrl+C (SIGINT)

# Exit code mappings for common exceptions
EXCEPTION_EXIT_CODES = {
    'FileNotFoundError': GENERAL_ERROR,
    'PermissionError': GENERAL_ERROR,
    'ValueError': DATA_ERROR,
    'KeyError': DATA_ERROR,
    'JSONDecodeError': DATA_ERROR,
    'YAMLError': DATA_ERROR,
    'TOMLDecodeError': DATA_ERROR,
    'KeyboardInterrupt': INTERRUPTED,
}


def get_exit_code_for_exception(exc: Exception) -> int:
    """
    Get the appropriate exit code for an exception.

    Args:
        exc: The exception that occurred

    Returns:
        Appropriate exit code
    """
    if isinstance(exc, CommandError):
        return exc.exit_code
    exc_name = exc.__class__.__name__
    return EXCEPTION_EXIT_CODES.get(exc_name, GENERAL_ERROR)


class CommandError(Exception):
    """
    Exception that commands can raise to indicate specific exit codes.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class PackageNotFoundError(CommandError):
    """Raised when the root package is absent from the universe."""
    def __init__(self, package: str):
        super().__init__(f"{package} not found !", PACKAGE_NOT_FOUND)
        self.package = package


class RepositoryUnavailableError(CommandError):
    """Raised when a listed repository cannot be fetched or read."""
    def __init__(self, message: str, repository: Optional[str] = None):
        super().__init__(message, REPOSITORY_ERROR)
        self.repository = repository


class RepositoryNotFoundError(RepositoryUnavailableError):
    """Raised when the provider is asked for a repository it does not know."""
    def __init__(self, repository: str):
        super().__init__(f"Repository not found: {repository}", repository)


class ConfigError(CommandError):
    """Raised when there's a configuration error."""
    def __init__(self, message: str):
        super().__init__(message, CONFIG_ERROR)


class RenderError(CommandError):
    """
    Raised when Graphviz cannot render the graph.

    The textual graph description may already be on disk; it is kept.
    """
    def __init__(self, message: str, dot_path: Optional[str] = None):
        super().__init__(message, PARTIAL_SUCCESS)
        self.dot_path = dot_path
