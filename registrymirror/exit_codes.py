"""
Standard exit codes for registrymirror commands.

Following Unix/POSIX conventions for command-line tools.
"""
# Standard POSIX exit codes
SUCCESS = 0              # Successful termination
GENERAL_ERROR = 1        # General errors
USAGE_ERROR = 2          # Misuse of shell command (wrong arguments, etc.)

# Application-specific exit codes (64-113 are typically available)
CONFIG_ERROR = 66        # Configuration file error
PERMISSION_ERROR = 67    # Insufficient permissions
DATA_ERROR = 70          # Data format or validation error
INTERRUPTED = 130        # Terminated by Ctrl+C (SIGINT)

# Exit code mappings for common exceptions, matched along the class hierarchy
EXCEPTION_EXIT_CODES = {
    'PermissionError': PERMISSION_ERROR,
    'RegistryURLError': DATA_ERROR,
    'ValueError': DATA_ERROR,
    'ConfigError': CONFIG_ERROR,
    'FilesystemError': GENERAL_ERROR,
    'KeyboardInterrupt': INTERRUPTED,
}


def get_exit_code_for_exception(exc: BaseException) -> int:
    """
    Get the appropriate exit code for an exception.

    Filesystem errors caused by a PermissionError map to PERMISSION_ERROR.

    Args:
        exc: The exception that occurred

    Returns:
        Appropriate exit code
    """
    if isinstance(exc, CommandError):
        return exc.exit_code

    cause = getattr(exc, 'cause', None)
    if isinstance(cause, PermissionError):
        return PERMISSION_ERROR

    for cls in type(exc).__mro__:
        if cls.__name__ in EXCEPTION_EXIT_CODES:
            return EXCEPTION_EXIT_CODES[cls.__name__]
    return GENERAL_ERROR


class CommandError(Exception):
    """
    Exception that commands can raise to indicate specific exit codes.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class ConfigError(CommandError):
    """Raised when there's a configuration error."""
    def __init__(self, message: str):
        super().__init__(message, CONFIG_ERROR)
