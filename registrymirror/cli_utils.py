"""
Common CLI utilities and decorators for consistent command behavior.
"""

import sys
import click
from functools import wraps

from .domain.errors import FilesystemError, RegistryURLError
from .exit_codes import (
    INTERRUPTED, USAGE_ERROR,
    get_exit_code_for_exception, CommandError
)
from .output import emit_error


def error_type(exc: BaseException) -> str:
    """Short error type name used in JSON error output."""
    if isinstance(exc, RegistryURLError):
        return "invalid_registry"
    if isinstance(exc, FilesystemError):
        return "filesystem_error"
    return type(exc).__name__


def handle_errors(func):
    """
    Decorator that turns domain errors into a JSON error on stderr and the
    matching exit code.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            emit_error("Interrupted by user", type="interrupted")
            sys.exit(INTERRUPTED)
        except click.ClickException:
            # Click exceptions already have their exit code
            raise
        except (CommandError, RegistryURLError, FilesystemError) as e:
            context = {}
            if isinstance(e, RegistryURLError):
                context['url'] = e.url
            elif isinstance(e, FilesystemError):
                context = {'path': e.path, 'operation': e.operation}
            emit_error(str(e), type=error_type(e), context=context or None)
            sys.exit(get_exit_code_for_exception(e))

    return wrapper


def require(values, option: str):
    """Fail with a usage error when a required list option is empty."""
    if not values:
        raise CommandError(f"At least one {option} is required", USAGE_ERROR)
    return list(values)
