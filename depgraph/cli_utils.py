"""
Common CLI utilities and decorators for consistent command behavior.
"""

import json
import logging
import sys
import click
from functools import wraps

from .exit_codes import (
    SUCCESS, INTERRUPTED,
    get_exit_code_for_exception, CommandError
)

logger = logging.getLogger("depgraph")


def standard_command(func):
    """
    Decorator that provides standard CLI behavior:
    - Clean JSON output on stdout, messages on stderr
    - Consistent error handling with specific exit codes

    The wrapped command returns a dict (printed as one JSON line), a list
    (printed as JSONL) or None (command handled its own output).
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            result = func(*args, **kwargs)
            output_result(result)
            sys.exit(SUCCESS)

        except KeyboardInterrupt:
            click.echo("Interrupted by user", err=True)
            sys.exit(INTERRUPTED)
        except click.ClickException:
            # Click exceptions already have their exit code
            raise
        except CommandError as e:
            click.echo(f"error: {e}", err=True)
            error_obj = {
                "error": str(e),
                "type": type(e).__name__,
                "exit_code": e.exit_code
            }
            dot_path = getattr(e, 'dot_path', None)
            if dot_path:
                error_obj['dot'] = dot_path
            print(json.dumps(error_obj, ensure_ascii=False), flush=True)
            sys.exit(e.exit_code)
        except Exception as e:
            logger.debug("Command failed", exc_info=True)
            click.echo(f"error: {e}", err=True)
            print(json.dumps({"error": str(e), "type": type(e).__name__}, ensure_ascii=False), flush=True)
            sys.exit(get_exit_code_for_exception(e))

    return wrapper


def output_result(result):
    """
    Standard output handler for results.

    Args:
        result: The result to output (dict, list, or None)
    """
    if isinstance(result, (list, tuple)):
        for item in result:
            print(json.dumps(item, ensure_ascii=False), flush=True)
    elif isinstance(result, dict):
        print(json.dumps(result, ensure_ascii=False), flush=True)


# Standard options that several commands share
common_options = {
    'repo': click.option('-r', '--repo', 'repos', multiple=True, type=click.Path(),
                         help='Repository file or directory (repeatable, overrides config)'),
    'pretty': click.option('--pretty', is_flag=True,
                           help='Show rich formatted output instead of JSON'),
    'debug': click.option('--debug', is_flag=True, help='Enable debug logging'),
}


def add_common_options(*option_names):
    """
    Decorator to add common options to a command.

    Example:
        @add_common_options('repo', 'pretty')
        def my_command(repos, pretty):
            ...
    """
    def decorator(func):
        for name in reversed(option_names):
            if name in common_options:
                func = common_options[name](func)
        return func
    return decorator
