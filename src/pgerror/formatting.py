"""
Rendering of pgerror exceptions.

`error_text` is what ``str(err)`` shows a user; `debug_repr` is what
``repr(err)`` shows, written as the constructor call that rebuilds the
exception.
"""
from pgerror.exceptions import PgError, ResultFailure, ServerError
from pgerror.registry import display_name

__all__ = [
    'chomp',
    'error_text',
    'debug_repr',
    'error_name',
    'error_class',
    'error_code',
]

_ERRORS_MODULE = 'pgerror.errors'


def chomp(text: str) -> str:
    """Remove exactly one trailing line terminator (``\\r\\n`` or ``\\n``).

    >>> chomp('ERROR:  oops\\n\\n')
    'ERROR:  oops\\n'
    """
    if text.endswith('\r\n'):
        return text[:-2]
    if text.endswith('\n'):
        return text[:-1]
    return text


def error_class(err: ResultFailure):
    return err.error_class


def error_code(err: ResultFailure):
    return err.error_code


def error_name(err: ResultFailure) -> str:
    """Display name of a result failure, `UnknownError` when unresolved.
    """
    return display_name(err.error_class, err.error_code)


def error_text(err: PgError) -> str:
    """User-facing message.

    Server messages lose their trailing newline; a result failure shows its
    verbose message when one was captured. Client messages are shown as is.
    """
    if isinstance(err, ResultFailure):
        msg = err.msg if err.verbose_msg is None else err.verbose_msg
        return chomp(msg)
    if isinstance(err, ServerError):
        return chomp(err.msg)
    return err.msg


def debug_repr(err: PgError) -> str:
    """Qualified constructor call for an exception.

        pgerror.errors.SyntaxError('ERROR:  syntax error\\n')
        pgerror.errors.SyntaxError('ERROR:  short\\n', 'ERROR:  42601: verbose\\n')
    """
    if isinstance(err, ResultFailure):
        args = [repr(err.msg)]
        if err.verbose_msg is not None:
            args.append(repr(err.verbose_msg))
        return f'{_ERRORS_MODULE}.{error_name(err)}({", ".join(args)})'
    cls = type(err)
    return f'{cls.__module__}.{cls.__qualname__}({err.msg!r})'
