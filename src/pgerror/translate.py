"""
Translate driver exceptions into pgerror exceptions.

Accepts psycopg 3 exceptions directly or wrapped by SQLAlchemy
(`sqlalchemy.exc.DBAPIError`), so callers can catch one taxonomy
regardless of how the connection was made:

    @translate_errors
    def load(cn):
        return cn.execute(sa.text('select * from missing')).all()

    try:
        load(cn)
    except errors.UndefinedTable:
        ...
"""
import logging
import re
from functools import wraps
from typing import Any

import psycopg
import psycopg.conninfo
import sqlalchemy.exc
from pgerror.errors import make_result_failure
from pgerror.exceptions import ClientConnectionFailure, ClientResultFailure
from pgerror.exceptions import ConnectionFailure, ConnStringParseFailure
from pgerror.exceptions import PgError
from pgerror.options import ErrorOptions, load_options
from pgerror.sources import ExceptionSource

__all__ = [
    'TRANSLATABLE_ERRORS',
    'is_translatable',
    'from_exception',
    'translate_errors',
    'parse_conninfo',
]

logger = logging.getLogger(__name__)

TRANSLATABLE_ERRORS = (
    psycopg.Error,
    sqlalchemy.exc.DBAPIError,
    sqlalchemy.exc.ResourceClosedError,
    )

# Misuse psycopg detects itself, before anything reaches libpq.
CLIENT_RESULT_PATTERNS = [
    r'cursor.*\bclosed\b',
    r'result.*\bclosed\b',
]

CLIENT_CONNECTION_PATTERNS = [
    r'^the connection is closed',
    r'connection.*already closed',
]

_CLIENT_RESULT_REGEX = re.compile('|'.join(CLIENT_RESULT_PATTERNS), re.IGNORECASE)
_CLIENT_CONNECTION_REGEX = re.compile('|'.join(CLIENT_CONNECTION_PATTERNS), re.IGNORECASE)


def _unwrap(exc: BaseException) -> BaseException:
    if isinstance(exc, sqlalchemy.exc.DBAPIError) and exc.orig is not None:
        return exc.orig
    return exc


def is_translatable(exc: BaseException) -> bool:
    """Check whether `from_exception` can convert an exception."""
    return isinstance(exc, PgError) or isinstance(
        _unwrap(exc), (psycopg.Error, sqlalchemy.exc.ResourceClosedError))


def from_exception(exc: BaseException,
                   options: ErrorOptions | dict[str, Any] | None = None) -> PgError:
    """Convert a driver exception to the matching pgerror exception.

    - psycopg errors carrying a SQLSTATE become a classified `ResultFailure`
    - use of a closed cursor or result becomes `ClientResultFailure`
    - use of a closed connection, and any other psycopg `InterfaceError`,
      becomes `ClientConnectionFailure`
    - remaining psycopg `OperationalError` (libpq reported the failure)
      becomes `ConnectionFailure`
    - other psycopg errors and SQLAlchemy `ResourceClosedError` become
      `ClientResultFailure`

    Raises `TypeError` for exceptions that did not come from the driver.
    """
    if isinstance(exc, PgError):
        return exc
    options = load_options(options)
    orig = _unwrap(exc)

    if isinstance(orig, psycopg.Error):
        source = ExceptionSource(orig, options)
        if source.error_field(psycopg.pq.DiagnosticField.SQLSTATE) is not None:
            return make_result_failure(source, verbose=options.verbose)
        text = str(orig)
        if _CLIENT_RESULT_REGEX.search(text):
            return ClientResultFailure(text)
        if isinstance(orig, psycopg.InterfaceError) or _CLIENT_CONNECTION_REGEX.search(text):
            return ClientConnectionFailure(text)
        if isinstance(orig, psycopg.OperationalError):
            return ConnectionFailure(source.error_message(verbose=False))
        return ClientResultFailure(text)

    if isinstance(orig, sqlalchemy.exc.ResourceClosedError):
        return ClientResultFailure(str(orig))

    raise TypeError(f'cannot translate {type(exc).__name__}: {exc}')


def translate_errors(func=None, *, options: ErrorOptions | dict[str, Any] | None = None):
    """Re-raise driver exceptions as pgerror exceptions.

    Supports both @translate_errors and @translate_errors(options=...) syntax.
    The original exception is kept as ``__cause__``. Nothing is retried.
    """
    def decorator(f):
        @wraps(f)
        def inner(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except TRANSLATABLE_ERRORS as err:
                if not is_translatable(err):
                    raise
                translated = from_exception(err, options)
                logger.debug(f'{f.__name__} raised {type(err).__name__}, '
                             f'translated to {type(translated).__name__}')
                raise translated from err
        return inner

    if func is not None:
        return decorator(func)
    return decorator


def parse_conninfo(conninfo: str) -> dict[str, Any]:
    """Parse a libpq connection string into a dict of parameters.

    >>> parse_conninfo('host=localhost dbname=test_db')
    {'host': 'localhost', 'dbname': 'test_db'}

    Raises `ConnStringParseFailure` when libpq rejects the string.
    """
    try:
        return psycopg.conninfo.conninfo_to_dict(conninfo)
    except psycopg.ProgrammingError as err:
        raise ConnStringParseFailure(str(err)) from err
