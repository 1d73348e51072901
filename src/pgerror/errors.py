"""
One `ResultFailure` subclass per registered PostgreSQL error code.

Classes are named after the code's display name (`SyntaxError`,
`UniqueViolation`, ...) and generated from the registry at import time.
Each code class derives from the class representing its error class, which
is the class of the ``XX000`` code (42601 `SyntaxError` derives from 42000
`SyntaxErrorOrAccessRuleViolation`), so either granularity can be caught::

    >>> from pgerror import errors
    >>> issubclass(errors.SyntaxError, errors.SyntaxErrorOrAccessRuleViolation)
    True
    >>> errors.lookup('42601')
    <class 'pgerror.errors.SyntaxError'>

Unrecognized codes are represented by `UnknownError`.
"""
import logging

from pgerror.classify import classify, sqlstate_or_placeholder
from pgerror.exceptions import ResultFailure
from pgerror.registry import NAME_TABLE, UNKNOWN_CODE, ErrorClass, ErrorCode
from pgerror.registry import lookup_code

logger = logging.getLogger(__name__)

_by_code: dict[ErrorCode, type[ResultFailure]] = {}


def _define(error_class: ErrorClass, error_code: ErrorCode,
            base: type[ResultFailure]) -> type[ResultFailure]:
    name = NAME_TABLE[(error_class, error_code)]
    doc = f'SQLSTATE {error_code}: {error_code.condition_name} ({error_class.title}).'
    cls = type(name, (base,), {
        '__module__': __name__,
        '__qualname__': name,
        '__doc__': doc,
        'error_class': error_class,
        'error_code': error_code,
        })
    _by_code[error_code] = cls
    globals()[name] = cls
    return cls


def _define_all() -> list[str]:
    for error_class in ErrorClass:
        representative, *members = error_class.codes
        class_base = _define(error_class, representative, ResultFailure)
        for error_code in members:
            _define(error_class, error_code, class_base)
    return [cls.__name__ for cls in _by_code.values()]


_generated = _define_all()

__all__ = [
    'lookup',
    'class_for',
    'result_failure',
    'make_result_failure',
    *_generated,
    ]

UnknownError = _by_code[UNKNOWN_CODE]


def lookup(sqlstate) -> type[ResultFailure]:
    """Return the exception class for a SQLSTATE or `ErrorCode`.

    Raise `KeyError` if the code is not registered.
    """
    error_code = sqlstate if isinstance(sqlstate, ErrorCode) else lookup_code(sqlstate)
    if error_code is None:
        raise KeyError(sqlstate)
    return _by_code[error_code]


def class_for(error_code: ErrorCode) -> type[ResultFailure]:
    """Return the exception class for a code, `UnknownError` if unregistered.
    """
    return _by_code.get(error_code, UnknownError)


def result_failure(sqlstate, msg: str, verbose_msg: str | None = None) -> ResultFailure:
    """Build the result failure for a raw SQLSTATE string.

    A missing or unrecognized code yields an `UnknownError`.
    """
    _, error_code = classify(sqlstate_or_placeholder(sqlstate))
    return class_for(error_code)(msg, verbose_msg)


def make_result_failure(source, verbose: bool = False) -> ResultFailure:
    """Build the result failure reported by a failed result.

    Args:
        source: Object with ``error_message(verbose)`` and ``error_field(field)``,
            see `pgerror.sources.MessageSource`
        verbose: Also capture the verbose message; otherwise `verbose_msg`
            is None

    Returns
        Instance of the `ResultFailure` subclass for the reported SQLSTATE
    """
    from pgerror.sources import SQLSTATE_FIELD

    msg = source.error_message(verbose=False)
    verbose_msg = source.error_message(verbose=True) if verbose else None
    sqlstate = source.error_field(SQLSTATE_FIELD)
    err = result_failure(sqlstate, msg, verbose_msg)
    logger.debug(f'Classified SQLSTATE {sqlstate!r} as {type(err).__name__}')
    return err
