"""
Resolve raw SQLSTATE strings to registered error identities.
"""
import logging

from pgerror.registry import UNKNOWN_CLASS, UNKNOWN_CODE, UNKNOWN_SQLSTATE
from pgerror.registry import ErrorClass, ErrorCode, lookup_class, lookup_code

__all__ = [
    'classify',
    'sqlstate_or_placeholder',
    'belongs_to_class',
    'has_code',
]

logger = logging.getLogger(__name__)


def sqlstate_or_placeholder(value, encoding: str = 'ascii') -> str:
    """Normalize a diagnostic field value to a SQLSTATE string.

    A missing field (None or empty) becomes `UNKNOWN_SQLSTATE`. Bytes, as
    returned by libpq, are decoded.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        value = bytes(value).decode(encoding, 'replace')
    if not value:
        return UNKNOWN_SQLSTATE
    return str(value)


def classify(raw_code) -> tuple[ErrorClass, ErrorCode]:
    """Resolve a raw status code to its ``(ErrorClass, ErrorCode)`` pair.

    Never raises. Anything that is not a registered code under its own
    registered class resolves to ``(UNKNOWN_CLASS, UNKNOWN_CODE)``.

    >>> classify('42601')
    (42::ErrorClass, 42601::ErrorCode)
    >>> classify('ZZ000')
    (UN::ErrorClass, UNOWN::ErrorCode)
    """
    if isinstance(raw_code, str) and len(raw_code) >= 2:
        error_class = lookup_class(raw_code[:2])
        error_code = lookup_code(raw_code)
        if error_class is not None and error_code is not None \
                and error_code.error_class is error_class:
            return error_class, error_code
    logger.debug(f'Unrecognized SQLSTATE {raw_code!r}, classifying as {UNKNOWN_SQLSTATE}')
    return UNKNOWN_CLASS, UNKNOWN_CODE


def _as_class(value):
    if isinstance(value, ErrorClass):
        return value
    if isinstance(value, ErrorCode):
        return value.error_class
    error_code = lookup_code(value)
    return error_code.error_class if error_code is not None else lookup_class(value)


def _as_code(value):
    if isinstance(value, ErrorCode):
        return value
    return lookup_code(value)


def belongs_to_class(err, error_class) -> bool:
    """Check whether a result failure falls under an error class.

    `error_class` may be an `ErrorClass`, its two-character string, or a
    code (identity or string) whose class should be matched.

        try:
            cn.execute(sql)
        except ResultFailure as err:
            if not belongs_to_class(err, '23'):
                raise
    """
    target = _as_class(error_class)
    return target is not None and getattr(err, 'error_class', None) is target


def has_code(err, error_code) -> bool:
    """Check whether a result failure carries exactly this error code."""
    target = _as_code(error_code)
    return target is not None and getattr(err, 'error_code', None) is target
