"""
Registry of PostgreSQL error classes and error codes.

Every class (two characters) and code (five characters) published in the
PostgreSQL error code appendix gets an enum member. Members are compared
by identity and the tables below are built once, at import time, and are
read-only afterwards.

    >>> lookup_code('42601')
    42601::ErrorCode
    >>> lookup_code('42601').error_class
    42::ErrorClass
    >>> display_name(ErrorClass.C42, ErrorCode.E42601)
    'SyntaxError'
"""
import enum
from types import MappingProxyType

from pgerror._errcodes import ERRCODES, NAME_OVERRIDES

__all__ = [
    'ErrorClass',
    'ErrorCode',
    'UNKNOWN_CLASS',
    'UNKNOWN_CODE',
    'UNKNOWN_SQLSTATE',
    'UNKNOWN_NAME',
    'NAME_TABLE',
    'CLASS_NAMES',
    'lookup_class',
    'lookup_code',
    'display_name',
    'camel_name',
    'iter_codes',
]

UNKNOWN_SQLSTATE = 'UNOWN'
UNKNOWN_NAME = 'UnknownError'
_UNKNOWN_TITLE = 'Unknown Error'


def camel_name(condition: str) -> str:
    """Convert an appendix condition name to a class-style name.

    >>> camel_name('syntax_error')
    'SyntaxError'
    """
    return ''.join(word.capitalize() for word in condition.split('_'))


class _Identity(enum.Enum):
    """Common display behavior for classes and codes.

    The string form is the raw SQLSTATE text; the repr names the kind of
    identity instead of exposing the enum internals.
    """

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f'{self.value}::{type(self).__name__}'


class _ClassIdentity(_Identity):

    @property
    def title(self) -> str:
        return _CLASS_TITLES[self]

    @property
    def codes(self) -> tuple:
        """All codes registered under this class, in appendix order."""
        return _CLASS_CODES[self]

    @property
    def is_unknown(self) -> bool:
        return self is UNKNOWN_CLASS


class _CodeIdentity(_Identity):

    @property
    def error_class(self):
        return _CODE_CLASSES[self]

    @property
    def condition_name(self) -> str:
        return _CONDITION_NAMES[self]

    @property
    def display_name(self) -> str:
        return NAME_TABLE[(self.error_class, self)]

    @property
    def is_unknown(self) -> bool:
        return self is UNKNOWN_CODE


ErrorClass = _ClassIdentity(
    'ErrorClass',
    [(f'C{klass}', klass) for klass, _, _ in ERRCODES]
    + [(f'C{UNKNOWN_SQLSTATE[:2]}', UNKNOWN_SQLSTATE[:2])],
    module=__name__,
)

ErrorCode = _CodeIdentity(
    'ErrorCode',
    [(f'E{code}', code) for _, _, codes in ERRCODES for code, _ in codes]
    + [(f'E{UNKNOWN_SQLSTATE}', UNKNOWN_SQLSTATE)],
    module=__name__,
)

UNKNOWN_CLASS = ErrorClass[f'C{UNKNOWN_SQLSTATE[:2]}']
UNKNOWN_CODE = ErrorCode[f'E{UNKNOWN_SQLSTATE}']


def _build_tables():
    classes = {member.value: member for member in ErrorClass}
    codes = {member.value: member for member in ErrorCode}
    titles, class_codes, code_classes, conditions, names = {}, {}, {}, {}, {}

    for klass, title, entries in ERRCODES:
        error_class = classes[klass]
        titles[error_class] = title
        members = []
        for sqlstate, condition in entries:
            if sqlstate[:2] != klass:
                raise ValueError(f'{sqlstate} is listed under class {klass}')
            error_code = codes[sqlstate]
            members.append(error_code)
            code_classes[error_code] = error_class
            conditions[error_code] = condition
            names[(error_class, error_code)] = NAME_OVERRIDES.get(sqlstate, camel_name(condition))
        class_codes[error_class] = tuple(members)

    titles[UNKNOWN_CLASS] = _UNKNOWN_TITLE
    class_codes[UNKNOWN_CLASS] = (UNKNOWN_CODE,)
    code_classes[UNKNOWN_CODE] = UNKNOWN_CLASS
    conditions[UNKNOWN_CODE] = 'unknown_error'
    names[(UNKNOWN_CLASS, UNKNOWN_CODE)] = UNKNOWN_NAME

    if len(set(names.values())) != len(names):
        raise ValueError('error code display names must be unique')

    return (
        MappingProxyType(classes),
        MappingProxyType(codes),
        MappingProxyType(titles),
        MappingProxyType(class_codes),
        MappingProxyType(code_classes),
        MappingProxyType(conditions),
        MappingProxyType(names),
    )


(_CLASSES, _CODES, _CLASS_TITLES, _CLASS_CODES,
 _CODE_CLASSES, _CONDITION_NAMES, NAME_TABLE) = _build_tables()

# Each class is represented by its XX000 code, whose name doubles as the
# class name (42 -> SyntaxErrorOrAccessRuleViolation).
CLASS_NAMES = MappingProxyType({
    error_class: NAME_TABLE[(error_class, codes[0])]
    for error_class, codes in _CLASS_CODES.items()
})


def lookup_class(value: str):
    """Return the `ErrorClass` for a two-character string, or None."""
    return _CLASSES.get(value) if isinstance(value, str) else None


def lookup_code(value: str):
    """Return the `ErrorCode` for a five-character string, or None."""
    return _CODES.get(value) if isinstance(value, str) else None


def display_name(error_class, error_code) -> str:
    """Name for a class/code pair, `UNKNOWN_NAME` for unregistered pairs."""
    return NAME_TABLE.get((error_class, error_code), UNKNOWN_NAME)


def iter_codes(include_unknown: bool = False):
    """Yield ``(ErrorClass, ErrorCode, name)`` for every registered code.

    Args:
        include_unknown: Also yield the unknown sentinel pair at the end

    Returns
        Generator of tuples in appendix order
    """
    for (error_class, error_code), name in NAME_TABLE.items():
        if error_code is UNKNOWN_CODE and not include_unknown:
            continue
        yield error_class, error_code, name
