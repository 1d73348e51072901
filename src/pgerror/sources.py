"""
Message sources backed by psycopg.

A message source is whatever a failure was reported on: a libpq result, a
connection, or a raised psycopg exception. It provides the short and
verbose error messages and the diagnostic fields, in particular the
SQLSTATE, that `pgerror.errors.make_result_failure` classifies.
"""
import logging
from typing import Protocol

import psycopg
from psycopg.pq import DiagnosticField
from pgerror.options import ErrorOptions, load_options

__all__ = [
    'SQLSTATE_FIELD',
    'MessageSource',
    'ResultSource',
    'ConnectionSource',
    'ExceptionSource',
    'verbose_message',
]

logger = logging.getLogger(__name__)

SQLSTATE_FIELD = DiagnosticField.SQLSTATE

# Labelled lines of a verbose message, in the order libpq prints them.
_VERBOSE_LINES = (
    ('DETAIL', DiagnosticField.MESSAGE_DETAIL),
    ('HINT', DiagnosticField.MESSAGE_HINT),
    ('QUERY', DiagnosticField.INTERNAL_QUERY),
    ('CONTEXT', DiagnosticField.CONTEXT),
    ('SCHEMA NAME', DiagnosticField.SCHEMA_NAME),
    ('TABLE NAME', DiagnosticField.TABLE_NAME),
    ('COLUMN NAME', DiagnosticField.COLUMN_NAME),
    ('DATATYPE NAME', DiagnosticField.DATATYPE_NAME),
    ('CONSTRAINT NAME', DiagnosticField.CONSTRAINT_NAME),
)


class MessageSource(Protocol):
    """What a failed result or connection must provide to be classified."""

    def error_message(self, verbose: bool = False) -> str:
        ...

    def error_field(self, field: DiagnosticField) -> str | None:
        ...


def _decode(value, encoding: str) -> str | None:
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode(encoding, 'replace')
    return str(value)


def verbose_message(source: MessageSource, options: ErrorOptions | None = None) -> str:
    """Assemble a verbose message from the diagnostic fields of a source.

    Follows the layout libpq uses for ``PQERRORS_VERBOSE``::

        ERROR:  42601: syntax error at or near "SELORCT"
        HINT:  ...
        LOCATION:  scanner_yyerror, scan.l:1188

    Falls back to the short message when the server sent no primary message.
    """
    options = options or ErrorOptions()
    primary = source.error_field(DiagnosticField.MESSAGE_PRIMARY)
    if primary is None:
        return source.error_message(verbose=False)

    severity = source.error_field(DiagnosticField.SEVERITY) or 'ERROR'
    sqlstate = source.error_field(SQLSTATE_FIELD)
    head = f'{sqlstate}: {primary}' if sqlstate else primary
    lines = [f'{severity}:  {head}']

    for label, field in _VERBOSE_LINES:
        if field is DiagnosticField.CONTEXT and not options.show_context:
            continue
        value = source.error_field(field)
        if value is not None:
            lines.append(f'{label}:  {value}')

    if options.show_location:
        function = source.error_field(DiagnosticField.SOURCE_FUNCTION)
        filename = source.error_field(DiagnosticField.SOURCE_FILE)
        line = source.error_field(DiagnosticField.SOURCE_LINE)
        if filename is not None and line is not None:
            where = f'{filename}:{line}'
            lines.append(f'LOCATION:  {function}, {where}' if function else f'LOCATION:  {where}')

    return '\n'.join(lines) + '\n'


class ResultSource:
    """Message source for a failed `psycopg.pq.PGresult`."""

    def __init__(self, pgresult, options: ErrorOptions | None = None):
        self.pgresult = pgresult
        self.options = load_options(options)

    def error_message(self, verbose: bool = False) -> str:
        if verbose:
            return verbose_message(self, self.options)
        return _decode(self.pgresult.error_message, self.options.encoding) or ''

    def error_field(self, field: DiagnosticField) -> str | None:
        return _decode(self.pgresult.error_field(field), self.options.encoding)


class ConnectionSource:
    """Message source for a `psycopg.pq.PGconn` or a psycopg connection.

    Connections carry no diagnostic fields, only a message.
    """

    def __init__(self, connection, options: ErrorOptions | None = None):
        self.pgconn = getattr(connection, 'pgconn', connection)
        self.options = load_options(options)

    def error_message(self, verbose: bool = False) -> str:
        return _decode(self.pgconn.error_message, self.options.encoding) or ''

    def error_field(self, field: DiagnosticField) -> str | None:
        return None


class ExceptionSource:
    """Message source for a raised `psycopg.Error`.

    Uses the exception's result when psycopg kept it, otherwise the
    diagnostic fields exposed on ``exc.diag``.
    """

    def __init__(self, exc: psycopg.Error, options: ErrorOptions | None = None):
        self.exc = exc
        self.options = load_options(options)
        pgresult = getattr(exc, 'pgresult', None)
        self._result = ResultSource(pgresult, self.options) if pgresult is not None else None

    def error_message(self, verbose: bool = False) -> str:
        if self._result is not None:
            return self._result.error_message(verbose)
        if verbose:
            return verbose_message(self, self.options)
        return str(self.exc)

    def error_field(self, field: DiagnosticField) -> str | None:
        if self._result is not None:
            return self._result.error_field(field)
        value = None
        diag = getattr(self.exc, 'diag', None)
        if diag is not None:
            try:
                value = getattr(diag, field.name.lower())
            except AttributeError:
                logger.debug(f'Diagnostic field {field.name} not available on {type(self.exc).__name__}')
        # psycopg error classes know their own code even without a result
        if value is None and field is SQLSTATE_FIELD:
            value = getattr(self.exc, 'sqlstate', None)
        return _decode(value, self.options.encoding)
