"""
Exception classes for PostgreSQL client failures.

    PgError
    ├── ServerError                 message generated by PostgreSQL
    │   ├── ConnectionFailure
    │   ├── ConnStringParseFailure
    │   └── ResultFailure           carries error_class / error_code
    │       └── (one subclass per error class and code, see pgerror.errors)
    └── ClientError                 detected by the client, no server message
        ├── ClientConnectionFailure
        └── ClientResultFailure
"""
from typing import ClassVar

from pgerror.registry import UNKNOWN_CLASS, UNKNOWN_CODE, ErrorClass
from pgerror.registry import ErrorCode

__all__ = [
    'PgError',
    'ServerError',
    'ClientError',
    'ConnectionFailure',
    'ConnStringParseFailure',
    'ClientConnectionFailure',
    'ClientResultFailure',
    'ResultFailure',
    'connection_failure',
]


class PgError(Exception):
    """Base class for all pgerror exceptions.
    """

    def __init__(self, msg: str) -> None:
        super().__init__(msg)
        self._msg = str(msg)

    @property
    def msg(self) -> str:
        return self._msg

    def __str__(self) -> str:
        from pgerror.formatting import error_text
        return error_text(self)

    def __repr__(self) -> str:
        from pgerror.formatting import debug_repr
        return debug_repr(self)

    def __reduce__(self):
        return type(self), (self._msg,)


class ServerError(PgError):
    """An exception with an error message generated by PostgreSQL.

    Server messages end with a newline, which is dropped when displayed.
    """


class ClientError(PgError):
    """An exception detected by the client without a server message.
    """


class ConnectionFailure(ServerError):
    """Error regarding a connection reported by PostgreSQL.
    """


class ConnStringParseFailure(ServerError):
    """Error parsing a connection parameter string reported by libpq.
    """


class ClientConnectionFailure(ClientError):
    """Misuse of a connection detected by the client.
    """


class ClientResultFailure(ClientError):
    """Misuse of a query result detected by the client.
    """


class ResultFailure(ServerError):
    """Error regarding a query result generated by PostgreSQL.

    `error_class` and `error_code` identify the SQLSTATE reported by the
    server. Concrete subclasses exist for every registered code (see
    `pgerror.errors`), so a failure can be caught by exact code or by class:

        try:
            cn.execute('SELORCT NUUL;')
        except errors.SyntaxErrorOrAccessRuleViolation as err:
            assert err.error_code is ErrorCode.E42601

    `verbose_msg` is None unless verbose diagnostics were requested, which
    is distinct from an empty verbose message.
    """
    error_class: ClassVar[ErrorClass] = UNKNOWN_CLASS
    error_code: ClassVar[ErrorCode] = UNKNOWN_CODE

    def __init__(self, msg: str, verbose_msg: str | None = None) -> None:
        super().__init__(msg)
        self._verbose_msg = None if verbose_msg is None else str(verbose_msg)

    @property
    def verbose_msg(self) -> str | None:
        return self._verbose_msg

    @property
    def sqlstate(self) -> str:
        return self.error_code.value

    def __reduce__(self):
        return type(self), (self._msg, self._verbose_msg)


def connection_failure(source) -> ConnectionFailure:
    """Build a `ConnectionFailure` from a connection's message source.
    """
    return ConnectionFailure(source.error_message(verbose=False))
