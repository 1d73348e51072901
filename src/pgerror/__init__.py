"""
Classification of PostgreSQL client errors.

Failures reported by PostgreSQL carry a five-character SQLSTATE. This
package resolves those codes against the published list of error classes
and codes and raises a matching exception, so callers can catch failures
by exact code, by class, or as any server or client failure:

- ``pgerror.errors.SyntaxError``               exactly SQLSTATE 42601
- ``pgerror.errors.SyntaxErrorOrAccessRuleViolation``   any code in class 42
- ``pgerror.ResultFailure``                    any classified server error
- ``pgerror.PgError``                          anything raised by this package
"""
__version__ = '0.1.0'

from pgerror import errors
from pgerror.classify import belongs_to_class, classify, has_code
from pgerror.classify import sqlstate_or_placeholder
from pgerror.errors import class_for, lookup, make_result_failure
from pgerror.errors import result_failure
from pgerror.exceptions import ClientConnectionFailure, ClientError
from pgerror.exceptions import ClientResultFailure, ConnectionFailure
from pgerror.exceptions import ConnStringParseFailure, PgError, ResultFailure
from pgerror.exceptions import ServerError, connection_failure
from pgerror.formatting import chomp, debug_repr, error_class, error_code
from pgerror.formatting import error_name, error_text
from pgerror.options import ErrorOptions, load_options
from pgerror.registry import CLASS_NAMES, NAME_TABLE, UNKNOWN_CLASS
from pgerror.registry import UNKNOWN_CODE, UNKNOWN_NAME, UNKNOWN_SQLSTATE
from pgerror.registry import ErrorClass, ErrorCode, display_name, iter_codes
from pgerror.registry import lookup_class, lookup_code
from pgerror.sources import ConnectionSource, ExceptionSource, MessageSource
from pgerror.sources import ResultSource
from pgerror.translate import from_exception, parse_conninfo
from pgerror.translate import translate_errors

__all__ = [
    'errors',
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
    'iter_codes',
    'classify',
    'sqlstate_or_placeholder',
    'belongs_to_class',
    'has_code',
    'PgError',
    'ServerError',
    'ClientError',
    'ConnectionFailure',
    'ConnStringParseFailure',
    'ClientConnectionFailure',
    'ClientResultFailure',
    'ResultFailure',
    'connection_failure',
    'lookup',
    'class_for',
    'result_failure',
    'make_result_failure',
    'chomp',
    'error_text',
    'debug_repr',
    'error_name',
    'error_class',
    'error_code',
    'ErrorOptions',
    'load_options',
    'MessageSource',
    'ResultSource',
    'ConnectionSource',
    'ExceptionSource',
    'from_exception',
    'translate_errors',
    'parse_conninfo',
]
