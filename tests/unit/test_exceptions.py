"""
Unit tests for the exception model and result failure construction.
"""
import pickle

import pytest
from pgerror import errors
from pgerror.errors import class_for, lookup, make_result_failure
from pgerror.errors import result_failure
from pgerror.exceptions import ClientConnectionFailure, ClientError
from pgerror.exceptions import ClientResultFailure, ConnectionFailure
from pgerror.exceptions import ConnStringParseFailure, PgError, ResultFailure
from pgerror.exceptions import ServerError, connection_failure
from pgerror.registry import UNKNOWN_CLASS, UNKNOWN_CODE, ErrorClass
from pgerror.registry import ErrorCode
from psycopg.pq import DiagnosticField


class TestHierarchy:
    """Exception classes and catch-by-class behavior"""

    def test_variants(self):
        assert issubclass(ConnectionFailure, ServerError)
        assert issubclass(ConnStringParseFailure, ServerError)
        assert issubclass(ResultFailure, ServerError)
        assert issubclass(ClientConnectionFailure, ClientError)
        assert issubclass(ClientResultFailure, ClientError)
        assert issubclass(ServerError, PgError)
        assert issubclass(ClientError, PgError)

    def test_code_class_derives_from_class_representative(self):
        assert issubclass(errors.SyntaxError, errors.SyntaxErrorOrAccessRuleViolation)
        assert issubclass(errors.SyntaxErrorOrAccessRuleViolation, ResultFailure)
        assert not issubclass(errors.UniqueViolation, errors.SyntaxErrorOrAccessRuleViolation)
        assert errors.SyntaxError.__module__ == 'pgerror.errors'

    def test_catch_by_class(self):
        with pytest.raises(errors.IntegrityConstraintViolation) as excinfo:
            raise errors.ForeignKeyViolation('ERROR:  fk\n')
        assert excinfo.value.error_class is ErrorClass.C23
        assert excinfo.value.error_code is ErrorCode.E23503

    def test_every_code_has_a_class(self):
        for error_code in ErrorCode:
            cls = class_for(error_code)
            assert cls.error_code is error_code
            assert cls.error_class is error_code.error_class
            assert getattr(errors, cls.__name__) is cls
            assert cls.__name__ == error_code.display_name

    def test_unknown_error(self):
        assert errors.UnknownError.error_class is UNKNOWN_CLASS
        assert errors.UnknownError.error_code is UNKNOWN_CODE
        assert issubclass(errors.UnknownError, ResultFailure)

    def test_lookup(self):
        assert lookup('42601') is errors.SyntaxError
        assert lookup(ErrorCode.E23505) is errors.UniqueViolation
        with pytest.raises(KeyError):
            lookup('ZZ000')

    def test_class_for_unregistered_falls_back(self):
        assert class_for(None) is errors.UnknownError


class TestResultFailure:
    """Construction from raw codes and from message sources"""

    def test_result_failure_from_known_code(self):
        err = result_failure('42601', 'ERROR:  syntax error\n')
        assert type(err) is errors.SyntaxError
        assert err.error_code is ErrorCode.E42601
        assert err.sqlstate == '42601'
        assert err.verbose_msg is None

    @pytest.mark.parametrize('sqlstate', ['ZZ000', None, '', b'ZZ000', 'X'])
    def test_result_failure_from_unknown_code(self, sqlstate):
        err = result_failure(sqlstate, 'ERROR:  odd\n')
        assert type(err) is errors.UnknownError
        assert (err.error_class, err.error_code) == (UNKNOWN_CLASS, UNKNOWN_CODE)

    def test_make_result_failure(self, syntax_error_source):
        err = make_result_failure(syntax_error_source)
        assert isinstance(err, errors.SyntaxError)
        assert err.msg == syntax_error_source.msg
        assert err.verbose_msg is None
        assert syntax_error_source.calls == [False]

    def test_make_result_failure_verbose(self, syntax_error_source):
        err = make_result_failure(syntax_error_source, verbose=True)
        assert err.msg == syntax_error_source.msg
        assert err.verbose_msg == syntax_error_source.verbose_msg
        assert syntax_error_source.calls == [False, True]

    def test_empty_verbose_is_not_missing(self, make_source):
        err = make_result_failure(make_source('42601', 'ERROR:  x\n', ''), verbose=True)
        assert err.verbose_msg == ''
        assert err.verbose_msg is not None

    def test_missing_sqlstate_does_not_raise(self, make_source):
        err = make_result_failure(make_source(None, 'ERROR:  no code\n'))
        assert type(err) is errors.UnknownError

    def test_bytes_sqlstate(self, make_source):
        source = make_source(fields={DiagnosticField.SQLSTATE: b'23505'}, msg='ERROR:  dup\n')
        assert type(make_result_failure(source)) is errors.UniqueViolation

    def test_identity_independent_of_message(self):
        first = result_failure('42601', 'ERROR:  one\n')
        second = result_failure('42601', 'ERROR:  two\n')
        assert (first.error_class, first.error_code) == (second.error_class, second.error_code)
        assert first.msg != second.msg

    def test_direct_construction(self):
        err = errors.SyntaxError('ERROR:  x\n', 'ERROR:  42601: x\n')
        assert err.msg == 'ERROR:  x\n'
        assert err.verbose_msg == 'ERROR:  42601: x\n'
        assert err.args == ('ERROR:  x\n',)

    def test_messages_are_read_only(self):
        err = errors.SyntaxError('ERROR:  x\n')
        with pytest.raises(AttributeError):
            err.msg = 'other'
        with pytest.raises(AttributeError):
            err.verbose_msg = 'other'

    @pytest.mark.parametrize('err', [
        errors.SyntaxError('ERROR:  x\n'),
        errors.SyntaxError('ERROR:  x\n', ''),
        errors.UnknownError('ERROR:  y\n', 'ERROR:  UNOWN: y\n'),
        ConnectionFailure('could not connect\n'),
        ClientResultFailure('result is closed'),
    ])
    def test_pickle(self, err):
        restored = pickle.loads(pickle.dumps(err))
        assert type(restored) is type(err)
        assert restored.msg == err.msg
        assert getattr(restored, 'verbose_msg', None) == getattr(err, 'verbose_msg', None)


def test_connection_failure(make_source):
    source = make_source(msg='connection to server failed: Connection refused\n')
    err = connection_failure(source)
    assert type(err) is ConnectionFailure
    assert err.msg == source.msg
    assert source.calls == [False]


if __name__ == '__main__':
    __import__('pytest').main([__file__])
