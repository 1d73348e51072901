"""
Classification of errors raised by a live PostgreSQL server.
"""
import psycopg
import pytest
from pgerror import errors
from pgerror.errors import make_result_failure
from pgerror.exceptions import ClientConnectionFailure, ClientResultFailure
from pgerror.exceptions import ConnectionFailure
from pgerror.registry import ErrorClass, ErrorCode
from pgerror.sources import ExceptionSource
from pgerror.translate import translate_errors


@translate_errors
def execute(conn, sql, *args):
    return conn.execute(sql, args or None).fetchall()


def test_syntax_error(pg_conn):
    with pytest.raises(errors.SyntaxErrorOrAccessRuleViolation) as excinfo:
        execute(pg_conn, 'SELORCT NUUL;')
    err = excinfo.value
    assert type(err) is errors.SyntaxError
    assert err.error_class is ErrorClass.C42
    assert 'syntax error at or near "SELORCT"' in str(err)
    assert not str(err).endswith('\n')
    assert err.msg.endswith('\n')
    assert repr(err).startswith("pgerror.errors.SyntaxError('ERROR:  syntax error")


def test_undefined_table(pg_conn):
    with pytest.raises(errors.UndefinedTable) as excinfo:
        execute(pg_conn, 'select * from no_such_table')
    assert excinfo.value.error_code is ErrorCode.E42P01


def test_division_by_zero_verbose(pg_conn):
    with pytest.raises(psycopg.errors.DivisionByZero) as excinfo:
        pg_conn.execute('select 1 / 0')
    err = make_result_failure(ExceptionSource(excinfo.value), verbose=True)
    assert type(err) is errors.DivisionByZero
    assert err.verbose_msg.startswith('ERROR:  22012: division by zero')
    assert 'LOCATION:' in err.verbose_msg
    assert str(err) == err.verbose_msg[:-1]


def test_unique_violation(pg_conn):
    pg_conn.execute('create temporary table t (id int primary key)')
    pg_conn.execute('insert into t values (1)')
    with pytest.raises(errors.IntegrityConstraintViolation) as excinfo:
        execute(pg_conn, 'insert into t values (%s)', 1)
    assert type(excinfo.value) is errors.UniqueViolation


def test_raise_exception_with_custom_sqlstate(pg_conn):
    with pytest.raises(errors.UnknownError) as excinfo:
        execute(pg_conn, "do $$ begin raise exception 'custom' using errcode = 'ZZ999'; end $$")
    assert 'custom' in str(excinfo.value)


def test_closed_connection(psql_dsn):
    conn = psycopg.connect(psql_dsn)
    conn.close()
    with pytest.raises(ClientConnectionFailure):
        execute(conn, 'select 1')


def test_closed_cursor(pg_conn):
    cur = pg_conn.cursor()
    cur.close()
    with pytest.raises(ClientResultFailure):
        translate_errors(cur.execute)('select 1')


def test_connection_refused():
    with pytest.raises(ConnectionFailure):
        translate_errors(psycopg.connect)('host=127.0.0.1 port=1 connect_timeout=1')


if __name__ == '__main__':
    __import__('pytest').main([__file__])
