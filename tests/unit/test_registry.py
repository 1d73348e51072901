"""
Unit tests for the error code registry.
"""
import pytest
from pgerror._errcodes import ERRCODES
from pgerror.registry import CLASS_NAMES, NAME_TABLE, UNKNOWN_CLASS
from pgerror.registry import UNKNOWN_CODE, UNKNOWN_NAME, UNKNOWN_SQLSTATE
from pgerror.registry import ErrorClass, ErrorCode, camel_name, display_name
from pgerror.registry import iter_codes, lookup_class, lookup_code


def test_every_code_belongs_to_its_prefix_class():
    """Test a code's class is always its first two characters"""
    for error_code in ErrorCode:
        assert error_code.error_class.value == error_code.value[:2]
        assert error_code in error_code.error_class.codes


def test_lookup_roundtrips_strings():
    """Test string -> identity -> string for every registered value"""
    for error_class in ErrorClass:
        assert lookup_class(str(error_class)) is error_class
    for error_code in ErrorCode:
        assert lookup_code(str(error_code)) is error_code


def test_lookup_missing_or_invalid():
    assert lookup_code('ZZ000') is None
    assert lookup_class('ZZ') is None
    assert lookup_code(None) is None
    assert lookup_class(42) is None


def test_known_names():
    assert display_name(ErrorClass.C42, ErrorCode.E42601) == 'SyntaxError'
    assert display_name(ErrorClass.C23, ErrorCode.E23505) == 'UniqueViolation'
    assert ErrorCode.E22012.display_name == 'DivisionByZero'
    assert ErrorCode.E22012.condition_name == 'division_by_zero'
    assert CLASS_NAMES[ErrorClass.C42] == 'SyntaxErrorOrAccessRuleViolation'
    assert ErrorClass.C42.title == 'Syntax Error or Access Rule Violation'


def test_duplicate_condition_names_are_disambiguated():
    """Test the appendix's reused condition names map to distinct names"""
    assert ErrorCode.E22001.display_name == 'StringDataRightTruncation'
    assert ErrorCode.E01004.display_name == 'StringDataRightTruncationWarning'
    assert ErrorCode.E2F002.display_name == 'ModifyingSqlDataNotPermitted'
    assert ErrorCode.E38002.display_name == 'ModifyingSqlDataNotPermittedExternal'
    assert ErrorCode.E39004.display_name == 'NullValueNotAllowedExternal'
    assert len(set(NAME_TABLE.values())) == len(NAME_TABLE)


def test_name_table_covers_every_code_once():
    registered = sum(len(codes) for _, _, codes in ERRCODES)
    assert len(NAME_TABLE) == registered + 1
    assert len(ErrorCode) == registered + 1
    assert (UNKNOWN_CLASS, UNKNOWN_CODE) in NAME_TABLE


def test_unknown_sentinel():
    assert UNKNOWN_CODE.value == UNKNOWN_SQLSTATE == 'UNOWN'
    assert UNKNOWN_CLASS.value == 'UN'
    assert UNKNOWN_CODE.error_class is UNKNOWN_CLASS
    assert UNKNOWN_CODE.is_unknown and UNKNOWN_CLASS.is_unknown
    assert not ErrorCode.E42601.is_unknown
    assert display_name(UNKNOWN_CLASS, UNKNOWN_CODE) == UNKNOWN_NAME
    # a pair that was never registered together
    assert display_name(ErrorClass.C23, ErrorCode.E42601) == UNKNOWN_NAME


def test_class_representative_is_first():
    """Test each class lists its XX000 code first"""
    for error_class in ErrorClass:
        if error_class is UNKNOWN_CLASS:
            continue
        assert error_class.codes[0].value == f'{error_class.value}000'


def test_identity_display():
    """Test identities show the raw code and kind, not enum internals"""
    assert str(ErrorCode.E42601) == '42601'
    assert repr(ErrorCode.E42601) == '42601::ErrorCode'
    assert repr(ErrorClass.C42) == '42::ErrorClass'
    assert f'{ErrorClass.C0A}' == '0A'


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        NAME_TABLE[(ErrorClass.C42, ErrorCode.E42601)] = 'Other'
    with pytest.raises(TypeError):
        CLASS_NAMES[ErrorClass.C42] = 'Other'


def test_iter_codes():
    listing = list(iter_codes())
    assert (ErrorClass.C42, ErrorCode.E42601, 'SyntaxError') in listing
    assert all(code is not UNKNOWN_CODE for _, code, _ in listing)
    assert list(iter_codes(include_unknown=True))[-1] == (UNKNOWN_CLASS, UNKNOWN_CODE, UNKNOWN_NAME)
    assert listing[0] == (ErrorClass.C00, ErrorCode.E00000, 'SuccessfulCompletion')


@pytest.mark.parametrize(('condition', 'expected'), [
    ('syntax_error', 'SyntaxError'),
    ('sqlclient_unable_to_establish_sqlconnection', 'SqlclientUnableToEstablishSqlconnection'),
    ('non_unique_keys_in_a_json_object', 'NonUniqueKeysInAJsonObject'),
    ('io_error', 'IoError'),
])
def test_camel_name(condition, expected):
    assert camel_name(condition) == expected


if __name__ == '__main__':
    __import__('pytest').main([__file__])
