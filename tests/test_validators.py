"""
Tests for input validation utilities.
"""

from datetime import date, datetime

import pytest

from utils.helpers import format_date, parse_bool, serialize_row
from utils.validators import (
    parse_iso_date,
    sanitize_input,
    validate_coordinates,
    validate_date_format,
    validate_date_range,
    validate_email,
    validate_password,
)


class TestValidateEmail:
    """Tests for email validation."""

    def test_valid_email(self):
        assert validate_email('user@example.com') is True
        assert validate_email('user+tag@example.co.uk') is True

    def test_invalid_email(self):
        assert validate_email('') is False
        assert validate_email(None) is False
        assert validate_email('missing@domain') is False
        assert validate_email('spaces in@email.com') is False


class TestValidatePassword:

    def test_valid(self):
        assert validate_password('Storage2026') == (True, '')

    def test_too_short(self):
        is_valid, error = validate_password('ab1', min_length=8)
        assert is_valid is False
        assert '8' in error

    def test_letters_only(self):
        assert validate_password('abcdefgh')[0] is False
        assert validate_password('12345678')[0] is False


class TestDates:

    def test_parse_iso_date(self):
        assert parse_iso_date('2026-03-01') == date(2026, 3, 1)
        assert parse_iso_date('2026-03-01T23:59:59.000Z') == date(2026, 3, 1)
        assert parse_iso_date(datetime(2026, 3, 1, 12)) == date(2026, 3, 1)
        assert parse_iso_date(date(2026, 3, 1)) == date(2026, 3, 1)

    @pytest.mark.parametrize('value', ['', None, '01/03/2026', 'tomorrow', 20260301])
    def test_parse_iso_date_rejects(self, value):
        with pytest.raises(ValueError):
            parse_iso_date(value)

    def test_validate_date_format(self):
        assert validate_date_format('2026-02-28') is True
        assert validate_date_format('2026-02-30') is False

    def test_validate_date_range_is_strict(self):
        assert validate_date_range('2026-03-01', '2026-03-02') is True
        assert validate_date_range('2026-03-01', '2026-03-01') is False
        assert validate_date_range('2026-03-02', '2026-03-01') is False


class TestMisc:

    def test_coordinates(self):
        assert validate_coordinates(40.4, -3.7) is True
        assert validate_coordinates('40.4', '-3.7') is True
        assert validate_coordinates(91, 0) is False
        assert validate_coordinates(None, 0) is False

    def test_sanitize_input(self):
        assert sanitize_input('  hello\x00 ') == 'hello'
        assert sanitize_input('abcdef', max_length=3) == 'abc'
        assert sanitize_input(None) == ''

    def test_parse_bool(self):
        assert parse_bool('true') is True
        assert parse_bool('1') is True
        assert parse_bool('no') is False
        assert parse_bool(None) is False
        assert parse_bool(None, default=True) is True

    def test_serialize_row(self):
        row = {'start_date': date(2026, 3, 1), 'rated': 0, 'items': '["a"]', 'price': 2.5}
        assert serialize_row(row, bool_fields=('rated',), json_fields=('items',)) == {
            'start_date': '2026-03-01', 'rated': False, 'items': ['a'], 'price': 2.5
        }

    def test_format_date(self):
        assert format_date('2026-03-01') == 'Mar 01, 2026'
        assert format_date(date(2026, 12, 25)) == 'Dec 25, 2026'
