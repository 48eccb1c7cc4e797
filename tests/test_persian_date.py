from datetime import date

import pytest

from app.utils.persian_date import (
    format_persian_date,
    format_persian_date_with_day,
    is_date_in_range,
    next_week_range,
    parse_currency,
    persian_day_of_week,
    to_english_number,
    to_persian_date,
)

NOWRUZ_1403 = date(2024, 3, 20)  # Wednesday


def test_nowruz_conversion():
    assert to_persian_date(NOWRUZ_1403) == (1403, 1, 1)
    assert to_persian_date(date(2025, 3, 20)) == (1403, 12, 30)  # 1403 is a leap year


def test_formatting():
    assert format_persian_date(NOWRUZ_1403) == "1403/01/01"
    assert format_persian_date_with_day(NOWRUZ_1403) == "چهارشنبه 1 فروردین"


def test_week_starts_on_saturday():
    assert persian_day_of_week(date(2024, 3, 16)) == 0
    assert persian_day_of_week(NOWRUZ_1403) == 4
    assert persian_day_of_week(date(2024, 3, 22)) == 6


def test_next_week_range_excludes_today():
    start, end = next_week_range(NOWRUZ_1403)
    assert start == date(2024, 3, 21)
    assert end == date(2024, 3, 27)
    assert not is_date_in_range(NOWRUZ_1403, start, end)
    assert is_date_in_range(end, start, end)


def test_digits():
    assert to_english_number("۱۴۰۳") == "1403"


class TestParseCurrency:

    def test_persian_digits_and_separators(self):
        assert parse_currency("۱۶٬۰۰۰٬۰۰۰") == 16000000
        assert parse_currency("16,000") == 16000
        assert parse_currency(" 250 000 ") == 250000

    def test_large_amount_is_exact(self):
        assert parse_currency("9007199254740993") == 2 ** 53 + 1

    def test_negative(self):
        assert parse_currency("-5,000") == -5000

    @pytest.mark.parametrize("text", ["abc", "", "12.5", "1e6", "²"])
    def test_rejects_non_whole_amounts(self, text):
        with pytest.raises(ValueError):
            parse_currency(text)
