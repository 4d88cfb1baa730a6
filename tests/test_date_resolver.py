"""Tests for year inference of month/day texts."""

import datetime

from tenki_parser import resolve_date

DECEMBER = datetime.date(2024, 12, 20)


class TestResolveDate:
    def test_january_in_december_is_next_year(self):
        assert resolve_date("1月5日", DECEMBER) == datetime.date(2025, 1, 5)

    def test_same_year(self):
        assert resolve_date("6月5日", DECEMBER) == datetime.date(2024, 6, 5)

    def test_december_in_december(self):
        assert resolve_date("12月21日", DECEMBER) == datetime.date(2024, 12, 21)

    def test_january_in_november_is_not_moved(self):
        # only the December -> January boundary is recognised
        november = datetime.date(2024, 11, 30)
        assert resolve_date("1月2日", november) == datetime.date(2024, 1, 2)

    def test_invalid_month(self):
        assert resolve_date("13月5日", DECEMBER) is None

    def test_invalid_day(self):
        assert resolve_date("11月31日", DECEMBER) is None

    def test_leap_day(self):
        assert resolve_date("2月29日", datetime.date(2024, 2, 1)) == datetime.date(2024, 2, 29)
        assert resolve_date("2月29日", datetime.date(2025, 2, 1)) is None

    def test_surrounding_text(self):
        text = "今日\xa010月18日(日)"
        assert resolve_date(text, datetime.date(2026, 10, 18)) == datetime.date(2026, 10, 18)

    def test_no_match(self):
        assert resolve_date("today", DECEMBER) is None
        assert resolve_date("", DECEMBER) is None
