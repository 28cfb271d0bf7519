import logging
from datetime import date, datetime

import pytest

from utils import app_config
from utils.currency import format_currency, parse_price
from utils.date_helpers import (
    at_time_of,
    format_days_until,
    format_display_date,
    parse_datetime,
    parse_display_date,
)


@pytest.mark.parametrize("target, expected", [
    (date(2026, 3, 9), "Overdue"),
    (date(2026, 3, 10), "Today"),
    (date(2026, 3, 11), "Tomorrow"),
    (date(2026, 3, 17), "In 7 days"),
])
def test_format_days_until(target, expected):
    assert format_days_until(target, ref=date(2026, 3, 10)) == expected


def test_format_days_until_ignores_time_of_day():
    ref = datetime(2026, 3, 10, 23, 59)
    assert format_days_until(datetime(2026, 3, 11, 0, 1), ref) == "Tomorrow"


@pytest.mark.parametrize("text, expected", [
    ("9.99", 9.99),
    (" 12 ", 12.0),
    ("", None),
    ("   ", None),
    ("abc", None),
    ("nan", None),
    ("inf", None),
])
def test_parse_price(text, expected):
    assert parse_price(text) == expected


def test_format_currency():
    assert format_currency(1234.5) == "$1,234.50"
    assert format_currency(15.99, symbol="€") == "€15.99"


def test_parse_datetime_accepts_bare_dates():
    assert parse_datetime("2026-04-02") == datetime(2026, 4, 2, 0, 0)
    assert parse_datetime("2026-04-02T18:45:00") == datetime(2026, 4, 2, 18, 45)
    assert parse_datetime("") is None
    assert parse_datetime("garbage") is None


def test_at_time_of_uses_reference_clock():
    ref = datetime(2026, 3, 10, 14, 27, 51)
    assert at_time_of(date(2026, 4, 1), ref) == datetime(2026, 4, 1, 14, 27)


def test_display_dates():
    assert format_display_date(date(2026, 4, 2), "DD.MM.YYYY") == "02.04.2026"
    assert parse_display_date("04/02/2026", "MM/DD/YYYY") == date(2026, 4, 2)
    assert parse_display_date("2026-04-02", "DD/MM/YYYY") == date(2026, 4, 2)


class TestAppConfig:

    @pytest.fixture(autouse=True)
    def _isolated_config(self, tmp_path, monkeypatch):
        monkeypatch.setattr(app_config, "CONFIG_DIR", tmp_path)
        monkeypatch.setattr(app_config, "CONFIG_FILE", tmp_path / "config.json")

    def test_missing_file_gives_defaults(self):
        assert app_config.load_config() == {}
        assert app_config.get_db_folder() is None
        assert app_config.get_log_level() == logging.INFO

    def test_db_folder_round_trip(self, tmp_path):
        app_config.set_db_folder(str(tmp_path / "data"))
        assert app_config.get_db_folder() == str(tmp_path / "data")
        app_config.set_db_folder(None)
        assert app_config.get_db_folder() is None

    def test_log_level(self):
        app_config.save_config({"log_level": "debug"})
        assert app_config.get_log_level() == logging.DEBUG
        app_config.save_config({"log_level": "chatty"})
        assert app_config.get_log_level() == logging.INFO

    def test_corrupt_file_is_ignored(self, tmp_path):
        (tmp_path / "config.json").write_text("{not json", encoding="utf-8")
        assert app_config.load_config() == {}
