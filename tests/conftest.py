"""Shared test fixtures."""

import datetime
from pathlib import Path

import pytest
from lxml import etree

FIXTURE_DIR = Path(__file__).parent / "fixtures"

ROWS = ("weather", "temperature", "prob-precip", "precipitation", "humidity", "wind-direction", "wind-speed")


def slot(hour, kind="晴れ", temp="20.5", prob="10", precip="0", humid="60", wind_dir="北", wind_speed="2",
         past=False):
    return {"hour": hour, "past": past, "weather": kind, "temperature": temp, "prob-precip": prob,
            "precipitation": precip, "humidity": humid, "wind-direction": wind_dir, "wind-speed": wind_speed}


def _table(table_id, date_text, slots, drop=None):
    past_class = ' class="past"'
    hours = "".join(f'<td><span{past_class if s["past"] else ""}>{s["hour"]}</span></td>' for s in slots)
    rows = [f'<tr class="head"><td><div>{date_text}</div></td></tr>',
            f'<tr class="hour"><th>時刻</th>{hours}</tr>']
    for row in ROWS:
        cells = slots[:-1] if row == drop else slots
        tds = "".join(f"<td><span>{s[row]}</span></td>" for s in cells)
        rows.append(f'<tr class="{row}"><th>{row}</th>{tds}</tr>')
    return f'<table id="{table_id}">{"".join(rows)}</table>'


def build_page(slots, token="1h", dates=("10月18日", "10月19日", "10月20日"),
               offsets=("today", "tomorrow", "dayaftertomorrow"), heading=True, drop=None):
    tables = "".join(_table(f"forecast-point-{token}-{offset}", date, slots, drop)
                     for offset, date in zip(offsets, dates))
    h2 = '<h2>つくば市の1時間天気<time class="date-time">18日17:00発表</time></h2>' if heading else ""
    return f'<html><head><meta charset="utf-8"></head><body>{h2}{tables}</body></html>'


@pytest.fixture
def today() -> datetime.date:
    return datetime.date(2026, 10, 18)


@pytest.fixture
def page_builder():
    return build_page


@pytest.fixture
def slot_factory():
    return slot


@pytest.fixture
def fragment_builder():
    """Return a function building a parsed single day table."""
    def build(slots, date_text="10月18日", drop=None):
        return etree.HTML(_table("forecast-point-1h-today", date_text, slots, drop))
    return build


@pytest.fixture
def three_hours_html() -> str:
    return (FIXTURE_DIR / "tenki_3hours.html").read_text(encoding="utf-8")
