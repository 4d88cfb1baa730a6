import datetime
import logging
import re
from typing import Callable, Optional, Tuple, TypeVar

import requests
from lxml import etree

from data_classes import (
    Announce,
    DailyForecast,
    NotYet,
    Past,
    Regular,
    Weather,
    WeatherKind,
    WindDirection,
)
from parser_exception import InvalidHtml, NetworkError
from point import Granularity, Point

logger = logging.getLogger(__name__)

T = TypeVar("T")

NOT_YET_TEXT = "---"
DAY_OFFSETS = ("today", "tomorrow", "dayaftertomorrow")
DATE_PATTERN = re.compile(r"(\d{1,2})月(\d{1,2})日")


def has_class(name: str) -> str:
    """xpath predicate matching one token of a whitespace separated class attribute"""
    return f"contains(concat(' ', normalize-space(@class), ' '), ' {name} ')"


def row_cells(row_class: str) -> str:
    return f"//tr[{has_class(row_class)}]/td"


SELECTOR_HEAD = row_cells("head") + "/div"
SELECTOR_HOUR = row_cells("hour") + "/span"
SELECTOR_KIND = row_cells("weather")
SELECTOR_TEMPERATURE = row_cells("temperature")
SELECTOR_PROB_PRECIP = row_cells("prob-precip")
SELECTOR_PRECIPITATION = row_cells("precipitation")
SELECTOR_HUMIDITY = row_cells("humidity")
SELECTOR_WIND_DIRECTION = f"{row_cells('wind-direction')} | {row_cells('wind-blow')}"
SELECTOR_WIND_SPEED = row_cells("wind-speed")


def collect_text(element) -> str:
    return "".join(element.itertext()).strip()


def parse_field(text: str, field_name: str, convert: Callable[[str], T]) -> T:
    try:
        return convert(text.strip())
    except ValueError:
        raise ValueError(f"failed to parse {text!r} as {field_name}") from None


def parse_optional(text: str, convert: Callable[[str], T]) -> Optional[T]:
    try:
        return convert(text.strip())
    except ValueError:
        return None


def unsigned(convert: Callable[[str], T]) -> Callable[[str], T]:
    def parse(text):
        value = convert(text)
        if value < 0:
            raise ValueError(f"negative value {value}")
        return value

    return parse


def resolve_date(text: str, today: datetime.date) -> Optional[datetime.date]:
    """
    Builds a full date out of "<month>月<day>日" text.
    Only a January date seen in December is moved to the next year, other
    year boundaries are not detected.
    :param text:
    :param today:
    :return: None when the text has no date or the date does not exist
    """
    match = DATE_PATTERN.search(text)
    if match is None:
        return None

    month, day = int(match.group(1)), int(match.group(2))
    year = today.year + 1 if month == 1 and today.month == 12 else today.year

    try:
        return datetime.date(year, month, day)
    except ValueError:
        return None


def parse_hour(span) -> datetime.time:
    hour = parse_field(collect_text(span), "hour", unsigned(int))
    return datetime.time(hour % 24)


def is_past(span) -> bool:
    classes = (span.get("class") or "").lower().split()
    return "past" in classes


def parse_weather(kind, temp, prob_precip, precip, humid, wind_dir, wind_speed) -> Weather:
    return Weather(kind=parse_field(collect_text(kind), "kind", WeatherKind),
                   temperature=parse_field(collect_text(temp), "temp", float),
                   prob_precip=parse_optional(collect_text(prob_precip), unsigned(int)),
                   precipitation=parse_field(collect_text(precip), "precipitation", unsigned(float)),
                   humidity=parse_field(collect_text(humid), "humidity", unsigned(int)),
                   wind_direction=parse_field(collect_text(wind_dir), "wind_direction", WindDirection),
                   wind_speed=parse_field(collect_text(wind_speed), "wind_speed", unsigned(int)))


def parse_slot(hour, kind, *cells) -> Tuple[datetime.time, Announce]:
    time = parse_hour(hour)

    # nothing else in the column is looked at once the kind is a placeholder
    if collect_text(kind) == NOT_YET_TEXT:
        return time, NotYet()

    weather = parse_weather(kind, *cells)
    if is_past(hour):
        return time, Past(weather)
    return time, Regular(weather)


def extract_rows(table) -> list:
    rows = {"hour": table.xpath(SELECTOR_HOUR),
            "kind": table.xpath(SELECTOR_KIND),
            "temperature": table.xpath(SELECTOR_TEMPERATURE),
            "prob_precip": table.xpath(SELECTOR_PROB_PRECIP),
            "precipitation": table.xpath(SELECTOR_PRECIPITATION),
            "humidity": table.xpath(SELECTOR_HUMIDITY),
            "wind_direction": table.xpath(SELECTOR_WIND_DIRECTION),
            "wind_speed": table.xpath(SELECTOR_WIND_SPEED)}

    lengths = {len(cells) for cells in rows.values()}
    if len(lengths) != 1:
        counts = ", ".join(f"{name}={len(cells)}" for name, cells in rows.items())
        raise ValueError(f"rows of the table are not aligned ({counts})")
    if 0 in lengths:
        raise ValueError("table has no hour slots")

    return list(zip(*rows.values()))


def extract_daily_forecast(table, location: str, today: datetime.date) -> DailyForecast:
    """
    Parses one day of the forecast. Raises ValueError with a readable message
    on the first thing that does not match the expected layout.
    :param table: fragment holding a single day table
    :param location: "<place> (<announced time>)"
    :param today:
    :return:
    """
    head = table.xpath(SELECTOR_HEAD)
    if not head:
        raise ValueError("date header `tr.head > td > div` not found")

    date_text = collect_text(head[0])
    date = resolve_date(date_text, today)
    if date is None:
        raise ValueError(f"invalid date {date_text!r}")

    weathers = tuple(parse_slot(*columns) for columns in extract_rows(table))

    times = [time for time, _ in weathers]
    if len(set(times)) != len(times):
        raise ValueError(f"duplicate hours in table for {date}")

    logger.debug("Parsed %d slots for %s", len(weathers), date)
    return DailyForecast(location=location, date=date, weathers=weathers)


def find_location(document) -> str:
    headings = document.xpath("//h2")
    if not headings:
        raise ValueError("location, announced_time not found")

    texts = [text.strip() for text in headings[0].xpath(".//text()") if text.strip()]
    if not texts:
        raise ValueError("location not found")
    if len(texts) < 2:
        raise ValueError("announced_time not found")

    location, announced_time = texts[0], texts[1]
    return f"{location} ({announced_time})"


def find_day_tables(document, granularity: Granularity) -> list:
    tables = []
    for offset in DAY_OFFSETS:
        table_id = f"forecast-point-{granularity.table_token}-{offset}"
        found = document.xpath(f"//*[@id='{table_id}']")
        if len(found) != 1:
            raise ValueError(f"expected one table #{table_id}, found {len(found)}")
        tables.append(found[0])
    return tables


def parse_3days_forecast(html: str, granularity: Granularity,
                         today: Optional[datetime.date] = None) -> Tuple[DailyForecast, ...]:
    """
    Turns the forecast page into three DailyForecast (today, tomorrow, day after tomorrow).
    Every layout or field problem is raised as InvalidHtml, nothing is skipped.
    """
    if today is None:
        today = datetime.date.today()

    try:
        document = etree.HTML(html)
        if document is None:
            raise ValueError("empty document")

        location = find_location(document)

        forecasts = []
        for table in find_day_tables(document, granularity):
            fragment = etree.HTML(etree.tostring(table, encoding="unicode", with_tail=False))
            if fragment is None:
                raise ValueError(f"failed to parse table {table.get('id')}")
            forecasts.append(extract_daily_forecast(fragment, location, today))
    except (ValueError, etree.LxmlError) as err:
        raise InvalidHtml(str(err)) from err

    forecasts = tuple(forecasts)
    if len(forecasts) != len(DAY_OFFSETS):
        raise InvalidHtml(f"expected {len(DAY_OFFSETS)} days, got {len(forecasts)}")
    return forecasts


class Tenki:

    BASE_URL = "https://tenki.jp/forecast/"

    def __init__(self, point: Point = Point.tsukuba, timeout: float = 30.0):
        self.__HEADERS = {"Accept-Language": "ja,en-US;q=0.7,en;q=0.3",
                          "User-Agent": "Mozilla/5.0 (X11; Ubuntu; Linux x86_64; rv:115.0) Gecko/20100101 Firefox/115.0",
                          "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"}

        self.point = point
        self.timeout = timeout

        self.__session = requests.Session()
        self.__session.headers.update(self.__HEADERS)

    def forecast_url(self, granularity: Granularity) -> str:
        return f"{self.BASE_URL}{self.point.value}/{granularity.value}.html"

    def request_page(self, url: str) -> str:
        logger.debug("Requesting %s", url)
        try:
            res = self.__session.get(url, timeout=self.timeout)
            res.raise_for_status()
        except requests.RequestException as err:
            raise NetworkError(str(err)) from err

        try:
            return res.content.decode("utf-8")
        except UnicodeDecodeError as err:
            raise NetworkError(f"response of {url} is not utf-8: {err}") from err

    def fetch_3days_forecast(self, granularity: Granularity) -> Tuple[DailyForecast, ...]:
        html = self.request_page(self.forecast_url(granularity))
        forecasts = parse_3days_forecast(html, granularity)

        logger.info("Fetched %s forecast for %s (%d days)",
                    granularity.value, forecasts[0].location, len(forecasts))
        return forecasts

    def fetch_10days_forecast(self) -> Tuple[DailyForecast, ...]:
        raise NotImplementedError("10 days forecast is not supported yet")


def fetch_each_3hours_forecast(point: Point = Point.tsukuba) -> Tuple[DailyForecast, ...]:
    """3時間天気"""
    return Tenki(point).fetch_3days_forecast(Granularity.every_3_hours)


def fetch_each_1hour_forecast(point: Point = Point.tsukuba) -> Tuple[DailyForecast, ...]:
    """1時間天気"""
    return Tenki(point).fetch_3days_forecast(Granularity.hourly)


def fetch_10days(point: Point = Point.tsukuba) -> Tuple[DailyForecast, ...]:
    """10日間天気"""
    return Tenki(point).fetch_10days_forecast()


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)

    for day in fetch_each_3hours_forecast():
        print(f"{day.location} - {day.date}")
        for time, announce in day.weathers:
            print(f"  {time:%H:%M} | {announce}")
