import datetime
from dataclasses import dataclass
from typing import Optional, Tuple, Union
from enum import Enum


class WeatherKind(Enum):
    """Sky condition labels as printed in the forecast table"""
    sunny = "晴れ"
    cloudy = "曇り"
    light_rain = "小雨"
    weak_rain = "弱雨"
    rain = "雨"
    heavy_rain = "強雨"
    torrential_rain = "豪雨"
    sleet = "みぞれ"
    dry_snow = "乾雪"
    wet_snow = "湿雪"
    snow = "雪"
    fog = "霧"


class WindDirection(Enum):
    calm = "静穏"
    n = "北"
    nne = "北北東"
    ne = "北東"
    ene = "東北東"
    e = "東"
    ese = "東南東"
    se = "南東"
    sse = "南南東"
    s = "南"
    ssw = "南南西"
    sw = "南西"
    wsw = "西南西"
    w = "西"
    wnw = "西北西"
    nw = "北西"
    nnw = "北北西"


@dataclass(frozen=True)
class Weather:
    kind: WeatherKind
    temperature: float
    prob_precip: Optional[int]  # None when the page shows no value
    precipitation: float  # mm
    humidity: int  # %
    wind_direction: WindDirection
    wind_speed: int  # m/s


@dataclass(frozen=True)
class NotYet:
    pass


@dataclass(frozen=True)
class Past:
    weather: Weather


@dataclass(frozen=True)
class Regular:
    weather: Weather


Announce = Union[NotYet, Past, Regular]


@dataclass(frozen=True)
class DailyForecast:
    location: str
    date: datetime.date
    weathers: Tuple[Tuple[datetime.time, Announce], ...]
