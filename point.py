from enum import Enum


class Point(Enum):
    """Forecast points available for parsing, as region paths under /forecast/"""
    tsukuba = "3/11/4020/8220"
    mito = "3/11/4010/8201"
    chiyoda = "3/16/4410/13101"
    yokohama = "3/17/4610/14100"
    kobe = "6/31/6310/28100"


class Granularity(Enum):
    hourly = "1hour"
    every_3_hours = "3hours"

    @property
    def table_token(self):
        """Token embedded into the per-day table ids, e.g. forecast-point-1h-today"""
        return "1h" if self is Granularity.hourly else "3h"
