from datetime import datetime
from pydantic import BaseModel, ConfigDict
from typing import Optional, Tuple
from metar_decoder.grammar import ReportModifier
from .sky import SkyCondition
from .visibility import RunwayVisualRange, Visibility
from .weather import Obscuration, WeatherCondition
from .wind import Wind


def celsius_to_fahrenheit(value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    return round(value * 9 / 5 + 32, 1)


class Observation(BaseModel):
    """One decoded METAR/SPECI report."""

    model_config = ConfigDict(frozen=True)

    station_id: str
    report_type: Optional[str] = None
    observed_at: Optional[datetime] = None
    raw_date_line: Optional[str] = None
    recorded_at: Optional[datetime] = None
    report_modifier: Optional[ReportModifier] = None

    wind: Optional[Wind] = None
    visibility: Optional[Visibility] = None
    runway_visual_ranges: Tuple[RunwayVisualRange, ...] = ()
    weather_conditions: Tuple[WeatherCondition, ...] = ()
    sky_conditions: Tuple[SkyCondition, ...] = ()
    obscurations: Tuple[Obscuration, ...] = ()

    temperature_c: Optional[float] = None
    dew_point_c: Optional[float] = None
    temperature_precise_c: Optional[float] = None
    dew_point_precise_c: Optional[float] = None

    pressure_in_hg: Optional[float] = None
    pressure_hpa: Optional[int] = None

    is_no_significant_change: bool = False
    becoming_trend: Optional[str] = None
    remarks: Optional[str] = None
    raw_report_string: str

    @property
    def is_cavok(self) -> bool:
        return self.visibility is not None and self.visibility.is_cavok

    @property
    def temperature_f(self) -> Optional[float]:
        return celsius_to_fahrenheit(self.temperature_c)

    @property
    def dew_point_f(self) -> Optional[float]:
        return celsius_to_fahrenheit(self.dew_point_c)

    @property
    def temperature_precise_f(self) -> Optional[float]:
        return celsius_to_fahrenheit(self.temperature_precise_c)

    @property
    def dew_point_precise_f(self) -> Optional[float]:
        return celsius_to_fahrenheit(self.dew_point_precise_c)

    @property
    def temperature_most_precise_c(self) -> Optional[float]:
        """Remarks (tenths) temperature when reported, else the body value."""
        if self.temperature_precise_c is not None:
            return self.temperature_precise_c
        return self.temperature_c

    @property
    def dew_point_most_precise_c(self) -> Optional[float]:
        if self.dew_point_precise_c is not None:
            return self.dew_point_precise_c
        return self.dew_point_c
