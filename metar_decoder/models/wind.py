from pydantic import BaseModel, ConfigDict
from typing import Optional, Tuple
from metar_decoder.grammar import SpeedUnit

KNOTS_PER_MPS = 1.943844


class Wind(BaseModel):
    model_config = ConfigDict(frozen=True)

    direction: Optional[int] = None  # degrees true; None when VRB
    is_variable: bool = False  # VRB, variability of 6 kt or less
    speed: int
    gust_speed: Optional[int] = None
    unit: SpeedUnit = SpeedUnit.KNOTS
    variable_range: Optional[Tuple[int, int]] = None

    @property
    def speed_knots(self) -> float:
        return _to_knots(self.speed, self.unit)

    @property
    def speed_mps(self) -> float:
        return _to_mps(self.speed, self.unit)

    @property
    def gust_speed_knots(self) -> Optional[float]:
        if self.gust_speed is None:
            return None
        return _to_knots(self.gust_speed, self.unit)

    @property
    def gust_speed_mps(self) -> Optional[float]:
        if self.gust_speed is None:
            return None
        return _to_mps(self.gust_speed, self.unit)


def _to_knots(value: int, unit: SpeedUnit) -> float:
    if unit == SpeedUnit.KNOTS:
        return float(value)
    return value * KNOTS_PER_MPS


def _to_mps(value: int, unit: SpeedUnit) -> float:
    if unit == SpeedUnit.METERS_PER_SECOND:
        return float(value)
    return value / KNOTS_PER_MPS
