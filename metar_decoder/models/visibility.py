from pydantic import BaseModel, ConfigDict, model_validator
from typing import Optional
from metar_decoder.grammar import RvrModifier

METERS_PER_STATUTE_MILE = 1609.344


class Visibility(BaseModel):
    """Prevailing visibility. Exactly one unit field is populated."""

    model_config = ConfigDict(frozen=True)

    statute_miles: Optional[float] = None
    kilometers: Optional[float] = None
    meters: Optional[float] = None
    less_than: bool = False
    is_cavok: bool = False

    @model_validator(mode="after")
    def _single_unit(self):
        populated = [v for v in (self.statute_miles, self.kilometers, self.meters) if v is not None]
        if len(populated) != 1:
            raise ValueError("visibility needs exactly one of statute_miles, kilometers, meters")
        if self.is_cavok and self.kilometers != 10.0:
            raise ValueError("CAVOK visibility is 10 km")
        return self

    @property
    def in_meters(self) -> float:
        if self.meters is not None:
            return self.meters
        if self.kilometers is not None:
            return self.kilometers * 1000
        return self.statute_miles * METERS_PER_STATUTE_MILE

    @property
    def in_kilometers(self) -> float:
        return self.in_meters / 1000

    @property
    def in_statute_miles(self) -> float:
        if self.statute_miles is not None:
            return self.statute_miles
        return self.in_meters / METERS_PER_STATUTE_MILE


class RunwayVisualRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    runway_number: int
    approach_direction: Optional[str] = None  # L, R or C
    modifier: Optional[RvrModifier] = None
    lowest_reportable: int
    highest_reportable: Optional[int] = None
    in_feet: bool = False
