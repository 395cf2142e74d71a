from pydantic import BaseModel, ConfigDict
from typing import Optional
from metar_decoder.grammar import Descriptor, Intensity, Phenomena, SkyCover


class WeatherCondition(BaseModel):
    model_config = ConfigDict(frozen=True)

    intensity: Optional[Intensity] = None  # None is moderate
    descriptor: Optional[Descriptor] = None
    phenomena: Phenomena

    @property
    def is_light(self) -> bool:
        return self.intensity == Intensity.LIGHT

    @property
    def is_heavy(self) -> bool:
        return self.intensity == Intensity.HEAVY

    @property
    def is_moderate(self) -> bool:
        return self.intensity is None


class Obscuration(BaseModel):
    """Obscuring phenomena reported in the remarks, with the layer it forms."""

    model_config = ConfigDict(frozen=True)

    phenomena: Phenomena
    contraction: Optional[SkyCover] = None
    height_hundreds_of_feet: Optional[int] = None

    @property
    def height_feet(self) -> Optional[int]:
        if self.height_hundreds_of_feet is None:
            return None
        return self.height_hundreds_of_feet * 100
