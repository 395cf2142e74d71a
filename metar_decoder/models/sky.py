from pydantic import BaseModel, ConfigDict
from typing import Optional
from metar_decoder.grammar import SkyCover


class SkyCondition(BaseModel):
    model_config = ConfigDict(frozen=True)

    contraction: SkyCover
    height_hundreds_of_feet: Optional[int] = None
    modifier: Optional[str] = None  # cloud type, e.g. CB, TCU

    @property
    def height_feet(self) -> Optional[int]:
        if self.height_hundreds_of_feet is None:
            return None
        return self.height_hundreds_of_feet * 100

