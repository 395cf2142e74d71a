from pydantic import BaseModel
from typing import List, Optional
from .observation import Observation


class DecodeRequest(BaseModel):
    report: str  # e.g. "KLAX 060250Z 34010KT 10SM CLR 14/M07 A3012"
    date_line: Optional[str] = None  # e.g. "2004/01/06 02:50"


class BatchRequest(BaseModel):
    text: str  # NOAA cycle file, records separated by blank lines


class DecodeResponse(BaseModel):
    observation: Observation
    summary: str


class DecodeFailure(BaseModel):
    record: str
    error: str
    message: str
    group: Optional[str] = None
    token: Optional[str] = None


class BatchResult(BaseModel):
    observations: List[Observation] = []
    failures: List[DecodeFailure] = []
