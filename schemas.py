from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class MoistureReadingIn(BaseModel):
    # firmware may send numeric ids
    model_config = ConfigDict(coerce_numbers_to_str=True)

    pot_id: str = Field(..., min_length=1, max_length=64)
    location: Optional[str] = None
    raw_value: float
    moisture_percent: float


class ReadingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    pot_id: str
    location: Optional[str] = None
    raw_value: float
    moisture_percent: float
    timestamp: datetime


class PotSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    pot_id: str
    location: Optional[str] = None
    reading_count: int
    last_reading: datetime


class ReadingCreated(BaseModel):
    success: bool = True
    data: ReadingOut


class PotHistory(BaseModel):
    success: bool = True
    pot_id: str
    count: int
    data: List[ReadingOut]


class ReadingList(BaseModel):
    success: bool = True
    count: int
    data: List[ReadingOut]


class PotList(BaseModel):
    success: bool = True
    count: int
    data: List[PotSummary]


class CleanupResult(BaseModel):
    success: bool = True
    deleted: int
    message: str


class HealthStatus(BaseModel):
    status: str
    timestamp: str


class ErrorBody(BaseModel):
    error: str
    details: str
