from pydantic import BaseModel, ConfigDict
from typing import List, Optional
from datetime import datetime


class ReadingCreate(BaseModel):
    """Schema for submitting a reading; the timestamp is assigned by the server"""
    power: float
    energy: float
    cost: float


class ReadingResponse(BaseModel):
    """Schema for a stored reading"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    power_w: Optional[float] = None
    energy_wh: Optional[float] = None
    cost: Optional[float] = None
    timestamp: datetime


class ReadingsResponse(BaseModel):
    success: bool = True
    readings: List[ReadingResponse]


class MessageResponse(BaseModel):
    success: bool = True
    message: str
