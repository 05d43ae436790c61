from pydantic import BaseModel
from typing import Optional, List
from datetime import date as Date, time as Time, datetime


class DoseScheduleRequest(BaseModel):
    name: str
    date: Date
    time: Time
    amount: str


class DoseEventRead(BaseModel):
    id: int
    timestamp: datetime
    name: str
    amount: str
    is_completed: bool
    notification_id: Optional[str] = None

    model_config = {
        "from_attributes": True
    }


class DayScheduleResponse(BaseModel):
    day: Date
    title: str
    subtitle: str
    doses: List[DoseEventRead]
