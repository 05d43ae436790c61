from pydantic import BaseModel
from typing import Optional
from datetime import date as Date, time as Time


class FlowStartRequest(BaseModel):
    initial_date: Optional[Date] = None


class FlowSelectRequest(BaseModel):
    medication_id: int


class FlowEnterRequest(BaseModel):
    name: str


class FlowConfirmRequest(BaseModel):
    date: Optional[Date] = None
    time: Optional[Time] = None
    amount: str


class FlowRead(BaseModel):
    id: str
    step: str
    name: str
    date: Date
    time: Time
    amount: str
    can_advance: bool
    can_confirm: bool
    dose_event_id: Optional[int] = None
