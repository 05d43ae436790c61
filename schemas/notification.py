from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class NotificationStatusResponse(BaseModel):
    status: str
    enabled: bool


class AuthorizationRequest(BaseModel):
    granted: bool


class NotificationRequestRead(BaseModel):
    identifier: str
    title: str
    body: str
    trigger_at: datetime
    delivered_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }
