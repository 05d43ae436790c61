from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class MedicationFields(BaseModel):
    """Descriptive fields shared by add and reconcile."""
    generic_name: str = ""
    category: str = ""
    form: str = ""
    strength: str = ""
    notes: str = ""


class MedicationCreate(MedicationFields):
    name: str
    is_favorite: bool = False


class MedicationReconcile(MedicationFields):
    name: str


class UsagePlanUpdate(BaseModel):
    doses_per_day: int = Field(default=1, ge=1)
    interval_days: int = Field(default=1, ge=1)


class MedicationRead(MedicationFields):
    id: int
    name: str
    is_builtin: bool
    is_favorite: bool
    doses_per_day: int
    interval_days: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }


class MedicationGroup(BaseModel):
    category: str
    medications: List[MedicationRead]


class BatchDeleteRequest(BaseModel):
    ids: List[int]
