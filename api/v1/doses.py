"""
Dose event endpoints: the daily list, scheduling, completion and deletion.
"""

import logging
from datetime import date
from typing import List

from fastapi import APIRouter, Depends, status

from api.deps import get_dose_scheduler, get_ledger
from schemas.dose_event import DayScheduleResponse, DoseEventRead, DoseScheduleRequest
from schemas.medication import BatchDeleteRequest
from schemas.responses import StandardSuccessResponse
from services.dose_ledger import DoseLedger
from services.dose_scheduler import DoseScheduler
from services.helpers import day_header

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[DoseEventRead], summary="All dose events by time")
def list_doses(ledger: DoseLedger = Depends(get_ledger)):
    return ledger.list_all()


@router.get("/day/{day}", response_model=DayScheduleResponse, summary="Dose events of one day")
def list_doses_for_day(day: date, ledger: DoseLedger = Depends(get_ledger)):
    title, subtitle = day_header(day, date.today())
    return DayScheduleResponse(
        day=day,
        title=title,
        subtitle=subtitle,
        doses=[DoseEventRead.model_validate(e) for e in ledger.list_for_day(day)],
    )


@router.delete("/day/{day}", response_model=StandardSuccessResponse)
def delete_doses_for_day(day: date, ledger: DoseLedger = Depends(get_ledger)):
    removed = ledger.delete_for_day(day)
    return StandardSuccessResponse(message=f"Deleted {removed} dose event(s)", data={"deleted": removed})


@router.post("", response_model=DoseEventRead, status_code=status.HTTP_201_CREATED)
def schedule_dose(request: DoseScheduleRequest, scheduler: DoseScheduler = Depends(get_dose_scheduler)):
    return scheduler.schedule(request.name, request.date, request.time, request.amount)


@router.post("/delete", response_model=StandardSuccessResponse)
def delete_doses(request: BatchDeleteRequest, ledger: DoseLedger = Depends(get_ledger)):
    removed = ledger.delete(ledger.repo.get_many(request.ids))
    return StandardSuccessResponse(message=f"Deleted {removed} dose event(s)", data={"deleted": removed})


@router.post("/{event_id}/toggle", response_model=DoseEventRead, summary="Flip taken/not taken")
def toggle_dose(event_id: int, ledger: DoseLedger = Depends(get_ledger)):
    return ledger.toggle_completed(ledger.get(event_id))


@router.delete("/{event_id}", response_model=StandardSuccessResponse)
def delete_dose(event_id: int, ledger: DoseLedger = Depends(get_ledger)):
    ledger.delete(ledger.get(event_id))
    return StandardSuccessResponse(message=f"Dose event {event_id} deleted")
