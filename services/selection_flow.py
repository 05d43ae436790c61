"""
Two-step "pick a medication, then set its schedule" session.

The controller holds only transient working state. Side effects committed
while selecting (favorite flagging, name reconciliation) stay in place when
the session is later cancelled.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from typing import List, Optional, Union
from collections import OrderedDict

from core.exceptions import FlowStateError, ValidationError
from models.dose_event import DoseEvent
from models.medication import Medication
from services.catalogue import CatalogueStore
from services.dose_scheduler import DoseScheduler

logger = logging.getLogger(__name__)


class FlowStep(str, Enum):
    SELECT_MEDICATION = "select_medication"
    SET_SCHEDULE = "set_schedule"
    CLOSED = "closed"


@dataclass
class FlowState:
    date: date
    time: time
    step: FlowStep = FlowStep.SELECT_MEDICATION
    name: str = ""
    amount: str = ""
    medication_id: Optional[int] = None
    dose_event_id: Optional[int] = None

    @classmethod
    def start(cls, initial_date: Optional[date] = None, now: Optional[datetime] = None) -> "FlowState":
        now = now or datetime.now()
        return cls(date=initial_date or now.date(), time=now.time().replace(second=0, microsecond=0))

    @property
    def can_advance(self) -> bool:
        return self.step == FlowStep.SELECT_MEDICATION and bool(self.name.strip())

    @property
    def can_confirm(self) -> bool:
        return (
            self.step == FlowStep.SET_SCHEDULE
            and bool(self.name.strip())
            and bool(self.amount.strip())
        )


class SelectionFlowController:
    def __init__(
        self,
        catalogue: CatalogueStore,
        scheduler: DoseScheduler,
        state: Optional[FlowState] = None,
    ):
        self.catalogue = catalogue
        self.scheduler = scheduler
        self.state = state or FlowState.start()

    @property
    def step(self) -> FlowStep:
        return self.state.step

    def _require(self, step: FlowStep) -> None:
        if self.state.step != step:
            raise FlowStateError(
                f"Operation requires step {step.value}, flow is at {self.state.step.value}"
            )

    def _move(self, step: FlowStep) -> None:
        self.state.step = step

    # SelectMedication

    def catalogue_groups(self, query: Optional[str] = None) -> "OrderedDict[str, List[Medication]]":
        return self.catalogue.grouped(query)

    def select_from_catalogue(self, medication: Union[Medication, int]) -> FlowState:
        """Choose a catalogue entry; it becomes a favorite immediately."""
        self._require(FlowStep.SELECT_MEDICATION)
        if not isinstance(medication, Medication):
            medication = self.catalogue.get(medication)
        medication = self.catalogue.mark_favorite(medication)
        self.state.name = medication.name
        self.state.medication_id = medication.id
        self._move(FlowStep.SET_SCHEDULE)
        logger.info(f"Flow selected catalogue medication {medication.id} ({medication.name})")
        return self.state

    def enter_name(self, text: str) -> FlowState:
        self._require(FlowStep.SELECT_MEDICATION)
        self.state.name = text or ""
        return self.state

    def submit_name(self, text: Optional[str] = None) -> FlowState:
        """Advance with free text, reconciling it into the catalogue as a favorite."""
        self._require(FlowStep.SELECT_MEDICATION)
        if text is not None:
            self.state.name = text
        if not self.state.can_advance:
            raise ValidationError("Medication name is required")
        medication = self.catalogue.reconcile_by_name(self.state.name)
        self.state.name = medication.name
        self.state.medication_id = medication.id
        self._move(FlowStep.SET_SCHEDULE)
        logger.info(f"Flow entered medication {medication.name} (id={medication.id})")
        return self.state

    # SetSchedule

    def update_schedule(
        self,
        day: Optional[date] = None,
        at: Optional[time] = None,
        amount: Optional[str] = None,
    ) -> FlowState:
        self._require(FlowStep.SET_SCHEDULE)
        if day is not None:
            self.state.date = day
        if at is not None:
            self.state.time = at
        if amount is not None:
            self.state.amount = amount
        return self.state

    def back(self) -> FlowState:
        """Return to selection keeping the chosen name and typed amount."""
        self._require(FlowStep.SET_SCHEDULE)
        self._move(FlowStep.SELECT_MEDICATION)
        return self.state

    def confirm(
        self,
        day: Optional[date] = None,
        at: Optional[time] = None,
        amount: Optional[str] = None,
    ) -> DoseEvent:
        self.update_schedule(day, at, amount)
        if not self.state.can_confirm:
            raise ValidationError("Medication name and dose amount are required")
        event = self.scheduler.schedule(self.state.name, self.state.date, self.state.time, self.state.amount)
        self.state.dose_event_id = event.id
        self._move(FlowStep.CLOSED)
        return event

    # Either step

    def cancel(self) -> FlowState:
        if self.state.step == FlowStep.CLOSED:
            raise FlowStateError("Flow is already closed")
        self._move(FlowStep.CLOSED)
        logger.info("Flow cancelled")
        return self.state
