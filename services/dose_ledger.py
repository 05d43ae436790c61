import logging
from datetime import date, datetime
from typing import Iterable, List, Optional, Union

from sqlalchemy.orm import Session

from core.exceptions import NotFoundError
from models.dose_event import DoseEvent
from repositories.dose_event import DoseEventRepository
from services.events import Publisher
from services.helpers import day_bounds
from services.notification_service import NotificationCenter

logger = logging.getLogger(__name__)


class DoseLedger:
    """Owns the lifecycle of dose events.

    Every mutation re-fetches the full time-ordered list and publishes it to
    subscribers.
    """

    def __init__(self, db: Session, notifications: Optional[NotificationCenter] = None):
        self.repo = DoseEventRepository(db)
        self.notifications = notifications
        self.changes: Publisher[DoseEvent] = Publisher()

    def list_all(self) -> List[DoseEvent]:
        return self.repo.list_sorted()

    def list_for_day(self, day: Union[date, datetime]) -> List[DoseEvent]:
        """Events on the same local calendar day as ``day``."""
        start, end = day_bounds(day)
        return self.repo.list_between(start, end)

    def list_pending_after(self, moment: datetime) -> List[DoseEvent]:
        return self.repo.list_pending_after(moment)

    def get(self, event_id: int) -> DoseEvent:
        event = self.repo.get(event_id)
        if event is None:
            raise NotFoundError(f"Dose event {event_id} not found")
        return event

    def record(self, timestamp: datetime, name: str = "", amount: str = "") -> DoseEvent:
        event = self.repo.create(
            {"timestamp": timestamp, "name": name, "amount": amount, "is_completed": False}
        )
        logger.info(f"Recorded dose event {event.id}: {name} {amount} at {timestamp.isoformat()}")
        self._publish()
        return event

    def attach_notification(self, event: DoseEvent, identifier: str) -> DoseEvent:
        return self.repo.update(event, {"notification_id": identifier})

    def toggle_completed(self, event: DoseEvent) -> DoseEvent:
        event = self.repo.update(event, {"is_completed": not event.is_completed})
        logger.info(f"Dose event {event.id} completed={event.is_completed}")
        self._publish()
        return event

    def delete(self, events: Union[DoseEvent, Iterable[DoseEvent]]) -> int:
        """Delete one event or several, cancelling their pending reminders."""
        if isinstance(events, DoseEvent):
            events = [events]
        events = list(events)
        identifiers = [e.notification_id for e in events if e.notification_id]
        removed = self.repo.delete_many([e.id for e in events])
        if self.notifications is not None:
            for identifier in identifiers:
                self.notifications.cancel(identifier)
        logger.info(f"Deleted {removed} dose event(s)")
        self._publish()
        return removed

    def delete_for_day(self, day: Union[date, datetime]) -> int:
        return self.delete(self.list_for_day(day))

    def _publish(self) -> None:
        self.changes.publish(self.list_all())
