import logging
from datetime import date, datetime, time
from typing import Callable, Optional

from core.config import settings
from core.exceptions import PersistenceError, ValidationError
from models.dose_event import DoseEvent
from services.dose_ledger import DoseLedger
from services.helpers import compose_timestamp, notification_identifier, reminder_body
from services.notification_service import NotificationCenter

logger = logging.getLogger(__name__)


class DoseScheduler:
    """Turns a medication name, a day, a time and an amount into a dose event
    plus a local reminder at the composed timestamp."""

    def __init__(
        self,
        ledger: DoseLedger,
        notifications: NotificationCenter,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.ledger = ledger
        self.notifications = notifications
        self.clock = clock

    def schedule(self, name: str, day: date, at: time, amount: str) -> DoseEvent:
        name = (name or "").strip()
        amount = (amount or "").strip()
        if not name:
            raise ValidationError("Medication name is required")
        if not amount:
            raise ValidationError("Dose amount is required")

        timestamp = compose_timestamp(day, at)
        event = self.ledger.record(timestamp, name=name, amount=amount)

        identifier = self.request_reminder(event)
        if identifier:
            try:
                event = self.ledger.attach_notification(event, identifier)
            except PersistenceError:
                # No row holds the identifier, so nothing could cancel it later
                self.notifications.cancel(identifier)
                raise
        return event

    def request_reminder(self, event: DoseEvent, identifier: Optional[str] = None) -> Optional[str]:
        """Ask for a reminder at the event's time if permitted and still ahead."""
        status = self.notifications.get_authorization_status()
        if not status.allows_delivery:
            logger.info(f"Reminder for dose event {event.id} skipped: authorization {status.value}")
            return None
        if event.timestamp <= self.clock():
            logger.info(f"Reminder for dose event {event.id} skipped: {event.timestamp.isoformat()} has passed")
            return None

        identifier = self.notifications.available_identifier(
            identifier or notification_identifier(event.name, event.timestamp)
        )
        self.notifications.schedule_notification(
            identifier,
            settings.REMINDER_TITLE,
            reminder_body(event.name, event.amount),
            event.timestamp,
        )
        return identifier

    def restore_pending_reminders(self, now: Optional[datetime] = None) -> int:
        """Re-request reminders for future, not-completed events after a restart."""
        now = now or self.clock()
        restored = 0
        for event in self.ledger.list_pending_after(now):
            if event.notification_id and self.notifications.get(event.notification_id):
                continue
            identifier = self.request_reminder(event, identifier=event.notification_id)
            if identifier:
                if identifier != event.notification_id:
                    self.ledger.attach_notification(event, identifier)
                restored += 1
        logger.info(f"Restored {restored} pending reminder(s)")
        return restored
