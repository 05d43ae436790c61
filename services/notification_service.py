"""
Local notification center.

Stands in for the device notification subsystem: it tracks a permission
status and fires each requested reminder once, at its wall-clock trigger
time, through an APScheduler ``BackgroundScheduler``.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from threading import RLock
from typing import Callable, Dict, List, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.date import DateTrigger
from apscheduler.jobstores.base import JobLookupError

from core.config import settings

logger = logging.getLogger(__name__)


class AuthorizationStatus(str, Enum):
    AUTHORIZED = "authorized"
    PROVISIONAL = "provisional"
    DENIED = "denied"
    NOT_DETERMINED = "notDetermined"

    @property
    def allows_delivery(self) -> bool:
        return self in (AuthorizationStatus.AUTHORIZED, AuthorizationStatus.PROVISIONAL)


@dataclass
class NotificationRequest:
    identifier: str
    title: str
    body: str
    trigger_at: datetime
    delivered_at: Optional[datetime] = None


DeliveryHandler = Callable[[NotificationRequest], None]


class NotificationCenter:
    def __init__(
        self,
        scheduler: Optional[BackgroundScheduler] = None,
        status: Optional[AuthorizationStatus] = None,
        enabled: Optional[bool] = None,
    ):
        self.scheduler = scheduler or BackgroundScheduler(
            job_defaults={
                "misfire_grace_time": settings.NOTIFICATION_MISFIRE_GRACE_SECONDS,
                "coalesce": True,
            }
        )
        self.enabled = settings.NOTIFICATIONS_ENABLED if enabled is None else enabled
        self._status = status or AuthorizationStatus(settings.NOTIFICATION_AUTHORIZATION)
        self._requests: Dict[str, NotificationRequest] = {}
        self._handlers: List[DeliveryHandler] = []
        self._lock = RLock()

    # Permission

    def get_authorization_status(self) -> AuthorizationStatus:
        if not self.enabled:
            return AuthorizationStatus.DENIED
        return self._status

    def request_authorization(self, granted: bool) -> AuthorizationStatus:
        """Resolve an undetermined status; a decided status is left alone."""
        if self._status == AuthorizationStatus.NOT_DETERMINED:
            self._status = AuthorizationStatus.AUTHORIZED if granted else AuthorizationStatus.DENIED
            logger.info(f"Notification authorization resolved to {self._status.value}")
        return self.get_authorization_status()

    def set_authorization_status(self, status: AuthorizationStatus) -> None:
        self._status = AuthorizationStatus(status)
        logger.info(f"Notification authorization set to {self._status.value}")

    # Requests

    def available_identifier(self, identifier: str) -> str:
        """``identifier`` if unused, else the first free ``identifier-N`` (N >= 2)."""
        with self._lock:
            if identifier not in self._requests:
                return identifier
            counter = 2
            while f"{identifier}-{counter}" in self._requests:
                counter += 1
            return f"{identifier}-{counter}"

    def schedule_notification(
        self, identifier: str, title: str, body: str, trigger_at: datetime
    ) -> NotificationRequest:
        from tasks.reminder_tasks import deliver_dose_reminder

        request = NotificationRequest(identifier=identifier, title=title, body=body, trigger_at=trigger_at)
        with self._lock:
            self._requests[identifier] = request
            self.scheduler.add_job(
                deliver_dose_reminder,
                trigger=DateTrigger(run_date=trigger_at),
                args=[self, identifier],
                id=identifier,
                name=title,
                replace_existing=True,
            )
        logger.info(f"Notification {identifier} scheduled for {trigger_at.isoformat()}")
        return request

    def cancel(self, identifier: str) -> bool:
        with self._lock:
            request = self._requests.pop(identifier, None)
            try:
                self.scheduler.remove_job(identifier)
            except JobLookupError:
                pass
        if request is not None:
            logger.info(f"Notification {identifier} cancelled")
        return request is not None

    def get(self, identifier: str) -> Optional[NotificationRequest]:
        return self._requests.get(identifier)

    def pending(self) -> List[NotificationRequest]:
        with self._lock:
            waiting = [r for r in self._requests.values() if r.delivered_at is None]
        return sorted(waiting, key=lambda r: (r.trigger_at, r.identifier))

    # Delivery

    def add_delivery_handler(self, handler: DeliveryHandler) -> None:
        self._handlers.append(handler)

    def deliver(self, identifier: str) -> Optional[NotificationRequest]:
        """Mark a request delivered and hand it to every delivery handler."""
        with self._lock:
            request = self._requests.pop(identifier, None)
        if request is None:
            logger.warning(f"Notification {identifier} fired but is no longer pending")
            return None
        request.delivered_at = datetime.now()
        for handler in list(self._handlers):
            try:
                handler(request)
            except Exception as e:
                logger.error(f"Delivery handler failed for {identifier}: {e}", exc_info=True)
        return request

    # Lifecycle

    def start(self) -> None:
        if not self.scheduler.running:
            self.scheduler.start()
            logger.info("Notification scheduler started")

    def shutdown(self) -> None:
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Notification scheduler stopped")
