"""
Dependency injection utilities for API endpoints.
"""

import logging
import time
import uuid
from threading import Event, Lock
from typing import Callable, Dict, Optional, Tuple

from fastapi import Depends
from sqlalchemy.orm import Session

from core.config import settings
from core.database import get_db
from core.exceptions import NotFoundError
from services.catalogue import CatalogueStore
from services.dose_ledger import DoseLedger
from services.dose_scheduler import DoseScheduler
from services.notification_service import NotificationCenter
from services.selection_flow import FlowState

logger = logging.getLogger(__name__)

notification_center = NotificationCenter()

# Set once the catalogue has been checked for seeding in this process
catalogue_seeded = Event()


class FlowRegistry:
    """In-memory selection sessions keyed by id.

    A session untouched for ``idle_timeout`` seconds is dropped the next time
    a session is opened.
    """

    def __init__(
        self,
        idle_timeout: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.idle_timeout = settings.FLOW_IDLE_TIMEOUT_SECONDS if idle_timeout is None else idle_timeout
        self.clock = clock
        self._flows: Dict[str, Tuple[FlowState, float]] = {}
        self._lock = Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._flows)

    def open(self, state: FlowState) -> str:
        flow_id = uuid.uuid4().hex
        with self._lock:
            self._prune()
            self._flows[flow_id] = (state, self.clock())
        return flow_id

    def get(self, flow_id: str) -> FlowState:
        with self._lock:
            entry = self._flows.get(flow_id)
            if entry is not None:
                self._flows[flow_id] = (entry[0], self.clock())
        if entry is None:
            raise NotFoundError(f"Flow {flow_id} not found")
        return entry[0]

    def close(self, flow_id: str) -> None:
        with self._lock:
            self._flows.pop(flow_id, None)

    def _prune(self) -> None:
        cutoff = self.clock() - self.idle_timeout
        stale = [flow_id for flow_id, (_, touched) in self._flows.items() if touched < cutoff]
        for flow_id in stale:
            del self._flows[flow_id]
        if stale:
            logger.info(f"Dropped {len(stale)} idle selection flow(s)")


flow_registry = FlowRegistry()


def seed_catalogue(catalogue: CatalogueStore) -> int:
    """Seed an empty catalogue the first time it is used in this process."""
    if not settings.SEED_CATALOGUE or catalogue_seeded.is_set():
        return 0
    inserted = catalogue.ensure_seeded()
    catalogue_seeded.set()
    return inserted


def get_notification_center() -> NotificationCenter:
    return notification_center


def get_flow_registry() -> FlowRegistry:
    return flow_registry


def get_catalogue(db: Session = Depends(get_db)) -> CatalogueStore:
    catalogue = CatalogueStore(db)
    seed_catalogue(catalogue)
    return catalogue


def get_ledger(
    db: Session = Depends(get_db),
    center: NotificationCenter = Depends(get_notification_center),
) -> DoseLedger:
    return DoseLedger(db, center)


def get_dose_scheduler(
    ledger: DoseLedger = Depends(get_ledger),
    center: NotificationCenter = Depends(get_notification_center),
) -> DoseScheduler:
    return DoseScheduler(ledger, center)
