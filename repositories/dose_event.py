import logging
from datetime import datetime
from typing import List
from sqlalchemy import select
from sqlalchemy.orm import Session

from models.dose_event import DoseEvent
from repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class DoseEventRepository(BaseRepository[DoseEvent]):
    def __init__(self, db_session: Session):
        super().__init__(DoseEvent, db_session)

    def list_sorted(self) -> List[DoseEvent]:
        """All dose events ordered by timestamp ascending."""
        return self.fetch(select(DoseEvent).order_by(DoseEvent.timestamp, DoseEvent.id))

    def list_between(self, start: datetime, end: datetime) -> List[DoseEvent]:
        """Events with start <= timestamp < end."""
        return self.fetch(
            select(DoseEvent)
            .where(DoseEvent.timestamp >= start, DoseEvent.timestamp < end)
            .order_by(DoseEvent.timestamp, DoseEvent.id)
        )

    def list_pending_after(self, moment: datetime) -> List[DoseEvent]:
        """Not-completed events scheduled later than ``moment``."""
        return self.fetch(
            select(DoseEvent)
            .where(DoseEvent.timestamp > moment, DoseEvent.is_completed.is_(False))
            .order_by(DoseEvent.timestamp, DoseEvent.id)
        )
