import logging
from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.orm import Session

from models.medication import Medication
from repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class MedicationRepository(BaseRepository[Medication]):
    def __init__(self, db_session: Session):
        super().__init__(Medication, db_session)

    def _sorted(self):
        return select(Medication).order_by(Medication.category, Medication.name, Medication.id)

    def list_sorted(self) -> List[Medication]:
        """All catalogue entries ordered by (category, name)."""
        return self.fetch(self._sorted())

    def list_favorites(self) -> List[Medication]:
        return self.fetch(self._sorted().where(Medication.is_favorite.is_(True)))

    def get_by_name(self, name: str) -> Optional[Medication]:
        """First entry whose name matches exactly (case-sensitive)."""
        rows = self.fetch(
            select(Medication).where(Medication.name == name).order_by(Medication.id).limit(1)
        )
        return rows[0] if rows else None
