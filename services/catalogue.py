import logging
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional, Union

from sqlalchemy.orm import Session

from core.database import write_lock
from core.exceptions import NotFoundError, ValidationError
from models.medication import Medication, UNCATEGORIZED
from repositories.medication import MedicationRepository
from schemas.medication import MedicationFields
from services.events import Publisher
from services.seed_data import builtin_rows

logger = logging.getLogger(__name__)

DESCRIPTIVE_FIELDS = ("generic_name", "category", "form", "strength", "notes")


def _clean_name(name: Optional[str]) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Medication name is required")
    return cleaned


def _descriptive(fields: Union[MedicationFields, Dict, None]) -> Dict[str, str]:
    if fields is None:
        return {}
    data = fields.model_dump(exclude_unset=True) if isinstance(fields, MedicationFields) else dict(fields)
    return {key: (data.get(key) or "") for key in DESCRIPTIVE_FIELDS if key in data}


def matches(medication: Medication, query: str) -> bool:
    """Case-insensitive substring match on name, generic name or category."""
    needle = query.casefold()
    return (
        needle in (medication.name or "").casefold()
        or needle in (medication.generic_name or "").casefold()
        or needle in (medication.category or "").casefold()
    )


class CatalogueStore:
    """Owns the lifecycle of catalogue entries."""

    def __init__(self, db: Session):
        self.repo = MedicationRepository(db)
        self.changes: Publisher[Medication] = Publisher()

    def list(self, query: Optional[str] = None) -> List[Medication]:
        """Entries sorted by (category, name), optionally filtered."""
        medications = self.repo.list_sorted()
        query = (query or "").strip()
        if query:
            medications = [m for m in medications if matches(m, query)]
        return medications

    def list_favorites(self) -> List[Medication]:
        return self.repo.list_favorites()

    def grouped(self, query: Optional[str] = None) -> "OrderedDict[str, List[Medication]]":
        """Entries grouped by category label, in catalogue order."""
        groups: "OrderedDict[str, List[Medication]]" = OrderedDict()
        for medication in self.list(query):
            groups.setdefault(medication.category or UNCATEGORIZED, []).append(medication)
        return groups

    def get(self, medication_id: int) -> Medication:
        medication = self.repo.get(medication_id)
        if medication is None:
            raise NotFoundError(f"Medication {medication_id} not found")
        return medication

    def add(
        self,
        name: str,
        fields: Union[MedicationFields, Dict, None] = None,
        is_favorite: bool = False,
    ) -> Medication:
        """Persist a new user-added entry."""
        data = _descriptive(fields)
        data.update(name=_clean_name(name), is_builtin=False, is_favorite=is_favorite)
        medication = self.repo.create(data)
        logger.info(f"Added medication {medication.name} (id={medication.id}, favorite={is_favorite})")
        self._publish()
        return medication

    def reconcile_by_name(
        self, name: str, fields: Union[MedicationFields, Dict, None] = None
    ) -> Medication:
        """Update and favorite the entry with exactly this name, or create one."""
        name = _clean_name(name)
        data = _descriptive(fields)
        with write_lock:
            existing = self.repo.get_by_name(name)
            if existing is None:
                return self.add(name, data, is_favorite=True)
            data["is_favorite"] = True
            medication = self.repo.update(existing, data)
        logger.info(f"Reconciled medication {name} onto id={medication.id}")
        self._publish()
        return medication

    def toggle_favorite(self, medication: Medication) -> Medication:
        medication = self.repo.update(medication, {"is_favorite": not medication.is_favorite})
        logger.info(f"Medication {medication.id} favorite={medication.is_favorite}")
        self._publish()
        return medication

    def mark_favorite(self, medication: Medication) -> Medication:
        if medication.is_favorite:
            return medication
        return self.toggle_favorite(medication)

    def set_usage_plan(self, medication: Medication, doses_per_day: int, interval_days: int) -> Medication:
        if doses_per_day < 1 or interval_days < 1:
            raise ValidationError("Doses per day and interval days must be at least 1")
        medication = self.repo.update(
            medication, {"doses_per_day": doses_per_day, "interval_days": interval_days}
        )
        logger.info(
            f"Medication {medication.id} usage plan: {doses_per_day}/day every {interval_days} day(s)"
        )
        self._publish()
        return medication

    def delete(self, medications: Union[Medication, Iterable[Medication]]) -> int:
        """Delete one entry or several. Dose events are not touched."""
        if isinstance(medications, Medication):
            medications = [medications]
        ids = [m.id for m in medications]
        removed = self.repo.delete_many(ids)
        logger.info(f"Deleted {removed} medication(s): {ids}")
        self._publish()
        return removed

    def ensure_seeded(self) -> int:
        """Insert the built-in list if the catalogue is empty. Returns rows inserted."""
        with write_lock:
            if self.repo.count() > 0:
                return 0
            created = self.repo.create_bulk(builtin_rows())
        logger.info(f"Seeded catalogue with {len(created)} built-in medications")
        self._publish()
        return len(created)

    def _publish(self) -> None:
        self.changes.publish(self.list())
