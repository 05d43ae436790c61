"""
SQLAlchemy ORM models for the Medication Reminder service.
"""

from .medication import Medication, CatalogueCategory, CatalogueForm, UNCATEGORIZED
from .dose_event import DoseEvent

__all__ = [
    "Medication",
    "CatalogueCategory",
    "CatalogueForm",
    "UNCATEGORIZED",
    "DoseEvent",
]
