"""
Medication model for the personal medication catalogue.
"""

from enum import Enum

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean
from sqlalchemy.sql import func

from core.database import Base


class CatalogueCategory(str, Enum):
    """Suggested category labels. Free text is accepted as well."""
    HYPERTENSION = "高血压"
    CARDIOVASCULAR = "心血管"
    DIABETES = "糖尿病"
    COLD_FEVER = "感冒发烧"
    DIGESTIVE = "消化系统"
    RESPIRATORY = "呼吸系统"
    ALLERGY = "过敏"
    SUPPLEMENT = "营养补充"


class CatalogueForm(str, Enum):
    """Suggested dosage-form labels. Free text is accepted as well."""
    TABLET = "片剂"
    CAPSULE = "胶囊"
    ORAL_LIQUID = "口服液"
    INJECTION = "注射剂"
    GRANULE = "颗粒剂"
    INHALER = "吸入剂"


UNCATEGORIZED = "未分类"


class Medication(Base):
    """Catalogue entry, either built-in seed data or added by the user."""

    __tablename__ = "medications"

    id = Column(Integer, primary_key=True, index=True)

    # Names are not unique; same-name rows are reconciled by the catalogue store
    name = Column(String(255), nullable=False, index=True)
    generic_name = Column(String(255), nullable=False, default="")
    category = Column(String(100), nullable=False, default="")
    form = Column(String(100), nullable=False, default="")
    strength = Column(String(100), nullable=False, default="")
    notes = Column(Text, nullable=False, default="")

    is_builtin = Column(Boolean, nullable=False, default=False)
    is_favorite = Column(Boolean, nullable=False, default=False)

    # Usage plan
    doses_per_day = Column(Integer, nullable=False, default=1)
    interval_days = Column(Integer, nullable=False, default=1)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<Medication(id={self.id}, name='{self.name}', category='{self.category}')>"
