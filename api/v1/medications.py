"""
Medication catalogue endpoints.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from api.deps import get_catalogue
from schemas.medication import (
    BatchDeleteRequest,
    MedicationCreate,
    MedicationGroup,
    MedicationRead,
    MedicationReconcile,
    UsagePlanUpdate,
)
from schemas.responses import StandardSuccessResponse
from services.catalogue import CatalogueStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[MedicationRead], summary="List the catalogue")
def list_medications(
    q: Optional[str] = Query(default=None, description="Matches name, generic name or category"),
    catalogue: CatalogueStore = Depends(get_catalogue),
):
    return catalogue.list(q)


@router.get("/favorites", response_model=List[MedicationRead], summary="List my medications")
def list_favorites(catalogue: CatalogueStore = Depends(get_catalogue)):
    return catalogue.list_favorites()


@router.get("/grouped", response_model=List[MedicationGroup], summary="Catalogue grouped by category")
def list_grouped(
    q: Optional[str] = Query(default=None),
    catalogue: CatalogueStore = Depends(get_catalogue),
):
    return [
        MedicationGroup(
            category=category,
            medications=[MedicationRead.model_validate(m) for m in medications],
        )
        for category, medications in catalogue.grouped(q).items()
    ]


@router.post("", response_model=MedicationRead, status_code=status.HTTP_201_CREATED)
def add_medication(request: MedicationCreate, catalogue: CatalogueStore = Depends(get_catalogue)):
    return catalogue.add(request.name, request, is_favorite=request.is_favorite)


@router.put("/reconcile", response_model=MedicationRead, summary="Save by name, favoriting it")
def reconcile_medication(request: MedicationReconcile, catalogue: CatalogueStore = Depends(get_catalogue)):
    return catalogue.reconcile_by_name(request.name, request)


@router.post("/delete", response_model=StandardSuccessResponse)
def delete_medications(request: BatchDeleteRequest, catalogue: CatalogueStore = Depends(get_catalogue)):
    medications = catalogue.repo.get_many(request.ids)
    removed = catalogue.delete(medications)
    return StandardSuccessResponse(message=f"Deleted {removed} medication(s)", data={"deleted": removed})


@router.get("/{medication_id}", response_model=MedicationRead)
def get_medication(medication_id: int, catalogue: CatalogueStore = Depends(get_catalogue)):
    return catalogue.get(medication_id)


@router.post("/{medication_id}/favorite", response_model=MedicationRead)
def toggle_favorite(medication_id: int, catalogue: CatalogueStore = Depends(get_catalogue)):
    return catalogue.toggle_favorite(catalogue.get(medication_id))


@router.put("/{medication_id}/usage-plan", response_model=MedicationRead)
def set_usage_plan(
    medication_id: int,
    request: UsagePlanUpdate,
    catalogue: CatalogueStore = Depends(get_catalogue),
):
    medication = catalogue.get(medication_id)
    return catalogue.set_usage_plan(medication, request.doses_per_day, request.interval_days)


@router.delete("/{medication_id}", response_model=StandardSuccessResponse)
def delete_medication(medication_id: int, catalogue: CatalogueStore = Depends(get_catalogue)):
    catalogue.delete(catalogue.get(medication_id))
    return StandardSuccessResponse(message=f"Medication {medication_id} deleted")
