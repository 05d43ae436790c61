"""
Selection flow endpoints: pick a medication, then set the dose schedule.
"""

import logging

from fastapi import APIRouter, Depends, status

from api.deps import FlowRegistry, get_catalogue, get_dose_scheduler, get_flow_registry
from schemas.flow import (
    FlowConfirmRequest,
    FlowEnterRequest,
    FlowRead,
    FlowSelectRequest,
    FlowStartRequest,
)
from services.catalogue import CatalogueStore
from services.dose_scheduler import DoseScheduler
from services.selection_flow import FlowState, SelectionFlowController

logger = logging.getLogger(__name__)

router = APIRouter()


def _read(flow_id: str, state: FlowState) -> FlowRead:
    return FlowRead(
        id=flow_id,
        step=state.step.value,
        name=state.name,
        date=state.date,
        time=state.time,
        amount=state.amount,
        can_advance=state.can_advance,
        can_confirm=state.can_confirm,
        dose_event_id=state.dose_event_id,
    )


def _controller(
    flow_id: str,
    registry: FlowRegistry,
    catalogue: CatalogueStore,
    scheduler: DoseScheduler,
) -> SelectionFlowController:
    return SelectionFlowController(catalogue, scheduler, registry.get(flow_id))


@router.post("", response_model=FlowRead, status_code=status.HTTP_201_CREATED)
def start_flow(request: FlowStartRequest, registry: FlowRegistry = Depends(get_flow_registry)):
    state = FlowState.start(request.initial_date)
    flow_id = registry.open(state)
    logger.info(f"Flow {flow_id} started for {state.date.isoformat()}")
    return _read(flow_id, state)


@router.get("/{flow_id}", response_model=FlowRead)
def get_flow(flow_id: str, registry: FlowRegistry = Depends(get_flow_registry)):
    return _read(flow_id, registry.get(flow_id))


@router.post("/{flow_id}/select", response_model=FlowRead)
def select_medication(
    flow_id: str,
    request: FlowSelectRequest,
    registry: FlowRegistry = Depends(get_flow_registry),
    catalogue: CatalogueStore = Depends(get_catalogue),
    scheduler: DoseScheduler = Depends(get_dose_scheduler),
):
    flow = _controller(flow_id, registry, catalogue, scheduler)
    return _read(flow_id, flow.select_from_catalogue(request.medication_id))


@router.post("/{flow_id}/enter", response_model=FlowRead)
def enter_medication(
    flow_id: str,
    request: FlowEnterRequest,
    registry: FlowRegistry = Depends(get_flow_registry),
    catalogue: CatalogueStore = Depends(get_catalogue),
    scheduler: DoseScheduler = Depends(get_dose_scheduler),
):
    flow = _controller(flow_id, registry, catalogue, scheduler)
    return _read(flow_id, flow.submit_name(request.name))


@router.post("/{flow_id}/back", response_model=FlowRead)
def go_back(
    flow_id: str,
    registry: FlowRegistry = Depends(get_flow_registry),
    catalogue: CatalogueStore = Depends(get_catalogue),
    scheduler: DoseScheduler = Depends(get_dose_scheduler),
):
    flow = _controller(flow_id, registry, catalogue, scheduler)
    return _read(flow_id, flow.back())


@router.post("/{flow_id}/confirm", response_model=FlowRead)
def confirm_flow(
    flow_id: str,
    request: FlowConfirmRequest,
    registry: FlowRegistry = Depends(get_flow_registry),
    catalogue: CatalogueStore = Depends(get_catalogue),
    scheduler: DoseScheduler = Depends(get_dose_scheduler),
):
    flow = _controller(flow_id, registry, catalogue, scheduler)
    flow.confirm(request.date, request.time, request.amount)
    registry.close(flow_id)
    return _read(flow_id, flow.state)


@router.delete("/{flow_id}", response_model=FlowRead)
def cancel_flow(
    flow_id: str,
    registry: FlowRegistry = Depends(get_flow_registry),
    catalogue: CatalogueStore = Depends(get_catalogue),
    scheduler: DoseScheduler = Depends(get_dose_scheduler),
):
    flow = _controller(flow_id, registry, catalogue, scheduler)
    state = flow.cancel()
    registry.close(flow_id)
    logger.info(f"Flow {flow_id} cancelled")
    return _read(flow_id, state)
