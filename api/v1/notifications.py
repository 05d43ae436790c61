"""
Notification permission and pending reminder endpoints.
"""

from typing import List

from fastapi import APIRouter, Depends

from api.deps import get_notification_center
from schemas.notification import (
    AuthorizationRequest,
    NotificationRequestRead,
    NotificationStatusResponse,
)
from services.notification_service import NotificationCenter

router = APIRouter()


@router.get("/status", response_model=NotificationStatusResponse)
def get_status(center: NotificationCenter = Depends(get_notification_center)):
    return NotificationStatusResponse(
        status=center.get_authorization_status().value, enabled=center.enabled
    )


@router.post("/authorization", response_model=NotificationStatusResponse)
def request_authorization(
    request: AuthorizationRequest,
    center: NotificationCenter = Depends(get_notification_center),
):
    status = center.request_authorization(request.granted)
    return NotificationStatusResponse(status=status.value, enabled=center.enabled)


@router.get("/pending", response_model=List[NotificationRequestRead])
def list_pending(center: NotificationCenter = Depends(get_notification_center)):
    return [NotificationRequestRead.model_validate(r) for r in center.pending()]
