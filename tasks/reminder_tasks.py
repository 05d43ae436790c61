from core.logging import get_logger

logger = get_logger(__name__)


def deliver_dose_reminder(center, identifier: str):
    """Scheduler job: fire the reminder registered under ``identifier``."""
    try:
        request = center.deliver(identifier)
        if request is None:
            return None
        logger.info(
            "Dose reminder delivered",
            identifier=identifier,
            title=request.title,
            body=request.body,
            trigger_at=request.trigger_at.isoformat(),
        )
        return request
    except Exception as e:
        logger.error("error in deliver_dose_reminder task", identifier=identifier, error=str(e))
        raise
