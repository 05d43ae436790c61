from datetime import datetime

from apscheduler.schedulers.background import BackgroundScheduler

from services.notification_service import AuthorizationStatus, NotificationCenter
from tasks.reminder_tasks import deliver_dose_reminder


def _center(**kwargs):
    return NotificationCenter(scheduler=BackgroundScheduler(), **kwargs)


def test_request_authorization_resolves_not_determined():
    center = _center(status=AuthorizationStatus.NOT_DETERMINED, enabled=True)
    assert center.request_authorization(granted=True) == AuthorizationStatus.AUTHORIZED

    center = _center(status=AuthorizationStatus.NOT_DETERMINED, enabled=True)
    assert center.request_authorization(granted=False) == AuthorizationStatus.DENIED


def test_request_authorization_keeps_decided_status():
    center = _center(status=AuthorizationStatus.DENIED, enabled=True)
    assert center.request_authorization(granted=True) == AuthorizationStatus.DENIED


def test_disabled_center_reports_denied():
    center = _center(status=AuthorizationStatus.AUTHORIZED, enabled=False)
    assert center.get_authorization_status() == AuthorizationStatus.DENIED
    assert not center.get_authorization_status().allows_delivery


def test_available_identifier_appends_counter(center):
    center.schedule_notification("med-a-1", "t", "b", datetime(2025, 6, 1, 8, 0))
    assert center.available_identifier("med-a-1") == "med-a-1-2"
    center.schedule_notification("med-a-1-2", "t", "b", datetime(2025, 6, 1, 8, 0))
    assert center.available_identifier("med-a-1") == "med-a-1-3"
    assert center.available_identifier("med-b-1") == "med-b-1"


def test_pending_sorted_by_trigger_time(center):
    center.schedule_notification("late", "t", "b", datetime(2025, 6, 2, 8, 0))
    center.schedule_notification("early", "t", "b", datetime(2025, 6, 1, 8, 0))
    assert [r.identifier for r in center.pending()] == ["early", "late"]


def test_cancel(center):
    center.schedule_notification("x", "t", "b", datetime(2025, 6, 1, 8, 0))
    assert center.cancel("x") is True
    assert center.cancel("x") is False
    assert center.scheduler.get_job("x") is None


def test_deliver_task_runs_handlers_once(center):
    received = []
    center.add_delivery_handler(received.append)
    center.schedule_notification("x", "服药提醒", "该服用 a 了，剂量：1 片", datetime(2025, 6, 1, 8, 0))

    request = deliver_dose_reminder(center, "x")

    assert request.delivered_at is not None
    assert [r.identifier for r in received] == ["x"]
    assert center.pending() == []
    # A second firing finds nothing
    assert deliver_dose_reminder(center, "x") is None
    assert len(received) == 1


def test_failing_handler_does_not_block_others(center):
    received = []

    def broken(request):
        raise RuntimeError("boom")

    center.add_delivery_handler(broken)
    center.add_delivery_handler(received.append)
    center.schedule_notification("x", "t", "b", datetime(2025, 6, 1, 8, 0))

    center.deliver("x")
    assert len(received) == 1
