from datetime import date, datetime, time

import pytest

from core.exceptions import PersistenceError, ValidationError
from services.dose_scheduler import DoseScheduler
from services.helpers import notification_identifier
from services.notification_service import AuthorizationStatus


def test_schedule_composes_timestamp(dose_scheduler):
    event = dose_scheduler.schedule("阿司匹林", date(2025, 3, 10), time(14, 30), "1 片")
    assert event.timestamp == datetime(2025, 3, 10, 14, 30, 0)


def test_schedule_then_query_day(dose_scheduler, ledger):
    dose_scheduler.schedule("阿司匹林", date(2025, 6, 1), time(8, 0), "1 片")

    events = ledger.list_for_day(date(2025, 6, 1))
    assert len(events) == 1
    assert events[0].name == "阿司匹林"
    assert events[0].amount == "1 片"
    assert events[0].is_completed is False


def test_schedule_requests_one_notification(dose_scheduler, center):
    event = dose_scheduler.schedule("阿司匹林", date(2025, 6, 1), time(8, 0), "1 片")

    expected = notification_identifier("阿司匹林", datetime(2025, 6, 1, 8, 0))
    assert event.notification_id == expected
    pending = center.pending()
    assert len(pending) == 1
    assert pending[0].identifier == expected
    assert pending[0].trigger_at == datetime(2025, 6, 1, 8, 0)
    assert "阿司匹林" in pending[0].body
    assert center.scheduler.get_job(expected) is not None


@pytest.mark.parametrize("status", [AuthorizationStatus.DENIED, AuthorizationStatus.NOT_DETERMINED])
def test_schedule_without_permission_still_persists(dose_scheduler, ledger, center, status):
    center.set_authorization_status(status)

    event = dose_scheduler.schedule("阿司匹林", date(2025, 6, 1), time(8, 0), "1 片")

    assert event.id is not None
    assert event.notification_id is None
    assert center.pending() == []
    assert len(ledger.list_all()) == 1


def test_provisional_permission_allows_notification(dose_scheduler, center):
    center.set_authorization_status(AuthorizationStatus.PROVISIONAL)
    dose_scheduler.schedule("阿司匹林", date(2025, 6, 1), time(8, 0), "1 片")
    assert len(center.pending()) == 1


def test_past_timestamp_gets_no_notification(ledger, center):
    scheduler = DoseScheduler(ledger, center, clock=lambda: datetime(2025, 6, 1, 9, 0))
    event = scheduler.schedule("阿司匹林", date(2025, 6, 1), time(8, 0), "1 片")
    assert event.notification_id is None
    assert center.pending() == []


@pytest.mark.parametrize("name, amount", [("", "1 片"), ("   ", "1 片"), ("阿司匹林", ""), ("阿司匹林", "  ")])
def test_schedule_rejects_empty_name_or_amount(dose_scheduler, ledger, name, amount):
    with pytest.raises(ValidationError):
        dose_scheduler.schedule(name, date(2025, 6, 1), time(8, 0), amount)
    assert ledger.list_all() == []


def test_same_second_schedules_get_distinct_identifiers(dose_scheduler, center):
    first = dose_scheduler.schedule("阿司匹林", date(2025, 6, 1), time(8, 0), "1 片")
    second = dose_scheduler.schedule("阿司匹林", date(2025, 6, 1), time(8, 0), "1 片")
    third = dose_scheduler.schedule("阿司匹林", date(2025, 6, 1), time(8, 0), "2 片")

    assert second.notification_id == f"{first.notification_id}-2"
    assert third.notification_id == f"{first.notification_id}-3"
    assert len(center.pending()) == 3


def test_restore_pending_reminders(dose_scheduler, ledger, center):
    future = dose_scheduler.schedule("a", date(2025, 6, 1), time(8, 0), "1 片")
    done = dose_scheduler.schedule("b", date(2025, 6, 2), time(8, 0), "1 片")
    ledger.toggle_completed(done)

    # Simulate a restart: nothing is pending any more
    center.cancel(future.notification_id)
    center.cancel(done.notification_id)

    assert dose_scheduler.restore_pending_reminders() == 1
    assert [r.identifier for r in center.pending()] == [future.notification_id]

    # Already pending reminders are not requested twice
    assert dose_scheduler.restore_pending_reminders() == 0


def test_reminder_is_withdrawn_when_identifier_cannot_be_saved(dose_scheduler, ledger, center, monkeypatch):
    def fail(event, identifier):
        raise PersistenceError("Could not save DoseEvent")

    monkeypatch.setattr(ledger, "attach_notification", fail)

    with pytest.raises(PersistenceError):
        dose_scheduler.schedule("阿司匹林", date(2025, 6, 1), time(8, 0), "1 片")

    assert center.pending() == []
