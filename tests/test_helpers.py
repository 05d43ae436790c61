from datetime import date, datetime, time

from services.helpers import (
    compose_timestamp,
    day_bounds,
    day_header,
    notification_identifier,
    reminder_body,
)


def test_compose_timestamp_takes_day_from_date_and_clock_from_time():
    assert compose_timestamp(date(2025, 3, 10), time(14, 30)) == datetime(2025, 3, 10, 14, 30)


def test_compose_timestamp_truncates_seconds():
    assert compose_timestamp(date(2025, 3, 10), time(14, 30, 59, 999)) == datetime(2025, 3, 10, 14, 30, 0)


def test_compose_timestamp_ignores_time_part_of_datetime_day():
    assert compose_timestamp(datetime(2025, 3, 10, 23, 59), time(8, 5)) == datetime(2025, 3, 10, 8, 5)


def test_compose_timestamp_falls_back_to_day_on_bad_time():
    assert compose_timestamp(date(2025, 3, 10), None) == datetime(2025, 3, 10, 0, 0)


def test_day_bounds_cover_one_calendar_day():
    start, end = day_bounds(datetime(2025, 3, 10, 17, 45))
    assert start == datetime(2025, 3, 10)
    assert end == datetime(2025, 3, 11)


def test_notification_identifier_uses_epoch_seconds():
    ts = datetime(2025, 6, 1, 8, 0)
    assert notification_identifier("阿司匹林", ts) == f"med-阿司匹林-{int(ts.timestamp())}"


def test_reminder_body_mentions_name_and_amount():
    body = reminder_body("布洛芬", "1 片")
    assert "布洛芬" in body
    assert "1 片" in body


def test_day_header_for_today():
    assert day_header(date(2025, 3, 10), today=date(2025, 3, 10)) == ("今天", "2025-03-10")


def test_day_header_for_other_day_uses_weekday():
    # 2025-03-11 is a Tuesday
    assert day_header(date(2025, 3, 11), today=date(2025, 3, 10)) == ("星期二", "2025-03-11")
    # 2025-03-16 is a Sunday
    assert day_header(date(2025, 3, 16), today=date(2025, 3, 10))[0] == "星期日"
