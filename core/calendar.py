"""
Calendar helpers: attendance days and Sunday-anchored weeks.
Python date.weekday(): Mon=0 .. Sun=6.
"""
from datetime import date, datetime, time, timedelta

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils import timezone

SUNDAY = 6


def parse_holidays(values):
    """['12-25'] -> {(12, 25)}. Raises ImproperlyConfigured on malformed entries."""
    result = set()
    for raw in values or []:
        try:
            month_str, day_str = str(raw).strip().split('-')
            month, day = int(month_str), int(day_str)
            # Leap year so 02-29 is accepted
            date(2000, month, day)
        except (TypeError, ValueError):
            raise ImproperlyConfigured(f"ATTENDANCE_HOLIDAYS entry {raw!r} is not MM-DD")
        result.add((month, day))
    return result


def is_attendance_day(day, holidays=None):
    """Sunday, or a configured holiday (e.g. Dec 25)."""
    if holidays is None:
        holidays = parse_holidays(settings.ATTENDANCE_HOLIDAYS)
    return day.weekday() == SUNDAY or (day.month, day.day) in holidays


def week_start(day):
    """The Sunday on or before `day`."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def week_window(now):
    """
    Half-open [start, end) window of the week containing `now`.
    start is Sunday 00:00 in the current time zone, end is the following Sunday 00:00.
    Pure: the caller supplies `now`.
    """
    if timezone.is_naive(now):
        now = timezone.make_aware(now)
    local_day = timezone.localtime(now).date()
    start_day = week_start(local_day)
    start = timezone.make_aware(datetime.combine(start_day, time.min))
    end = timezone.make_aware(datetime.combine(start_day + timedelta(days=7), time.min))
    return start, end
