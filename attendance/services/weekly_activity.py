"""
Weekly activity toggles. Each of the four flags is its own switch:
false -> true credits ACTIVITY_TALENTS, true -> false takes them back.
No teacher cascade. Dates are stored as the Sunday of their week.
"""
import logging
from dataclasses import dataclass

from django.conf import settings

from attendance.models import WeeklyActivity
from attendance.services.attendance_status import parse_date
from core.calendar import week_start
from talents.exceptions import InvalidActivity
from talents.models import TalentHistory
from talents.services.ledger import apply_student_delta, ledger_transaction, lock_student

logger = logging.getLogger(__name__)

ACTIVITY_LABELS = dict(WeeklyActivity.ACTIVITY_CHOICES)


@dataclass
class ActivityToggle:
    activity: WeeklyActivity  # None when nothing exists and nothing changed
    kind: str
    value: bool
    changed: bool
    student_delta: int = 0


def weekly_activities(day):
    """Returns (week Sunday, activity rows of that week). No side effects."""
    week = week_start(parse_date(day))
    return week, WeeklyActivity.objects.filter(date=week).select_related("student")


@ledger_transaction
def _toggle(student_id, week, kind, desired):
    student = lock_student(student_id)
    activity = (
        WeeklyActivity.objects.select_for_update()
        .filter(student=student, date=week)
        .first()
    )
    current = getattr(activity, kind) if activity else False
    if current == desired:
        return ActivityToggle(activity=activity, kind=kind, value=current, changed=False)

    if activity is None:
        # Lazily created on the first real toggle; other flags stay false
        activity = WeeklyActivity.objects.create(student=student, date=week, **{kind: desired})
    else:
        setattr(activity, kind, desired)
        activity.save(update_fields=[kind, "updated_at"])

    amount = settings.ACTIVITY_TALENTS if desired else -settings.ACTIVITY_TALENTS
    label = ACTIVITY_LABELS[kind]
    apply_student_delta(
        student,
        amount,
        f"{label} {'checked' if desired else 'unchecked'}",
        TalentHistory.TYPE_ACTIVITY,
    )
    return ActivityToggle(activity=activity, kind=kind, value=desired, changed=True, student_delta=amount)


def toggle_activity(student_id, day, kind, desired_value):
    """
    Set one weekly flag for the week containing `day`.
    Setting a flag to the value it already has is a no-op (no history row).
    """
    if kind not in ACTIVITY_LABELS:
        raise InvalidActivity(f"Invalid activity {kind!r} (expected one of {', '.join(ACTIVITY_LABELS)}).")
    week = week_start(parse_date(day))
    result = _toggle(student_id, week, kind, bool(desired_value))
    logger.info(
        f"[activity] Student {student_id} week {week} {kind}={result.value} "
        f"({'changed' if result.changed else 'unchanged'}, {result.student_delta:+d})"
    )
    return result
