"""
Teacher-initiated talents.

- Grant: credit from nowhere, positive amounts capped at WEEKLY_GRANT_LIMIT per
  teacher per Sunday-anchored week; negative amounts (deductions) are not capped.
- Transfer: teacher's own balance funds the student; both sides move together.

The weekly total is recomputed from history on every request (never cached) and
is read under the teacher row lock, so two concurrent grants cannot both pass.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from django.conf import settings
from django.db.models import Sum
from django.utils import timezone

from core.calendar import week_window
from talents.exceptions import (
    CapExceeded,
    InsufficientTeacherBalance,
    InvalidAmount,
    MissingField,
    StudentNotAssigned,
)
from talents.models import TalentHistory, TeacherTalentHistory
from talents.services.adjustments import validate_amount
from talents.services.ledger import (
    apply_student_delta,
    apply_teacher_delta,
    get_teacher,
    ledger_transaction,
    lock_student,
    lock_teacher,
)

logger = logging.getLogger(__name__)

MODE_GRANT = "grant"
MODE_TRANSFER = "transfer"


@dataclass
class GrantResult:
    mode: str
    amount: int
    student_before: int
    student_after: int
    teacher_before: Optional[int] = None
    teacher_after: Optional[int] = None


@dataclass
class WeeklyGrantSummary:
    teacher_id: int
    window_start: datetime
    window_end: datetime
    total: int
    limit: int
    grants: list = field(default_factory=list)

    @property
    def remaining(self):
        return max(self.limit - self.total, 0)


def weekly_grants(teacher, now):
    """Positive manual grants by `teacher` inside the week containing `now`."""
    start, end = week_window(now)
    return TalentHistory.objects.filter(
        granted_by=teacher,
        type=TalentHistory.TYPE_MANUAL,
        amount__gt=0,
        created_at__gte=start,
        created_at__lt=end,
    )


def weekly_grant_total(teacher, now):
    return weekly_grants(teacher, now).aggregate(total=Sum("amount"))["total"] or 0


def weekly_grant_summary(teacher_id, now=None):
    """This week's grant total, limit and contributing rows (newest first)."""
    now = now or timezone.now()
    teacher = get_teacher(teacher_id)
    start, end = week_window(now)
    grants = list(
        weekly_grants(teacher, now).select_related("student").order_by("-created_at", "-id")
    )
    return WeeklyGrantSummary(
        teacher_id=teacher.id,
        window_start=start,
        window_end=end,
        total=sum(g.amount for g in grants),
        limit=settings.WEEKLY_GRANT_LIMIT,
        grants=grants,
    )


def _check_assigned(teacher, student):
    if student.teacher != teacher.name:
        logger.warning(
            f"[grant] Teacher {teacher.id} ({teacher.name!r}) refused for student {student.id} "
            f"assigned to {student.teacher!r}"
        )
        raise StudentNotAssigned()


@ledger_transaction
def _grant(teacher_id, student_id, amount, reason, now):
    student = lock_student(student_id)
    teacher = lock_teacher(teacher_id)
    _check_assigned(teacher, student)

    if amount > 0:
        limit = settings.WEEKLY_GRANT_LIMIT
        weekly_total = weekly_grant_total(teacher, now)
        if weekly_total + amount > limit:
            logger.warning(
                f"[grant] Teacher {teacher.id} cap exceeded: week={weekly_total}, request={amount}, limit={limit}"
            )
            raise CapExceeded(
                f"Weekly grant limit exceeded (granted this week: {weekly_total}, "
                f"requested: {amount}, limit: {limit}).",
                weeklyTotal=weekly_total,
                requestAmount=amount,
                limit=limit,
            )

    entry = apply_student_delta(
        student,
        amount,
        f"{reason} ({teacher.name})",
        TalentHistory.TYPE_MANUAL,
        granted_by=teacher,
    )
    return GrantResult(
        mode=MODE_GRANT,
        amount=amount,
        student_before=entry.before_balance,
        student_after=entry.after_balance,
    )


@ledger_transaction
def _transfer(teacher_id, student_id, amount, reason):
    student = lock_student(student_id)
    teacher = lock_teacher(teacher_id)
    _check_assigned(teacher, student)

    if teacher.talents < amount:
        logger.warning(f"[transfer] Teacher {teacher.id} balance {teacher.talents} < {amount}")
        raise InsufficientTeacherBalance(
            f"Not enough talents (balance: {teacher.talents}, requested: {amount}).",
            balance=teacher.talents,
            requestAmount=amount,
        )

    teacher_entry = apply_teacher_delta(
        teacher,
        -amount,
        f"Sent to {student.name} ({reason})",
        TeacherTalentHistory.TYPE_TRANSFER,
    )
    student_entry = apply_student_delta(
        student,
        amount,
        f"Received from {teacher.name} ({reason})",
        TalentHistory.TYPE_TRANSFER,
    )
    return GrantResult(
        mode=MODE_TRANSFER,
        amount=amount,
        student_before=student_entry.before_balance,
        student_after=student_entry.after_balance,
        teacher_before=teacher_entry.before_balance,
        teacher_after=teacher_entry.after_balance,
    )


def grant_or_transfer(teacher_id, student_id, amount, reason, use_own_balance, now=None):
    """
    Teacher gives `amount` talents to one of their students.
    use_own_balance=False: capped grant (negative amounts deduct, uncapped).
    use_own_balance=True: transfer from the teacher's balance; amount must be positive.
    `now` selects the cap week; defaults to the current time.
    """
    validate_amount(amount)
    reason = (reason or "").strip()
    if not reason:
        raise MissingField("A reason is required.")

    if use_own_balance:
        if amount <= 0:
            raise InvalidAmount("Transfer amount must be positive.")
        return _transfer(teacher_id, student_id, amount, reason)
    return _grant(teacher_id, student_id, amount, reason, now or timezone.now())
