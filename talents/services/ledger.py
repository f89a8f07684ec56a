"""
Ledger engine core: the only code path that changes a talent balance.

Every change appends a history row and updates the cached balance in the same
transaction, so `talents == initial_talents + sum(history.amount)` always holds.
Callers lock the rows they touch (select_for_update) in a fixed order:
student -> teacher -> product.
"""
import functools
import logging

from django.conf import settings
from django.db import OperationalError, transaction

from students.models import Student, Teacher
from talents.exceptions import ConsistencyFailure, StudentNotFound, TeacherNotFound
from talents.models import TalentHistory, TeacherTalentHistory

logger = logging.getLogger(__name__)

# PostgreSQL serialization_failure / deadlock_detected
_TRANSIENT_SQLSTATES = {"40001", "40P01"}


def _is_transient(exc):
    cause = exc.__cause__
    code = getattr(cause, "sqlstate", None) or getattr(cause, "pgcode", None)
    if code in _TRANSIENT_SQLSTATES:
        return True
    message = str(exc).lower()
    return "deadlock" in message or "database is locked" in message


def ledger_transaction(func):
    """
    Run `func` as one atomic unit. A transient conflict (deadlock, serialization
    failure) is retried LEDGER_TRANSACTION_RETRIES times when this is the outermost
    transaction, then surfaced as ConsistencyFailure. Nothing from a failed attempt
    is committed.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        connection = transaction.get_connection()
        # Inside a caller's transaction a conflict has already doomed the outer block
        retries = 0 if connection.in_atomic_block else max(settings.LEDGER_TRANSACTION_RETRIES, 0)
        attempt = 0
        while True:
            attempt += 1
            try:
                with transaction.atomic():
                    return func(*args, **kwargs)
            except OperationalError as exc:
                if not _is_transient(exc):
                    raise
                logger.warning(f"[ledger] {func.__name__} attempt {attempt} hit a transient conflict: {exc}")
                if attempt > retries:
                    raise ConsistencyFailure() from exc
    return wrapper


def lock_student(student_id):
    """Fetch the student row FOR UPDATE. Must run inside a transaction."""
    try:
        return Student.objects.select_for_update().get(pk=student_id)
    except Student.DoesNotExist:
        raise StudentNotFound(f"Student {student_id} not found.")


def lock_teacher(teacher_id):
    """Fetch the teacher row FOR UPDATE. Must run inside a transaction."""
    try:
        return Teacher.objects.select_for_update().get(pk=teacher_id)
    except Teacher.DoesNotExist:
        raise TeacherNotFound(f"Teacher {teacher_id} not found.")


def get_teacher(teacher_id):
    """Plain read for reporting paths that do not write."""
    try:
        return Teacher.objects.get(pk=teacher_id)
    except Teacher.DoesNotExist:
        raise TeacherNotFound(f"Teacher {teacher_id} not found.")


def find_teacher_for_student(student):
    """
    Resolve Student.teacher (a name, not a foreign key) to a locked Teacher row.
    Returns None when no teacher matches; the caller then skips the cascade.
    Duplicate names resolve to the lowest id.
    """
    if not student.teacher:
        logger.warning(f"[ledger] Student {student.id} has no teacher name, cascade skipped")
        return None
    teacher = (
        Teacher.objects.select_for_update()
        .filter(name=student.teacher)
        .order_by("id")
        .first()
    )
    if teacher is None:
        logger.warning(
            f"[ledger] No teacher named {student.teacher!r} for student {student.id}, cascade skipped"
        )
    return teacher


def _fit_reason(history_model, reason):
    """Composed reasons (prefix + name + free text) are cut to the column length."""
    max_length = history_model._meta.get_field("reason").max_length
    if len(reason) <= max_length:
        return reason
    return reason[:max_length - 3] + "..."


def apply_student_delta(student, amount, reason, history_type, granted_by=None):
    """
    Move a locked student's balance by `amount` and append the matching history row.
    Returns the TalentHistory row.
    """
    reason = _fit_reason(TalentHistory, reason)
    before = student.talents
    after = before + amount
    student.talents = after
    student.save(update_fields=["talents", "updated_at"])
    entry = TalentHistory.objects.create(
        student=student,
        amount=amount,
        before_balance=before,
        after_balance=after,
        reason=reason,
        type=history_type,
        granted_by=granted_by,
    )
    logger.info(f"[ledger] Student {student.id}: {before} -> {after} ({amount:+d}, {history_type}, {reason!r})")
    return entry


def apply_teacher_delta(teacher, amount, reason, history_type):
    """
    Move a locked teacher's balance by `amount` and append the matching history row.
    Returns the TeacherTalentHistory row.
    """
    reason = _fit_reason(TeacherTalentHistory, reason)
    before = teacher.talents
    after = before + amount
    teacher.talents = after
    teacher.save(update_fields=["talents", "updated_at"])
    entry = TeacherTalentHistory.objects.create(
        teacher=teacher,
        amount=amount,
        before_balance=before,
        after_balance=after,
        reason=reason,
        type=history_type,
    )
    logger.info(f"[ledger] Teacher {teacher.id}: {before} -> {after} ({amount:+d}, {history_type}, {reason!r})")
    return entry
