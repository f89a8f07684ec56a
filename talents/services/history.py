"""
Read-only ledger queries and the audit/reset helpers behind the management commands.
"""
import logging
from dataclasses import dataclass

from django.db.models import F, Sum

from students.models import Student, Teacher
from talents.exceptions import InvalidEntityKind, StudentNotFound, TeacherNotFound
from talents.models import TalentHistory, TeacherTalentHistory
from talents.services.ledger import (
    apply_student_delta,
    apply_teacher_delta,
    ledger_transaction,
    lock_student,
    lock_teacher,
)

logger = logging.getLogger(__name__)

ENTITY_STUDENT = "student"
ENTITY_TEACHER = "teacher"

RESET_REASON = "Season reset"


def get_history(entity_kind, entity_id):
    """
    Returns (entity, history queryset newest first). No side effects.
    """
    if entity_kind == ENTITY_STUDENT:
        try:
            entity = Student.objects.get(pk=entity_id)
        except Student.DoesNotExist:
            raise StudentNotFound(f"Student {entity_id} not found.")
        history = TalentHistory.objects.filter(student=entity)
    elif entity_kind == ENTITY_TEACHER:
        try:
            entity = Teacher.objects.get(pk=entity_id)
        except Teacher.DoesNotExist:
            raise TeacherNotFound(f"Teacher {entity_id} not found.")
        history = TeacherTalentHistory.objects.filter(teacher=entity)
    else:
        raise InvalidEntityKind()
    return entity, history.order_by("-created_at", "-id")


@dataclass
class Discrepancy:
    entity_kind: str
    entity_id: int
    problem: str
    expected: int
    actual: int

    def __str__(self):
        return f"{self.entity_kind} {self.entity_id}: {self.problem} (expected {self.expected}, actual {self.actual})"


def _row_discrepancies(entity_kind, history_model, fk_name):
    bad_rows = history_model.objects.exclude(after_balance=F("before_balance") + F("amount"))
    return [
        Discrepancy(
            entity_kind=entity_kind,
            entity_id=getattr(row, f"{fk_name}_id"),
            problem=f"history row {row.id} does not add up",
            expected=row.before_balance + row.amount,
            actual=row.after_balance,
        )
        for row in bad_rows
    ]


def _balance_discrepancies(entity_kind, model):
    result = []
    for entity in model.objects.annotate(history_sum=Sum("talent_history__amount")).order_by("id"):
        expected = entity.initial_talents + (entity.history_sum or 0)
        if entity.talents != expected:
            result.append(Discrepancy(
                entity_kind=entity_kind,
                entity_id=entity.id,
                problem="balance does not match initial balance plus history",
                expected=expected,
                actual=entity.talents,
            ))
    return result


def ledger_discrepancies():
    """Every violation of the ledger invariants, students first."""
    return (
        _row_discrepancies(ENTITY_STUDENT, TalentHistory, "student")
        + _balance_discrepancies(ENTITY_STUDENT, Student)
        + _row_discrepancies(ENTITY_TEACHER, TeacherTalentHistory, "teacher")
        + _balance_discrepancies(ENTITY_TEACHER, Teacher)
    )


@ledger_transaction
def _reset_student(student_id, reason):
    student = lock_student(student_id)
    if student.talents == 0:
        return None
    return apply_student_delta(student, -student.talents, reason, TalentHistory.TYPE_CORRECTION)


@ledger_transaction
def _reset_teacher(teacher_id, reason):
    teacher = lock_teacher(teacher_id)
    if teacher.talents == 0:
        return None
    return apply_teacher_delta(teacher, -teacher.talents, reason, TeacherTalentHistory.TYPE_CORRECTION)


def reset_balances(apply=False, reason=RESET_REASON):
    """
    Bring every non-zero balance to zero with a correction row (history is kept).
    Returns (students, teachers): the rows that were, or with apply=False would be, reset.
    """
    students = list(Student.objects.exclude(talents=0).order_by("id"))
    teachers = list(Teacher.objects.exclude(talents=0).order_by("id"))
    if apply:
        for student in students:
            _reset_student(student.id, reason)
        for teacher in teachers:
            _reset_teacher(teacher.id, reason)
        logger.info(f"[reset] Reset {len(students)} students and {len(teachers)} teachers to 0")
    return students, teachers
