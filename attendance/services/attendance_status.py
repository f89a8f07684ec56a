"""
Attendance status transitions and their talent effects.

Student delta (ATTENDANCE_TALENTS = 10):
- unset -> present: +10          unset -> absent/late: 0
- present -> absent/late: -10    absent/late -> present: +10
- same status again: 0           absent <-> late: 0
Whenever the student delta is non-zero the student's teacher (matched by name)
moves by a fixed TEACHER_ATTENDANCE_TALENTS in the same direction.
Deleting a present record reverses the student's +10 only; the teacher is not touched.
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from django.conf import settings

from attendance.models import AttendanceRecord
from core.calendar import is_attendance_day
from students.models import Teacher
from talents.exceptions import AttendanceRecordNotFound, InvalidDate, InvalidStatus, MissingField
from talents.models import TalentHistory, TeacherTalentHistory
from talents.services.ledger import (
    apply_student_delta,
    apply_teacher_delta,
    find_teacher_for_student,
    ledger_transaction,
    lock_student,
)

logger = logging.getLogger(__name__)

VALID_STATUSES = {
    AttendanceRecord.STATUS_PRESENT,
    AttendanceRecord.STATUS_ABSENT,
    AttendanceRecord.STATUS_LATE,
}


@dataclass
class AttendanceChange:
    record: AttendanceRecord
    created: bool
    old_status: Optional[str]
    student_delta: int = 0
    teacher_delta: int = 0
    teacher: Optional[Teacher] = None


def parse_date(value):
    """Accept a date, a 'YYYY-MM-DD' string, or an ISO datetime string ('YYYY-MM-DDTHH:MM...')."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        raise MissingField("date is required (YYYY-MM-DD).")
    text = str(value).strip()
    try:
        return datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError:
        pass
    try:
        # Only a time part may follow the date
        if len(text) > 10 and text[10] in "T ":
            return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    raise InvalidDate("Invalid date format (expected YYYY-MM-DD).")


def attendance_delta(old_status, new_status):
    """Student delta for old -> new. old_status None means no record yet."""
    was_present = old_status == AttendanceRecord.STATUS_PRESENT
    is_present = new_status == AttendanceRecord.STATUS_PRESENT
    if was_present == is_present:
        return 0
    amount = settings.ATTENDANCE_TALENTS
    return amount if is_present else -amount


@ledger_transaction
def _set_attendance(student_id, day, new_status, marked_by):
    student = lock_student(student_id)
    record = (
        AttendanceRecord.objects.select_for_update()
        .filter(student=student, date=day)
        .first()
    )
    old_status = record.status if record else None
    created = record is None

    if created:
        record = AttendanceRecord.objects.create(
            student=student,
            date=day,
            status=new_status,
            marked_by=marked_by,
        )
    elif old_status != new_status:
        record.status = new_status
        record.marked_by = marked_by
        record.save(update_fields=["status", "marked_by", "updated_at"])

    change = AttendanceChange(record=record, created=created, old_status=old_status)
    delta = attendance_delta(old_status, new_status)
    if delta == 0:
        logger.debug(f"[attendance] Student {student.id} {day}: {old_status} -> {new_status}, no talent change")
        return change

    apply_student_delta(
        student,
        delta,
        f"Attendance ({new_status})",
        TalentHistory.TYPE_ATTENDANCE,
    )
    change.student_delta = delta

    teacher = find_teacher_for_student(student)
    if teacher is not None:
        teacher_delta = settings.TEACHER_ATTENDANCE_TALENTS if delta > 0 else -settings.TEACHER_ATTENDANCE_TALENTS
        apply_teacher_delta(
            teacher,
            teacher_delta,
            f"Attendance of {student.name}",
            TeacherTalentHistory.TYPE_ATTENDANCE,
        )
        change.teacher = teacher
        change.teacher_delta = teacher_delta
    return change


def set_attendance(student_id, day, status, marked_by=None):
    """
    Set the attendance status of a student for a day and apply its talent effect.
    Status and date are validated before anything is read; a rejected request
    leaves no trace.
    """
    if status not in VALID_STATUSES:
        raise InvalidStatus(f"Invalid attendance status {status!r} (expected present, absent or late).")
    day = parse_date(day)
    if not is_attendance_day(day):
        raise InvalidDate(f"{day.isoformat()} is not an attendance day (Sundays and holidays only).")

    change = _set_attendance(student_id, day, status, marked_by)
    logger.info(
        f"[attendance] Student {student_id} {day}: {change.old_status or 'unset'} -> {status} "
        f"(student {change.student_delta:+d}, teacher {change.teacher_delta:+d})"
    )
    return change


@ledger_transaction
def _delete_attendance(record_id):
    try:
        student_id = AttendanceRecord.objects.values_list("student_id", flat=True).get(pk=record_id)
    except AttendanceRecord.DoesNotExist:
        raise AttendanceRecordNotFound(f"Attendance record {record_id} not found.")

    # Student first, then the record, same order as set_attendance
    student = lock_student(student_id)
    try:
        record = AttendanceRecord.objects.select_for_update().get(pk=record_id)
    except AttendanceRecord.DoesNotExist:
        raise AttendanceRecordNotFound(f"Attendance record {record_id} not found.")

    reversed_amount = 0
    if record.status == AttendanceRecord.STATUS_PRESENT:
        reversed_amount = -settings.ATTENDANCE_TALENTS
        apply_student_delta(
            student,
            reversed_amount,
            "Attendance record deleted",
            TalentHistory.TYPE_DELETE,
        )
        if student.teacher:
            logger.info(
                f"[attendance] Record {record_id} deleted; teacher {student.teacher!r} keeps its attendance talents"
            )
    record.delete()
    return reversed_amount


def delete_attendance(record_id):
    """
    Remove an attendance record. A present record gives back its student talents
    (history type 'delete'); the teacher side is left as is.
    Returns the student delta (0 or -ATTENDANCE_TALENTS).
    """
    amount = _delete_attendance(record_id)
    logger.info(f"[attendance] Record {record_id} deleted (student {amount:+d})")
    return amount


def set_attendance_comment(record_id, comment):
    """Update the free-text comment. No talent effect."""
    try:
        record = AttendanceRecord.objects.get(pk=record_id)
    except AttendanceRecord.DoesNotExist:
        raise AttendanceRecordNotFound(f"Attendance record {record_id} not found.")
    record.comment = comment or ""
    record.save(update_fields=["comment", "updated_at"])
    return record
