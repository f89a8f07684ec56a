"""
Attendance status transitions.
Tests prove:
1. The rule table (unset/present/absent/late) gives the right student delta
2. The teacher moves a fixed 10 in the same direction whenever the student moves
3. Re-clicking the same status writes nothing
4. Deleting a present record reverses the student side only
5. Bad dates and statuses are rejected with no state change
"""
from django.test import TestCase

from attendance.models import AttendanceRecord
from attendance.services.attendance_status import (
    attendance_delta,
    delete_attendance,
    set_attendance,
    set_attendance_comment,
)
from talents.exceptions import AttendanceRecordNotFound, InvalidDate, InvalidStatus, StudentNotFound
from talents.models import TalentHistory, TeacherTalentHistory

from .helpers import CHRISTMAS, MONDAY, SUNDAY, make_student, make_teacher


class AttendanceDeltaRuleTests(TestCase):
    def test_rule_table(self):
        cases = [
            (None, "present", 10),
            (None, "absent", 0),
            (None, "late", 0),
            ("present", "absent", -10),
            ("present", "late", -10),
            ("absent", "present", 10),
            ("late", "present", 10),
            ("present", "present", 0),
            ("absent", "late", 0),
            ("late", "absent", 0),
        ]
        for old, new, expected in cases:
            with self.subTest(old=old, new=new):
                self.assertEqual(attendance_delta(old, new), expected)


class SetAttendanceTests(TestCase):
    def setUp(self):
        self.teacher = make_teacher(name="Kim")
        self.student = make_student(name="Lee", teacher="Kim")

    def _refresh(self):
        self.student.refresh_from_db()
        self.teacher.refresh_from_db()

    def test_first_present_credits_student_and_teacher(self):
        change = set_attendance(self.student.id, SUNDAY, "present")
        self._refresh()
        self.assertTrue(change.created)
        self.assertEqual(self.student.talents, 10)
        self.assertEqual(self.teacher.talents, 10)
        entry = TalentHistory.objects.get(student=self.student)
        self.assertEqual((entry.amount, entry.before_balance, entry.after_balance), (10, 0, 10))
        self.assertEqual(entry.type, TalentHistory.TYPE_ATTENDANCE)
        self.assertEqual(TeacherTalentHistory.objects.get(teacher=self.teacher).amount, 10)

    def test_first_absent_records_status_without_talents(self):
        set_attendance(self.student.id, SUNDAY, "absent")
        self._refresh()
        self.assertEqual(AttendanceRecord.objects.get(student=self.student).status, "absent")
        self.assertEqual(self.student.talents, 0)
        self.assertEqual(self.teacher.talents, 0)
        self.assertFalse(TalentHistory.objects.exists())

    def test_same_status_twice_is_idempotent(self):
        set_attendance(self.student.id, SUNDAY, "present")
        change = set_attendance(self.student.id, SUNDAY, "present")
        self._refresh()
        self.assertEqual(change.student_delta, 0)
        self.assertEqual(self.student.talents, 10)
        self.assertEqual(self.teacher.talents, 10)
        self.assertEqual(TalentHistory.objects.count(), 1)
        self.assertEqual(TeacherTalentHistory.objects.count(), 1)
        self.assertEqual(AttendanceRecord.objects.count(), 1)

    def test_absent_to_late_changes_status_only(self):
        set_attendance(self.student.id, SUNDAY, "absent")
        set_attendance(self.student.id, SUNDAY, "late")
        self._refresh()
        self.assertEqual(AttendanceRecord.objects.get().status, "late")
        self.assertEqual(self.student.talents, 0)
        self.assertFalse(TalentHistory.objects.exists())

    def test_full_scenario_with_delete_asymmetry(self):
        set_attendance(self.student.id, SUNDAY, "present")
        self._refresh()
        self.assertEqual((self.student.talents, self.teacher.talents), (10, 10))

        set_attendance(self.student.id, SUNDAY, "late")
        self._refresh()
        self.assertEqual((self.student.talents, self.teacher.talents), (0, 0))

        change = set_attendance(self.student.id, SUNDAY, "present")
        self._refresh()
        self.assertEqual((self.student.talents, self.teacher.talents), (10, 10))

        self.assertEqual(delete_attendance(change.record.id), -10)
        self._refresh()
        self.assertEqual(self.student.talents, 0)
        # Teacher keeps the talents from the last transition
        self.assertEqual(self.teacher.talents, 10)
        self.assertFalse(AttendanceRecord.objects.exists())

        last = TalentHistory.objects.order_by("-id").first()
        self.assertEqual(last.type, TalentHistory.TYPE_DELETE)
        self.assertEqual((last.amount, last.before_balance, last.after_balance), (-10, 10, 0))
        self.assertEqual(TeacherTalentHistory.objects.count(), 3)

    def test_delete_non_present_record_has_no_talent_effect(self):
        change = set_attendance(self.student.id, SUNDAY, "absent")
        self.assertEqual(delete_attendance(change.record.id), 0)
        self._refresh()
        self.assertEqual(self.student.talents, 0)
        self.assertFalse(TalentHistory.objects.exists())
        self.assertFalse(AttendanceRecord.objects.exists())

    def test_delete_missing_record(self):
        with self.assertRaises(AttendanceRecordNotFound):
            delete_attendance(9999)

    def test_holiday_is_accepted(self):
        set_attendance(self.student.id, CHRISTMAS, "present")
        self._refresh()
        self.assertEqual(self.student.talents, 10)

    def test_weekday_rejected_without_state_change(self):
        with self.assertRaises(InvalidDate):
            set_attendance(self.student.id, MONDAY, "present")
        self._refresh()
        self.assertEqual(self.student.talents, 0)
        self.assertFalse(AttendanceRecord.objects.exists())
        self.assertFalse(TalentHistory.objects.exists())

    def test_string_dates_are_parsed(self):
        set_attendance(self.student.id, "2024-01-07", "present")
        self.assertEqual(AttendanceRecord.objects.get().date, SUNDAY)
        with self.assertRaises(InvalidDate):
            set_attendance(self.student.id, "07/01/2024", "present")

    def test_trailing_text_after_date_rejected(self):
        for value in ["2024-01-07garbage", "2024-01-07 x", "2024-01-071"]:
            with self.subTest(value=value), self.assertRaises(InvalidDate):
                set_attendance(self.student.id, value, "present")
        self.assertFalse(AttendanceRecord.objects.exists())

    def test_datetime_string_uses_its_date(self):
        set_attendance(self.student.id, "2024-01-07T10:30:00", "present")
        self.assertEqual(AttendanceRecord.objects.get().date, SUNDAY)

    def test_invalid_status_rejected(self):
        with self.assertRaises(InvalidStatus):
            set_attendance(self.student.id, SUNDAY, "excused")
        self.assertFalse(AttendanceRecord.objects.exists())

    def test_unknown_student(self):
        with self.assertRaises(StudentNotFound):
            set_attendance(9999, SUNDAY, "present")

    def test_student_without_matching_teacher_still_credited(self):
        orphan = make_student(name="Park", teacher="Nobody")
        change = set_attendance(orphan.id, SUNDAY, "present")
        orphan.refresh_from_db()
        self.assertEqual(orphan.talents, 10)
        self.assertIsNone(change.teacher)
        self.assertEqual(change.teacher_delta, 0)
        self.assertFalse(TeacherTalentHistory.objects.exists())

    def test_duplicate_teacher_names_resolve_to_lowest_id(self):
        second = make_teacher(name="Kim")
        set_attendance(self.student.id, SUNDAY, "present")
        self._refresh()
        second.refresh_from_db()
        self.assertEqual(self.teacher.talents, 10)
        self.assertEqual(second.talents, 0)

    def test_comment_has_no_ledger_effect(self):
        change = set_attendance(self.student.id, SUNDAY, "present")
        record = set_attendance_comment(change.record.id, "Came with a friend")
        self._refresh()
        self.assertEqual(record.comment, "Came with a friend")
        self.assertEqual(record.status, "present")
        self.assertEqual(self.student.talents, 10)
        self.assertEqual(TalentHistory.objects.count(), 1)
