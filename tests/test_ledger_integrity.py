"""
Ledger invariants, history ordering, transient-conflict retries and the
audit/reset management commands.
"""
from io import StringIO
from unittest.mock import patch

from django.core.management import call_command
from django.core.management.base import CommandError
from django.db import DataError, OperationalError
from django.test import TestCase, TransactionTestCase

from attendance.services.attendance_status import set_attendance
from attendance.services.weekly_activity import toggle_activity
from store.models import Product
from store.services.purchase import purchase
from students.models import Student, Teacher
from talents.exceptions import ConsistencyFailure, InvalidEntityKind
from talents.models import TalentHistory, TeacherTalentHistory
from talents.services.adjustments import adjust_talents
from talents.services.grants import grant_or_transfer
from talents.services.history import get_history, ledger_discrepancies

from .helpers import SUNDAY, make_student, make_teacher


class LedgerInvariantTests(TestCase):
    def setUp(self):
        self.teacher = make_teacher(name="Kim", talents=25)
        self.student = make_student(name="Lee", teacher="Kim", talents=5)

    def _mixed_activity(self):
        set_attendance(self.student.id, SUNDAY, "present")
        set_attendance(self.student.id, SUNDAY, "absent")
        set_attendance(self.student.id, SUNDAY, "present")
        toggle_activity(self.student.id, SUNDAY, "scripture", True)
        adjust_talents([self.student.id], -4)
        grant_or_transfer(self.teacher.id, self.student.id, 3, "Verse", False)
        grant_or_transfer(self.teacher.id, self.student.id, 7, "Gift", True)
        purchase(self.student.id, Product.objects.create(name="Pen", price=6, stock=5).id, 2)

    def test_initial_balance_is_recorded(self):
        self.assertEqual(self.student.initial_talents, 5)
        self.assertEqual(self.teacher.initial_talents, 25)

    def test_every_row_and_balance_adds_up(self):
        self._mixed_activity()
        for entry in list(TalentHistory.objects.all()) + list(TeacherTalentHistory.objects.all()):
            self.assertEqual(entry.after_balance, entry.before_balance + entry.amount)
        self.student.refresh_from_db()
        self.teacher.refresh_from_db()
        student_sum = sum(TalentHistory.objects.filter(student=self.student).values_list("amount", flat=True))
        teacher_sum = sum(TeacherTalentHistory.objects.filter(teacher=self.teacher).values_list("amount", flat=True))
        self.assertEqual(self.student.talents, self.student.initial_talents + student_sum)
        self.assertEqual(self.teacher.talents, self.teacher.initial_talents + teacher_sum)
        self.assertEqual(ledger_discrepancies(), [])

    def test_direct_balance_edit_is_detected(self):
        self._mixed_activity()
        Student.objects.filter(pk=self.student.pk).update(talents=999)
        [problem] = ledger_discrepancies()
        self.assertEqual((problem.entity_kind, problem.entity_id, problem.actual), ("student", self.student.id, 999))

    def test_broken_history_row_is_detected(self):
        adjust_talents([self.student.id], 2)
        TalentHistory.objects.update(after_balance=100)
        problems = ledger_discrepancies()
        self.assertTrue(any("history row" in p.problem for p in problems))

    def test_history_is_newest_first(self):
        self._mixed_activity()
        entity, history = get_history("student", self.student.id)
        self.assertEqual(entity, self.student)
        ids = list(history.values_list("id", flat=True))
        self.assertEqual(ids, sorted(ids, reverse=True))
        _, teacher_history = get_history("teacher", self.teacher.id)
        # Three attendance transitions and one transfer
        self.assertEqual(teacher_history.count(), 4)

    def test_history_rejects_unknown_entity_kind(self):
        with self.assertRaises(InvalidEntityKind):
            get_history("parent", 1)


class TransientConflictTests(TestCase):
    def test_conflict_inside_caller_transaction_is_not_retried(self):
        student = make_student(talents=3)
        with patch(
            "talents.services.adjustments.apply_student_delta",
            side_effect=OperationalError("deadlock detected"),
        ) as mocked:
            [result] = adjust_talents([student.id], 1)
        self.assertEqual(mocked.call_count, 1)
        self.assertFalse(result.ok)
        self.assertEqual(result.code, "consistency_failure")
        self.assertEqual(result.status_code, 409)
        student.refresh_from_db()
        self.assertEqual(student.talents, 3)


class RetryTests(TransactionTestCase):
    def test_outermost_transaction_is_retried_once(self):
        from talents.services import ledger

        student = make_student(talents=3)
        real = ledger.apply_student_delta
        calls = []

        def flaky(*args, **kwargs):
            calls.append(1)
            if len(calls) == 1:
                raise OperationalError("deadlock detected")
            return real(*args, **kwargs)

        with patch("talents.services.adjustments.apply_student_delta", side_effect=flaky):
            [result] = adjust_talents([student.id], 4)
        self.assertEqual(len(calls), 2)
        self.assertTrue(result.ok)
        student.refresh_from_db()
        self.assertEqual(student.talents, 7)
        self.assertEqual(TalentHistory.objects.count(), 1)

    def test_non_transient_errors_are_not_retried(self):
        student = make_student()
        with patch(
            "talents.services.adjustments.apply_student_delta",
            side_effect=OperationalError("no such table"),
        ) as mocked:
            [result] = adjust_talents([student.id], 1)
        self.assertEqual(mocked.call_count, 1)
        self.assertFalse(result.ok)
        self.assertEqual(result.code, "database_error")

    def test_database_error_on_one_student_keeps_the_batch_going(self):
        from talents.services import ledger

        first = make_student(name="A", talents=1)
        second = make_student(name="B", talents=2)
        real = ledger.apply_student_delta

        def fail_first(student, *args, **kwargs):
            if student.id == first.id:
                raise DataError("integer out of range")
            return real(student, *args, **kwargs)

        with patch("talents.services.adjustments.apply_student_delta", side_effect=fail_first):
            results = adjust_talents([first.id, second.id], 5)
        self.assertEqual([r.ok for r in results], [False, True])
        self.assertEqual(results[0].status_code, 500)
        first.refresh_from_db()
        second.refresh_from_db()
        self.assertEqual((first.talents, second.talents), (1, 7))
        self.assertEqual(TalentHistory.objects.count(), 1)


class LedgerCommandTests(TestCase):
    def setUp(self):
        self.teacher = make_teacher(name="Kim", talents=20)
        self.student = make_student(name="Lee", teacher="Kim", talents=8)
        set_attendance(self.student.id, SUNDAY, "present")

    def test_verify_clean_ledger(self):
        out = StringIO()
        call_command("verify_talent_ledger", "--strict", stdout=out)
        self.assertIn("no discrepancies", out.getvalue())

    def test_verify_strict_fails_on_discrepancy(self):
        Teacher.objects.filter(pk=self.teacher.pk).update(talents=0)
        out = StringIO()
        with self.assertRaises(CommandError):
            call_command("verify_talent_ledger", "--strict", stdout=out)
        self.assertIn(f"teacher {self.teacher.id}", out.getvalue())

    def test_reset_dry_run_changes_nothing(self):
        out = StringIO()
        call_command("reset_talents", stdout=out)
        self.student.refresh_from_db()
        self.assertEqual(self.student.talents, 18)
        self.assertIn("Would reset 1 students and 1 teachers", out.getvalue())

    def test_reset_apply_zeroes_balances_with_corrections(self):
        call_command("reset_talents", "--apply", stdout=StringIO())
        self.student.refresh_from_db()
        self.teacher.refresh_from_db()
        self.assertEqual((self.student.talents, self.teacher.talents), (0, 0))
        correction = TalentHistory.objects.get(type=TalentHistory.TYPE_CORRECTION)
        self.assertEqual((correction.amount, correction.after_balance), (-18, 0))
        self.assertEqual(ledger_discrepancies(), [])

    def test_reset_with_long_reason_fits_history_column(self):
        call_command("reset_talents", "--apply", "--reason", "x" * 400, stdout=StringIO())
        correction = TalentHistory.objects.get(type=TalentHistory.TYPE_CORRECTION)
        teacher_correction = TeacherTalentHistory.objects.get(type=TeacherTalentHistory.TYPE_CORRECTION)
        self.assertEqual(len(correction.reason), 255)
        self.assertEqual(len(teacher_correction.reason), 255)
