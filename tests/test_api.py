"""
HTTP layer: role checks, status codes and the error body for ledger failures.
"""
from django.test import TestCase
from rest_framework.test import APIClient

from attendance.models import AttendanceRecord
from store.models import Product
from talents.models import TalentHistory

from .helpers import auth_header, make_admin, make_student, make_teacher


class ApiTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = make_admin()
        self.teacher = make_teacher(name="Kim", talents=20, email="kim@test.com")
        self.student = make_student(name="Lee", teacher="Kim", talents=50, email="lee@test.com")
        self.other = make_student(name="Choi", teacher="Park", email="choi@test.com")


class AuthApiTests(ApiTestCase):
    def test_login_returns_tokens_and_roster_ids(self):
        response = self.client.post(
            "/api/auth/login", {"email": "kim@test.com", "password": "pass123"}, format="json"
        )
        self.assertEqual(response.status_code, 200)
        self.assertIn("accessToken", response.data)
        self.assertEqual(response.data["user"]["teacherId"], self.teacher.id)

    def test_me_requires_authentication(self):
        self.assertEqual(self.client.get("/api/auth/me").status_code, 401)


class AttendanceApiTests(ApiTestCase):
    def test_teacher_sets_attendance(self):
        response = self.client.post(
            "/api/attendance",
            {"studentId": self.student.id, "date": "2024-01-07", "status": "present"},
            format="json",
            **auth_header(self.teacher.user),
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["studentDelta"], 10)
        self.assertEqual(response.data["teacherDelta"], 10)

    def test_invalid_date_is_400_with_code(self):
        response = self.client.post(
            "/api/attendance",
            {"studentId": self.student.id, "date": "2024-01-08", "status": "present"},
            format="json",
            **auth_header(self.admin),
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["code"], "invalid_date")
        self.assertFalse(AttendanceRecord.objects.exists())

    def test_students_cannot_take_attendance(self):
        response = self.client.post(
            "/api/attendance",
            {"studentId": self.student.id, "date": "2024-01-07", "status": "present"},
            format="json",
            **auth_header(self.student.user),
        )
        self.assertEqual(response.status_code, 403)

    def test_list_comment_and_delete(self):
        headers = auth_header(self.admin)
        created = self.client.post(
            "/api/attendance",
            {"studentId": self.student.id, "date": "2024-01-07", "status": "present"},
            format="json",
            **headers,
        )
        record_id = created.data["record"]["id"]

        listing = self.client.get("/api/attendance?date=2024-01-07", **headers)
        self.assertEqual([r["id"] for r in listing.data["records"]], [record_id])

        comment = self.client.patch(
            f"/api/attendance/{record_id}/comment", {"comment": "Brought a friend"}, format="json", **headers
        )
        self.assertEqual(comment.data["comment"], "Brought a friend")

        deleted = self.client.delete(f"/api/attendance/{record_id}", **headers)
        self.assertEqual(deleted.status_code, 200)
        self.assertEqual(deleted.data["studentDelta"], -10)
        self.assertEqual(self.client.delete(f"/api/attendance/{record_id}", **headers).status_code, 404)

    def test_weekly_activity_toggle(self):
        response = self.client.post(
            "/api/weekly-activities",
            {"studentId": self.student.id, "date": "2024-01-09", "activityType": "quiet_time", "checked": True},
            format="json",
            **auth_header(self.teacher.user),
        )
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.data["activity"]["quietTime"])
        self.assertEqual(response.data["activity"]["date"], "2024-01-07")

    def test_weekly_activities_read_for_any_day_of_the_week(self):
        headers = auth_header(self.teacher.user)
        self.client.post(
            "/api/weekly-activities",
            {"studentId": self.student.id, "date": "2024-01-07", "activityType": "scripture", "checked": True},
            format="json",
            **headers,
        )
        response = self.client.get("/api/weekly-activities?date=2024-01-11", **headers)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["weekStart"], "2024-01-07")
        self.assertEqual([a["studentId"] for a in response.data["activities"]], [self.student.id])
        self.assertTrue(response.data["activities"][0]["scripture"])

        other_week = self.client.get("/api/weekly-activities?date=2024-01-14", **headers)
        self.assertEqual(other_week.data["activities"], [])

    def test_weekly_activities_read_rejects_bad_date(self):
        response = self.client.get("/api/weekly-activities?date=2024-01-07garbage", **auth_header(self.admin))
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["code"], "invalid_date")


class TalentsApiTests(ApiTestCase):
    def test_admin_bulk_adjust(self):
        response = self.client.post(
            "/api/talents/adjust",
            {"studentIds": [self.student.id, self.other.id], "amount": 5, "reason": "Retreat"},
            format="json",
            **auth_header(self.admin),
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["count"], 2)
        self.assertEqual(
            [(r["beforeBalance"], r["afterBalance"]) for r in response.data["results"]], [(50, 55), (0, 5)]
        )

    def test_single_adjust_failure_uses_error_status(self):
        response = self.client.post(
            "/api/talents/adjust", {"studentId": 9999, "amount": 5}, format="json", **auth_header(self.admin)
        )
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["code"], "student_not_found")

    def test_zero_amount_rejected(self):
        response = self.client.post(
            "/api/talents/adjust",
            {"studentId": self.student.id, "amount": 0},
            format="json",
            **auth_header(self.admin),
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["code"], "invalid_amount")

    def test_teachers_cannot_adjust(self):
        response = self.client.post(
            "/api/talents/adjust",
            {"studentId": self.student.id, "amount": 5},
            format="json",
            **auth_header(self.teacher.user),
        )
        self.assertEqual(response.status_code, 403)

    def test_teacher_grant_cap_error_body(self):
        response = self.client.post(
            "/api/teacher/talents/grant",
            {"studentId": self.student.id, "amount": 6, "reason": "Verse"},
            format="json",
            **auth_header(self.teacher.user),
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["code"], "cap_exceeded")
        self.assertEqual(response.data["limit"], 5)
        self.assertEqual(response.data["weeklyTotal"], 0)

    def test_teacher_transfer_and_weekly_summary(self):
        headers = auth_header(self.teacher.user)
        self.client.post(
            "/api/teacher/talents/grant",
            {"studentId": self.student.id, "amount": 2, "reason": "Verse"},
            format="json",
            **headers,
        )
        transfer = self.client.post(
            "/api/teacher/talents/grant",
            {"studentId": self.student.id, "amount": 8, "reason": "Gift", "useOwnBalance": True},
            format="json",
            **headers,
        )
        self.assertEqual(transfer.status_code, 200)
        self.assertEqual(transfer.data["teacher"], {"before": 20, "after": 12})

        summary = self.client.get("/api/teacher/talents/weekly-grants", **headers)
        self.assertEqual(summary.data["weeklyTotal"], 2)
        self.assertEqual(summary.data["remaining"], 3)
        self.assertEqual(len(summary.data["grants"]), 1)

    def test_teacher_cannot_grant_to_other_class(self):
        response = self.client.post(
            "/api/teacher/talents/grant",
            {"studentId": self.other.id, "amount": 1, "reason": "Nice"},
            format="json",
            **auth_header(self.teacher.user),
        )
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.data["code"], "not_assigned")

    def test_teacher_role_without_profile_is_logged_and_refused(self):
        from accounts.models import User

        stray = User.objects.create_user(email="stray@test.com", password="pass123", full_name="Stray", role="teacher")
        with self.assertLogs("talents.views", level="WARNING") as logs:
            response = self.client.get("/api/teacher/talents/weekly-grants", **auth_header(stray))
        self.assertEqual(response.status_code, 404)
        self.assertIn("no teacher profile", logs.output[0])

    def test_student_reads_own_history_only(self):
        TalentHistory.objects.create(
            student=self.student, amount=1, before_balance=50, after_balance=51, reason="x", type="manual"
        )
        headers = auth_header(self.student.user)
        own = self.client.get(f"/api/talents/history?entity=student&id={self.student.id}", **headers)
        self.assertEqual(own.status_code, 200)
        self.assertEqual(len(own.data["history"]), 1)
        other = self.client.get(f"/api/talents/history?entity=student&id={self.other.id}", **headers)
        self.assertEqual(other.status_code, 403)

    def test_admin_reads_teacher_history(self):
        response = self.client.get(
            f"/api/talents/history?entity=teacher&id={self.teacher.id}", **auth_header(self.admin)
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["teacher"]["id"], self.teacher.id)


class StoreApiTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.product = Product.objects.create(name="Notebook", price=20, stock=3)

    def test_student_purchase(self):
        response = self.client.post(
            f"/api/store/products/{self.product.id}/purchase",
            {"quantity": 2, "requirements": "blue"},
            format="json",
            **auth_header(self.student.user),
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["remainingTalents"], 10)

        again = self.client.post(
            f"/api/store/products/{self.product.id}/purchase",
            {"quantity": 2},
            format="json",
            **auth_header(self.student.user),
        )
        self.assertEqual(again.status_code, 400)
        self.assertEqual(again.data["code"], "insufficient_stock")

    def test_teachers_cannot_purchase(self):
        response = self.client.post(
            f"/api/store/products/{self.product.id}/purchase",
            {"quantity": 1},
            format="json",
            **auth_header(self.teacher.user),
        )
        self.assertEqual(response.status_code, 403)
