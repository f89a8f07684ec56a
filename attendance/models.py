"""
Attendance models: one status record per student per attendance day, and one
weekly-activity row per student per week (keyed by the week's Sunday).
Unique constraints: (student, date) on both.
"""
from django.db import models
from students.models import Student


class AttendanceRecord(models.Model):
    """
    Attendance status for a Sunday or holiday. No record means "unset".
    Status changes move talents through the ledger; the comment does not.
    """
    STATUS_PRESENT = "present"
    STATUS_ABSENT = "absent"
    STATUS_LATE = "late"

    STATUS_CHOICES = [
        (STATUS_PRESENT, "Present"),
        (STATUS_ABSENT, "Absent"),
        (STATUS_LATE, "Late"),
    ]

    student = models.ForeignKey(
        Student,
        on_delete=models.CASCADE,
        related_name="attendance_records",
    )
    date = models.DateField()
    status = models.CharField(max_length=20, choices=STATUS_CHOICES)
    comment = models.TextField(blank=True, default="")
    marked_by = models.ForeignKey(
        "accounts.User",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="marked_attendance",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "attendance_records"
        verbose_name = "Attendance Record"
        verbose_name_plural = "Attendance Records"
        unique_together = [["student", "date"]]
        ordering = ["-date", "student"]
        indexes = [
            models.Index(fields=["date"], name="attendance__date_2c41d9_idx"),
        ]

    def __str__(self):
        return f"{self.student.name} - {self.date} - {self.status}"


class WeeklyActivity(models.Model):
    """Four independent weekly flags, each worth ACTIVITY_TALENTS while set."""
    ACTIVITY_SCRIPTURE = "scripture"
    ACTIVITY_RECITATION = "recitation"
    ACTIVITY_QUIET_TIME = "quiet_time"
    ACTIVITY_PHONE_CHECK = "phone_check"

    ACTIVITY_CHOICES = [
        (ACTIVITY_SCRIPTURE, "Scripture reading"),
        (ACTIVITY_RECITATION, "Recitation"),
        (ACTIVITY_QUIET_TIME, "Quiet time"),
        (ACTIVITY_PHONE_CHECK, "Phone check"),
    ]

    student = models.ForeignKey(
        Student,
        on_delete=models.CASCADE,
        related_name="weekly_activities",
    )
    date = models.DateField(help_text="Sunday that starts the week")
    scripture = models.BooleanField(default=False)
    recitation = models.BooleanField(default=False)
    quiet_time = models.BooleanField(default=False)
    phone_check = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "weekly_activities"
        verbose_name = "Weekly Activity"
        verbose_name_plural = "Weekly Activities"
        unique_together = [["student", "date"]]
        ordering = ["-date", "student"]

    def __str__(self):
        return f"{self.student.name} - week of {self.date}"
