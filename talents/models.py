"""
Talent history: append-only audit rows for every balance change.
Invariant per row: after_balance == before_balance + amount.
Invariant per entity: talents == initial_talents + sum(amount).
"""
from django.db import models
from students.models import Student, Teacher


class BaseTalentHistory(models.Model):
    TYPE_ATTENDANCE = "attendance"
    TYPE_ACTIVITY = "activity"
    TYPE_MANUAL = "manual"
    TYPE_TRANSFER = "transfer"
    TYPE_PURCHASE = "purchase"
    TYPE_DELETE = "delete"
    TYPE_CORRECTION = "correction"

    TYPE_CHOICES = [
        (TYPE_ATTENDANCE, "Attendance"),
        (TYPE_ACTIVITY, "Weekly activity"),
        (TYPE_MANUAL, "Manual"),
        (TYPE_TRANSFER, "Transfer"),
        (TYPE_PURCHASE, "Purchase"),
        (TYPE_DELETE, "Attendance deleted"),
        (TYPE_CORRECTION, "Correction"),
    ]

    amount = models.IntegerField(help_text="Signed: positive credits, negative debits")
    before_balance = models.IntegerField()
    after_balance = models.IntegerField()
    reason = models.CharField(max_length=255)
    type = models.CharField(max_length=20, choices=TYPE_CHOICES, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        abstract = True
        ordering = ["-created_at", "-id"]


class TalentHistory(BaseTalentHistory):
    """Student ledger row."""
    student = models.ForeignKey(
        Student,
        on_delete=models.CASCADE,
        related_name="talent_history",
    )
    # Set for teacher manual grants; the weekly cap sums these rows
    granted_by = models.ForeignKey(
        Teacher,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="granted_history",
    )

    class Meta(BaseTalentHistory.Meta):
        db_table = "talent_history"
        verbose_name = "Talent History"
        verbose_name_plural = "Talent History"
        indexes = [
            models.Index(fields=["student", "created_at"], name="talent_hist_student_6b1f0e_idx"),
            models.Index(fields=["granted_by", "type", "created_at"], name="talent_hist_granted_3c9a42_idx"),
        ]

    def __str__(self):
        return f"{self.student.name} {self.amount:+d} ({self.type}) {self.before_balance} -> {self.after_balance}"


class TeacherTalentHistory(BaseTalentHistory):
    """Teacher ledger row."""
    teacher = models.ForeignKey(
        Teacher,
        on_delete=models.CASCADE,
        related_name="talent_history",
    )

    class Meta(BaseTalentHistory.Meta):
        db_table = "teacher_talent_history"
        verbose_name = "Teacher Talent History"
        verbose_name_plural = "Teacher Talent History"
        indexes = [
            models.Index(fields=["teacher", "created_at"], name="teacher_tal_teacher_8d2e57_idx"),
        ]

    def __str__(self):
        return f"{self.teacher.name} {self.amount:+d} ({self.type}) {self.before_balance} -> {self.after_balance}"
