"""
Roster: Student and Teacher rows carrying the cached talent balance.
Student.teacher is the teacher's *name* (denormalized, no foreign key); see
talents.services.ledger.find_teacher_for_student for the lookup.
`talents` is written only through talents.services.ledger.
"""
from django.db import models
from accounts.models import User


class Teacher(models.Model):
    """Teacher, optionally linked to a User (role=teacher)."""
    user = models.OneToOneField(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='teacher_profile',
        limit_choices_to={'role': 'teacher'},
    )
    name = models.CharField(max_length=100, db_index=True)
    class_name = models.CharField(max_length=50, blank=True, default='')
    talents = models.IntegerField(default=0)
    # Opening balance; talents == initial_talents + sum(history.amount)
    initial_talents = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'teachers'
        verbose_name = 'Teacher'
        verbose_name_plural = 'Teachers'
        ordering = ['name', 'id']

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if self._state.adding:
            # Opening balance is whatever the row is created with
            self.initial_talents = self.talents or self.initial_talents
            self.talents = self.initial_talents
        super().save(*args, **kwargs)


class Student(models.Model):
    """
    Student, optionally linked to a User (role=student).
    Balance may go negative only as a side effect of reversals (attendance delete, un-check).
    """
    user = models.OneToOneField(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='student_profile',
        limit_choices_to={'role': 'student'},
    )
    name = models.CharField(max_length=100)
    class_name = models.CharField(max_length=50, blank=True, default='', db_index=True)
    teacher = models.CharField(
        max_length=100,
        blank=True,
        default='',
        db_index=True,
        help_text="Teacher name (matched against Teacher.name, not a foreign key)",
    )
    talents = models.IntegerField(default=0)
    initial_talents = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'students'
        verbose_name = 'Student'
        verbose_name_plural = 'Students'
        ordering = ['class_name', 'name', 'id']

    def __str__(self):
        return f"{self.name} ({self.class_name})"

    def save(self, *args, **kwargs):
        if self._state.adding:
            # Opening balance is whatever the row is created with
            self.initial_talents = self.talents or self.initial_talents
            self.talents = self.initial_talents
        super().save(*args, **kwargs)
