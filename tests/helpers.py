"""
Shared fixtures for ledger tests.
Dates: 2024-01-07 and 2024-01-14 are Sundays, 2024-12-25 is a Wednesday holiday.
"""
from datetime import date

from rest_framework_simplejwt.tokens import AccessToken

from accounts.models import User
from students.models import Student, Teacher

SUNDAY = date(2024, 1, 7)
NEXT_SUNDAY = date(2024, 1, 14)
MONDAY = date(2024, 1, 8)
CHRISTMAS = date(2024, 12, 25)


def make_teacher(name="Kim", talents=0, email=None):
    user = None
    if email:
        user = User.objects.create_user(email=email, password="pass123", full_name=name, role="teacher")
    return Teacher.objects.create(name=name, talents=talents, user=user)


def make_student(name="Lee", teacher="Kim", talents=0, email=None):
    user = None
    if email:
        user = User.objects.create_user(email=email, password="pass123", full_name=name, role="student")
    return Student.objects.create(name=name, teacher=teacher, talents=talents, user=user)


def make_admin(email="admin@test.com"):
    return User.objects.create_user(email=email, password="pass123", full_name="Admin", role="admin")


def auth_header(user) -> dict:
    token = str(AccessToken.for_user(user))
    return {"HTTP_AUTHORIZATION": f"Bearer {token}"}
