"""
Test settings: in-memory SQLite through the same DATABASE_URL path as other environments.
"""
import os

os.environ.setdefault('DATABASE_URL', 'sqlite://:memory:')

from .base import *

DEBUG = False

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

# Ledger constants pinned so tests do not depend on the environment
ATTENDANCE_TALENTS = 10
TEACHER_ATTENDANCE_TALENTS = 10
ACTIVITY_TALENTS = 10
WEEKLY_GRANT_LIMIT = 5
ATTENDANCE_HOLIDAYS = ['12-25']
LEDGER_TRANSACTION_RETRIES = 1

LOGGING['root']['level'] = 'WARNING'
