"""
Production settings
"""
from .base import *

DEBUG = False

# Production security settings
SECURE_SSL_REDIRECT = True
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_BROWSER_XSS_FILTER = True
SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = 'DENY'

# Production database must come from DATABASE_URL (PostgreSQL: ledger writes use row locks)
_default_db = env.db('DATABASE_URL')
_default_db.setdefault('CONN_MAX_AGE', 60)
DATABASES['default'] = _default_db

LOGGING['root']['level'] = env('LOG_LEVEL', default='WARNING')
LOGGING['loggers'].update({
    'talents': {'level': 'INFO'},
    'attendance': {'level': 'INFO'},
    'store': {'level': 'INFO'},
})
