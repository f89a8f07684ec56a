import logging
from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class CoreConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'core'
    verbose_name = 'Core (Calendar)'

    def ready(self):
        from core.calendar import parse_holidays

        # Fail at startup rather than on the first attendance request
        holidays = parse_holidays(settings.ATTENDANCE_HOLIDAYS)
        logger.info('Attendance holidays: %s', sorted(holidays))
