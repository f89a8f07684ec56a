"""
Season reset: bring every student and teacher balance to 0.
Each reset appends a correction row, so history and the ledger invariants are kept.
Usage: python manage.py reset_talents [--apply] [--reason "..."]
Without --apply: dry-run only (report, no changes).
"""
from django.core.management.base import BaseCommand

from talents.services.history import RESET_REASON, reset_balances


class Command(BaseCommand):
    help = 'Reset all talent balances to 0 with correction history rows'

    def add_arguments(self, parser):
        parser.add_argument(
            '--apply',
            action='store_true',
            help='Apply the reset (default: dry-run only)',
        )
        parser.add_argument('--reason', default=RESET_REASON, help='Reason stored on correction rows')

    def handle(self, *args, **options):
        apply = options['apply']
        if not apply:
            self.stdout.write(self.style.WARNING('DRY RUN - no changes will be made. Use --apply to reset.'))

        students, teachers = reset_balances(apply=apply, reason=options['reason'])
        for student in students:
            self.stdout.write(f'  Student {student.id} ({student.name}): {student.talents} -> 0')
        for teacher in teachers:
            self.stdout.write(f'  Teacher {teacher.id} ({teacher.name}): {teacher.talents} -> 0')

        verb = 'Reset' if apply else 'Would reset'
        self.stdout.write(self.style.SUCCESS(f'{verb} {len(students)} students and {len(teachers)} teachers.'))
