"""
Audit the talent ledger.
Checks every history row (after == before + amount) and every balance
(talents == initial_talents + sum(history amounts)) for students and teachers.
Usage: python manage.py verify_talent_ledger [--strict]
With --strict the command exits non-zero when anything is off.
"""
from django.core.management.base import BaseCommand, CommandError

from talents.services.history import ledger_discrepancies


class Command(BaseCommand):
    help = 'Verify talent ledger invariants for students and teachers'

    def add_arguments(self, parser):
        parser.add_argument(
            '--strict',
            action='store_true',
            help='Fail with a non-zero exit code when discrepancies are found',
        )

    def handle(self, *args, **options):
        problems = ledger_discrepancies()
        if not problems:
            self.stdout.write(self.style.SUCCESS('Talent ledger OK: no discrepancies.'))
            return

        self.stdout.write(self.style.WARNING(f'Found {len(problems)} discrepancies:'))
        for problem in problems:
            self.stdout.write(f'  {problem}')

        if options['strict']:
            raise CommandError(f'Talent ledger has {len(problems)} discrepancies')
