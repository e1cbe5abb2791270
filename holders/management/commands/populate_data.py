"""
Management command to load the sample holders, pets and visits.
"""
from django.core.management.base import BaseCommand

from holders.sample_data import load_sample_data


class Command(BaseCommand):
    help = 'Populate database with the sample pet clinic data (idempotent)'

    def handle(self, *args, **options):
        self.stdout.write('Loading sample data...')
        created = load_sample_data()
        for table, count in created.items():
            self.stdout.write(f"  {table}: {count} new")
        self.stdout.write(self.style.SUCCESS('Sample data ready.'))
