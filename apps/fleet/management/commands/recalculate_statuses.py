from django.core.management.base import BaseCommand

from apps.maintenance.status import recalculate_all_vehicle_statuses


class Command(BaseCommand):
    help = 'Re-derive every vehicle status from its service records'

    def handle(self, *args, **options):
        count = recalculate_all_vehicle_statuses()
        self.stdout.write(self.style.SUCCESS(f'Recalculated {count} vehicle statuses'))
