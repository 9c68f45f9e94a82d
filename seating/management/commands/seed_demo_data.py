from datetime import date, time, timedelta

from django.core.management.base import BaseCommand

from seating.models import Reservation, Table
from seating.stores import DjangoTableStore
from seating.validators import validate_capacity_field, validate_name

TABLES = [
    ("Bar #1", 1),
    ("Bar #2", 1),
    ("#1", 6),
    ("#2", 6),
]

RESERVATIONS = [
    ("Rick", "Sanchez", "202-555-0164", time(20, 0), 6),
    ("Frank", "Palicky", "202-555-0153", time(20, 0), 1),
    ("Bird", "Person", "808-555-0141", time(18, 30), 1),
    ("Tiger", "Lion", "808-555-0140", time(19, 30), 3),
]


class Command(BaseCommand):
    help = 'Seed the database with demo tables and booked reservations'

    def add_arguments(self, parser):
        parser.add_argument('--flush', action='store_true', help='Delete existing tables and reservations first')

    def handle(self, *args, **options):
        if options['flush']:
            Table.objects.all().delete()
            Reservation.objects.all().delete()

        store = DjangoTableStore()
        for name, capacity in TABLES:
            table = store.create({
                'table_name': validate_name(name),
                'capacity': validate_capacity_field(capacity),
            })
            self.stdout.write(f"Creating Table: {table.table_name}, capacity={table.capacity}")

        tomorrow = date.today() + timedelta(days=1)
        for first_name, last_name, mobile, at, people in RESERVATIONS:
            reservation = Reservation.objects.create(
                first_name=first_name,
                last_name=last_name,
                mobile_number=mobile,
                reservation_date=tomorrow,
                reservation_time=at,
                people=people,
            )
            self.stdout.write(f"Creating Reservation: {reservation}")

        self.stdout.write(self.style.SUCCESS('Successfully seeded the database with demo tables and reservations'))
