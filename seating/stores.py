"""
stores.py

Narrow read/update contracts the seating engine works through, and their
Django ORM implementations. Each call reads or writes exactly one row; the
engine is responsible for wrapping a read-check-write sequence in a
transaction.
"""

import logging
from typing import Optional, Protocol

from django.core.exceptions import ValidationError
from django.db import transaction

from .exceptions import NotFound
from .models import Reservation, Table

logger = logging.getLogger(__name__)

# Lookup values that cannot be a primary key are treated as "no such row".
_BAD_KEY_ERRORS = (TypeError, ValueError, ValidationError)


class TableStore(Protocol):
    def find(self, table_id, *, lock: bool = False) -> Optional[Table]:
        """Return the table, or ``None``. ``lock`` holds the row until commit."""
        ...

    def update(self, table_id, patch: dict) -> Table:
        ...

    def create(self, data: dict) -> Table:
        ...


class ReservationStore(Protocol):
    def read(self, reservation_id, *, lock: bool = False) -> Optional[Reservation]:
        ...

    def update(self, reservation_id, patch: dict) -> Reservation:
        ...


# =============================================================================
# === ORM-BACKED STORES =======================================================
# =============================================================================

class DjangoTableStore:
    """``TableStore`` over the ``Table`` model."""

    def find(self, table_id, *, lock=False):
        queryset = Table.objects.all()
        if lock:
            queryset = queryset.select_for_update()
        try:
            return queryset.filter(pk=table_id).first()
        except _BAD_KEY_ERRORS:
            return None

    def update(self, table_id, patch):
        # Row locks need a transaction; nests under the engine's.
        with transaction.atomic():
            table = self.find(table_id, lock=True)
            if table is None:
                raise NotFound(f"table id: {table_id} not found")

            fields = set()
            for key, value in patch.items():
                if key == "status":
                    # Derived from reservation_id, never written directly.
                    continue
                if key == "reservation_id":
                    table.assign_reservation(value)
                    fields.update({"reservation", "status"})
                else:
                    setattr(table, key, value)
                    fields.add(key)
            fields.add("updated_at")
            table.save(update_fields=sorted(fields))
        return table

    def create(self, data):
        table = Table.objects.create(
            table_name=data["table_name"],
            capacity=data["capacity"],
        )
        logger.info(f"Created table {table.table_id} ({table.table_name}, seats {table.capacity})")
        return table


class DjangoReservationStore:
    """``ReservationStore`` over the ``Reservation`` model."""

    def read(self, reservation_id, *, lock=False):
        queryset = Reservation.objects.all()
        if lock:
            queryset = queryset.select_for_update()
        try:
            return queryset.filter(pk=reservation_id).first()
        except _BAD_KEY_ERRORS:
            return None

    def update(self, reservation_id, patch):
        with transaction.atomic():
            reservation = self.read(reservation_id, lock=True)
            if reservation is None:
                raise NotFound(f"reservation {reservation_id} does not exist")
            for key, value in patch.items():
                setattr(reservation, key, value)
            reservation.save(update_fields=sorted(set(patch) | {"updated_at"}))
        return reservation
