"""
engine.py

The seating engine: the only code that changes a table's occupancy or a
reservation's status.

    seat(table_id, reservation_id)   booked reservation -> occupied table
    finish(table_id)                 occupied table -> free, reservation finished
    validate_capacity(table_id, n)   pre-flight check, no side effects

Every transition runs in a single transaction. The table row is locked
first and the reservation row second (the same order for seat and finish),
so concurrent calls on the same table serialize instead of both claiming it.
"""

import logging

from django.db import transaction

from .exceptions import InvalidRequest, NotFound, SeatingError
from .models import Reservation, Table
from .signals import table_finished, table_seated
from .stores import DjangoReservationStore, DjangoTableStore
from .validators import validate_capacity_field, validate_name  # noqa: F401  re-exported

logger = logging.getLogger(__name__)


def _is_missing_id(value) -> bool:
    # Booleans are never ids; 0 and blank strings are "not supplied".
    if isinstance(value, bool):
        return True
    if isinstance(value, str):
        return not value.strip()
    return not value


class SeatingEngine:
    def __init__(self, tables=None, reservations=None):
        self.tables = tables or DjangoTableStore()
        self.reservations = reservations or DjangoReservationStore()

    # --------------------------------------------------------------------------
    # Capacity
    # --------------------------------------------------------------------------
    def validate_capacity(self, table_id, party_size) -> bool:
        """True when the table exists and seats at least ``party_size``."""
        return self._fits(self.tables.find(table_id), party_size)

    @staticmethod
    def _fits(table, party_size) -> bool:
        if table is None:
            return False
        try:
            return int(table.capacity) >= int(party_size)
        except (TypeError, ValueError):
            return False

    # --------------------------------------------------------------------------
    # Seat
    # --------------------------------------------------------------------------
    def seat(self, table_id, reservation_id) -> dict:
        """
        Seat a booked reservation at a free table.

        Checks run in a fixed order and the first failure wins; nothing is
        written unless all of them pass.

        Raises:
            InvalidRequest: missing reservation_id, unknown or too-small
                table, table occupied, reservation already seated or finished.
            NotFound: the reservation does not exist.
        """
        try:
            with transaction.atomic():
                return self._seat(table_id, reservation_id)
        except SeatingError as exc:
            logger.warning(f"Seat rejected (table={table_id}, reservation={reservation_id}): {exc}")
            raise

    def _seat(self, table_id, reservation_id):
        if _is_missing_id(reservation_id):
            raise InvalidRequest("body must have reservation_id.")

        table = self.tables.find(table_id, lock=True)
        reservation = self.reservations.read(reservation_id, lock=True)

        if reservation is None:
            raise NotFound(f"reservation {reservation_id} does not exist")
        if table is None:
            raise InvalidRequest("table does not have sufficient data")
        if not self._fits(table, reservation.people):
            raise InvalidRequest(
                f"table does not have sufficient capacity for reservation {reservation_id}"
            )
        if table.reservation_id is not None:
            raise InvalidRequest("table is occupied.")
        if reservation.status == Reservation.Status.SEATED:
            raise InvalidRequest(f"reservation {reservation_id} is already seated")
        if reservation.status == Reservation.Status.FINISHED:
            raise InvalidRequest(f"reservation {reservation_id} is finished")

        table = self.tables.update(table.table_id, {"reservation_id": reservation.reservation_id})
        reservation = self.reservations.update(
            reservation.reservation_id, {"status": Reservation.Status.SEATED}
        )
        logger.info(f"🪑 Seated reservation {reservation.reservation_id} at table {table.table_id}")
        table_seated.send(sender=self.__class__, table=table, reservation=reservation)
        return {"status": Reservation.Status.SEATED.value}

    # --------------------------------------------------------------------------
    # Finish
    # --------------------------------------------------------------------------
    def finish(self, table_id) -> dict:
        """
        Release an occupied table and mark its reservation finished.
        A finished reservation can never be seated again.

        Raises:
            NotFound: the table does not exist.
            InvalidRequest: the table is not occupied.
        """
        try:
            with transaction.atomic():
                return self._finish(table_id)
        except SeatingError as exc:
            logger.warning(f"Finish rejected (table={table_id}): {exc}")
            raise

    def _finish(self, table_id):
        table = self.tables.find(table_id, lock=True)
        if table is None:
            raise NotFound(f"table id: {table_id} not found")
        if table.status != Table.Status.OCCUPIED:
            raise InvalidRequest("table is not occupied")

        reservation_id = table.reservation_id
        reservation = self.reservations.update(reservation_id, {"status": Reservation.Status.FINISHED})
        table = self.tables.update(table.table_id, {"reservation_id": None})
        logger.info(f"🧹 Table {table.table_id} is free again (reservation {reservation_id} finished)")
        table_finished.send(sender=self.__class__, table=table, reservation=reservation)
        return {"status": Reservation.Status.FINISHED.value}


# =============================================================================
# === MODULE-LEVEL SHORTCUTS ==================================================
# =============================================================================

_default_engine = SeatingEngine()


def seat(table_id, reservation_id) -> dict:
    return _default_engine.seat(table_id, reservation_id)


def finish(table_id) -> dict:
    return _default_engine.finish(table_id)


def validate_capacity(table_id, party_size) -> bool:
    return _default_engine.validate_capacity(table_id, party_size)
