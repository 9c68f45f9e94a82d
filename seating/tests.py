import threading
import time
from io import StringIO
from unittest import mock

from channels.layers import get_channel_layer
from channels.testing import WebsocketCommunicator
from django.contrib import messages
from django.core.management import call_command
from django.db import IntegrityError, connection, transaction
from django.test import SimpleTestCase, TestCase, TransactionTestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from . import engine as seating_engine
from .admin import finish_tables
from .consumers import FloorConsumer
from .engine import SeatingEngine
from .exceptions import InvalidRequest, NotFound
from .models import Reservation, Table
from .signals import FLOOR_GROUP
from .stores import DjangoReservationStore, DjangoTableStore
from .validators import (
    MAX_CAPACITY,
    MAX_TABLE_NAME_LENGTH,
    FieldState,
    classify_capacity,
    classify_table_name,
    validate_capacity_field,
    validate_name,
)


class OccupancyAssertionsMixin:
    def assertOccupancyConsistent(self):
        for table in Table.objects.all():
            self.assertEqual(
                table.reservation_id is not None,
                table.status == Table.Status.OCCUPIED,
                f"table {table.table_id} drifted: {table.status} / {table.reservation_id}",
            )


# ==============================================================================
# FIELD VALIDATORS
# ==============================================================================

class TableNameValidatorTests(SimpleTestCase):
    def test_missing_name(self):
        for value in (None, "", "   "):
            with self.subTest(value=value):
                self.assertIs(classify_table_name(value), FieldState.MISSING)
                with self.assertRaisesMessage(InvalidRequest, "data must include a table_name."):
                    validate_name(value)

    def test_single_character_name_is_rejected(self):
        with self.assertRaises(InvalidRequest) as ctx:
            validate_name("A")
        self.assertEqual(str(ctx.exception), "A is not a valid table_name")

    def test_non_string_name_is_invalid(self):
        self.assertIs(classify_table_name(12), FieldState.INVALID)

    def test_valid_name_is_returned(self):
        self.assertEqual(validate_name("Bar #1"), "Bar #1")

    def test_name_longer_than_column_is_invalid(self):
        self.assertIs(classify_table_name("x" * MAX_TABLE_NAME_LENGTH), FieldState.VALID)
        self.assertIs(classify_table_name("x" * (MAX_TABLE_NAME_LENGTH + 1)), FieldState.INVALID)
        with self.assertRaises(InvalidRequest):
            validate_name("x" * 200)


class CapacityValidatorTests(SimpleTestCase):
    def test_missing_capacity(self):
        for value in (None, ""):
            with self.subTest(value=value):
                with self.assertRaisesMessage(InvalidRequest, "data must include a capacity value"):
                    validate_capacity_field(value)

    def test_zero_and_negative_are_invalid_not_missing(self):
        self.assertIs(classify_capacity(0), FieldState.INVALID)
        with self.assertRaisesMessage(InvalidRequest, "0 is not a valid capacity"):
            validate_capacity_field(0)
        with self.assertRaisesMessage(InvalidRequest, "-3 is not a valid capacity"):
            validate_capacity_field(-3)

    def test_non_numeric_values_are_invalid(self):
        for value in ("abc", True, 2.5, [4]):
            with self.subTest(value=value):
                self.assertIs(classify_capacity(value), FieldState.INVALID)

    def test_capacity_beyond_column_range_is_invalid(self):
        self.assertEqual(validate_capacity_field(MAX_CAPACITY), MAX_CAPACITY)
        for value in (MAX_CAPACITY + 1, 10**20, str(10**20), float("inf")):
            with self.subTest(value=value):
                self.assertIs(classify_capacity(value), FieldState.INVALID)
        with self.assertRaisesMessage(InvalidRequest, f"{10**20} is not a valid capacity"):
            validate_capacity_field(10**20)

    def test_numeric_string_is_cleaned_to_int(self):
        self.assertEqual(validate_capacity_field("6"), 6)
        self.assertEqual(validate_capacity_field(4), 4)


# ==============================================================================
# SEATING ENGINE
# ==============================================================================

class SeatTests(OccupancyAssertionsMixin, TestCase):
    def setUp(self):
        self.engine = SeatingEngine()
        self.table = Table.objects.create(table_name="#1", capacity=4)
        self.reservation = Reservation.objects.create(first_name="Rick", people=4)

    def test_seat_occupies_table_and_seats_reservation(self):
        result = self.engine.seat(self.table.table_id, self.reservation.reservation_id)

        self.assertEqual(result, {"status": "seated"})
        self.table.refresh_from_db()
        self.reservation.refresh_from_db()
        self.assertEqual(self.table.status, Table.Status.OCCUPIED)
        self.assertEqual(self.table.reservation_id, self.reservation.reservation_id)
        self.assertEqual(self.reservation.status, Reservation.Status.SEATED)
        self.assertOccupancyConsistent()

    def test_missing_reservation_id(self):
        for value in (None, ""):
            with self.subTest(value=value):
                with self.assertRaisesMessage(InvalidRequest, "body must have reservation_id."):
                    self.engine.seat(self.table.table_id, value)

    def test_falsy_and_boolean_reservation_ids_count_as_missing(self):
        for value in (0, False, True, "   "):
            with self.subTest(value=value):
                with self.assertRaisesMessage(InvalidRequest, "body must have reservation_id."):
                    self.engine.seat(self.table.table_id, value)
        self.table.refresh_from_db()
        self.assertEqual(self.table.status, Table.Status.FREE)

    def test_unknown_reservation(self):
        with self.assertRaisesMessage(NotFound, "reservation 9999 does not exist"):
            self.engine.seat(self.table.table_id, 9999)

    def test_unknown_reservation_wins_over_unknown_table(self):
        with self.assertRaises(NotFound):
            self.engine.seat(8888, 9999)

    def test_unknown_table_is_an_invalid_request(self):
        with self.assertRaisesMessage(InvalidRequest, "table does not have sufficient data"):
            self.engine.seat(8888, self.reservation.reservation_id)

    def test_insufficient_capacity_leaves_state_unchanged(self):
        small = Table.objects.create(table_name="Bar #1", capacity=2)

        with self.assertRaisesMessage(InvalidRequest, "does not have sufficient capacity"):
            self.engine.seat(small.table_id, self.reservation.reservation_id)

        small.refresh_from_db()
        self.reservation.refresh_from_db()
        self.assertEqual(small.status, Table.Status.FREE)
        self.assertIsNone(small.reservation_id)
        self.assertEqual(self.reservation.status, Reservation.Status.BOOKED)

    def test_occupied_table_is_rejected_and_unchanged(self):
        self.engine.seat(self.table.table_id, self.reservation.reservation_id)
        other = Reservation.objects.create(first_name="Morty", people=2)

        with self.assertRaisesMessage(InvalidRequest, "table is occupied."):
            self.engine.seat(self.table.table_id, other.reservation_id)

        self.table.refresh_from_db()
        other.refresh_from_db()
        self.assertEqual(self.table.reservation_id, self.reservation.reservation_id)
        self.assertEqual(other.status, Reservation.Status.BOOKED)
        self.assertOccupancyConsistent()

    def test_already_seated_reservation_is_rejected_before_any_write(self):
        self.engine.seat(self.table.table_id, self.reservation.reservation_id)
        second = Table.objects.create(table_name="#2", capacity=6)

        with self.assertRaisesMessage(InvalidRequest, "is already seated"):
            self.engine.seat(second.table_id, self.reservation.reservation_id)

        second.refresh_from_db()
        self.assertEqual(second.status, Table.Status.FREE)
        self.assertIsNone(second.reservation_id)
        self.assertOccupancyConsistent()

    def test_string_ids_are_accepted(self):
        self.engine.seat(str(self.table.table_id), str(self.reservation.reservation_id))
        self.table.refresh_from_db()
        self.assertEqual(self.table.reservation_id, self.reservation.reservation_id)

    def test_rejection_is_logged(self):
        with self.assertLogs("seating.engine", level="WARNING") as logs:
            with self.assertRaises(NotFound):
                self.engine.seat(self.table.table_id, 9999)
        self.assertIn("Seat rejected", logs.output[0])


class FinishTests(OccupancyAssertionsMixin, TestCase):
    def setUp(self):
        self.engine = SeatingEngine()
        self.table = Table.objects.create(table_name="#1", capacity=6)
        self.reservation = Reservation.objects.create(people=4)

    def test_finish_frees_table_and_finishes_reservation(self):
        self.engine.seat(self.table.table_id, self.reservation.reservation_id)

        result = self.engine.finish(self.table.table_id)

        self.assertEqual(result, {"status": "finished"})
        self.table.refresh_from_db()
        self.reservation.refresh_from_db()
        self.assertEqual(self.table.status, Table.Status.FREE)
        self.assertIsNone(self.table.reservation_id)
        self.assertEqual(self.reservation.status, Reservation.Status.FINISHED)
        self.assertOccupancyConsistent()

    def test_finish_free_table(self):
        with self.assertRaisesMessage(InvalidRequest, "table is not occupied"):
            self.engine.finish(self.table.table_id)

    def test_finish_unknown_table(self):
        with self.assertRaisesMessage(NotFound, "table id: 4242 not found"):
            self.engine.finish(4242)

    def test_finished_reservation_can_never_be_seated_again(self):
        self.engine.seat(self.table.table_id, self.reservation.reservation_id)
        self.engine.finish(self.table.table_id)

        for table_id in (self.table.table_id, Table.objects.create(table_name="#2", capacity=6).table_id):
            with self.subTest(table_id=table_id):
                with self.assertRaisesMessage(InvalidRequest, "is finished"):
                    self.engine.seat(table_id, self.reservation.reservation_id)

        self.reservation.refresh_from_db()
        self.assertEqual(self.reservation.status, Reservation.Status.FINISHED)
        self.assertFalse(Table.objects.filter(status=Table.Status.OCCUPIED).exists())

    def test_table_can_be_reused_after_finish(self):
        self.engine.seat(self.table.table_id, self.reservation.reservation_id)
        self.engine.finish(self.table.table_id)
        nxt = Reservation.objects.create(people=6)

        self.engine.seat(self.table.table_id, nxt.reservation_id)

        self.table.refresh_from_db()
        self.assertEqual(self.table.reservation_id, nxt.reservation_id)
        self.assertOccupancyConsistent()


class ValidateCapacityTests(TestCase):
    def setUp(self):
        self.engine = SeatingEngine()
        self.table = Table.objects.create(table_name="#1", capacity=4)

    def test_fits(self):
        self.assertTrue(self.engine.validate_capacity(self.table.table_id, 4))
        self.assertTrue(self.engine.validate_capacity(self.table.table_id, "2"))

    def test_too_many_people(self):
        self.assertFalse(self.engine.validate_capacity(self.table.table_id, 5))

    def test_unknown_table_or_bad_party_size(self):
        self.assertFalse(self.engine.validate_capacity(9999, 1))
        self.assertFalse(self.engine.validate_capacity(self.table.table_id, "many"))

    def test_check_has_no_side_effects(self):
        self.engine.validate_capacity(self.table.table_id, 2)
        self.table.refresh_from_db()
        self.assertEqual(self.table.status, Table.Status.FREE)

    def test_module_level_shortcuts(self):
        reservation = Reservation.objects.create(people=3)
        self.assertTrue(seating_engine.validate_capacity(self.table.table_id, reservation.people))
        self.assertEqual(seating_engine.seat(self.table.table_id, reservation.reservation_id), {"status": "seated"})
        self.assertEqual(seating_engine.finish(self.table.table_id), {"status": "finished"})


class EngineStoreContractTests(TestCase):
    """The engine talks to its stores only through find/read/update."""

    class RecordingTableStore:
        def __init__(self, *tables):
            self.rows = {t.table_id: t for t in tables}
            self.locks = []

        def find(self, table_id, *, lock=False):
            self.locks.append(lock)
            return self.rows.get(table_id)

        def update(self, table_id, patch):
            table = self.rows[table_id]
            table.assign_reservation(patch["reservation_id"])
            return table

        def create(self, data):
            raise NotImplementedError

    class RecordingReservationStore:
        def __init__(self, *reservations):
            self.rows = {r.reservation_id: r for r in reservations}
            self.locks = []

        def read(self, reservation_id, *, lock=False):
            self.locks.append(lock)
            return self.rows.get(reservation_id)

        def update(self, reservation_id, patch):
            reservation = self.rows[reservation_id]
            for key, value in patch.items():
                setattr(reservation, key, value)
            return reservation

    def test_seat_and_finish_lock_rows_and_go_through_stores(self):
        table = Table(table_id=1, table_name="#1", capacity=4)
        reservation = Reservation(reservation_id=7, people=3)
        tables = self.RecordingTableStore(table)
        reservations = self.RecordingReservationStore(reservation)
        engine = SeatingEngine(tables=tables, reservations=reservations)

        engine.seat(1, 7)
        self.assertEqual((table.status, table.reservation_id), (Table.Status.OCCUPIED, 7))
        self.assertEqual(reservation.status, Reservation.Status.SEATED)

        engine.finish(1)
        self.assertEqual((table.status, table.reservation_id), (Table.Status.FREE, None))
        self.assertEqual(reservation.status, Reservation.Status.FINISHED)

        self.assertTrue(all(tables.locks))
        self.assertTrue(all(reservations.locks))


# ==============================================================================
# MODEL & STORE INVARIANTS
# ==============================================================================

class TableModelTests(TestCase):
    def test_assign_reservation_derives_status(self):
        table = Table(table_name="#1", capacity=2)
        table.assign_reservation(5)
        self.assertEqual(table.status, Table.Status.OCCUPIED)
        self.assertTrue(table.is_occupied)
        table.assign_reservation(None)
        self.assertEqual(table.status, Table.Status.FREE)
        self.assertFalse(table.is_occupied)

    def test_database_rejects_occupied_without_reservation(self):
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Table.objects.create(table_name="#9", capacity=2, status=Table.Status.OCCUPIED)

    def test_reservation_sits_at_one_table_only(self):
        reservation = Reservation.objects.create(people=2)
        first = Table.objects.create(table_name="#1", capacity=2)
        second = Table.objects.create(table_name="#2", capacity=2)
        first.assign_reservation(reservation.reservation_id)
        first.save()
        second.assign_reservation(reservation.reservation_id)
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                second.save()


class StoreTests(TestCase):
    def setUp(self):
        self.tables = DjangoTableStore()
        self.reservations = DjangoReservationStore()

    def test_status_cannot_be_patched_directly(self):
        table = self.tables.create({"table_name": "#1", "capacity": 2})
        updated = self.tables.update(table.table_id, {"status": Table.Status.OCCUPIED})
        self.assertEqual(updated.status, Table.Status.FREE)

    def test_bad_keys_read_as_absent(self):
        self.assertIsNone(self.tables.find("abc"))
        self.assertIsNone(self.reservations.read("abc"))

    def test_update_unknown_rows(self):
        with self.assertRaises(NotFound):
            self.tables.update(123, {"capacity": 3})
        with self.assertRaises(NotFound):
            self.reservations.update(123, {"status": Reservation.Status.SEATED})


class StandaloneStoreUpdateTests(TransactionTestCase):
    """Store writes called outside the engine, in autocommit mode."""

    class AtomicAwareTableStore(DjangoTableStore):
        def find(self, table_id, *, lock=False):
            self.locked_in_transaction = lock and connection.in_atomic_block
            return super().find(table_id, lock=lock)

    class AtomicAwareReservationStore(DjangoReservationStore):
        def read(self, reservation_id, *, lock=False):
            self.locked_in_transaction = lock and connection.in_atomic_block
            return super().read(reservation_id, lock=lock)

    def test_updates_take_their_row_lock_inside_a_transaction(self):
        table = Table.objects.create(table_name="#1", capacity=2)
        reservation = Reservation.objects.create(people=2)
        tables = self.AtomicAwareTableStore()
        reservations = self.AtomicAwareReservationStore()
        self.assertFalse(connection.in_atomic_block)

        tables.update(table.table_id, {"capacity": 4})
        reservations.update(reservation.reservation_id, {"first_name": "Summer"})

        self.assertTrue(tables.locked_in_transaction)
        self.assertTrue(reservations.locked_in_transaction)
        table.refresh_from_db()
        reservation.refresh_from_db()
        self.assertEqual(table.capacity, 4)
        self.assertEqual(reservation.first_name, "Summer")


class ConcurrentSeatTests(OccupancyAssertionsMixin, TransactionTestCase):
    class SlowTableStore(DjangoTableStore):
        """Holds on to the locked table row for a moment after reading it."""

        def __init__(self, row_read):
            self.row_read = row_read

        def find(self, table_id, *, lock=False):
            table = super().find(table_id, lock=lock)
            if lock and not self.row_read.is_set():
                self.row_read.set()
                time.sleep(0.3)
            return table

    @mock.patch("seating.signals.broadcast_table_status")
    def test_only_one_of_two_racing_seats_claims_the_table(self, _broadcast):
        table = Table.objects.create(table_name="#1", capacity=4)
        first = Reservation.objects.create(people=2)
        second = Reservation.objects.create(people=3)
        row_read = threading.Event()
        outcomes = {}

        def attempt(engine, reservation, wait_for=None):
            try:
                if wait_for is not None:
                    wait_for.wait(timeout=5)
                outcomes[reservation.reservation_id] = engine.seat(table.table_id, reservation.reservation_id)
            except InvalidRequest as exc:
                outcomes[reservation.reservation_id] = exc
            finally:
                connection.close()

        threads = [
            threading.Thread(target=attempt, args=(SeatingEngine(tables=self.SlowTableStore(row_read)), first)),
            threading.Thread(target=attempt, args=(SeatingEngine(), second, row_read)),
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        self.assertEqual(outcomes[first.reservation_id], {"status": "seated"})
        self.assertIsInstance(outcomes[second.reservation_id], InvalidRequest)
        self.assertEqual(str(outcomes[second.reservation_id]), "table is occupied.")

        table.refresh_from_db()
        second.refresh_from_db()
        self.assertEqual(table.reservation_id, first.reservation_id)
        self.assertEqual(second.status, Reservation.Status.BOOKED)
        self.assertOccupancyConsistent()


# ==============================================================================
# REAL-TIME FLOOR UPDATES
# ==============================================================================

class FloorBroadcastTests(TestCase):
    def setUp(self):
        self.table = Table.objects.create(table_name="#1", capacity=4)
        self.reservation = Reservation.objects.create(people=2)

    @mock.patch("seating.signals.get_channel_layer")
    def test_seat_and_finish_are_broadcast_after_commit(self, get_layer):
        layer = mock.Mock()
        layer.group_send = mock.AsyncMock()
        get_layer.return_value = layer
        engine = SeatingEngine()

        with self.captureOnCommitCallbacks(execute=True):
            engine.seat(self.table.table_id, self.reservation.reservation_id)
        with self.captureOnCommitCallbacks(execute=True):
            engine.finish(self.table.table_id)

        self.assertEqual(layer.group_send.await_count, 2)
        (group, seated), _ = layer.group_send.await_args_list[0]
        (_, finished), _ = layer.group_send.await_args_list[1]
        self.assertEqual(group, FLOOR_GROUP)
        self.assertEqual(seated["type"], "table_status_update")
        self.assertEqual(seated["data"]["event"], "table_seated")
        self.assertEqual(seated["data"]["table"]["status"], "occupied")
        self.assertEqual(finished["data"]["event"], "table_finished")
        self.assertEqual(finished["data"]["reservation"]["status"], "finished")

    @mock.patch("seating.signals.get_channel_layer")
    def test_rejected_finish_is_not_broadcast(self, get_layer):
        with self.captureOnCommitCallbacks(execute=True):
            with self.assertRaises(InvalidRequest):
                SeatingEngine().finish(self.table.table_id)
        get_layer.assert_not_called()


class FloorConsumerTests(TransactionTestCase):
    # Consumer dispatch closes stale DB connections between messages.
    async def test_relays_table_status_updates(self):
        communicator = WebsocketCommunicator(FloorConsumer.as_asgi(), "/ws/floor/")
        connected, _ = await communicator.connect()
        self.assertTrue(connected)

        payload = {"event": "table_seated", "table": {"table_id": 1, "status": "occupied"}}
        await get_channel_layer().group_send(FLOOR_GROUP, {"type": "table_status_update", "data": payload})

        self.assertEqual(await communicator.receive_json_from(), payload)
        await communicator.disconnect()


# ==============================================================================
# HTTP SHELL
# ==============================================================================

class TableAPITests(APITestCase):
    def setUp(self):
        self.table = Table.objects.create(table_name="#1", capacity=6)
        self.bar = Table.objects.create(table_name="Bar #1", capacity=1)
        self.reservation = Reservation.objects.create(people=4)

    def test_list_tables_sorted_by_name(self):
        response = self.client.get(reverse("seating:table-list"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([t["table_name"] for t in response.data["data"]], ["#1", "Bar #1"])

    def test_create_table(self):
        response = self.client.post(
            reverse("seating:table-list"),
            {"data": {"table_name": "#2", "capacity": 6}},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["data"]["table_name"], "#2")
        self.assertEqual(response.data["data"]["status"], "free")
        self.assertIsNone(response.data["data"]["reservation_id"])

    def test_create_table_rejections(self):
        cases = [
            ({}, "data must be in a valid format."),
            ({"data": {"capacity": 2}}, "data must include a table_name."),
            ({"data": {"table_name": "A", "capacity": 2}}, "A is not a valid table_name"),
            ({"data": {"table_name": "#3"}}, "data must include a capacity value"),
            ({"data": {"table_name": "#3", "capacity": 0}}, "0 is not a valid capacity"),
            ({"data": {"table_name": "#3", "capacity": 10**20}}, f"{10**20} is not a valid capacity"),
            ({"data": {"table_name": "x" * 51, "capacity": 2}}, f"{'x' * 51} is not a valid table_name"),
        ]
        for body, message in cases:
            with self.subTest(message=message):
                response = self.client.post(reverse("seating:table-list"), body, format="json")
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
                self.assertEqual(response.data, {"error": message})

    def test_seat_and_finish(self):
        url = reverse("seating:table-seat", args=[self.table.table_id])

        response = self.client.put(url, {"data": {"reservation_id": self.reservation.reservation_id}}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {"data": {"status": "seated"}})

        response = self.client.delete(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {"data": {"status": "finished"}})

    def test_seat_error_kinds_map_to_status_codes(self):
        url = reverse("seating:table-seat", args=[self.bar.table_id])

        response = self.client.put(url, {"data": {"reservation_id": 9999}}, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

        response = self.client.put(url, {"data": {"reservation_id": self.reservation.reservation_id}}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("does not have sufficient capacity", response.data["error"])

        response = self.client.put(url, {"data": {}}, format="json")
        self.assertEqual(response.data, {"error": "body must have reservation_id."})

    def test_rejection_is_logged_once(self):
        url = reverse("seating:table-seat", args=[self.table.table_id])
        with self.assertLogs("seating", level="INFO") as logs:
            response = self.client.put(url, {"data": {"reservation_id": 9999}}, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(len(logs.records), 1)
        self.assertEqual(logs.records[0].name, "seating.engine")
        self.assertEqual(logs.records[0].levelname, "WARNING")

    def test_finish_errors(self):
        response = self.client.delete(reverse("seating:table-seat", args=[9999]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

        response = self.client.delete(reverse("seating:table-seat", args=[self.table.table_id]))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {"error": "table is not occupied"})

    def test_capacity_preflight(self):
        url = reverse("seating:table-capacity", args=[self.table.table_id])
        self.assertEqual(self.client.get(url, {"people": 6}).data, {"data": {"fits": True}})
        self.assertEqual(self.client.get(url, {"people": 7}).data, {"data": {"fits": False}})
        self.assertEqual(self.client.get(url).status_code, status.HTTP_400_BAD_REQUEST)


# ==============================================================================
# ADMIN & MANAGEMENT COMMANDS
# ==============================================================================

class FinishTablesActionTests(TestCase):
    class FakeModelAdmin:
        def __init__(self):
            self.sent = []

        def message_user(self, request, message, level=messages.INFO):
            self.sent.append((message, level))

    def test_finishes_occupied_and_warns_about_free(self):
        occupied = Table.objects.create(table_name="#1", capacity=4)
        Table.objects.create(table_name="#2", capacity=4)
        reservation = Reservation.objects.create(people=2)
        SeatingEngine().seat(occupied.table_id, reservation.reservation_id)
        admin = self.FakeModelAdmin()

        finish_tables(admin, None, Table.objects.all())

        reservation.refresh_from_db()
        self.assertEqual(reservation.status, Reservation.Status.FINISHED)
        self.assertFalse(Table.objects.filter(status=Table.Status.OCCUPIED).exists())
        self.assertIn(("#2: table is not occupied", messages.WARNING), admin.sent)
        self.assertEqual(admin.sent[-1][0], "Finished 1 table(s).")


class SeedDemoDataTests(TestCase):
    def test_seeds_tables_and_booked_reservations(self):
        out = StringIO()
        call_command("seed_demo_data", stdout=out)

        self.assertEqual(
            list(Table.objects.values_list("table_name", "capacity")),
            [("#1", 6), ("#2", 6), ("Bar #1", 1), ("Bar #2", 1)],
        )
        self.assertEqual(Reservation.objects.filter(status=Reservation.Status.BOOKED).count(), 4)
        self.assertIn("Successfully seeded", out.getvalue())
