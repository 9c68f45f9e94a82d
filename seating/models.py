from django.core.validators import MinLengthValidator, MinValueValidator
from django.db import models
from django.db.models import Q

from .validators import MAX_TABLE_NAME_LENGTH


# =============================================================================
# === RESERVATIONS ============================================================
# =============================================================================

class Reservation(models.Model):
    """A booked party. Status moves booked -> seated -> finished, never back."""

    class Status(models.TextChoices):
        BOOKED = "booked", "Booked"
        SEATED = "seated", "Seated"
        FINISHED = "finished", "Finished"

    reservation_id = models.BigAutoField(primary_key=True)
    first_name = models.CharField(max_length=100, blank=True)
    last_name = models.CharField(max_length=100, blank=True)
    mobile_number = models.CharField(max_length=20, blank=True)
    reservation_date = models.DateField(null=True, blank=True)
    reservation_time = models.TimeField(null=True, blank=True)
    people = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.BOOKED)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["reservation_date", "reservation_time"]

    def __str__(self):
        name = f"{self.first_name} {self.last_name}".strip() or "Guest"
        return f"Reservation {self.reservation_id} - {name} ({self.people})"


# =============================================================================
# === TABLES ==================================================================
# =============================================================================

class Table(models.Model):
    class Status(models.TextChoices):
        FREE = "free", "Free"
        OCCUPIED = "occupied", "Occupied"

    table_id = models.BigAutoField(primary_key=True)
    table_name = models.CharField(max_length=MAX_TABLE_NAME_LENGTH, validators=[MinLengthValidator(2)])
    capacity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    # One-to-one: a reservation sits at no more than one table at a time.
    reservation = models.OneToOneField(
        Reservation,
        null=True,
        blank=True,
        on_delete=models.PROTECT,
        related_name="table",
        db_column="reservation_id",
    )
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.FREE, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["table_name"]
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(status="occupied", reservation__isnull=False)
                    | Q(status="free", reservation__isnull=True)
                ),
                name="table_status_matches_reservation",
            ),
        ]

    def __str__(self):
        return f"{self.table_name} (Seats: {self.capacity})"

    def assign_reservation(self, reservation_id):
        """
        The only way occupancy changes: sets the reservation reference and
        derives ``status`` from it, so the two can never drift apart.
        Pass ``None`` to free the table.
        """
        self.reservation_id = reservation_id
        self.status = self.Status.FREE if reservation_id is None else self.Status.OCCUPIED

    @property
    def is_occupied(self) -> bool:
        return self.reservation_id is not None
