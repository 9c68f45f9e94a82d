# seating/admin.py
import logging

from django.contrib import admin, messages

from .engine import SeatingEngine
from .exceptions import SeatingError
from .models import Reservation, Table

logger = logging.getLogger(__name__)


# =============================================================================
# === GLOBAL UTILITIES ========================================================
# =============================================================================

@admin.action(description="Finish selected tables")
def finish_tables(modeladmin, request, queryset):
    """Release each selected table through the engine so reservations follow."""
    engine = SeatingEngine()
    finished = 0
    for table in queryset:
        try:
            engine.finish(table.table_id)
            finished += 1
        except SeatingError as exc:
            modeladmin.message_user(request, f"{table.table_name}: {exc}", level=messages.WARNING)
    modeladmin.message_user(request, f"Finished {finished} table(s).")


# =============================================================================
# === TABLE & RESERVATION ADMIN ===============================================
# =============================================================================

@admin.register(Table)
class TableAdmin(admin.ModelAdmin):
    list_display = ("table_name", "capacity", "status", "reservation", "updated_at")
    list_filter = ("status",)
    search_fields = ("table_name",)
    readonly_fields = ("status", "reservation", "created_at", "updated_at")
    ordering = ("table_name",)
    actions = [finish_tables]


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    list_display = ("reservation_id", "last_name", "first_name", "people", "reservation_date", "reservation_time", "status")
    list_filter = ("status", "reservation_date")
    search_fields = ("first_name", "last_name", "mobile_number")
    readonly_fields = ("status", "created_at", "updated_at")
    ordering = ("-reservation_date", "reservation_time")
