import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.db import transaction
from django.dispatch import Signal, receiver

from .serializers import serialize_table_event_for_channels

# -----------------------------------------------------------------------------
# Logger
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)

FLOOR_GROUP = "floor_plan"

# -----------------------------------------------------------------------------
# Seating events (sent by seating.engine with table=..., reservation=...)
# -----------------------------------------------------------------------------
table_seated = Signal()
table_finished = Signal()


def broadcast_table_status(event, table, reservation):
    """Push a table status change to every dashboard on the floor plan."""
    channel_layer = get_channel_layer()
    if not channel_layer:
        logger.warning("⚠️ Channels layer not found. Skipping real-time broadcast.")
        return

    async_to_sync(channel_layer.group_send)(
        FLOOR_GROUP,
        {
            "type": "table_status_update",
            "data": serialize_table_event_for_channels(event, table, reservation),
        },
    )
    logger.info(f"📡 Broadcast {event} for table {table.table_id}")


# -----------------------------------------------------------------------------
# Notify via WebSocket (Channels) once the transition is committed
# -----------------------------------------------------------------------------
@receiver(table_seated)
def notify_on_table_seated(sender, table, reservation, **kwargs):
    transaction.on_commit(lambda: broadcast_table_status("table_seated", table, reservation))


@receiver(table_finished)
def notify_on_table_finished(sender, table, reservation, **kwargs):
    transaction.on_commit(lambda: broadcast_table_status("table_finished", table, reservation))
