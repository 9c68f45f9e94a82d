# seating/serializers.py

from rest_framework import serializers

from .models import Reservation, Table


# ==============================================================================
# Table Serializer
# ==============================================================================

class TableSerializer(serializers.ModelSerializer):
    """Read-side representation of a table; occupancy fields are never writable."""

    reservation_id = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = Table
        fields = [
            'table_id',
            'table_name',
            'capacity',
            'status',
            'reservation_id',
        ]
        read_only_fields = ['table_id', 'status']


# ==============================================================================
# Reservation Serializer
# ==============================================================================

class ReservationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Reservation
        fields = [
            'reservation_id',
            'first_name',
            'last_name',
            'mobile_number',
            'reservation_date',
            'reservation_time',
            'people',
            'status',
        ]
        read_only_fields = ['reservation_id', 'status']


# ==============================================================================
# Integration Helper: Build payloads for Channels Consumers
# ==============================================================================

def serialize_table_event_for_channels(event, table, reservation):
    """
    Payload pushed to floor-plan dashboards when a table changes state.

    Usage:
        data = serialize_table_event_for_channels("table_seated", table, reservation)
        await channel_layer.group_send("floor_plan", {
            "type": "table_status_update",
            "data": data,
        })
    """
    return {
        "event": event,
        "table": TableSerializer(table).data,
        "reservation": ReservationSerializer(reservation).data,
    }
