"""
seating/routing.py
=====================================================================================
WebSocket route mappings for Django Channels. Dashboards connect here to be
told when a table is seated or finished.
=====================================================================================
"""

from django.urls import re_path

from . import consumers

websocket_urlpatterns = [
    # -------------------------------------------------------------------------
    # Floor plan
    # Live table occupancy for the host stand
    # -------------------------------------------------------------------------
    re_path(r"^ws/floor/$", consumers.FloorConsumer.as_asgi()),
]
