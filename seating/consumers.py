import json
import logging

from channels.generic.websocket import AsyncWebsocketConsumer

from .signals import FLOOR_GROUP

logger = logging.getLogger("channels")


# ==============================================================================
# Base Helper
# ==============================================================================
class SafeConsumer(AsyncWebsocketConsumer):
    """Base consumer with safe JSON sending method."""

    async def safe_send(self, data: dict):
        try:
            await self.send(text_data=json.dumps(data))
        except Exception as exc:
            logger.error(f"{self.__class__.__name__} failed to send data: {exc}")


# ==============================================================================
# Floor Plan Consumer
# ==============================================================================
class FloorConsumer(SafeConsumer):
    """Relays table seated/finished events to host-stand dashboards."""

    async def connect(self):
        self.group_name = FLOOR_GROUP
        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()
        logger.info(f"Floor dashboard connected: {self.channel_name}")

    async def disconnect(self, code):
        await self.channel_layer.group_discard(self.group_name, self.channel_name)

    async def table_status_update(self, event):
        await self.safe_send(event["data"])

    async def receive(self, text_data=None, bytes_data=None):
        # Dashboards only listen; state changes go through the HTTP API.
        logger.debug(f"Floor inbound ignored: {text_data}")
