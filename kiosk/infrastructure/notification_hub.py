import logging
import threading
from typing import Any, Optional, Set

from fastapi import WebSocket

logger = logging.getLogger(__name__)

# Event names pushed to admin clients
PRODUCTS_UPDATED = "products_updated"
NEW_ORDER = "new_order"
ORDER_UPDATED = "order_updated"
ORDER_DELETED = "order_deleted"
DAILY_REPORT_READY = "daily_report_ready"

class NotificationHub:
    """
    Best-effort fan-out to every connected WebSocket client.

    Nothing is buffered: a client that connects after a broadcast never sees
    it, and a client that fails to receive is dropped without retry.
    """

    def __init__(self):
        self._clients: Set[WebSocket] = set()
        self._connected = 0
        self._lock = threading.Lock()

    @property
    def connected_count(self) -> int:
        with self._lock:
            return self._connected

    async def connect(self, websocket: WebSocket):
        await websocket.accept()
        with self._lock:
            self._clients.add(websocket)
            self._connected += 1
            total = self._connected
        logger.info(f"✅ Client connected. Total connected: {total}")

    def disconnect(self, websocket: WebSocket):
        with self._lock:
            if websocket not in self._clients:
                return
            self._clients.discard(websocket)
            self._connected -= 1
            total = self._connected
        logger.info(f"❌ Client disconnected. Total connected: {total}")

    async def broadcast(self, event: str, payload: Optional[Any] = None):
        message = {"event": event}
        if payload is not None:
            message["data"] = payload

        with self._lock:
            targets = list(self._clients)

        for websocket in targets:
            try:
                await websocket.send_json(message)
            except Exception as e:
                logger.warning(f"⚠️ Dropping client after failed '{event}' delivery: {e}")
                self.disconnect(websocket)

        logger.info(f"🔔 '{event}' sent to {len(targets)} clients")
