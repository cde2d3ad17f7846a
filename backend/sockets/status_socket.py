"""
WebSocket status feed for the demo page.

This module provides:
- Connection management with per-connection write locks
- Non-blocking broadcast of ride status events
- StatusNotifier, the ride request observer that feeds the broadcasts
"""

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from models.events import RideStatusEvent
from models.ride_request import Observer
from models.rider import STATUS_MESSAGE_TEMPLATE

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# CONFIGURATION
# =============================================================================

SEND_TIMEOUT_SECONDS = 5


# =============================================================================
# CONNECTIONS
# =============================================================================


@dataclass
class ClientConnection:
    """Represents a single WebSocket client connection with metadata."""

    websocket: WebSocket
    client_id: str
    connected_at: float = field(default_factory=time.time)
    last_activity: float = field(default_factory=time.time)
    write_lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    is_alive: bool = True

    def update_activity(self) -> None:
        self.last_activity = time.time()


class ConnectionManager:
    """Tracks status feed clients and fans events out to them."""

    def __init__(self):
        self._connections: Dict[str, ClientConnection] = {}
        self._connections_lock = asyncio.Lock()

    async def connect(self, websocket: WebSocket) -> ClientConnection:
        """Accept and register a new WebSocket connection."""
        await websocket.accept()

        connection = ClientConnection(websocket=websocket, client_id=uuid.uuid4().hex)
        async with self._connections_lock:
            self._connections[connection.client_id] = connection

        logger.info(f"WebSocket connected: client_id={connection.client_id}")
        return connection

    async def disconnect(
        self, client_id: str, reason: str = "Client disconnected", close: bool = True
    ) -> None:
        """Forget a connection, closing the socket unless the client already did."""
        async with self._connections_lock:
            connection = self._connections.pop(client_id, None)

        if connection is None:
            return

        connection.is_alive = False
        if close:
            try:
                await connection.websocket.close(
                    code=status.WS_1000_NORMAL_CLOSURE, reason=reason
                )
            except (RuntimeError, OSError) as e:
                logger.debug(f"Close skipped for {client_id}: {e}")

        logger.info(f"WebSocket disconnected: client_id={client_id}, reason={reason}")

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    async def send_to_client(
        self, connection: ClientConnection, message: dict, timeout: float = SEND_TIMEOUT_SECONDS
    ) -> bool:
        """Send a message to one client with timeout protection."""
        if not connection.is_alive:
            return False

        try:
            async with connection.write_lock:
                await asyncio.wait_for(connection.websocket.send_json(message), timeout=timeout)
            connection.update_activity()
            return True

        except asyncio.TimeoutError:
            logger.warning(f"Send timeout for client {connection.client_id}, marking as dead")
        except (RuntimeError, OSError, WebSocketDisconnect) as e:
            logger.debug(f"WebSocket not connected for {connection.client_id}: {e}")

        connection.is_alive = False
        return False

    async def broadcast_to_all(self, message: dict) -> int:
        """Broadcast message to all connected clients."""
        async with self._connections_lock:
            connections_snapshot = list(self._connections.values())

        if not connections_snapshot:
            return 0

        results = await asyncio.gather(
            *(self.send_to_client(conn, message) for conn in connections_snapshot)
        )

        for connection, sent in zip(connections_snapshot, results):
            if not sent:
                await self.disconnect(connection.client_id, reason="Send failed", close=False)

        sent_count = sum(1 for sent in results if sent)
        logger.debug(
            f"Broadcast {message.get('event_type', 'unknown')}: "
            f"{sent_count}/{len(connections_snapshot)} successful"
        )
        return sent_count


# =============================================================================
# RIDE REQUEST OBSERVER
# =============================================================================


class StatusNotifier(Observer):
    """
    Queues a RideStatusEvent for every status update.

    update() runs inside the synchronous notification cycle, so it only
    records the event; flush() is awaited by the async caller afterwards.
    """

    def __init__(self, manager: ConnectionManager, audience: str = "rider"):
        self.manager = manager
        self.audience = audience
        self._pending: List[RideStatusEvent] = []

    def update(self, status: str) -> None:
        self._pending.append(
            RideStatusEvent(
                status=status,
                message=STATUS_MESSAGE_TEMPLATE.format(name=self.audience, status=status),
            )
        )

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def flush(self) -> int:
        """Broadcast queued events in order; returns how many were sent."""
        events, self._pending = self._pending, []
        for event in events:
            await self.manager.broadcast_to_all(event.model_dump(mode="json"))
        return len(events)

    def __repr__(self):
        return f"StatusNotifier(clients={self.manager.connection_count})"


# =============================================================================
# WEBSOCKET ENDPOINT
# =============================================================================


def _is_ping(raw: str) -> bool:
    if raw == "ping":
        return True
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        return False
    return isinstance(data, dict) and data.get("event_type") == "ping"


@router.websocket("/ride-status")
async def ride_status_feed(websocket: WebSocket):
    """Live feed of ride status updates for the demo page."""
    notifier: StatusNotifier = websocket.app.state.notifier
    context = websocket.app.state.context

    connection = await notifier.manager.connect(websocket)
    try:
        await notifier.manager.send_to_client(
            connection,
            {
                "event_type": "connected",
                "message": "Connected to ride status feed",
                "timestamp": datetime.utcnow().isoformat(),
            },
        )
        await notifier.manager.send_to_client(
            connection,
            RideStatusEvent(
                status=context.ride_request.status, message=context.status_board.text
            ).model_dump(mode="json"),
        )

        while True:
            raw = await websocket.receive_text()
            connection.update_activity()
            if _is_ping(raw):
                await notifier.manager.send_to_client(
                    connection,
                    {"event_type": "pong", "timestamp": datetime.utcnow().isoformat()},
                )
            else:
                logger.debug(f"Ignoring message from {connection.client_id}: {raw[:100]}")

    except WebSocketDisconnect:
        logger.info(f"Client {connection.client_id} closed the status feed")
        await notifier.manager.disconnect(connection.client_id, close=False)
    finally:
        if connection.is_alive:
            await notifier.manager.disconnect(connection.client_id, reason="Feed closed")
