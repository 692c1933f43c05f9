"""
Socket.IO Event Handlers for the lobby relay server.

Pure routing layer that hands every client event to the EventDispatcher.
Contains no lobby logic - only transport wiring: connection IDs in,
room membership and broadcasts out.
"""

import logging
from typing import Any

from flask import request

from lobby import RoomBroadcaster, EventDispatcher
from utils.constants import CLIENT_EVENTS, SOCKET_NAMESPACE

logger = logging.getLogger(__name__)


class SocketIORoomBroadcaster(RoomBroadcaster):
    """RoomBroadcaster backed by Flask-SocketIO rooms."""

    def __init__(self, socketio, namespace: str = SOCKET_NAMESPACE):
        self.socketio = socketio
        self.namespace = namespace

    def join(self, connection_id, room):
        self.socketio.server.enter_room(connection_id, room, namespace=self.namespace)

    def leave(self, connection_id, room):
        self.socketio.server.leave_room(connection_id, room, namespace=self.namespace)

    def emit(self, room, event: str, payload: Any) -> None:
        self.socketio.emit(event, payload, to=room, namespace=self.namespace)


def register_socket_handlers(socketio, dispatcher: EventDispatcher, namespace: str = SOCKET_NAMESPACE):
    """
    Register all Socket.IO event handlers.

    Args:
        socketio: SocketIO instance
        dispatcher: Event dispatcher owning lobby state
        namespace: Socket.IO namespace to register on
    """

    @socketio.on('connect', namespace=namespace)
    def handle_connect(auth=None):
        """Handle client connection."""
        logger.info(f"User connected: {request.sid}")

    @socketio.on('disconnect', namespace=namespace)
    def handle_disconnect(reason=None):
        """Handle client disconnection."""
        logger.info(f"User disconnected: {request.sid}")

        try:
            dispatcher.handle_disconnect(request.sid)
        except Exception as e:
            logger.error(f"Error handling disconnect: {e}")

    def make_handler(event_name):
        def handle_event(data=None):
            try:
                dispatcher.handle_event(request.sid, event_name, data)
            except Exception as e:
                logger.error(f"Error handling {event_name}: {e}")

        handle_event.__name__ = f"handle_{event_name.replace('-', '_')}"
        return handle_event

    for event_name in CLIENT_EVENTS.values():
        socketio.on_event(event_name, make_handler(event_name), namespace=namespace)

    logger.info("Socket handlers registered successfully")
