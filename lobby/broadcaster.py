"""
Room broadcasting capability.

The lobby package depends only on this interface; the Socket.IO
implementation lives in the handlers package.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable

from .models import Effect, Broadcast, RoomJoin, RoomLeave, ConnectionId, LobbyKey


class RoomBroadcaster(ABC):
    """Groups connections into rooms and fans events out to a room."""

    @abstractmethod
    def join(self, connection_id: ConnectionId, room: LobbyKey) -> None:
        """Add a connection to a room."""

    @abstractmethod
    def leave(self, connection_id: ConnectionId, room: LobbyKey) -> None:
        """Remove a connection from a room."""

    @abstractmethod
    def emit(self, room: LobbyKey, event: str, payload: Any) -> None:
        """Send an event to every connection in a room. Fire-and-forget."""

    def apply(self, effects: Iterable[Effect]) -> None:
        """Carry out effects in order."""
        for effect in effects:
            if isinstance(effect, Broadcast):
                self.emit(effect.room, effect.event, effect.payload)
            elif isinstance(effect, RoomJoin):
                self.join(effect.connection_id, effect.room)
            elif isinstance(effect, RoomLeave):
                self.leave(effect.connection_id, effect.room)
            else:
                raise TypeError(f"Unknown effect: {effect!r}")
