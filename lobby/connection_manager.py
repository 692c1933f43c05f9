"""
Connection Manager for lobby membership.

Tracks which (lobby, player) identity each live connection currently
represents. Contains no lobby or game logic - purely connection bookkeeping.
"""

import logging
from typing import Dict, Optional, List, Any

from .models import ConnectionBinding, ConnectionId, LobbyKey, PlayerId

logger = logging.getLogger(__name__)


class ConnectionManager:
    """
    Registry of connection bindings.

    A connection has at most one binding at any time. Bindings reference
    lobbies and players by key only; the lobby store is never touched here.
    """

    def __init__(self):
        """Initialize connection manager."""
        self.bindings: Dict[ConnectionId, ConnectionBinding] = {}  # connection_id -> binding
        logger.debug("Connection manager initialized")

    def bind(self, connection_id: ConnectionId, lobby_key: LobbyKey, player_id: PlayerId) -> None:
        """
        Bind a connection to a lobby member, replacing any existing binding.

        Args:
            connection_id: Transport connection ID
            lobby_key: Lobby the connection joined
            player_id: Player the connection represents
        """
        previous = self.bindings.get(connection_id)
        self.bindings[connection_id] = ConnectionBinding(
            connection_id=connection_id,
            lobby_key=lobby_key,
            player_id=player_id
        )
        if previous:
            logger.debug(f"Rebound {connection_id}: {previous.lobby_key}/{previous.player_id} -> {lobby_key}/{player_id}")
        else:
            logger.debug(f"Bound {connection_id} to {lobby_key}/{player_id}")

    def unbind(self, connection_id: ConnectionId) -> Optional[ConnectionBinding]:
        """
        Remove a connection's binding.

        Args:
            connection_id: Transport connection ID

        Returns:
            The removed binding, or None if the connection was not bound
        """
        binding = self.bindings.pop(connection_id, None)
        if binding:
            logger.debug(f"Unbound {connection_id} from {binding.lobby_key}/{binding.player_id}")
        return binding

    def lookup(self, connection_id: ConnectionId) -> Optional[ConnectionBinding]:
        """Get the binding for a connection, if any."""
        return self.bindings.get(connection_id)

    def connections_in_lobby(self, lobby_key: LobbyKey) -> List[ConnectionId]:
        """
        Get the connections currently bound to a lobby.

        Args:
            lobby_key: Lobby key

        Returns:
            List of connection IDs
        """
        return [
            binding.connection_id
            for binding in self.bindings.values()
            if binding.lobby_key == lobby_key
        ]

    def get_connection_stats(self) -> Dict[str, Any]:
        """
        Get connection statistics.

        Returns:
            Dictionary with connection statistics
        """
        lobby_counts: Dict[str, int] = {}
        for binding in self.bindings.values():
            lobby_counts[binding.lobby_key] = lobby_counts.get(binding.lobby_key, 0) + 1

        return {
            'bound_connections': len(self.bindings),
            'lobby_distribution': lobby_counts
        }
