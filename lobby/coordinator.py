"""
Membership coordinator.

Implements the join / leave / disconnect protocol for connections. A
connection is either unbound or bound to exactly one (lobby, player);
joining while bound always tears the prior binding down first, so a
reconnecting or lobby-switching client never leaves a stale member
behind.

The coordinator mutates the lobby store and the connection registry and
returns the effects (room changes and broadcasts) the transport should
carry out. It never talks to the transport itself.
"""

import logging
from typing import List

from .connection_manager import ConnectionManager
from .manager import LobbyManager
from .models import (
    ConnectionBinding, ConnectionId, LobbyKey, PlayerId, PlayerData,
    Effect, Broadcast, RoomJoin, RoomLeave
)
from utils.constants import SERVER_EVENTS

logger = logging.getLogger(__name__)


class MembershipCoordinator:
    """Coordinates lobby membership for live connections."""

    def __init__(self, lobby_manager: LobbyManager, connection_manager: ConnectionManager):
        self.lobby_manager = lobby_manager
        self.connection_manager = connection_manager

    def lobby_update(self, lobby_key: LobbyKey) -> List[Effect]:
        """
        Build the lobby-update broadcast for a lobby.

        Returns:
            A single broadcast, or nothing if the lobby no longer exists
        """
        snapshot = self.lobby_manager.snapshot(lobby_key)
        if snapshot is None:
            return []
        return [Broadcast(lobby_key, SERVER_EVENTS['LOBBY_UPDATE'], snapshot.to_dict())]

    def join(self, connection_id: ConnectionId, lobby_key: LobbyKey,
             player_name: str, player_id: PlayerId) -> List[Effect]:
        """
        Join a connection to a lobby as the given player.

        Any existing binding for the connection is left first, even when it
        points at the same lobby.

        Args:
            connection_id: Transport connection ID
            lobby_key: Lobby to join (created if unknown)
            player_name: Display name
            player_id: Caller-supplied player identity

        Returns:
            Effects to apply, in order
        """
        effects: List[Effect] = []

        previous = self.connection_manager.lookup(connection_id)
        if previous:
            logger.info(f"Connection {connection_id} rejoining; leaving {previous.lobby_key} as {previous.player_id} first")
            effects.extend(self._leave_binding(previous))

        self.lobby_manager.add_member(lobby_key, PlayerData(id=player_id, name=player_name))
        self.connection_manager.bind(connection_id, lobby_key, player_id)
        effects.append(RoomJoin(connection_id, lobby_key))
        effects.extend(self.lobby_update(lobby_key))

        logger.info(f"Player {player_name} ({player_id}) joined lobby {lobby_key} on {connection_id}")
        return effects

    def leave(self, connection_id: ConnectionId) -> List[Effect]:
        """
        Remove a connection's player from its lobby.

        Returns:
            Effects to apply; empty if the connection was not bound
        """
        binding = self.connection_manager.lookup(connection_id)
        if not binding:
            logger.debug(f"Connection {connection_id} not in any lobby")
            return []

        return self._leave_binding(binding)

    def disconnect(self, connection_id: ConnectionId) -> List[Effect]:
        """Clean up after a transport disconnect; same effect as leave."""
        logger.debug(f"Cleaning up after disconnect of {connection_id}")
        return self.leave(connection_id)

    def _leave_binding(self, binding: ConnectionBinding) -> List[Effect]:
        """
        Remove the bound member and clear the binding.

        When two connections joined under the same player id, the member is
        shared: the first leave removes it and the other connection keeps a
        binding to a player that is gone until it leaves or disconnects.
        """
        # The broadcast goes out before the room leave, so the departing
        # connection still receives the roster it left.
        removed = self.lobby_manager.remove_member(binding.lobby_key, binding.player_id)
        self.connection_manager.unbind(binding.connection_id)

        effects: List[Effect] = []
        if removed:
            effects.extend(self.lobby_update(binding.lobby_key))
            logger.info(f"Player {binding.player_id} left lobby {binding.lobby_key}")
        else:
            logger.debug(f"Player {binding.player_id} was already gone from lobby {binding.lobby_key}")
        effects.append(RoomLeave(binding.connection_id, binding.lobby_key))
        return effects
