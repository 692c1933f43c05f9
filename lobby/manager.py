"""
Main lobby management system.

Owns every lobby held by the process. Lobbies are created lazily on
first join and deleted the instant their roster becomes empty, so an
empty lobby is never observable from outside.
"""

import logging
from typing import Optional, List, Dict, Any
from .models import LobbyData, PlayerData, LobbySnapshot, LobbyKey, PlayerId
from .player_manager import PlayerManager
from utils.constants import DEFAULT_TARGET_SCORE

logger = logging.getLogger(__name__)


class LobbyManager:
    """In-memory lobby store."""

    def __init__(self, default_target_score: int = DEFAULT_TARGET_SCORE):
        self.player_manager = PlayerManager()
        self.active_lobbies: Dict[LobbyKey, LobbyData] = {}
        self.default_target_score = default_target_score

    def ensure_lobby(self, lobby_key: LobbyKey) -> LobbyData:
        """
        Get a lobby, creating it with an empty roster if it does not exist.

        Args:
            lobby_key: Key of the lobby

        Returns:
            The existing or newly created lobby
        """
        lobby_data = self.active_lobbies.get(lobby_key)
        if lobby_data is None:
            lobby_data = LobbyData(key=lobby_key, target_score=self.default_target_score)
            self.active_lobbies[lobby_key] = lobby_data
            logger.info(f"Created lobby: {lobby_key}")
        return lobby_data

    def get_lobby(self, lobby_key: LobbyKey) -> Optional[LobbyData]:
        """Get lobby data by key, or None if not found."""
        return self.active_lobbies.get(lobby_key)

    def has_lobby(self, lobby_key: LobbyKey) -> bool:
        return lobby_key in self.active_lobbies

    def add_member(self, lobby_key: LobbyKey, player: PlayerData) -> None:
        """
        Add a player to a lobby, overwriting any player with the same id.

        The lobby is created if needed so a member is never added to nothing.
        """
        lobby_data = self.ensure_lobby(lobby_key)
        self.player_manager.add_player(lobby_data, player)

    def remove_member(self, lobby_key: LobbyKey, player_id: PlayerId) -> bool:
        """
        Remove a player from a lobby, deleting the lobby if it becomes empty.

        Args:
            lobby_key: Key of the lobby
            player_id: ID of the player to remove

        Returns:
            True if a player was removed
        """
        lobby_data = self.active_lobbies.get(lobby_key)
        if not lobby_data:
            logger.debug(f"Cannot remove {player_id}: lobby {lobby_key} not found")
            return False

        removed = self.player_manager.remove_player(lobby_data, player_id)
        if removed is None:
            return False

        if lobby_data.is_empty:
            del self.active_lobbies[lobby_key]
            logger.info(f"Lobby {lobby_key} deleted (empty)")

        return True

    def set_target_score(self, lobby_key: LobbyKey, target_score: int) -> bool:
        """
        Update a lobby's target score.

        Returns:
            True if updated, False if the lobby does not exist
        """
        lobby_data = self.active_lobbies.get(lobby_key)
        if not lobby_data:
            logger.debug(f"Cannot set target score: lobby {lobby_key} not found")
            return False

        lobby_data.target_score = target_score
        logger.info(f"Lobby {lobby_key} target score set to {target_score}")
        return True

    def rename_member(self, lobby_key: LobbyKey, player_id: PlayerId, new_name: str) -> bool:
        """
        Rename a player in a lobby.

        Returns:
            True if renamed, False if the lobby or player does not exist
        """
        lobby_data = self.active_lobbies.get(lobby_key)
        if not lobby_data:
            logger.debug(f"Cannot rename {player_id}: lobby {lobby_key} not found")
            return False

        return self.player_manager.rename_player(lobby_data, player_id, new_name)

    def snapshot(self, lobby_key: LobbyKey) -> Optional[LobbySnapshot]:
        """
        Get a read view of a lobby for broadcasting.

        Returns:
            Snapshot of players and target score, or None if not found
        """
        lobby_data = self.active_lobbies.get(lobby_key)
        if not lobby_data:
            return None

        return LobbySnapshot(
            players=[PlayerData(id=p.id, name=p.name) for p in lobby_data.members.values()],
            target_score=lobby_data.target_score
        )

    def list_lobbies(self) -> List[LobbyData]:
        """Get all active lobbies."""
        return list(self.active_lobbies.values())

    def get_lobby_stats(self) -> Dict[str, Any]:
        """
        Get lobby statistics.

        Returns:
            Dictionary with lobby statistics
        """
        return {
            'active_lobbies': len(self.active_lobbies),
            'total_players': sum(lobby.player_count for lobby in self.active_lobbies.values()),
            'lobbies': {key: lobby.player_count for key, lobby in self.active_lobbies.items()}
        }
