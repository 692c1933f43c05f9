"""
Player management for lobbies.

Handles roster operations on a single lobby: adding, removing and
renaming players.
"""

import logging
from typing import Optional

from .models import PlayerData, LobbyData, PlayerId

logger = logging.getLogger(__name__)


class PlayerManager:
    """Manages player operations within lobbies."""

    def add_player(self, lobby_data: LobbyData, player: PlayerData) -> bool:
        """
        Add a player to a lobby.

        A player already present under the same id is overwritten, never
        duplicated.

        Args:
            lobby_data: The lobby to add player to
            player: Player to add

        Returns:
            True if an existing player was replaced, False if newly added
        """
        replaced = player.id in lobby_data.members
        lobby_data.members[player.id] = player

        if replaced:
            logger.info(f"Player {player.name} ({player.id}) replaced in lobby {lobby_data.key}")
        else:
            logger.info(f"Player {player.name} ({player.id}) added to lobby {lobby_data.key}")
        return replaced

    def remove_player(self, lobby_data: LobbyData, player_id: PlayerId) -> Optional[PlayerData]:
        """
        Remove a player from a lobby.

        Args:
            lobby_data: The lobby to remove player from
            player_id: ID of player to remove

        Returns:
            The removed player, or None if not found
        """
        player = lobby_data.members.pop(player_id, None)
        if not player:
            logger.debug(f"Player {player_id} not found in lobby {lobby_data.key}")
            return None

        logger.info(f"Player {player.name} ({player.id}) removed from lobby {lobby_data.key}")
        return player

    def rename_player(self, lobby_data: LobbyData, player_id: PlayerId, new_name: str) -> bool:
        """
        Rename a player in place.

        Returns:
            True if renamed, False if the player is not in the lobby
        """
        player = lobby_data.get_player(player_id)
        if not player:
            logger.debug(f"Cannot rename {player_id}: not in lobby {lobby_data.key}")
            return False

        old_name = player.name
        player.name = new_name
        logger.info(f"Player {player_id} renamed {old_name} -> {new_name} in lobby {lobby_data.key}")
        return True
