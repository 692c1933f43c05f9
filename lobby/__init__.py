"""
Lobby Module for the lobby relay server.

Contains all lobby management logic and components.
Handles lobby lifecycle, membership, connection tracking and event routing.
"""

from .models import (
    LobbyKey, PlayerId, ConnectionId,
    LobbyData, PlayerData, ConnectionBinding, LobbySnapshot,
    Broadcast, RoomJoin, RoomLeave, Effect
)
from .manager import LobbyManager
from .player_manager import PlayerManager
from .connection_manager import ConnectionManager
from .coordinator import MembershipCoordinator
from .broadcaster import RoomBroadcaster
from .dispatcher import EventDispatcher

__all__ = [
    # Identity types
    'LobbyKey',
    'PlayerId',
    'ConnectionId',

    # Data models
    'LobbyData',
    'PlayerData',
    'ConnectionBinding',
    'LobbySnapshot',

    # Effects
    'Broadcast',
    'RoomJoin',
    'RoomLeave',
    'Effect',

    # Managers
    'LobbyManager',
    'PlayerManager',
    'ConnectionManager',
    'MembershipCoordinator',
    'RoomBroadcaster',
    'EventDispatcher'
]
