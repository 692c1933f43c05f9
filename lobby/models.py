"""
Data models for lobby management.

These are pure data structures used to pass information between
the connection registry, the lobby store, the membership coordinator
and the Socket.IO handlers.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, NewType, Optional, Union

from utils.constants import DEFAULT_TARGET_SCORE

LobbyKey = NewType('LobbyKey', str)
PlayerId = NewType('PlayerId', str)
ConnectionId = NewType('ConnectionId', str)


@dataclass
class PlayerData:
    """Represents a player in a lobby."""
    id: PlayerId
    name: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'id': self.id,
            'name': self.name
        }


@dataclass
class LobbyData:
    """Represents a lobby's current state."""
    key: LobbyKey
    members: Dict[PlayerId, PlayerData] = field(default_factory=dict)
    target_score: int = DEFAULT_TARGET_SCORE

    @property
    def player_count(self) -> int:
        """Number of players currently in the lobby."""
        return len(self.members)

    @property
    def is_empty(self) -> bool:
        return not self.members

    def get_player(self, player_id: PlayerId) -> Optional[PlayerData]:
        """Find player by id."""
        return self.members.get(player_id)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'key': self.key,
            'player_count': self.player_count,
            'target_score': self.target_score,
            'players': [p.to_dict() for p in self.members.values()]
        }


@dataclass(frozen=True)
class ConnectionBinding:
    """The (lobby, player) identity a live connection currently represents."""
    connection_id: ConnectionId
    lobby_key: LobbyKey
    player_id: PlayerId


@dataclass
class LobbySnapshot:
    """Read view of a lobby used to build broadcast payloads."""
    players: List[PlayerData]
    target_score: int

    def to_dict(self) -> Dict[str, Any]:
        """Wire format of the lobby-update event."""
        return {
            'players': [p.to_dict() for p in self.players],
            'targetScore': self.target_score
        }


# Effects produced by the coordinator and dispatcher. Nothing in the lobby
# package talks to the transport; handlers apply these to a RoomBroadcaster.

@dataclass(frozen=True)
class Broadcast:
    """Emit an event to every connection grouped under a room."""
    room: LobbyKey
    event: str
    payload: Any


@dataclass(frozen=True)
class RoomJoin:
    """Add a connection to a room."""
    connection_id: ConnectionId
    room: LobbyKey


@dataclass(frozen=True)
class RoomLeave:
    """Remove a connection from a room."""
    connection_id: ConnectionId
    room: LobbyKey


Effect = Union[Broadcast, RoomJoin, RoomLeave]
