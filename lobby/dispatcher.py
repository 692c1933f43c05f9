"""
Event dispatcher and broadcast router.

Routes named client events to the coordinator or lobby store and turns
the outcome into room broadcasts. Each event performs at most one state
mutation followed by at most one broadcast. Anything the event refers to
that does not exist (lobby, member, payload field) makes it a silent
no-op; there is no error channel back to the sender.
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Optional

from .broadcaster import RoomBroadcaster
from .connection_manager import ConnectionManager
from .coordinator import MembershipCoordinator
from .manager import LobbyManager
from .models import ConnectionId, Effect, Broadcast
from utils.constants import CLIENT_EVENTS, SERVER_EVENTS, DEFAULT_TARGET_SCORE
from utils.helpers import get_field, get_fields, get_key

logger = logging.getLogger(__name__)

EventHandler = Callable[[ConnectionId, Any], List[Effect]]


class EventDispatcher:
    """
    Stateless routing layer over the lobby store and membership coordinator.

    All state lives in the LobbyManager and ConnectionManager passed in (or
    created here). A single lock serializes every event so that the
    mutation and the broadcast it causes are never interleaved with another
    event, even when the transport runs handlers on several threads.
    """

    def __init__(self,
                 broadcaster: RoomBroadcaster,
                 lobby_manager: Optional[LobbyManager] = None,
                 connection_manager: Optional[ConnectionManager] = None,
                 default_target_score: int = DEFAULT_TARGET_SCORE):
        self.broadcaster = broadcaster
        self.lobby_manager = lobby_manager or LobbyManager(default_target_score)
        self.connection_manager = connection_manager or ConnectionManager()
        self.coordinator = MembershipCoordinator(self.lobby_manager, self.connection_manager)
        self._lock = threading.RLock()

        self.handlers: Dict[str, EventHandler] = {
            CLIENT_EVENTS['JOIN_LOBBY']: self.on_join_lobby,
            CLIENT_EVENTS['UPDATE_TARGET_SCORE']: self.on_update_target_score,
            CLIENT_EVENTS['CHANGE_NAME']: self.on_change_name,
            CLIENT_EVENTS['START_GAME']: self.on_start_game,
            CLIENT_EVENTS['GAME_UPDATE']: self.on_game_update,
            CLIENT_EVENTS['PLAYER_READY']: self.on_player_ready,
            CLIENT_EVENTS['LEAVE_LOBBY']: self.on_leave_lobby,
        }

    # ---- Entry points used by the transport handlers ----

    def dispatch(self, connection_id: ConnectionId, event: str, data: Any) -> List[Effect]:
        """
        Apply an inbound event to lobby state.

        Args:
            connection_id: Connection the event arrived on
            event: Event name
            data: Raw payload

        Returns:
            Effects to carry out, in order
        """
        handler = self.handlers.get(event)
        if handler is None:
            logger.debug(f"Ignoring unknown event {event!r} from {connection_id}")
            return []
        with self._lock:
            return handler(connection_id, data)

    def handle_event(self, connection_id: ConnectionId, event: str, data: Any) -> List[Effect]:
        """Dispatch an event and apply its effects to the broadcaster."""
        with self._lock:
            effects = self.dispatch(connection_id, event, data)
            self.broadcaster.apply(effects)
        return effects

    def handle_disconnect(self, connection_id: ConnectionId) -> List[Effect]:
        """Clean up a lost connection and apply the resulting effects."""
        with self._lock:
            effects = self.coordinator.disconnect(connection_id)
            self.broadcaster.apply(effects)
        return effects

    # ---- Event handlers ----

    def on_join_lobby(self, connection_id: ConnectionId, data: Any) -> List[Effect]:
        # Validated before anything is torn down, so a bad join leaves the
        # current binding untouched.
        fields = get_fields(data, 'lobbyKey', 'playerName', 'playerId', keys=('lobbyKey', 'playerId'))
        if fields is None:
            logger.debug(f"join-lobby from {connection_id} missing fields: {data!r}")
            return []
        return self.coordinator.join(
            connection_id, fields['lobbyKey'], fields['playerName'], fields['playerId']
        )

    def on_update_target_score(self, connection_id: ConnectionId, data: Any) -> List[Effect]:
        fields = get_fields(data, 'lobbyKey', 'targetScore', keys=('lobbyKey',))
        if fields is None:
            return []
        target_score = fields['targetScore']
        if isinstance(target_score, bool) or not isinstance(target_score, int):
            logger.debug(f"Ignoring non-integer target score {target_score!r} from {connection_id}")
            return []
        if not self.lobby_manager.set_target_score(fields['lobbyKey'], target_score):
            return []
        return [Broadcast(
            fields['lobbyKey'],
            SERVER_EVENTS['TARGET_SCORE_UPDATED'],
            {'targetScore': target_score}
        )]

    def on_change_name(self, connection_id: ConnectionId, data: Any) -> List[Effect]:
        fields = get_fields(data, 'lobbyKey', 'playerId', 'newName', keys=('lobbyKey', 'playerId'))
        if fields is None:
            return []
        if not self.lobby_manager.rename_member(fields['lobbyKey'], fields['playerId'], fields['newName']):
            return []
        return self.coordinator.lobby_update(fields['lobbyKey'])

    def on_start_game(self, connection_id: ConnectionId, data: Any) -> List[Effect]:
        return self._relay(data, SERVER_EVENTS['GAME_STARTED'], 'initialState')

    def on_game_update(self, connection_id: ConnectionId, data: Any) -> List[Effect]:
        return self._relay(data, SERVER_EVENTS['GAME_UPDATED'], 'gameState')

    def on_player_ready(self, connection_id: ConnectionId, data: Any) -> List[Effect]:
        return self._relay(data, SERVER_EVENTS['PLAYER_READY_UPDATED'], 'playerId')

    def on_leave_lobby(self, connection_id: ConnectionId, data: Any) -> List[Effect]:
        # The lobby is resolved from the connection's binding, not the payload.
        return self.coordinator.leave(connection_id)

    def _relay(self, data: Any, event: str, field_name: str) -> List[Effect]:
        """Forward a content-agnostic payload field to a lobby's room."""
        # A single string room only; the transport reads a list as many rooms.
        lobby_key = get_key(data, 'lobbyKey')
        if lobby_key is None:
            return []
        return [Broadcast(lobby_key, event, {field_name: get_field(data, field_name)})]
