"""
Constants for the lobby relay server.

Socket.IO event names (inbound and outbound), room defaults and
configuration defaults used throughout the application.
"""

# Default shared configuration for a freshly created lobby
DEFAULT_TARGET_SCORE = 100

# Inbound events (client -> server)
CLIENT_EVENTS = {
    'JOIN_LOBBY': 'join-lobby',
    'UPDATE_TARGET_SCORE': 'update-target-score',
    'CHANGE_NAME': 'change-name',
    'START_GAME': 'start-game',
    'GAME_UPDATE': 'game-update',
    'PLAYER_READY': 'player-ready',
    'LEAVE_LOBBY': 'leave-lobby',
}

# Outbound events (server -> lobby room)
SERVER_EVENTS = {
    'LOBBY_UPDATE': 'lobby-update',
    'TARGET_SCORE_UPDATED': 'target-score-updated',
    'GAME_STARTED': 'game-started',
    'GAME_UPDATED': 'game-updated',
    'PLAYER_READY_UPDATED': 'player-ready-updated',
}

# Default Socket.IO namespace used by the client application
SOCKET_NAMESPACE = '/'

SERVER_VERSION = '1.0.0'
