"""
Lobby Relay Server

Flask-SocketIO backend for a multiplayer game client. Players join a
named lobby, share a target score, and relay game-state events to
everyone else in the lobby.
"""

import logging
from flask import Flask
from flask_socketio import SocketIO
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from config import settings
from lobby import EventDispatcher
from handlers import register_socket_handlers, register_api_handlers, SocketIORoomBroadcaster
from utils.helpers import parse_origins

logger = logging.getLogger(__name__)


def configure_logging(level: str = settings.LOG_LEVEL):
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def create_app(config_overrides=None):
    """
    Application factory.

    Args:
        config_overrides: Optional mapping applied on top of environment settings

    Returns:
        tuple: (app, socketio)
    """
    app = Flask(__name__)
    app.config.update(settings.as_dict())
    if config_overrides:
        app.config.update(config_overrides)

    origins = parse_origins(app.config['CORS_ORIGINS'])

    # CORS so the hosted client site can talk to this server
    CORS(app, origins=origins)

    # ProxyFix for deployment behind reverse proxy
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1)

    socketio = SocketIO(
        app,
        cors_allowed_origins=origins,
        async_mode=app.config['ASYNC_MODE']
    )

    # One dispatcher per process owns all lobby and connection state
    dispatcher = EventDispatcher(
        SocketIORoomBroadcaster(socketio),
        default_target_score=app.config['DEFAULT_TARGET_SCORE']
    )
    app.extensions['lobby_dispatcher'] = dispatcher

    register_socket_handlers(socketio, dispatcher)
    register_api_handlers(app, dispatcher)

    logger.info("Lobby server initialized successfully")
    return app, socketio


if __name__ == '__main__':
    configure_logging()
    app, socketio = create_app()

    logger.info(f"Server is listening on port {settings.PORT}")
    socketio.run(app, debug=settings.DEBUG, port=settings.PORT, host=settings.HOST,
                 allow_unsafe_werkzeug=True)
