import pytest

from app import create_app
from lobby import RoomBroadcaster, EventDispatcher, LobbyManager, ConnectionManager


class RecordingBroadcaster(RoomBroadcaster):
    """In-memory RoomBroadcaster that tracks rooms and records every emit."""

    def __init__(self):
        self.rooms = {}
        self.emitted = []

    def join(self, connection_id, room):
        self.rooms.setdefault(room, set()).add(connection_id)

    def leave(self, connection_id, room):
        members = self.rooms.get(room)
        if members is not None:
            members.discard(connection_id)
            if not members:
                del self.rooms[room]

    def emit(self, room, event, payload):
        recipients = sorted(self.rooms.get(room, ()))
        self.emitted.append((room, event, payload, recipients))

    def events(self, name=None):
        return [e for e in self.emitted if name is None or e[1] == name]

    def clear(self):
        self.emitted = []


TEST_CONFIG = {
    'TESTING': True,
    'SECRET_KEY': 'test-secret',
    'CORS_ORIGINS': '*',
    'ASYNC_MODE': 'threading',
    'DEFAULT_TARGET_SCORE': 100,
}


@pytest.fixture()
def broadcaster():
    return RecordingBroadcaster()


@pytest.fixture()
def lobby_manager():
    return LobbyManager()


@pytest.fixture()
def connection_manager():
    return ConnectionManager()


@pytest.fixture()
def dispatcher(broadcaster, lobby_manager, connection_manager):
    return EventDispatcher(broadcaster, lobby_manager, connection_manager)


@pytest.fixture()
def app_and_socketio():
    return create_app(TEST_CONFIG)


@pytest.fixture()
def flask_app(app_and_socketio):
    return app_and_socketio[0]


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def server_state(flask_app):
    return flask_app.extensions['lobby_dispatcher']


@pytest.fixture()
def make_sio_client(app_and_socketio):
    flask_app, socketio = app_and_socketio
    created = []

    def _make():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        created.append(test_client)
        return test_client

    yield _make

    for test_client in created:
        if test_client.is_connected():
            test_client.disconnect()
