"""Event routing tests, driven through a recording broadcaster."""

import pytest


def join(dispatcher, sid, lobby_key, name, player_id):
    return dispatcher.handle_event(sid, 'join-lobby', {
        'lobbyKey': lobby_key, 'playerName': name, 'playerId': player_id
    })


@pytest.fixture()
def scenario_b(dispatcher, broadcaster):
    join(dispatcher, 'sid-alice', 'room1', 'Alice', 'p1')
    join(dispatcher, 'sid-bob', 'room1', 'Bob', 'p2')
    broadcaster.clear()
    return dispatcher


def test_scenario_a_first_join_creates_lobby(dispatcher, broadcaster, lobby_manager):
    join(dispatcher, 'sid-alice', 'room1', 'Alice', 'p1')

    assert lobby_manager.has_lobby('room1')
    assert broadcaster.emitted == [
        ('room1', 'lobby-update', {'players': [{'id': 'p1', 'name': 'Alice'}], 'targetScore': 100}, ['sid-alice'])
    ]


def test_scenario_b_second_join_broadcasts_once(dispatcher, broadcaster):
    join(dispatcher, 'sid-alice', 'room1', 'Alice', 'p1')
    broadcaster.clear()

    join(dispatcher, 'sid-bob', 'room1', 'Bob', 'p2')

    assert len(broadcaster.emitted) == 1
    room, event, payload, recipients = broadcaster.emitted[0]
    assert (room, event) == ('room1', 'lobby-update')
    assert payload['players'] == [{'id': 'p1', 'name': 'Alice'}, {'id': 'p2', 'name': 'Bob'}]
    assert payload['targetScore'] == 100
    assert recipients == ['sid-alice', 'sid-bob']


def test_scenario_c_leave_keeps_lobby(scenario_b, broadcaster, lobby_manager):
    scenario_b.handle_event('sid-alice', 'leave-lobby', {'lobbyKey': 'room1'})

    assert broadcaster.events('lobby-update')[0][2] == {
        'players': [{'id': 'p2', 'name': 'Bob'}], 'targetScore': 100
    }
    assert lobby_manager.has_lobby('room1')
    assert broadcaster.rooms == {'room1': {'sid-bob'}}


def test_scenario_d_last_disconnect_deletes_lobby_silently(scenario_b, broadcaster, lobby_manager):
    scenario_b.handle_event('sid-alice', 'leave-lobby', {'lobbyKey': 'room1'})
    broadcaster.clear()

    scenario_b.handle_disconnect('sid-bob')

    assert broadcaster.emitted == []
    assert not lobby_manager.has_lobby('room1')
    assert broadcaster.rooms == {}


def test_scenario_e_target_score_on_missing_lobby(dispatcher, broadcaster, lobby_manager):
    effects = dispatcher.handle_event('sid-1', 'update-target-score', {'lobbyKey': 'room1', 'targetScore': 250})

    assert effects == []
    assert broadcaster.emitted == []
    assert not lobby_manager.has_lobby('room1')


def test_scenario_f_start_game_relays_initial_state(scenario_b, broadcaster):
    scenario_b.handle_event('sid-bob', 'start-game', {'lobbyKey': 'room1', 'initialState': {'round': 1}})

    assert broadcaster.emitted == [
        ('room1', 'game-started', {'initialState': {'round': 1}}, ['sid-alice', 'sid-bob'])
    ]


def test_update_target_score_broadcasts_and_persists(scenario_b, broadcaster, lobby_manager):
    scenario_b.handle_event('sid-alice', 'update-target-score', {'lobbyKey': 'room1', 'targetScore': 250})

    assert broadcaster.emitted == [
        ('room1', 'target-score-updated', {'targetScore': 250}, ['sid-alice', 'sid-bob'])
    ]
    assert lobby_manager.get_lobby('room1').target_score == 250

    # Later joins see the updated score
    join(scenario_b, 'sid-cy', 'room1', 'Cy', 'p3')
    assert broadcaster.events('lobby-update')[-1][2]['targetScore'] == 250


def test_change_name_broadcasts_roster(scenario_b, broadcaster):
    scenario_b.handle_event('sid-bob', 'change-name', {'lobbyKey': 'room1', 'playerId': 'p2', 'newName': 'Robert'})

    (room, event, payload, _), = broadcaster.emitted
    assert event == 'lobby-update'
    assert {'id': 'p2', 'name': 'Robert'} in payload['players']


def test_change_name_for_unknown_member_is_noop(scenario_b, broadcaster):
    scenario_b.handle_event('sid-bob', 'change-name', {'lobbyKey': 'room1', 'playerId': 'p9', 'newName': 'X'})
    scenario_b.handle_event('sid-bob', 'change-name', {'lobbyKey': 'room9', 'playerId': 'p2', 'newName': 'X'})

    assert broadcaster.emitted == []


def test_game_update_and_player_ready_relays(scenario_b, broadcaster):
    scenario_b.handle_event('sid-alice', 'game-update', {'lobbyKey': 'room1', 'gameState': {'scores': [3, 4]}})
    scenario_b.handle_event('sid-bob', 'player-ready', {'lobbyKey': 'room1', 'playerId': 'p2'})

    assert [(e[1], e[2]) for e in broadcaster.emitted] == [
        ('game-updated', {'gameState': {'scores': [3, 4]}}),
        ('player-ready-updated', {'playerId': 'p2'}),
    ]


def test_relay_to_lobby_without_members_still_emits(dispatcher, broadcaster):
    dispatcher.handle_event('sid-1', 'start-game', {'lobbyKey': 'ghost', 'initialState': None})

    assert broadcaster.emitted == [('ghost', 'game-started', {'initialState': None}, [])]


def test_reconnect_moves_binding_between_lobbies(dispatcher, broadcaster, lobby_manager, connection_manager):
    join(dispatcher, 'sid-1', 'lobbyA', 'Alice', 'p1')
    join(dispatcher, 'sid-2', 'lobbyA', 'Bob', 'p9')

    join(dispatcher, 'sid-1', 'lobbyB', 'Alice', 'p2')

    assert 'p1' not in lobby_manager.get_lobby('lobbyA').members
    assert 'p2' in lobby_manager.get_lobby('lobbyB').members
    binding = connection_manager.lookup('sid-1')
    assert (binding.lobby_key, binding.player_id) == ('lobbyB', 'p2')
    assert broadcaster.rooms == {'lobbyA': {'sid-2'}, 'lobbyB': {'sid-1'}}


def test_leave_twice_produces_single_broadcast(scenario_b, broadcaster):
    scenario_b.handle_event('sid-alice', 'leave-lobby', {'lobbyKey': 'room1'})
    scenario_b.handle_event('sid-alice', 'leave-lobby', {'lobbyKey': 'room1'})

    assert len(broadcaster.events('lobby-update')) == 1


def test_leave_lobby_ignores_payload_lobby_key(scenario_b, lobby_manager):
    scenario_b.handle_event('sid-alice', 'leave-lobby', {'lobbyKey': 'some-other-room'})

    assert 'p1' not in lobby_manager.get_lobby('room1').members


@pytest.mark.parametrize('event, payload', [
    ('join-lobby', None),
    ('join-lobby', {'lobbyKey': 'room1', 'playerName': 'Alice'}),
    ('join-lobby', 'not-a-dict'),
    ('update-target-score', {'targetScore': 5}),
    ('change-name', {'lobbyKey': 'room1'}),
    ('start-game', {'initialState': {}}),
    ('game-update', None),
    ('player-ready', {}),
    ('no-such-event', {'lobbyKey': 'room1'}),
])
def test_malformed_events_are_noops(dispatcher, broadcaster, lobby_manager, event, payload):
    assert dispatcher.handle_event('sid-1', event, payload) == []
    assert broadcaster.emitted == []
    assert lobby_manager.list_lobbies() == []


@pytest.mark.parametrize('payload', [
    {'lobbyKey': ['x'], 'playerName': 'Alice', 'playerId': 'p1-new'},
    {'lobbyKey': {'room': 'x'}, 'playerName': 'Alice', 'playerId': 'p1-new'},
    {'lobbyKey': 'room2', 'playerName': 'Alice', 'playerId': ['p1']},
    {'lobbyKey': 7, 'playerName': 'Alice', 'playerId': 'p1-new'},
])
def test_join_with_unusable_keys_keeps_prior_binding(scenario_b, broadcaster, lobby_manager,
                                                     connection_manager, payload):
    assert scenario_b.handle_event('sid-alice', 'join-lobby', payload) == []

    binding = connection_manager.lookup('sid-alice')
    assert (binding.lobby_key, binding.player_id) == ('room1', 'p1')
    assert sorted(lobby_manager.get_lobby('room1').members) == ['p1', 'p2']
    assert broadcaster.emitted == []
    assert broadcaster.rooms == {'room1': {'sid-alice', 'sid-bob'}}
    assert [lobby.key for lobby in lobby_manager.list_lobbies()] == ['room1']


@pytest.mark.parametrize('event, payload', [
    ('start-game', {'lobbyKey': ['room1', 'room2'], 'initialState': {'round': 1}}),
    ('game-update', {'lobbyKey': {'room1': True}, 'gameState': {}}),
    ('player-ready', {'lobbyKey': 42, 'playerId': 'p2'}),
    ('change-name', {'lobbyKey': ['room1'], 'playerId': 'p2', 'newName': 'X'}),
    ('change-name', {'lobbyKey': 'room1', 'playerId': {'id': 'p2'}, 'newName': 'X'}),
    ('update-target-score', {'lobbyKey': ['room1'], 'targetScore': 250}),
])
def test_relays_and_updates_require_a_single_string_room(scenario_b, broadcaster, event, payload):
    assert scenario_b.handle_event('sid-bob', event, payload) == []
    assert broadcaster.emitted == []


@pytest.mark.parametrize('target_score', ['250', 2.5, True, None, [250]])
def test_non_integer_target_score_is_ignored(scenario_b, broadcaster, lobby_manager, target_score):
    scenario_b.handle_event('sid-alice', 'update-target-score', {'lobbyKey': 'room1', 'targetScore': target_score})

    assert broadcaster.emitted == []
    assert lobby_manager.get_lobby('room1').target_score == 100
