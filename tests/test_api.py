import pytest
from app import sessions

LINE_CELLS = [[
    [1, 1, 5, 0, 0, 0, 0],
    [1, -1, 0, 0, 0, 0, 0],
    [1, -1, 0, 0, 0, 0, 0],
    [1, -1, 0, 0, 0, 0, 0],
]]


@pytest.fixture
def session_id(api_client):
    """Create a 4x1 session and return its ID."""
    response = api_client.post('/api/session/new', json={'width': 4, 'height': 1})
    assert response.status_code == 200
    return response.json['session_id']


def test_new_session(api_client):
    """Test POST /api/session/new creates a session with a UUID."""
    response = api_client.post('/api/session/new', json={'width': 12, 'height': 6})
    assert response.status_code == 200
    data = response.json
    assert 'session_id' in data
    import re
    uuid_pattern = r'^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$'
    assert re.match(uuid_pattern, data['session_id']) is not None
    assert sessions[data['session_id']].width == 12


def test_new_session_invalid_json(api_client):
    response = api_client.post('/api/session/new', data='not json', content_type='application/json')
    assert response.status_code == 400


@pytest.mark.parametrize("body", [{'width': 4}, {'width': 'wide', 'height': 1}, {'width': 0, 'height': 3}])
def test_new_session_bad_dimensions(api_client, body):
    response = api_client.post('/api/session/new', json=body)
    assert response.status_code == 400


def test_play_turn(api_client, session_id):
    """Test POST /api/session/<id>/turn plans the 4x1 line scenario."""
    response = api_client.post(f'/api/session/{session_id}/turn',
                               json={'my_matter': 10, 'opponent_matter': 10, 'cells': LINE_CELLS})
    assert response.status_code == 200
    data = response.json
    assert data['turn'] == 1
    assert data['zone'] == 'LEFT'
    assert data['strategy'] == 'Conquer'
    assert data['line'] == "MESSAGE Conquer;MOVE 5 0 0 2 0;SPAWN 1 0 0"
    assert data['commands'][1] == {
        'type': 'MOVE', 'amount': 5, 'source': {'x': 0, 'y': 0}, 'target': {'x': 2, 'y': 0}
    }


def test_play_turn_unknown_session(api_client):
    response = api_client.post('/api/session/nope/turn', json={'cells': LINE_CELLS})
    assert response.status_code == 404


def test_play_turn_malformed_snapshot(api_client, session_id):
    response = api_client.post(f'/api/session/{session_id}/turn', json={'cells': [[[1, 1, 5]]]})
    assert response.status_code == 400
    assert 'Invalid snapshot' in response.json['error']


def test_play_turn_invalid_json(api_client, session_id):
    response = api_client.post(f'/api/session/{session_id}/turn', data='{', content_type='application/json')
    assert response.status_code == 400


@pytest.mark.parametrize("body", [[1, 2], 7, "text"])
def test_new_session_non_object_json(api_client, body):
    response = api_client.post('/api/session/new', json=body)
    assert response.status_code == 400
    assert response.json['error'] == 'Invalid JSON data'


@pytest.mark.parametrize("body", [[1, 2], 7, "text"])
def test_play_turn_non_object_json(api_client, session_id, body):
    response = api_client.post(f'/api/session/{session_id}/turn', json=body)
    assert response.status_code == 400
    assert response.json['error'] == 'Invalid JSON data'


def test_play_turn_rejects_fractional_units(api_client, session_id):
    cells = [[[1, 1, 1.9, 0, 0, 0, 0]] + LINE_CELLS[0][1:]]
    response = api_client.post(f'/api/session/{session_id}/turn', json={'cells': cells})
    assert response.status_code == 400


def test_state_after_turn(api_client, session_id):
    api_client.post(f'/api/session/{session_id}/turn', json={'cells': LINE_CELLS})
    response = api_client.get(f'/api/session/{session_id}/state')
    assert response.status_code == 200
    data = response.json
    assert data['turn'] == 1
    assert data['zone'] == 'LEFT'
    assert data['wall'] == [[2, 0]]
    assert data['weak_points'] == [[2, 0]]


def test_state_unknown_session(api_client):
    assert api_client.get('/api/session/nope/state').status_code == 404


def test_log(api_client, session_id):
    api_client.post(f'/api/session/{session_id}/turn', json={'cells': LINE_CELLS})
    response = api_client.get(f'/api/session/{session_id}/log')
    assert response.status_code == 200
    events = [entry['event'] for entry in response.json['log']]
    assert events[0] == "Snapshot loaded"
    assert "Strategy selected: Conquer" in events


def test_log_unknown_session(api_client):
    assert api_client.get('/api/session/nope/log').status_code == 404
