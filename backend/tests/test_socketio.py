def _names(events):
    return [e['name'] for e in events]


def test_socket_connect_and_get_state(sio_client):
    # Ensure we are connected to /ws
    if not sio_client.is_connected('/ws'):
        sio_client.connect(namespace='/ws')
    assert sio_client.is_connected('/ws')

    received = sio_client.get_received('/ws')
    assert 'connected' in _names(received)

    sio_client.emit('get_state', namespace='/ws')
    received = sio_client.get_received('/ws')
    updates = [e for e in received if e['name'] == 'state_update']
    assert updates
    assert [t['id'] for t in updates[0]['args'][0]['tables']] == [1, 2]


def test_ping_pong(sio_client):
    sio_client.get_received('/ws')
    sio_client.emit('ping', {'n': 1}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert any(e['name'] == 'pong' and e['args'][0] == {'n': 1} for e in received)


def test_actions_broadcast_events(sio_client, client):
    sio_client.get_received('/ws')  # flush

    client.post('/api/tournament/players', json={'name': 'Alice'})
    received = sio_client.get_received('/ws')
    assert 'state_update' in _names(received)
    notices = [e['args'][0] for e in received if e['name'] == 'notify']
    assert notices[-1] == {'message': 'Player "Alice" added to the queue', 'severity': 'success'}


def test_round_decided_broadcast(sio_client, client):
    for name in ('P1', 'P2', 'P3', 'P4'):
        client.post('/api/tournament/players', json={'name': name})
    client.post('/api/tournament/session/start', json={'mode': 'solo'})
    sio_client.get_received('/ws')

    for _ in range(4):
        client.post('/api/tournament/tables/2/point', json={'side': 'A'})
    received = sio_client.get_received('/ws')
    decided = [e['args'][0] for e in received if e['name'] == 'round_decided']
    assert decided == [{'title': 'Table 2: P3 wins!', 'detail': 'P3 4 - 0 P4'}]
