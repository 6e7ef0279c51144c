from flask_socketio import emit
from flask import current_app
from ponggou import socketio, get_session


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_get_state(data=None):
    payload = get_session().snapshot()
    payload['announce_delay_ms'] = int(current_app.config.get('ROUND_ANNOUNCE_DELAY_MS', 0))
    emit('state_update', payload)


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    socketio.on_event('connect', handle_connect, namespace='/ws')
    socketio.on_event('get_state', handle_get_state, namespace='/ws')
    socketio.on_event('ping', handle_ping, namespace='/ws')

    if testing:
        # Test-only mirror on default namespace
        socketio.on_event('connect', handle_connect, namespace='/')
        socketio.on_event('get_state', handle_get_state, namespace='/')
        socketio.on_event('ping', handle_ping, namespace='/')
