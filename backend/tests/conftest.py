import os
import sys
import pytest

# Ensure the backend root (containing the `ponggou` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from ponggou import create_app, db, socketio
from ponggou.services.tournament import MemoryStore, TournamentListener, TournamentSession


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    STORAGE_KEY_PREFIX = 'pongGou_'
    ROUND_ANNOUNCE_DELAY_MS = 0
    CORS_ORIGINS = 'http://localhost:5173'


class RecordingListener(TournamentListener):
    def __init__(self):
        self.states = []
        self.notices = []
        self.rounds = []

    def on_state_changed(self, state):
        self.states.append(state)

    def on_notify(self, message, severity):
        self.notices.append((message, severity))

    def on_round_decided(self, title, detail):
        self.rounds.append((title, detail))


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import ponggou.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass


@pytest.fixture()
def listener():
    return RecordingListener()


@pytest.fixture()
def store():
    return MemoryStore()


@pytest.fixture()
def session(store, listener):
    return TournamentSession(store=store, listener=listener)


@pytest.fixture()
def add_players(session):
    def _add(*names):
        return [session.add_player(name).value for name in names]
    return _add
