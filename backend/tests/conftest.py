import os
import sys
import pytest

# Ensure the backend root (containing the `unigrid` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from unigrid import create_app, socketio


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    COOLDOWN_SECONDS = 5
    CLIENT_ORIGINS = ['http://localhost:5173']
    CORS_ANY = False
    SOCKETIO_NAMESPACE = '/'


class LifetimeConfig(TestConfig):
    COOLDOWN_SECONDS = 0


class FakeClock:
    def __init__(self, now=1000):
        self.now = now

    def __call__(self):
        return self.now


class RecordingGateway:
    """Stand-in for the Socket.IO gateway that remembers what was sent."""

    def __init__(self):
        self.broadcasts = []
        self.sent = []

    def broadcast(self, event, data):
        self.broadcasts.append((event, data))

    def send(self, sid, event, data):
        self.sent.append((sid, event, data))


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def gateway():
    return RecordingGateway()


@pytest.fixture()
def flask_app(clock):
    application = create_app(TestConfig)
    application.extensions['unigrid'].coordinator.clock = clock
    with application.app_context():
        yield application


@pytest.fixture()
def lifetime_app():
    application = create_app(LifetimeConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_factory(flask_app):
    clients = []

    def _connect(app=None):
        test_client = socketio.test_client(app or flask_app)
        clients.append(test_client)
        return test_client

    yield _connect
    for test_client in clients:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass


@pytest.fixture()
def sio_client(sio_factory):
    return sio_factory()
