import os
import random
import sys
import pytest

# Ensure the backend root (containing the `racebingo` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from racebingo import create_app, socketio
from racebingo.services.bingo import IdleTimeoutSupervisor, RoomRegistry


GOALS = ['Find an egg', 'Level Up', 'Get a pet', 'Ride a boat', 'See a Ghost', 'Cast a Spell']


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    ROOM_IDLE_TIMEOUT_SEC = 1800
    IDLE_SWEEP_INTERVAL_SEC = 30
    MIN_BOARD_SIZE = 2
    SOCKETIO_NAMESPACE = '/'
    CORS_ORIGINS = '*'
    LOG_LEVEL = 'WARNING'


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture()
def goals():
    return list(GOALS)


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def registry(clock):
    supervisor = IdleTimeoutSupervisor(timeout_sec=1800, clock=clock)
    return RoomRegistry(supervisor=supervisor, rng=random.Random(1234), clock=clock)


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_factory(flask_app):
    clients = []

    def _connect():
        test_client = socketio.test_client(
            flask_app,
            flask_test_client=flask_app.test_client(),
            namespace='/'
        )
        clients.append(test_client)
        return test_client

    yield _connect
    for test_client in clients:
        try:
            if test_client.is_connected('/'):
                test_client.disconnect(namespace='/')
        except Exception:
            pass
