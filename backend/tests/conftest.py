import os
import sys
import pytest

# Ensure the backend root (containing the `culers` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from culers import create_app, db
from culers.models import Player, Match


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    ALLOCATION_BUDGET = 100
    LEADERBOARD_LIMIT = 100
    AUTO_BOOTSTRAP = False
    CORS_ORIGINS = ['http://localhost:5173']
    LOG_LEVEL = 'DEBUG'


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import culers.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def players(flask_app):
    """Two players: A with 80 season points, B with 20."""
    a = Player(name='Alpha', club='FC Barcelona', total_points=80)
    b = Player(name='Bravo', club='FC Barcelona', total_points=20)
    db.session.add_all([a, b])
    db.session.commit()
    return a.id, b.id


@pytest.fixture()
def match_id(flask_app):
    match = Match(date='2026-10-01', opponent='Real Madrid', home_away='HOME', status='final')
    db.session.add(match)
    db.session.commit()
    return match.id
