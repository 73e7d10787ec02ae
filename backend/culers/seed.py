from datetime import date

from flask import current_app

from culers import db
from culers.models import Player, Match

DEMO_PLAYERS = [
    ('Lamine Yamal', 'FC Barcelona'),
    ('Pedri', 'FC Barcelona'),
    ('Gavi', 'FC Barcelona'),
]


def seed_demo_data() -> None:
    """Insert demo players and a sample match into empty tables."""
    if Player.query.count() == 0:
        for name, club in DEMO_PLAYERS:
            db.session.add(Player(name=name, club=club, photo_url=''))
        current_app.logger.info(f"[seed] added {len(DEMO_PLAYERS)} players")
    if Match.query.count() == 0:
        db.session.add(Match(date=date.today().isoformat(), opponent='Real Madrid', home_away='HOME', status='final'))
        current_app.logger.info("[seed] added sample match")
    db.session.commit()


def init_db() -> None:
    """Create missing tables and seed demo rows. Safe to run repeatedly."""
    db.create_all()
    seed_demo_data()


def reset_db() -> None:
    db.drop_all()
    init_db()
