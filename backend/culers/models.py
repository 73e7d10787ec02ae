from datetime import datetime, timezone

from culers import db

HOME_AWAY_VALUES = ('HOME', 'AWAY')
MATCH_STATUSES = ('upcoming', 'live', 'final')


def utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class User(db.Model):
    __tablename__ = 'users'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(128), nullable=False)
    email = db.Column(db.String(255), unique=True, index=True)
    allocations = db.relationship('Allocation', back_populates='user', lazy='dynamic')

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
        }


class Player(db.Model):
    __tablename__ = 'players'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(128), nullable=False)
    club = db.Column(db.String(128), default='')
    photo_url = db.Column(db.String(512), default='')
    # Season score, only changed through the points adjustment endpoint
    total_points = db.Column(db.Integer, default=0, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'club': self.club,
            'photo_url': self.photo_url,
            'total_points': self.total_points,
        }


class Allocation(db.Model):
    __tablename__ = 'allocations'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'player_id', name='uq_allocations_user_player'),
        db.CheckConstraint('points_allocated >= 0', name='ck_allocations_points_nonnegative'),
    )
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    player_id = db.Column(db.Integer, db.ForeignKey('players.id'), nullable=False)
    points_allocated = db.Column(db.Integer, nullable=False)
    user = db.relationship('User', back_populates='allocations')
    player = db.relationship('Player')

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'player_id': self.player_id,
            'points_allocated': self.points_allocated,
        }


class Match(db.Model):
    __tablename__ = 'matches'
    __table_args__ = (
        db.CheckConstraint("home_away in ('HOME','AWAY')", name='ck_matches_home_away'),
    )
    id = db.Column(db.Integer, primary_key=True)
    date = db.Column(db.String(32), nullable=False)
    opponent = db.Column(db.String(128), nullable=False)
    home_away = db.Column(db.String(4), default='HOME')
    status = db.Column(db.String(16), default='final') # upcoming, live, final
    votes = db.relationship('PotmVote', back_populates='match', lazy='dynamic')

    def to_dict(self):
        return {
            'id': self.id,
            'date': self.date,
            'opponent': self.opponent,
            'home_away': self.home_away,
            'status': self.status,
        }


class PotmVote(db.Model):
    __tablename__ = 'potm_votes'
    __table_args__ = (
        db.UniqueConstraint('match_id', 'user_email', name='uq_potm_votes_match_email'),
    )
    id = db.Column(db.Integer, primary_key=True)
    match_id = db.Column(db.Integer, db.ForeignKey('matches.id'), nullable=False)
    player_id = db.Column(db.Integer, db.ForeignKey('players.id'), nullable=False)
    user_email = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    match = db.relationship('Match', back_populates='votes')
    player = db.relationship('Player')

    def to_dict(self):
        return {
            'id': self.id,
            'match_id': self.match_id,
            'player_id': self.player_id,
            'user_email': self.user_email,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
