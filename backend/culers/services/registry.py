"""Player and match reference data.

Player ``total_points`` is owned here: it changes only through
``adjust_points`` and is only read by the scoring engine.
"""
from typing import List, Optional

from flask import current_app
from sqlalchemy import select

from culers import db
from culers.errors import NotFoundError, ValidationError, WriteFailure
from culers.models import Player, Match, HOME_AWAY_VALUES, MATCH_STATUSES

# Integer columns are 64-bit signed
MIN_INTEGER = -2 ** 63
MAX_INTEGER = 2 ** 63 - 1


def is_integer(value) -> bool:
    """True for a non-bool int that fits an integer column."""
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and MIN_INTEGER <= value <= MAX_INTEGER
    )


def is_text(value) -> bool:
    return isinstance(value, str) and value != ''


def require_text(value, field: str) -> str:
    if not is_text(value):
        raise ValidationError(f"Invalid {field}={value!r}", f"{field} must be a non-empty string")
    return value


def optional_text(value, field: str) -> str:
    if value is None:
        return ''
    if not isinstance(value, str):
        raise ValidationError(f"Invalid {field}={value!r}", f"{field} must be a string")
    return value


def list_players() -> List[Player]:
    return Player.query.order_by(Player.id.asc()).all()


def get_player(player_id: int) -> Player:
    player = db.session.get(Player, player_id) if is_integer(player_id) else None
    if player is None:
        raise NotFoundError('Player', player_id)
    return player


def create_player(name: str, club: Optional[str] = None, photo_url: Optional[str] = None) -> Player:
    if not name:
        raise ValidationError('Player name missing', 'name required')
    require_text(name, 'name')
    player = Player(
        name=name,
        club=optional_text(club, 'club'),
        photo_url=optional_text(photo_url, 'photo_url'),
        total_points=0,
    )
    db.session.add(player)
    _commit('player creation')
    current_app.logger.info(f"[player] created player={player.id} name={name}")
    return player


def adjust_points(player_id: int, delta=None, set_to=None) -> Player:
    """Set and/or shift a player's season score.

    ``set_to`` is applied first, then ``delta``; both may be given in one call.
    """
    for label, value in (('set', set_to), ('delta', delta)):
        if value is not None and not is_integer(value):
            raise ValidationError(f"Non-integer {label}={value!r}", f"{label} must be an integer")
    if not is_integer(player_id):
        raise NotFoundError('Player', player_id)

    player = db.session.execute(
        select(Player).where(Player.id == player_id).with_for_update()
    ).scalar_one_or_none()
    if player is None:
        raise NotFoundError('Player', player_id)

    previous = player.total_points or 0
    new_total = previous
    if set_to is not None:
        new_total = set_to
    if delta is not None:
        new_total = new_total + delta
    if not is_integer(new_total):
        db.session.rollback()
        raise ValidationError(f"Total {new_total} out of range for player={player_id}",
                              'total_points out of range')
    player.total_points = new_total
    _commit('points update')
    current_app.logger.info(f"[points] player={player_id} {previous} -> {new_total}")
    return player


def list_matches() -> List[Match]:
    return Match.query.order_by(Match.date.desc(), Match.id.desc()).all()


def get_match(match_id: int) -> Match:
    match = db.session.get(Match, match_id) if is_integer(match_id) else None
    if match is None:
        raise NotFoundError('Match', match_id)
    return match


def create_match(date: str, opponent: str, home_away: Optional[str] = None, status: Optional[str] = None) -> Match:
    if not date or not opponent:
        raise ValidationError('Match date or opponent missing', 'date and opponent required')
    require_text(date, 'date')
    require_text(opponent, 'opponent')
    home_away = home_away or 'HOME'
    status = status or 'final'
    if not isinstance(home_away, str) or home_away not in HOME_AWAY_VALUES:
        raise ValidationError(f"Invalid home_away={home_away!r}", 'home_away must be HOME or AWAY')
    if not isinstance(status, str) or status not in MATCH_STATUSES:
        raise ValidationError(f"Invalid status={status!r}", 'status must be one of upcoming, live, final')
    match = Match(date=date, opponent=opponent, home_away=home_away, status=status)
    db.session.add(match)
    _commit('match creation')
    current_app.logger.info(f"[match] created match={match.id} {date} vs {opponent}")
    return match


def _commit(operation: str) -> None:
    try:
        db.session.commit()
    except Exception as exc:
        db.session.rollback()
        current_app.logger.exception(f"[{operation}] write rolled back")
        raise WriteFailure(operation, str(exc)) from exc
