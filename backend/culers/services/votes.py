"""Player of the Match voting.

One vote per (match, email): casting again replaces the chosen player and
refreshes the timestamp. The chosen player is not checked against the match.
"""
from typing import List

from flask import current_app
from sqlalchemy import and_, false, func, select

from culers import db
from culers.errors import ValidationError
from culers.models import Player, PotmVote, utcnow
from culers.services.identity import resolve_user, run_atomic
from culers.services.registry import get_match, is_integer, is_text
from culers.services.upsert import upsert


def cast_vote(match_id: int, name, email, player_id) -> None:
    if not name or not email or not player_id:
        raise ValidationError('Vote missing name, email or player_id', 'name, email, player_id required')
    if not is_text(name) or not is_text(email):
        raise ValidationError(f"Non-string name={name!r} or email={email!r}",
                              'name and email must be non-empty strings')
    if not is_integer(player_id):
        raise ValidationError(f"Non-integer player_id={player_id!r}", 'player_id must be an integer')
    get_match(match_id)

    def write():
        # Votes are keyed by raw email; the user row is bookkeeping only
        resolve_user(name, email)
        upsert(
            PotmVote,
            {'match_id': match_id, 'player_id': player_id, 'user_email': email, 'created_at': utcnow()},
            conflict_columns=('match_id', 'user_email'),
            update_columns=('player_id', 'created_at'),
        )

    run_atomic('vote', write)
    current_app.logger.info(f"[vote] match={match_id} email={email} player={player_id}")


def match_results(match_id: int) -> List[dict]:
    """Vote count for every registered player, most votes first, ties by name."""
    votes = func.count(PotmVote.id).label('votes')
    # Ids no integer column can hold match no votes
    same_match = PotmVote.match_id == match_id if is_integer(match_id) else false()
    stmt = (
        select(Player.id, Player.name, votes)
        .outerjoin(PotmVote, and_(PotmVote.player_id == Player.id, same_match))
        .group_by(Player.id, Player.name)
        .order_by(votes.desc(), Player.name.asc(), Player.id.asc())
    )
    return [
        {'player_id': player_id, 'player_name': player_name, 'votes': count}
        for player_id, player_name, count in db.session.execute(stmt).all()
    ]
