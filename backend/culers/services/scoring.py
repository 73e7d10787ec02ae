from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Tuple

from flask import current_app
from sqlalchemy import func, select

from culers import db
from culers.models import Allocation, Player, User

# Allocated points are a percentage of the player's season score
POINTS_SCALE = 100


def portfolio_points(allocations: Iterable[Tuple[int, int]], totals: Dict[int, int]) -> float:
    """Score one user's ``(player_id, points_allocated)`` pairs against season totals.

    Products are summed as integers and divided once, so the result does not
    depend on the order of the allocations.
    """
    weighted = sum(points * totals.get(player_id, 0) for player_id, points in allocations)
    return weighted / POINTS_SCALE


def leaderboard(totals: Optional[Dict[int, int]] = None, limit: Optional[int] = None) -> List[dict]:
    """Rank every user by portfolio score, highest first, ties by user id.

    Without ``totals`` the ranking runs in the database against current
    season scores. A ``totals`` mapping (player id to season score) replaces
    those scores for this call only. Nothing is cached.
    """
    if limit is None:
        limit = int(current_app.config.get('LEADERBOARD_LIMIT', 100))
    if totals is None:
        return _ranked_from_store(limit)
    return _ranked_with_totals(totals, limit)


def _row(user_id, name, email, score) -> dict:
    return {'user_id': user_id, 'name': name, 'email': email, 'portfolio_points': score}


def _ranked_from_store(limit: int) -> List[dict]:
    # Integer sum of points x season score; a user with no allocations sums to 0
    weighted = func.coalesce(func.sum(Allocation.points_allocated * Player.total_points), 0).label('weighted')
    stmt = (
        select(User.id, User.name, User.email, weighted)
        .outerjoin(Allocation, Allocation.user_id == User.id)
        .outerjoin(Player, Player.id == Allocation.player_id)
        .group_by(User.id, User.name, User.email)
        .order_by(weighted.desc(), User.id.asc())
        .limit(limit)
    )
    return [
        _row(user_id, name, email, int(total) / POINTS_SCALE)
        for user_id, name, email, total in db.session.execute(stmt).all()
    ]


def _ranked_with_totals(totals: Dict[int, int], limit: int) -> List[dict]:
    by_user = defaultdict(list)
    rows = db.session.execute(
        select(Allocation.user_id, Allocation.player_id, Allocation.points_allocated)
    ).all()
    for user_id, player_id, points in rows:
        by_user[user_id].append((player_id, points))

    board = [
        _row(user.id, user.name, user.email, portfolio_points(by_user.get(user.id, ()), totals))
        for user in User.query.all()
    ]
    board.sort(key=lambda row: (-row['portfolio_points'], row['user_id']))
    return board[:limit]
