from typing import List, Tuple

from flask import current_app

from culers.errors import ValidationError
from culers.models import Allocation, User
from culers.services.identity import resolve_user, run_atomic
from culers.services.registry import is_integer, is_text
from culers.services.upsert import upsert


def coerce_points(value) -> int:
    """Integer value of ``points_allocated``; anything non-numeric counts as 0."""
    if isinstance(value, bool):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return 0


def validate_submission(name, email, allocations) -> List[Tuple[int, int]]:
    """Check a submission and return its ``(player_id, points)`` pairs.

    Nothing is written when this raises.
    """
    if not name or not email or not isinstance(allocations, list) or not allocations:
        raise ValidationError('Submission missing name, email or allocations',
                              'name, email, allocations[] required')
    if not is_text(name) or not is_text(email):
        raise ValidationError(f"Non-string name={name!r} or email={email!r}",
                              'name and email must be non-empty strings')

    entries = []
    seen = set()
    for entry in allocations:
        player_id = entry.get('player_id') if isinstance(entry, dict) else None
        if not player_id:
            raise ValidationError('Allocation entry without player_id', 'player_id missing')
        if not is_integer(player_id):
            raise ValidationError(f"Non-integer player_id={player_id!r}", 'player_id must be an integer')
        if player_id in seen:
            raise ValidationError(f"Duplicate player_id={player_id}", 'each player may appear only once')
        seen.add(player_id)
        points = coerce_points(entry.get('points_allocated'))
        if points < 0:
            raise ValidationError(f"Negative points for player_id={player_id}",
                                  'points_allocated must not be negative')
        entries.append((player_id, points))

    budget = int(current_app.config.get('ALLOCATION_BUDGET', 100))
    total = sum(points for _, points in entries)
    if total != budget:
        raise ValidationError(f"Allocation total {total} != {budget}",
                              f"Total allocated points must equal {budget}")
    return entries


def submit_allocations(name, email, allocations) -> User:
    """Validate and store a user's complete point distribution.

    Each (user, player) pair is upserted; the whole batch commits or rolls
    back together, so an unknown player id leaves earlier rows untouched.
    """
    entries = validate_submission(name, email, allocations)

    def write():
        user = resolve_user(name, email)
        for player_id, points in entries:
            upsert(
                Allocation,
                {'user_id': user.id, 'player_id': player_id, 'points_allocated': points},
                conflict_columns=('user_id', 'player_id'),
                update_columns=('points_allocated',),
            )
        return user

    user = run_atomic('allocation', write)
    current_app.logger.info(f"[allocate] user={user.id} entries={len(entries)}")
    return user
