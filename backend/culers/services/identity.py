from typing import Callable, Optional, TypeVar

from flask import current_app
from sqlalchemy.exc import IntegrityError

from culers import db
from culers.errors import ConflictError, CulersError, WriteFailure
from culers.models import User

T = TypeVar('T')


def find_user(email: str) -> Optional[User]:
    return User.query.filter_by(email=email).first()


def resolve_user(name: str, email: str) -> User:
    """Return the user registered under ``email``, creating it on first contact.

    An existing user's stored name is never overwritten. The new row is flushed
    immediately so a concurrent first-time insert of the same email fails here,
    as a ConflictError, rather than later in the caller's transaction.
    """
    user = find_user(email)
    if user:
        return user
    user = User(name=name, email=email)
    db.session.add(user)
    try:
        db.session.flush()
    except IntegrityError as exc:
        db.session.rollback()
        raise ConflictError(f"User with email {email} was created concurrently") from exc
    current_app.logger.info(f"[user] created user={user.id} email={email}")
    return user


def run_atomic(operation: str, write: Callable[[], T]) -> T:
    """Run ``write`` and commit it as one transaction.

    A lost identity race is retried once, so the second attempt finds the user
    the other writer created. Any other failure rolls the whole transaction
    back and surfaces as a WriteFailure; the cause is logged only.
    """
    for attempt in range(2):
        try:
            result = write()
            db.session.commit()
            return result
        except ConflictError as exc:
            db.session.rollback()
            if attempt:
                current_app.logger.error(f"[{operation}] identity conflict persisted after retry: {exc}")
                raise WriteFailure(operation, str(exc)) from exc
            current_app.logger.warning(f"[{operation}] identity conflict, retrying: {exc}")
        except CulersError:
            db.session.rollback()
            raise
        except Exception as exc:
            db.session.rollback()
            current_app.logger.exception(f"[{operation}] write rolled back")
            raise WriteFailure(operation, str(exc)) from exc
