from typing import Iterable

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite

from culers import db

_NATIVE_INSERTS = {
    'sqlite': sqlite.insert,
    'postgresql': postgresql.insert,
}


def upsert(model, values: dict, conflict_columns: Iterable[str], update_columns: Iterable[str]) -> None:
    """Insert a row, or update ``update_columns`` when ``conflict_columns`` already match one.

    Runs inside the caller's transaction; nothing is committed here.
    """
    conflict_columns = list(conflict_columns)
    update_columns = list(update_columns)
    native_insert = _NATIVE_INSERTS.get(db.engine.dialect.name)
    if native_insert is not None:
        stmt = native_insert(model).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=conflict_columns,
            set_={col: stmt.excluded[col] for col in update_columns},
        )
        db.session.execute(stmt)
        return

    # No native upsert: hold a lock on the matching row while deciding
    filters = [getattr(model, col) == values[col] for col in conflict_columns]
    row = db.session.execute(select(model).where(*filters).with_for_update()).scalar_one_or_none()
    if row is None:
        db.session.add(model(**values))
    else:
        for col in update_columns:
            setattr(row, col, values[col])
    db.session.flush()
