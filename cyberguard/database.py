"""Persistence gateway: the only code that talks to the database session."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from flask import Flask, current_app, g
from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError

from cyberguard.extensions import db

Params = Optional[Mapping[str, Any]]

UNIQUE = 'unique'
FOREIGN_KEY = 'foreign_key'
OTHER = 'other'

_SQLITE_KINDS = {
    'SQLITE_CONSTRAINT_UNIQUE': UNIQUE,
    'SQLITE_CONSTRAINT_PRIMARYKEY': UNIQUE,
    'SQLITE_CONSTRAINT_FOREIGNKEY': FOREIGN_KEY,
}
_SQLSTATE_KINDS = {
    '23505': UNIQUE,
    '23503': FOREIGN_KEY,
}


class DatabaseError(Exception):
    """Raised for any driver failure, tagged with the violated constraint kind."""

    def __init__(self, kind: str, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


@dataclass
class ExecuteResult:
    inserted_id: Optional[int]
    rows_affected: int


def constraint_kind(exc: BaseException) -> str:
    """Classify a driver exception by its error code, never by its message."""
    orig = getattr(exc, 'orig', exc)
    name = getattr(orig, 'sqlite_errorname', None)
    if name in _SQLITE_KINDS:
        return _SQLITE_KINDS[name]
    sqlstate = getattr(orig, 'pgcode', None) or getattr(orig, 'sqlstate', None)
    if sqlstate in _SQLSTATE_KINDS:
        return _SQLSTATE_KINDS[sqlstate]
    return OTHER


def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute('PRAGMA foreign_keys=ON')
    cursor.close()


class Database:
    """Parameterized query/execute/get_one over a SQLAlchemy session.

    Statements use named binds (``:email``). Each ``execute`` commits on its
    own unless it runs inside ``transaction()``.
    """

    def __init__(self, session) -> None:
        self._session = session
        self._depth = 0

    @staticmethod
    def connect(app: Flask) -> None:
        """Bind the extension to ``app`` and create any missing tables."""
        # Registers the tables on db.metadata
        import cyberguard.models  # noqa: F401

        db.init_app(app)
        with app.app_context():
            if db.engine.dialect.name == 'sqlite':
                event.listen(db.engine, 'connect', _enable_foreign_keys)
            try:
                db.create_all()
            except SQLAlchemyError as exc:
                app.logger.critical('Schema creation failed: %s', exc)
                raise DatabaseError(constraint_kind(exc), 'Schema creation failed') from exc
            app.logger.info('Connected to %s', db.engine.url.render_as_string(hide_password=True))

    def _run(self, sql: str, params: Params):
        try:
            return self._session.execute(text(sql), dict(params or {}))
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise DatabaseError(constraint_kind(exc), str(getattr(exc, 'orig', exc))) from exc

    def query(self, sql: str, params: Params = None) -> List[Dict[str, Any]]:
        result = self._run(sql, params)
        return [dict(row) for row in result.mappings().all()]

    def get_one(self, sql: str, params: Params = None) -> Optional[Dict[str, Any]]:
        row = self._run(sql, params).mappings().first()
        return dict(row) if row is not None else None

    def execute(self, sql: str, params: Params = None) -> ExecuteResult:
        result = self._run(sql, params)
        outcome = ExecuteResult(inserted_id=result.lastrowid, rows_affected=result.rowcount)
        if self._depth == 0:
            self._commit()
        return outcome

    @contextmanager
    def transaction(self):
        """Group several statements into one commit; roll back on any error."""
        self._depth += 1
        try:
            yield self
        except Exception:
            self._depth -= 1
            self._session.rollback()
            raise
        self._depth -= 1
        if self._depth == 0:
            self._commit()

    def _commit(self) -> None:
        try:
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise DatabaseError(constraint_kind(exc), str(getattr(exc, 'orig', exc))) from exc

    def close(self) -> None:
        if hasattr(self._session, 'remove'):
            self._session.remove()
        else:
            self._session.close()


def get_store() -> Database:
    """Return the request-scoped gateway, creating it on first use."""
    if 'store' not in g:
        g.store = Database(db.session)
    return g.store


def close_store(exception=None) -> None:
    store = g.pop('store', None)
    if store is not None:
        store.close()
        if exception is not None:
            current_app.logger.debug('Store released after error: %s', exception)
