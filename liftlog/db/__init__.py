"""Database package: engine, session, base."""

from liftlog.db.session import async_session_maker, get_db, unit_of_work

__all__ = ["async_session_maker", "get_db", "unit_of_work"]
