from cardsync.db.database import create_engine_for, create_session_factory, init_db

__all__ = [
    "create_engine_for",
    "create_session_factory",
    "init_db",
]
