from santadraft.db.locks import ReadWriteLock
from santadraft.db.models import Base, DraftMember, DraftRecord
from santadraft.db.session import IN_MEMORY_URL, get_session, init_engine, make_session_factory
from santadraft.db.store import DraftStore

__all__ = [
    "Base",
    "DraftMember",
    "DraftRecord",
    "DraftStore",
    "IN_MEMORY_URL",
    "ReadWriteLock",
    "get_session",
    "init_engine",
    "make_session_factory",
]
