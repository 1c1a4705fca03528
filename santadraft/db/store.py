from __future__ import annotations

import datetime
from typing import List, Optional

from loguru import logger

from santadraft.db import repo
from santadraft.db.locks import ReadWriteLock
from santadraft.db.models import Base
from santadraft.db.session import IN_MEMORY_URL, get_session, init_engine, make_session_factory
from santadraft.services.drafts import Draft


class DraftStore:
    """Process-wide collection of solved drafts.

    Backed by an in-memory SQLite database by default, so its contents are
    gone after a restart. Tests build one store per case.
    """

    def __init__(self, database_url: str = IN_MEMORY_URL) -> None:
        self.engine = init_engine(database_url)
        Base.metadata.create_all(self.engine)
        self._session_factory = make_session_factory(self.engine)
        self._lock = ReadWriteLock()

    def add_draft(self, draft: Draft) -> Draft:
        if draft.id is not None:
            raise ValueError("Draft was already stored.")
        with self._lock.write():
            with get_session(self._session_factory) as session:
                record = repo.create_draft(session, draft)
                stored = draft.with_identity(
                    record.id, record.created_at or datetime.datetime.utcnow()
                )
        logger.bind(draft_id=stored.id, members=len(stored.members)).debug("Draft stored")
        return stored

    def get_draft(self, draft_id: int) -> Optional[Draft]:
        with self._lock.read():
            with get_session(self._session_factory) as session:
                record = repo.get_draft_by_id(session, draft_id)
                return repo.to_draft(record) if record else None

    def list_drafts(self) -> List[Draft]:
        with self._lock.read():
            with get_session(self._session_factory) as session:
                return [repo.to_draft(record) for record in repo.list_drafts(session)]

    def count(self) -> int:
        with self._lock.read():
            with get_session(self._session_factory) as session:
                return repo.count_drafts(session)

    def close(self) -> None:
        self.engine.dispose()
