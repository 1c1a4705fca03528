from __future__ import annotations

from typing import List, Optional

from sqlalchemy import func, select

from santadraft.db.models import DraftMember, DraftRecord
from santadraft.services.assignment import Assignment
from santadraft.services.drafts import Draft
from santadraft.services.registry import Participant


def to_draft(record: DraftRecord) -> Draft:
    return Draft(
        title=record.title,
        date=record.date,
        members=tuple(Participant(member.name, member.team) for member in record.members),
        assignment=Assignment({member.name: member.recipient for member in record.members}),
        seed=record.seed,
        attempts=record.attempts,
        id=record.id,
        created_at=record.created_at,
    )


def create_draft(session, draft: Draft) -> DraftRecord:
    record = DraftRecord(
        title=draft.title,
        date=draft.date,
        seed=draft.seed,
        attempts=draft.attempts,
    )
    record.members = [
        DraftMember(name=member.name, team=member.team, recipient=draft.assignment[member.name])
        for member in draft.members
    ]
    session.add(record)
    session.flush()
    session.refresh(record)
    return record


def get_draft_by_id(session, draft_id: int) -> Optional[DraftRecord]:
    return session.scalar(select(DraftRecord).where(DraftRecord.id == draft_id))


def list_drafts(session) -> List[DraftRecord]:
    return list(session.scalars(select(DraftRecord).order_by(DraftRecord.id)).all())


def count_drafts(session) -> int:
    return session.scalar(select(func.count()).select_from(DraftRecord))
