from __future__ import annotations

from sqlalchemy import (
    BigInteger,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class DraftRecord(Base):
    __tablename__ = "drafts"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    date = Column(String, nullable=False)
    seed = Column(BigInteger, nullable=True)
    attempts = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    members = relationship(
        "DraftMember",
        back_populates="draft",
        cascade="all, delete-orphan",
        order_by="DraftMember.id",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<DraftRecord(id={self.id}, title={self.title!r}, members={len(self.members)})>"


class DraftMember(Base):
    __tablename__ = "draft_members"

    id = Column(Integer, primary_key=True)
    draft_id = Column(Integer, ForeignKey("drafts.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    team = Column(BigInteger, nullable=True)
    recipient = Column(String, nullable=False)

    draft = relationship("DraftRecord", back_populates="members")

    __table_args__ = (
        UniqueConstraint("draft_id", "name", name="uq_draft_members_draft_name"),
    )

    def __repr__(self) -> str:
        return (
            "<DraftMember(draft_id={0}, name={1!r}, team={2})>"
        ).format(self.draft_id, self.name, self.team)
