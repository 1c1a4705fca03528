from __future__ import annotations

import datetime
import enum
import random
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence, Tuple

from loguru import logger

from santadraft.services import feasibility
from santadraft.services.assignment import DEFAULT_MAX_ATTEMPTS, Assignment, solve
from santadraft.services.errors import DraftError, DraftStateError, InvalidData
from santadraft.services.registry import MAX_STORED_INT, MIN_STORED_INT, Participant, ParticipantRegistry

if TYPE_CHECKING:
    from santadraft.db.store import DraftStore


class DraftState(str, enum.Enum):
    COLLECTING = "collecting"
    CHECKED = "checked"
    SOLVED = "solved"
    REJECTED = "rejected"


@dataclass(frozen=True)
class Draft:
    title: str
    date: str
    members: Tuple[Participant, ...]
    assignment: Assignment
    seed: Optional[int] = None
    attempts: int = 1
    id: Optional[int] = None
    created_at: Optional[datetime.datetime] = None

    def member_names(self) -> List[str]:
        return [member.name for member in self.members]

    def with_identity(self, draft_id: int, created_at: datetime.datetime) -> "Draft":
        return replace(self, id=draft_id, created_at=created_at)


def _require_text(value, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidData(f"{field} must not be empty.")
    return value.strip()


def _resolve_seed(seed) -> int:
    if seed is None:
        return random.SystemRandom().randint(1, 2**31 - 1)
    if isinstance(seed, bool):
        raise InvalidData(f"Invalid seed: {seed!r}.")
    if isinstance(seed, float) and not seed.is_integer():
        raise InvalidData(f"Seed must be a whole number: {seed!r}.")
    try:
        seed = int(seed)
    except (TypeError, ValueError, OverflowError) as exc:
        raise InvalidData(f"Invalid seed: {seed!r}.") from exc
    if not MIN_STORED_INT <= seed <= MAX_STORED_INT:
        raise InvalidData(f"Seed is out of range: {seed}.")
    return seed


class DraftBuilder:
    """Walks one submission through collecting, checking and solving."""

    def __init__(self, title: str, date: str) -> None:
        self.title = _require_text(title, "Title")
        self.date = _require_text(date, "Date")
        self.registry = ParticipantRegistry()
        self.state = DraftState.COLLECTING
        self.rejection: Optional[DraftError] = None

    def _expect(self, state: DraftState) -> None:
        if self.state != state:
            raise DraftStateError(f"Draft is {self.state.value}, expected {state.value}.")

    def _reject(self, error: DraftError) -> DraftError:
        self.state = DraftState.REJECTED
        self.rejection = error
        return error

    def add(self, name, team=None) -> Participant:
        self._expect(DraftState.COLLECTING)
        try:
            return self.registry.register(name, team)
        except DraftError as exc:
            self._reject(exc)
            raise

    def check(self) -> None:
        self._expect(DraftState.COLLECTING)
        if not len(self.registry):
            raise self._reject(InvalidData("At least one participant is required."))
        self.registry.freeze()
        try:
            feasibility.check(self.registry)
        except DraftError as exc:
            self._reject(exc)
            raise
        self.state = DraftState.CHECKED

    def solve(
        self,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> Draft:
        self._expect(DraftState.CHECKED)
        try:
            if rng is None:
                seed = _resolve_seed(seed)
                rng = random.Random(seed)
            solution = solve(self.registry, rng=rng, max_attempts=max_attempts)
        except DraftError as exc:
            self._reject(exc)
            raise
        self.state = DraftState.SOLVED
        return Draft(
            title=self.title,
            date=self.date,
            members=tuple(self.registry.participants()),
            assignment=solution.assignment,
            seed=seed,
            attempts=solution.attempts,
        )


def create_draft(
    title: str,
    date: str,
    participants: Iterable[Tuple[str, Optional[int]]],
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> Draft:
    builder = DraftBuilder(title, date)
    for pair in participants:
        try:
            name, team = pair
        except (TypeError, ValueError) as exc:
            raise InvalidData(f"Invalid participant entry: {pair!r}.") from exc
        builder.add(name, team)
    builder.check()
    return builder.solve(rng=rng, seed=seed, max_attempts=max_attempts)


def lookup_recipient(draft: Draft, member_name: str) -> Optional[str]:
    return draft.assignment.recipient_of(member_name)


class DraftService:
    def __init__(self, store: "DraftStore", max_attempts: int = DEFAULT_MAX_ATTEMPTS) -> None:
        self.store = store
        self.max_attempts = max_attempts

    def submit(
        self,
        title: str,
        date: str,
        participants: Sequence[Tuple[str, Optional[int]]],
        seed: Optional[int] = None,
    ) -> Draft:
        try:
            draft = create_draft(title, date, participants, seed=seed, max_attempts=self.max_attempts)
        except DraftError as exc:
            logger.bind(kind=exc.kind, title=title).info("Draft rejected: {error}", error=str(exc))
            raise
        stored = self.store.add_draft(draft)
        logger.bind(draft_id=stored.id, seed=stored.seed, attempts=stored.attempts).info(
            "Draft created"
        )
        return stored

    def list_drafts(self) -> List[Draft]:
        return self.store.list_drafts()

    def get_draft(self, draft_id: int) -> Optional[Draft]:
        return self.store.get_draft(draft_id)

    def lookup_recipient(self, draft_id: int, member_name: str) -> Optional[str]:
        draft = self.store.get_draft(draft_id)
        if draft is None:
            return None
        return lookup_recipient(draft, member_name)
