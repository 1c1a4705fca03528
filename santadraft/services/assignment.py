from __future__ import annotations

import random
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Set

from loguru import logger

from santadraft.services import feasibility
from santadraft.services.errors import AssignmentError, SolveExhausted
from santadraft.services.registry import Participant, ParticipantRegistry

DEFAULT_MAX_ATTEMPTS = 1000


class Assignment(Mapping):
    """Read-only giver -> recipient mapping."""

    def __init__(self, pairs: Dict[str, str]) -> None:
        self._pairs = dict(pairs)

    def __getitem__(self, giver: str) -> str:
        return self._pairs[giver]

    def __iter__(self) -> Iterator[str]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __repr__(self) -> str:
        return f"<Assignment(size={len(self)})>"

    def recipient_of(self, giver: str) -> Optional[str]:
        return self._pairs.get(giver)

    def as_dict(self) -> Dict[str, str]:
        return dict(self._pairs)

    def validate(self, registry: ParticipantRegistry) -> None:
        names = registry.names()
        if set(self._pairs) != names:
            raise AssignmentError("Every participant must give exactly one gift.")
        if set(self._pairs.values()) != names or len(set(self._pairs.values())) != len(names):
            raise AssignmentError("Every participant must receive exactly one gift.")
        for giver, recipient in self._pairs.items():
            if giver == recipient:
                raise AssignmentError(f"{giver!r} is assigned to themselves.")
            if registry.get(giver).team_key == registry.get(recipient).team_key:
                raise AssignmentError(f"{giver!r} and {recipient!r} are on the same team.")


@dataclass(frozen=True)
class Solution:
    assignment: Assignment
    attempts: int


def _giver_order(participants: List[Participant], team_sizes, rng: random.Random) -> List[Participant]:
    order = list(participants)
    rng.shuffle(order)
    # Stable sort keeps the shuffle within each team size; big teams go first.
    order.sort(key=lambda p: -team_sizes[p.team_key])
    return order


def _attempt(participants: List[Participant], team_sizes, rng: random.Random) -> Optional[Dict[str, str]]:
    used: Set[str] = set()
    pairs: Dict[str, str] = {}
    for giver in _giver_order(participants, team_sizes, rng):
        candidates = [
            candidate.name
            for candidate in participants
            if candidate.name != giver.name
            and candidate.team_key != giver.team_key
            and candidate.name not in used
        ]
        if not candidates:
            return None
        recipient = rng.choice(candidates)
        pairs[giver.name] = recipient
        used.add(recipient)
    return pairs


def solve(
    registry: ParticipantRegistry,
    rng: Optional[random.Random] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> Solution:
    """Draw a valid assignment by greedy random picks, restarting on dead ends.

    The result is valid but not uniformly distributed over all valid
    assignments: earlier picks shape the candidates left for later givers.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be positive.")
    feasibility.check(registry)

    rng = rng if rng is not None else random.Random()
    participants = registry.participants()
    team_sizes = registry.team_sizes()

    for attempt in range(1, max_attempts + 1):
        pairs = _attempt(participants, team_sizes, rng)
        if pairs is None:
            continue
        assignment = Assignment(pairs)
        assignment.validate(registry)
        logger.bind(participants=len(participants), attempts=attempt).debug("Assignment solved")
        return Solution(assignment=assignment, attempts=attempt)

    logger.bind(participants=len(participants), attempts=max_attempts).warning(
        "Assignment attempts exhausted"
    )
    raise SolveExhausted(max_attempts)
