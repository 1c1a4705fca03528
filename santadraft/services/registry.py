from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Dict, Hashable, Iterable, List, Optional, Set, Tuple

from santadraft.services.errors import DuplicateName, InvalidData

# Signed 64-bit range of the integer columns drafts are stored in.
MIN_STORED_INT = -(2**63)
MAX_STORED_INT = 2**63 - 1


@dataclass(frozen=True)
class Participant:
    name: str
    team: Optional[int] = None

    @property
    def team_key(self) -> Hashable:
        """Key used for the same-team exclusion.

        A participant without a team sits alone in a synthetic team, so only
        the "not yourself" rule applies to them.
        """
        if self.team is None:
            return ("solo", self.name)
        return self.team


def normalize_name(name) -> str:
    if not isinstance(name, str):
        raise InvalidData("Participant name must be a string.")
    name = name.strip()
    if not name:
        raise InvalidData("Participant name must not be empty.")
    return name


def normalize_team(team) -> Optional[int]:
    if team is None:
        return None
    if isinstance(team, bool):
        raise InvalidData(f"Invalid team tag: {team!r}.")
    if isinstance(team, str):
        team = team.strip()
        if not team:
            return None
        try:
            team = int(team)
        except ValueError as exc:
            raise InvalidData(f"Invalid team tag: {team!r}.") from exc
    if not isinstance(team, int):
        raise InvalidData(f"Invalid team tag: {team!r}.")
    if team < 0:
        raise InvalidData(f"Team tag must not be negative: {team}.")
    if team > MAX_STORED_INT:
        raise InvalidData(f"Team tag is too large: {team}.")
    return team


class ParticipantRegistry:
    def __init__(self) -> None:
        self._members: Dict[str, Participant] = {}
        self._frozen = False

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, Optional[int]]]) -> "ParticipantRegistry":
        registry = cls()
        for name, team in pairs:
            registry.register(name, team)
        registry.freeze()
        return registry

    def register(self, name, team=None) -> Participant:
        if self._frozen:
            raise InvalidData("Registry is closed for new participants.")
        participant = Participant(normalize_name(name), normalize_team(team))
        if participant.name in self._members:
            raise DuplicateName(participant.name)
        self._members[participant.name] = participant
        return participant

    def freeze(self) -> None:
        self._frozen = True

    def names(self) -> Set[str]:
        return set(self._members)

    def participants(self) -> List[Participant]:
        # Sorted so that a seeded solver does not depend on insertion order.
        return sorted(self._members.values(), key=lambda p: p.name)

    def get(self, name: str) -> Optional[Participant]:
        return self._members.get(name)

    def team_sizes(self) -> Counter:
        return Counter(participant.team_key for participant in self._members.values())

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, name: object) -> bool:
        return name in self._members

    def __repr__(self) -> str:
        return f"<ParticipantRegistry(size={len(self)}, frozen={self._frozen})>"
