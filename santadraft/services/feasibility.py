from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Hashable, List, Optional, Tuple

from santadraft.services.errors import Infeasible
from santadraft.services.registry import ParticipantRegistry


@dataclass(frozen=True)
class FeasibilityReport:
    team_sizes: Dict[Hashable, int]
    total: int

    def others(self, team_key: Hashable) -> int:
        return self.total - self.team_sizes[team_key]

    def violations(self) -> List[Tuple[Hashable, int, int]]:
        """Teams with more members than participants outside them, largest first."""
        found = [
            (team_key, size, self.total - size)
            for team_key, size in self.team_sizes.items()
            if size > self.total - size
        ]
        found.sort(key=lambda item: (-item[1], _sort_key(item[0])))
        return found

    @property
    def feasible(self) -> bool:
        return not self.violations()


def _sort_key(team_key: Hashable) -> Tuple[int, int, str]:
    if isinstance(team_key, int):
        return (0, team_key, "")
    return (1, 0, str(team_key[1]))


def _public_team(team_key: Hashable) -> Optional[int]:
    return team_key if isinstance(team_key, int) else None


def inspect(registry: ParticipantRegistry) -> FeasibilityReport:
    return FeasibilityReport(team_sizes=dict(registry.team_sizes()), total=len(registry))


def check(registry: ParticipantRegistry) -> None:
    """Raise Infeasible unless every team fits into the participants outside it.

    Each giver in team t needs a distinct recipient outside t, so
    team_size(t) <= total - team_size(t) is necessary; it is also sufficient
    for a derangement that avoids same-team pairs to exist.
    """
    violations = inspect(registry).violations()
    if violations:
        team_key, size, others = violations[0]
        raise Infeasible(_public_team(team_key), size, others)
