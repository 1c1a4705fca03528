from __future__ import annotations

from typing import Optional


class DraftError(RuntimeError):
    kind = "draft_error"

    def to_dict(self) -> dict:
        return {"error": self.kind, "message": str(self)}


class InvalidData(DraftError):
    kind = "invalid_data"


class DuplicateName(DraftError):
    kind = "duplicate_name"

    def __init__(self, name: str) -> None:
        super().__init__(f"Participant {name!r} was already registered.")
        self.name = name

    def to_dict(self) -> dict:
        payload = super().to_dict()
        payload["name"] = self.name
        return payload


class Infeasible(DraftError):
    """No valid matching exists: a team outnumbers everyone outside it."""

    kind = "infeasible"

    def __init__(self, team: Optional[int], team_size: int, others: int) -> None:
        label = "a participant without a team" if team is None else f"team {team}"
        super().__init__(
            f"Cannot match {label}: {team_size} member(s) but only {others} "
            "participant(s) outside it."
        )
        self.team = team
        self.team_size = team_size
        self.others = others

    def to_dict(self) -> dict:
        payload = super().to_dict()
        payload.update(team=self.team, team_size=self.team_size, others=self.others)
        return payload


class SolveExhausted(DraftError):
    kind = "solve_exhausted"

    def __init__(self, attempts: int) -> None:
        super().__init__(f"Failed to generate assignments after {attempts} attempts.")
        self.attempts = attempts


class AssignmentError(DraftError):
    kind = "assignment_error"


class DraftStateError(DraftError):
    kind = "draft_state_error"
