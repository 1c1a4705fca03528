from santadraft.services.assignment import Assignment, Solution, solve
from santadraft.services.drafts import Draft, DraftService, create_draft, lookup_recipient
from santadraft.services.errors import (
    AssignmentError,
    DraftError,
    DuplicateName,
    Infeasible,
    InvalidData,
    SolveExhausted,
)
from santadraft.services.registry import Participant, ParticipantRegistry

__all__ = [
    "Assignment",
    "AssignmentError",
    "Draft",
    "DraftError",
    "DraftService",
    "DuplicateName",
    "Infeasible",
    "InvalidData",
    "Participant",
    "ParticipantRegistry",
    "Solution",
    "SolveExhausted",
    "create_draft",
    "lookup_recipient",
    "solve",
]
