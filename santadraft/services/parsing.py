from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from santadraft.services.errors import InvalidData
from santadraft.services.registry import normalize_name, normalize_team


def parse_participant_line(line: str) -> Tuple[str, Optional[int]]:
    """Parse ``"name"`` or ``"name, team"``.

    Only the last comma separates the team, so a name containing commas needs
    an explicit team.
    """
    if "," not in line:
        return normalize_name(line), None
    name, team = line.rsplit(",", 1)
    return normalize_name(name), normalize_team(team)


def parse_participant_lines(lines: Iterable[str]) -> List[Tuple[str, Optional[int]]]:
    return [parse_participant_line(line) for line in lines if line.strip()]


def parse_draft_header(text: str) -> Tuple[str, str]:
    """Split ``"<title> | <date>"``."""
    if "|" not in text:
        raise InvalidData("Expected '<title> | <date>'.")
    title, date = text.split("|", 1)
    title, date = title.strip(), date.strip()
    if not title or not date:
        raise InvalidData("Both title and date are required.")
    return title, date


def parse_participant_payload(items) -> List[Tuple[str, Optional[int]]]:
    """Turn a JSON ``participants`` array into (name, team) pairs."""
    if not isinstance(items, list):
        raise InvalidData("participants must be a list.")
    pairs: List[Tuple[str, Optional[int]]] = []
    for item in items:
        if isinstance(item, str):
            pairs.append((item, None))
        elif isinstance(item, dict):
            if "name" not in item:
                raise InvalidData("Each participant needs a name.")
            pairs.append((item["name"], item.get("team")))
        else:
            raise InvalidData(f"Invalid participant entry: {item!r}.")
    return pairs
