import pytest

from santadraft.services.errors import InvalidData
from santadraft.services.parsing import (
    parse_draft_header,
    parse_participant_line,
    parse_participant_lines,
    parse_participant_payload,
)


def test_line_with_and_without_team():
    assert parse_participant_line("Alice, 1") == ("Alice", 1)
    assert parse_participant_line("  Bob  ") == ("Bob", None)
    assert parse_participant_line("Smith, John, 2") == ("Smith, John", 2)
    assert parse_participant_line("Carol,") == ("Carol", None)


def test_line_with_bad_team():
    with pytest.raises(InvalidData):
        parse_participant_line("Alice, red")


def test_lines_skip_blanks():
    assert parse_participant_lines(["A, 1", "", "   ", "B"]) == [("A", 1), ("B", None)]


def test_header():
    assert parse_draft_header(" Office party | 2026-12-24 ") == ("Office party", "2026-12-24")
    with pytest.raises(InvalidData):
        parse_draft_header("Office party")
    with pytest.raises(InvalidData):
        parse_draft_header("| 2026-12-24")


def test_payload():
    payload = [{"name": "A", "team": 1}, {"name": "B"}, "C"]
    assert parse_participant_payload(payload) == [("A", 1), ("B", None), ("C", None)]
    with pytest.raises(InvalidData):
        parse_participant_payload({"name": "A"})
    with pytest.raises(InvalidData):
        parse_participant_payload([{"team": 1}])
    with pytest.raises(InvalidData):
        parse_participant_payload([3])
