import pytest

from santadraft.services.errors import DuplicateName, InvalidData
from santadraft.services.registry import Participant, ParticipantRegistry


def test_register_and_lookup():
    registry = ParticipantRegistry()
    registry.register("Alice", 1)
    registry.register("Bob")
    assert len(registry) == 2
    assert "Alice" in registry
    assert registry.get("Alice").team == 1
    assert registry.get("Bob").team is None
    assert registry.names() == {"Alice", "Bob"}


def test_duplicate_name_is_rejected():
    registry = ParticipantRegistry()
    registry.register("A", 1)
    with pytest.raises(DuplicateName) as excinfo:
        registry.register("A", 2)
    assert excinfo.value.name == "A"
    assert registry.get("A").team == 1


def test_names_are_case_sensitive_and_stripped():
    registry = ParticipantRegistry()
    registry.register("alice")
    registry.register("Alice")
    with pytest.raises(DuplicateName):
        registry.register("  Alice ")
    assert len(registry) == 2


@pytest.mark.parametrize("name", ["", "   ", None, 5])
def test_invalid_names(name):
    with pytest.raises(InvalidData):
        ParticipantRegistry().register(name)


@pytest.mark.parametrize("team", [-1, "x", 1.5, True, "-3", 2**63, 2**70, str(2**70)])
def test_invalid_teams(team):
    with pytest.raises(InvalidData):
        ParticipantRegistry().register("A", team)


def test_team_strings_are_parsed():
    registry = ParticipantRegistry()
    registry.register("A", " 2 ")
    registry.register("B", "")
    registry.register("C", 0)
    assert registry.get("A").team == 2
    assert registry.get("B").team is None
    assert registry.get("C").team == 0


def test_no_team_gets_a_synthetic_team_of_its_own():
    assert Participant("A").team_key != Participant("B").team_key
    assert Participant("A", 0).team_key == Participant("B", 0).team_key
    assert Participant("A").team_key != Participant("A", 0).team_key


def test_team_sizes():
    registry = ParticipantRegistry.from_pairs([("A", 1), ("B", 1), ("C", None), ("D", 2)])
    sizes = registry.team_sizes()
    assert sizes[1] == 2
    assert sizes[2] == 1
    assert sizes[("solo", "C")] == 1


def test_frozen_registry_rejects_new_members():
    registry = ParticipantRegistry.from_pairs([("A", None), ("B", None)])
    with pytest.raises(InvalidData):
        registry.register("C")


def test_participants_order_is_independent_of_insertion():
    first = ParticipantRegistry.from_pairs([("B", 1), ("A", 2), ("C", None)])
    second = ParticipantRegistry.from_pairs([("C", None), ("A", 2), ("B", 1)])
    assert first.participants() == second.participants()


def test_largest_storable_team_is_accepted():
    registry = ParticipantRegistry()
    registry.register("A", 2**63 - 1)
    assert registry.get("A").team == 2**63 - 1
