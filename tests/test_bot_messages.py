from santadraft.bot.keyboards import MAX_TICKET_BUTTONS, parse_ticket_callback, ticket_callback_data, tickets_keyboard
from santadraft.bot.messages import (
    MAX_ALERT_LENGTH,
    MAX_MESSAGE_LENGTH,
    format_draft_created,
    format_draft_list,
    format_error,
    format_ticket_alert,
)
from santadraft.db import DraftStore
from santadraft.services.drafts import create_draft
from santadraft.services.errors import DuplicateName, Infeasible, InvalidData, SolveExhausted


def stored_draft():
    store = DraftStore()
    return store.add_draft(create_draft("<Party>", "2026-12-24", [("A", 1), ("B", 2), ("C", None)], seed=2))


def test_draft_created_message_escapes_html():
    text = format_draft_created(stored_draft())
    assert "&lt;Party&gt;" in text
    assert "- A (team 1)" in text
    assert "- C\n" in text


def test_draft_list():
    assert "No drafts yet" in format_draft_list([])
    text = format_draft_list([stored_draft()])
    assert "#1 &lt;Party&gt; (2026-12-24), 3 participants" in text


def test_error_messages():
    assert "listed twice" in format_error(DuplicateName("A"))
    assert "Team 4 has 3 members" in format_error(Infeasible(4, 3, 0))
    assert "two participants" in format_error(Infeasible(None, 1, 0))
    assert format_error(InvalidData("Title must not be empty.")) == "Title must not be empty."
    assert "try again" in format_error(SolveExhausted(10))


def test_ticket_callback_round_trip():
    assert parse_ticket_callback(ticket_callback_data(7, 2)) == (7, 2)
    assert parse_ticket_callback("ticket:x:1") is None
    assert parse_ticket_callback("join") is None
    assert parse_ticket_callback(None) is None


def test_tickets_keyboard_has_a_button_per_member():
    draft = stored_draft()
    markup = tickets_keyboard(draft)
    buttons = [button for row in markup.inline_keyboard for button in row]
    assert [button.text for button in buttons] == ["A", "B", "C"]
    assert buttons[1].callback_data == ticket_callback_data(draft.id, 1)


def crowded_draft(count=150, name_length=60):
    participants = [(f"{index:03d}" + "&" * (name_length - 3), None) for index in range(count)]
    return DraftStore().add_draft(create_draft("Crowd", "2026-12-24", participants, seed=3))


def test_crowded_draft_fits_in_one_message():
    draft = crowded_draft()
    text = format_draft_created(draft)
    assert len(text) <= MAX_MESSAGE_LENGTH
    assert "more\n" in text
    assert f"/ticket {draft.id}" in text


def test_crowded_keyboard_is_capped():
    draft = crowded_draft()
    buttons = [button for row in tickets_keyboard(draft).inline_keyboard for button in row]
    assert len(buttons) == MAX_TICKET_BUTTONS
    assert buttons[-1].callback_data == ticket_callback_data(draft.id, MAX_TICKET_BUTTONS - 1)


def test_small_draft_lists_everyone_without_overflow():
    text = format_draft_created(stored_draft())
    assert "more" not in text
    assert "/ticket" not in text


def test_long_title_is_clipped_without_breaking_entities():
    draft = create_draft("&" * 500, "2026-12-24", [("A", None), ("B", None)], seed=1)
    text = format_draft_created(draft)
    assert len(text) < MAX_MESSAGE_LENGTH
    assert "&amp;&amp;..." in text


def test_ticket_alert_is_capped():
    alert = format_ticket_alert("G" * 300, "R" * 300)
    assert len(alert) <= MAX_ALERT_LENGTH
    assert alert.startswith("GGG")
    assert format_ticket_alert("A", "B") == "A, you're giving a gift to B!"
