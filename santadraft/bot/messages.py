from __future__ import annotations

import html
from typing import List, Sequence

from santadraft.bot.keyboards import MAX_TICKET_BUTTONS
from santadraft.bot.utils import clip
from santadraft.services.drafts import Draft
from santadraft.services.errors import DraftError, DuplicateName, Infeasible, InvalidData

# Telegram limits: message text and callback alert text.
MAX_MESSAGE_LENGTH = 4096
MAX_ALERT_LENGTH = 200
MAX_LABEL_LENGTH = 64
# Room left for the "and N more" line.
OVERFLOW_RESERVE = 32

USAGE = (
    "Create a draft with one participant per line:\n\n"
    "<code>/draft Office party | 2026-12-24\n"
    "Alice, 1\n"
    "Bob, 1\n"
    "Carol, 2\n"
    "Dave</code>\n\n"
    "The number after the comma is a team: nobody gives to someone on their own team. "
    "Leave it out for people without a team."
)


def label(text: str) -> str:
    # Clip before escaping so an entity is never cut in half.
    return html.escape(clip(text, MAX_LABEL_LENGTH))


def format_member(name: str, team) -> str:
    text = label(name)
    if team is not None:
        text += f" (team {team})"
    return text


def fit_lines(header: str, lines: Sequence[str], footer: str = "") -> str:
    """Join ``lines`` between ``header`` and ``footer`` within one message.

    Lines that do not fit are replaced by an "and N more" line.
    """
    budget = MAX_MESSAGE_LENGTH - len(header) - len(footer) - OVERFLOW_RESERVE
    kept: List[str] = []
    for index, line in enumerate(lines):
        budget -= len(line) + 1
        if budget < 0:
            kept.append(f"and {len(lines) - index} more")
            break
        kept.append(line)
    return "\n".join([header, *kept, footer]) if footer else "\n".join([header, *kept])


def format_draft_created(draft: Draft) -> str:
    header = f"Draft #{draft.id} <b>{label(draft.title)}</b> on {label(draft.date)} is ready!\n\nParticipants:"
    footer = "\nTap your name below to see who you are giving a gift to."
    if len(draft.members) > MAX_TICKET_BUTTONS:
        footer += (
            f"\nOnly the first {MAX_TICKET_BUTTONS} names have a button. Everyone else can send "
            f"/ticket {draft.id} &lt;your name&gt; to me in a private chat."
        )
    members = [f"- {format_member(member.name, member.team)}" for member in draft.members]
    return fit_lines(header, members, footer)


def format_draft_list(drafts: Sequence[Draft]) -> str:
    if not drafts:
        return "No drafts yet. Use /draft to create one."
    lines = [
        f"#{draft.id} {label(draft.title)} ({label(draft.date)}), {len(draft.members)} participants"
        for draft in drafts
    ]
    return fit_lines("Drafts:", lines)


def format_ticket(giver: str, recipient: str) -> str:
    return f"{giver}, you're giving a gift to {recipient}!"


def format_ticket_alert(giver: str, recipient: str) -> str:
    # Alerts are plain text, so nothing is escaped here.
    return clip(format_ticket(clip(giver, 80), clip(recipient, 80)), MAX_ALERT_LENGTH)


def format_error(error: DraftError) -> str:
    if isinstance(error, DuplicateName):
        return f"{html.escape(error.name)} is listed twice. Every name must be unique."
    if isinstance(error, Infeasible):
        if error.team is None:
            return "At least two participants are needed to draw tickets."
        return (
            f"Team {error.team} has {error.team_size} members but only {error.others} "
            "people are outside it, so nobody could be matched. Add more people or split the team."
        )
    if isinstance(error, InvalidData):
        return html.escape(str(error))
    return "Could not draw tickets for this draft. Please try again."
