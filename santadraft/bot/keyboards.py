from typing import Optional, Tuple

from aiogram.utils.keyboard import InlineKeyboardBuilder

from santadraft.bot.utils import clip
from santadraft.services.drafts import Draft

TICKET_PREFIX = "ticket"
MAX_BUTTON_TEXT = 64
# Telegram rejects inline keyboards with more buttons than this.
MAX_TICKET_BUTTONS = 100


def ticket_callback_data(draft_id: int, member_index: int) -> str:
    # Names can exceed the 64-byte callback limit, so buttons carry positions.
    return f"{TICKET_PREFIX}:{draft_id}:{member_index}"


def parse_ticket_callback(data: Optional[str]) -> Optional[Tuple[int, int]]:
    if not data:
        return None
    parts = data.split(":")
    if len(parts) != 3 or parts[0] != TICKET_PREFIX:
        return None
    try:
        return int(parts[1]), int(parts[2])
    except ValueError:
        return None


def tickets_keyboard(draft: Draft):
    keyboard = InlineKeyboardBuilder()
    for index, member in enumerate(draft.members[:MAX_TICKET_BUTTONS]):
        keyboard.button(text=clip(member.name, MAX_BUTTON_TEXT), callback_data=ticket_callback_data(draft.id, index))
    keyboard.adjust(2)
    return keyboard.as_markup()
