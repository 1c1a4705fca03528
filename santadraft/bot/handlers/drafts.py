from __future__ import annotations

import asyncio
import html

from aiogram import F, Router, types
from aiogram.filters import Command, CommandObject

from santadraft.bot.keyboards import TICKET_PREFIX, parse_ticket_callback, tickets_keyboard
from santadraft.bot.messages import (
    USAGE,
    format_draft_created,
    format_draft_list,
    format_error,
    format_ticket,
    format_ticket_alert,
)
from santadraft.bot.utils import check_rate_limit, log_handler_exception
from santadraft.services.drafts import DraftService
from santadraft.services.errors import DraftError
from santadraft.services.parsing import parse_draft_header, parse_participant_lines

router = Router()


@router.message(Command("draft"))
async def draft_command_handler(message: types.Message, command: CommandObject, service: DraftService) -> None:
    if not check_rate_limit(message.from_user.id, "draft"):
        await message.answer("You're doing that too often. Please slow down.")
        return

    if not command.args:
        await message.answer(USAGE)
        return

    header, _, body = command.args.partition("\n")
    try:
        title, date = parse_draft_header(header)
        participants = parse_participant_lines(body.splitlines())
        loop = asyncio.get_running_loop()
        draft = await loop.run_in_executor(None, service.submit, title, date, participants)
    except DraftError as exc:
        await message.answer(format_error(exc))
        return
    except Exception as exc:
        log_handler_exception("draft", message.from_user.id, message.chat.id, exc)
        await message.answer("Something went wrong. Please try again later.")
        return

    try:
        await message.answer(format_draft_created(draft), reply_markup=tickets_keyboard(draft))
    except Exception as exc:
        log_handler_exception("draft", message.from_user.id, message.chat.id, exc)
        await message.answer(f"Draft #{draft.id} was created, but its summary could not be sent.")


@router.message(Command("drafts"))
async def drafts_command_handler(message: types.Message, service: DraftService) -> None:
    if not check_rate_limit(message.from_user.id, "drafts"):
        await message.answer("You're doing that too often. Please slow down.")
        return

    try:
        await message.answer(format_draft_list(service.list_drafts()))
    except Exception as exc:
        log_handler_exception("drafts", message.from_user.id, message.chat.id, exc)
        await message.answer("Something went wrong. Please try again later.")


@router.message(Command("ticket"))
async def ticket_command_handler(message: types.Message, command: CommandObject, service: DraftService) -> None:
    if not check_rate_limit(message.from_user.id, "ticket"):
        await message.answer("You're doing that too often. Please slow down.")
        return

    if message.chat.type != "private":
        await message.answer("Tickets are only shown in a private chat.")
        return

    parts = (command.args or "").split(maxsplit=1)
    if len(parts) < 2 or not parts[0].isdigit():
        await message.answer("Usage: /ticket &lt;draft id&gt; &lt;your name&gt;")
        return

    draft_id, name = int(parts[0]), parts[1].strip()
    try:
        recipient = service.lookup_recipient(draft_id, name)
        if recipient is None:
            await message.answer("No ticket found for that draft and name.")
            return
        await message.answer(format_ticket(html.escape(name), html.escape(recipient)))
    except Exception as exc:
        log_handler_exception("ticket", message.from_user.id, message.chat.id, exc)
        await message.answer("Something went wrong. Please try again later.")


@router.callback_query(F.data.startswith(f"{TICKET_PREFIX}:"))
async def ticket_callback_handler(query: types.CallbackQuery, service: DraftService) -> None:
    if not check_rate_limit(query.from_user.id, "ticket"):
        await query.answer("You're doing that too often. Please slow down.", show_alert=True)
        return

    parsed = parse_ticket_callback(query.data)
    if parsed is None:
        await query.answer("This button is no longer valid.", show_alert=True)
        return

    draft_id, member_index = parsed
    try:
        draft = service.get_draft(draft_id)
        if draft is None or not 0 <= member_index < len(draft.members):
            await query.answer("This draft no longer exists.", show_alert=True)
            return
        giver = draft.members[member_index].name
        await query.answer(format_ticket_alert(giver, draft.assignment[giver]), show_alert=True)
    except Exception as exc:
        chat_id = query.message.chat.id if query.message else None
        log_handler_exception("ticket_button", query.from_user.id, chat_id, exc)
        await query.answer("Something went wrong. Please try again later.", show_alert=True)
