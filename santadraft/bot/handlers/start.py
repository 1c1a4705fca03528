from aiogram import Router, types
from aiogram.filters import CommandStart

from santadraft.bot.messages import USAGE
from santadraft.bot.utils import check_rate_limit, log_handler_exception

router = Router()


@router.message(CommandStart())
async def command_start_handler(message: types.Message) -> None:
    if not check_rate_limit(message.from_user.id, "start"):
        await message.answer("You're doing that too often. Please slow down.")
        return

    try:
        await message.answer(
            "Hello! I draw Secret Santa tickets.\n\n"
            + USAGE
            + "\n\nUse /drafts to list drafts and /ticket &lt;id&gt; &lt;name&gt; "
            "in a private chat to see your recipient again."
        )
    except Exception as exc:
        log_handler_exception("start", message.from_user.id, message.chat.id, exc)
        await message.answer("Something went wrong. Please try again later.")
