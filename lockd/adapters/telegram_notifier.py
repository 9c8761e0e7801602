"""Telegram milestone channel — implements NotificationPort.

Sends achievement messages through a telegram.Bot. Provider errors
surface as NotificationError so the milestone notifier never sees
Telegram types.
"""

from __future__ import annotations

import logging

from telegram import Bot
from telegram.error import TelegramError

from lockd.ports.notification_port import NotificationError

logger = logging.getLogger(__name__)


class TelegramNotifier:
    def __init__(self, bot: Bot) -> None:
        self._bot = bot

    async def send_message(self, user_id: int, text: str) -> None:
        try:
            await self._bot.send_message(chat_id=user_id, text=text)
        except TelegramError as exc:
            raise NotificationError(f"Telegram send to {user_id} failed: {exc}") from exc
        logger.debug("Milestone sent to chat %d", user_id)
