from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import discord

from gptrelay.llm.client import CompletionClient
from gptrelay.llm.errors import parse_error_message

logger = logging.getLogger(__name__)

FALLBACK_REPLY = (
    "Unable to get a response. If this problem continues, "
    "please contact the administrator of the bot."
)
MAX_MESSAGE_LENGTH = 2000


def split_message(text: str, limit: int = MAX_MESSAGE_LENGTH) -> list[str]:
    """Cut `text` into pieces Discord accepts, keeping every character."""
    if len(text) <= limit:
        return [text]
    return [text[i : i + limit] for i in range(0, len(text), limit)]


class EventHandler(ABC):
    """Gateway callbacks the Discord client forwards to."""

    async def on_ready(self, user: Any) -> None:
        pass

    @abstractmethod
    async def on_message(self, message: discord.Message) -> None:
        ...


class RelayHandler(EventHandler):
    """
    Forward every human-authored message to the completion API and reply
    with the answer, or with FALLBACK_REPLY when the call fails.
    """

    def __init__(self, completion_client: CompletionClient):
        self.completion_client = completion_client

    async def on_ready(self, user: Any) -> None:
        logger.info("%s is connected!", getattr(user, "name", user))

    async def on_message(self, message: discord.Message) -> None:
        if message.author.bot:
            return

        try:
            reply = await self.completion_client.complete(message.content)
        except Exception as e:  # noqa: BLE001
            logger.warning("Completion failed for message %s: %s", message.id, parse_error_message(e))
            reply = FALLBACK_REPLY

        await self._send_reply(message, reply)

    async def _send_reply(self, message: discord.Message, text: str) -> None:
        first, *rest = split_message(text)
        try:
            await message.reply(first)
            for chunk in rest:
                await message.channel.send(chunk)
        except discord.DiscordException as e:
            logger.error("Could not reply to message %s: %s", message.id, e)
