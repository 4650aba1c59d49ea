from __future__ import annotations

import discord

from .handler import EventHandler


def build_client(handler: EventHandler) -> discord.Client:
    """
    Create the gateway client and route its events to `handler`.

    Only direct messages are subscribed to.
    """
    intents = discord.Intents.none()
    intents.dm_messages = True
    intents.message_content = True
    client = discord.Client(intents=intents)

    @client.event
    async def on_ready() -> None:
        await handler.on_ready(client.user)

    @client.event
    async def on_message(message: discord.Message) -> None:
        await handler.on_message(message)

    return client
