"""
Entrypoint for the relay bot.

Run with `python -m gptrelay.main` or the `gpt-relay-bot` console script.
"""

import asyncio
import logging
import sys

import httpx

from gptrelay.config.loader import Settings, load_settings
from gptrelay.discord.client import build_client
from gptrelay.discord.handler import RelayHandler
from gptrelay.llm.client import CompletionClient


def setup_logging(debug: bool = False) -> None:
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s: %(message)s")
    if debug:
        logging.getLogger("httpx").setLevel(logging.DEBUG)


async def run_bot(settings: Settings) -> None:
    async with httpx.AsyncClient() as http_client:
        completion_client = CompletionClient(
            http_client,
            settings.openai_token,
            endpoint=settings.endpoint,
            model=settings.model,
            timeout=settings.timeout,
        )
        client = build_client(RelayHandler(completion_client))
        logging.info(f"🚀 Bot starting | model: {settings.model} | endpoint: {settings.endpoint}")
        async with client:
            await client.start(settings.discord_token)


def main() -> None:
    settings = load_settings()
    setup_logging(settings.debug)
    try:
        asyncio.run(run_bot(settings))
    except KeyboardInterrupt:
        pass
    except Exception as e:  # noqa: BLE001
        print(f"Client error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
