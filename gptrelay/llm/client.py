"""
gptrelay/llm/client.py

Single-shot client for an OpenAI-compatible chat completion endpoint.
Every call sends one user turn, no history, and reads back the first choice.
"""

from __future__ import annotations

import logging

import httpx

from .errors import CompletionError
from .models import ChatCompletion, ChatMessage, CompletionRequest

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://api.openai.com/v1/chat/completions"
DEFAULT_MODEL = "gpt-3.5-turbo"
RESPONSE_TIMEOUT_SECONDS = 60.0


class CompletionClient:
    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: str,
        endpoint: str = DEFAULT_ENDPOINT,
        model: str = DEFAULT_MODEL,
        timeout: float = RESPONSE_TIMEOUT_SECONDS,
    ):
        """
        http_client: shared AsyncClient, owned and closed by the caller
        api_key: bearer token for the completion API
        """
        self.http_client = http_client
        self.endpoint = endpoint
        self.model = model
        self.timeout = timeout
        self._headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
        }

    async def ask(self, message: ChatMessage) -> ChatMessage:
        request = CompletionRequest(model=self.model, messages=[message])
        try:
            response = await self.http_client.post(
                self.endpoint,
                json=request.to_payload(),
                headers=self._headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            completion = ChatCompletion.from_dict(response.json())
            reply = completion.first_message()
        except httpx.HTTPError as e:
            raise CompletionError(f"Completion request failed: {e}") from e
        except (ValueError, KeyError, TypeError, IndexError) as e:
            # ValueError covers a body that is not JSON at all
            raise CompletionError(f"Malformed completion response: {e!r}") from e

        logger.debug(
            "Completion %s | model: %s | tokens: %d",
            completion.id,
            completion.model,
            completion.usage.total_tokens,
        )
        return reply

    async def complete(self, user_text: str) -> str:
        """Send `user_text` as a single user turn and return the reply text."""
        reply = await self.ask(ChatMessage(role="user", content=user_text))
        if not reply.content.strip():
            raise CompletionError("Completion returned empty content")
        return reply.content
