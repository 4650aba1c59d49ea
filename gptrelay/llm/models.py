"""
Wire shapes of the chat completion API.

Only the fields the bot reads or sends are modelled. Parsing is strict: a
response missing any of them raises, and the client turns that into a
CompletionError.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Optional


@dataclass(frozen=True)
class ChatMessage:
    role: Literal["system", "user", "assistant"]
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChatMessage":
        content = data["content"]
        if not isinstance(content, str):
            raise TypeError(f"message content must be a string, got {type(content).__name__}")
        return cls(role=data["role"], content=content)


@dataclass(frozen=True)
class CompletionRequest:
    model: str
    messages: list[ChatMessage] = field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        return {"model": self.model, "messages": [m.to_dict() for m in self.messages]}


@dataclass(frozen=True)
class Usage:
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Usage":
        return cls(
            prompt_tokens=int(data["prompt_tokens"]),
            completion_tokens=int(data["completion_tokens"]),
            total_tokens=int(data["total_tokens"]),
        )


@dataclass(frozen=True)
class Choice:
    message: ChatMessage
    finish_reason: Optional[str]
    index: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Choice":
        return cls(
            message=ChatMessage.from_dict(data["message"]),
            finish_reason=data.get("finish_reason"),
            index=int(data["index"]),
        )


@dataclass(frozen=True)
class ChatCompletion:
    id: str
    object: str
    created: int
    model: str
    usage: Usage
    choices: list[Choice]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChatCompletion":
        if not isinstance(data, dict):
            raise TypeError(f"completion body must be an object, got {type(data).__name__}")
        choices = data["choices"]
        if not isinstance(choices, list):
            raise TypeError(f"'choices' must be a list, got {type(choices).__name__}")
        return cls(
            id=data["id"],
            object=data["object"],
            created=int(data["created"]),
            model=data["model"],
            usage=Usage.from_dict(data["usage"]),
            choices=[Choice.from_dict(c) for c in choices],
        )

    def first_message(self) -> ChatMessage:
        if not self.choices:
            raise IndexError("completion has no choices")
        return self.choices[0].message
