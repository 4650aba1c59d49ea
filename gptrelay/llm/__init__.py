from .client import CompletionClient
from .errors import CompletionError, parse_error_message
from .models import ChatCompletion, ChatMessage, Choice, CompletionRequest, Usage

__all__ = [
    "ChatCompletion",
    "ChatMessage",
    "Choice",
    "CompletionClient",
    "CompletionError",
    "CompletionRequest",
    "Usage",
    "parse_error_message",
]
