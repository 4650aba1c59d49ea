from .client import build_client
from .handler import FALLBACK_REPLY, EventHandler, RelayHandler

__all__ = ["FALLBACK_REPLY", "EventHandler", "RelayHandler", "build_client"]
