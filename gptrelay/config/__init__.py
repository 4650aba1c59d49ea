from .loader import Settings, load_settings
from .validator import ConfigValidationError

__all__ = ["ConfigValidationError", "Settings", "load_settings"]
