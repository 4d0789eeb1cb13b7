"""
Error manager: named error definitions loaded from a JSON file and rendered
as parameterized messages.

    from error_manager import ErrorManager

    manager = ErrorManager("errors.json")
    manager.load_sync()
    print(manager.format("test", {"name": "fraxken"}))
"""

from .config import Settings
from .events import Event, EventType, Observers
from .exceptions import (
    ArgumentTypeError,
    ConfigurationError,
    ErrorFileIOError,
    ErrorManagerError,
    ParseError,
    StateError,
    TitleLookupError,
    ValidationError,
    is_error_manager_error,
)
from .message import ErrorMessage
from .models import CompiledError, Criticity, ErrorDefinition
from .registry import ErrorManager

__version__ = "1.0.0"

__all__ = [
    "ErrorManager",
    "ErrorMessage",
    "ErrorDefinition",
    "CompiledError",
    "Criticity",
    "Settings",
    "Event",
    "Observers",
    "EventType",
    "ErrorManagerError",
    "ArgumentTypeError",
    "ConfigurationError",
    "ErrorFileIOError",
    "ParseError",
    "ValidationError",
    "StateError",
    "TitleLookupError",
    "is_error_manager_error",
    "__version__",
]
