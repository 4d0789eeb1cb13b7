from __future__ import annotations

import json
import traceback
from typing import Any, Dict, Mapping, Optional

# Prefix of the serialized ``name`` field, used to recognise our errors once
# they have been turned into plain dicts.
ERROR_NAMESPACE = "ErrorManager"


class ErrorManagerError(Exception):
    """Base error for the error manager.

    Every subclass carries a ``kind`` discriminant so callers can tell the
    variants apart without isinstance chains, plus an optional ``context``
    mapping with structured details.
    """

    kind: str = "Unknown"

    def __init__(self, message: str, *, context: Optional[Mapping[str, Any]] = None):
        self.message = message
        self.context: Dict[str, Any] = dict(context or {})
        super().__init__(message)

    @property
    def name(self) -> str:
        return f"{ERROR_NAMESPACE}::{self.kind}"

    def to_dict(self) -> Dict[str, Any]:
        stack = None
        if self.__traceback__ is not None:
            stack = "".join(traceback.format_exception(type(self), self, self.__traceback__))
        return {
            "name": self.name,
            "kind": self.kind,
            "message": self.message,
            "context": self.context,
            "stack": stack,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)


class ArgumentTypeError(ErrorManagerError, TypeError):
    """Raised when a constructor or call receives a value of the wrong type."""

    kind = "ArgumentType"


class ConfigurationError(ErrorManagerError, ValueError):
    """Raised when an input is well-typed but rejected (e.g. not a .json file)."""

    kind = "Configuration"


class ErrorFileIOError(ErrorManagerError, OSError):
    """Raised when the error file is missing or cannot be read."""

    kind = "IO"

    def __init__(self, path: Any, reason: str):
        self.path = path
        super().__init__(f"Unable to read error file {path}: {reason}", context={"path": str(path)})


class ParseError(ErrorManagerError, ValueError):
    kind = "Parse"

    def __init__(self, path: Any, message: str, lineno: Optional[int] = None, colno: Optional[int] = None):
        self.path = path
        self.lineno = lineno
        self.colno = colno
        location = f" (line {lineno}, column {colno})" if lineno is not None and colno is not None else ""
        super().__init__(
            f"Failed to parse JSON at {path}{location}: {message}",
            context={"path": str(path), "lineno": lineno, "colno": colno},
        )


class ValidationError(ErrorManagerError, ValueError):
    """Raised when an error payload does not match the error-definition schema.

    ``errors`` holds the individual violations as human readable lines.
    """

    kind = "Validation"

    def __init__(self, message: str, errors: Optional[list[str]] = None, *, context: Optional[Mapping[str, Any]] = None):
        self.errors = list(errors or [])
        super().__init__(message, context=context)

    def to_human(self) -> str:
        parts = [self.message]
        parts.extend(f" - {line}" for line in self.errors)
        return "\n".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["errors"] = list(self.errors)
        return data


class StateError(ErrorManagerError, RuntimeError):
    """Raised when an operation needs a loaded registry and none is loaded."""

    kind = "State"


class TitleLookupError(ErrorManagerError, LookupError):
    kind = "Lookup"

    def __init__(self, title: str):
        self.title = title
        super().__init__(f"No error(s) has been found with title {title}", context={"title": title})


def is_error_manager_error(obj: Any) -> bool:
    """Tell whether ``obj`` is one of our errors, live or serialized."""
    if isinstance(obj, ErrorManagerError):
        return True
    if isinstance(obj, Mapping):
        name = obj.get("name")
        return isinstance(name, str) and name.startswith(f"{ERROR_NAMESPACE}::")
    return False


__all__ = [
    "ERROR_NAMESPACE",
    "ErrorManagerError",
    "ArgumentTypeError",
    "ConfigurationError",
    "ErrorFileIOError",
    "ParseError",
    "ValidationError",
    "StateError",
    "TitleLookupError",
    "is_error_manager_error",
]
