from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional

from .exceptions import ArgumentTypeError, ValidationError
from .template import render


class Criticity(str, Enum):
    CRITICAL = "Critical"
    MAJOR = "Major"
    MINOR = "Minor"
    DEBUG = "Debug"


_KNOWN_KEYS = {"title", "code", "message", "description", "criticity"}


@dataclass
class ErrorDefinition:
    """One element of an error file."""

    title: str
    message: str
    code: Optional[str] = None
    description: Optional[str] = None
    criticity: Optional[str] = None
    # Unknown keys are kept but never rendered
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any, index: int = 0) -> "ErrorDefinition":
        if not isinstance(data, Mapping):
            raise ArgumentTypeError(
                f"Payload item {index} should be an object, got <{type(data).__name__}>",
                context={"index": index},
            )
        missing = [k for k in ("title", "message") if not isinstance(data.get(k), str)]
        if missing:
            raise ValidationError(
                "Failed to validate JSON Payload!",
                [f"At {index}: '{k}' should be a string" for k in missing],
                context={"index": index},
            )
        code = data.get("code")
        return cls(
            title=data["title"],
            message=data["message"],
            code=None if code is None else str(code),
            description=data.get("description"),
            criticity=data.get("criticity"),
            extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
        )

    @property
    def severity(self) -> Optional[Criticity]:
        """The criticity as an enum member, or None when absent or unknown."""
        try:
            return Criticity(self.criticity) if self.criticity is not None else None
        except ValueError:
            return None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = dict(self.extra)
        data.update({"title": self.title, "message": self.message})
        for key in ("code", "description", "criticity"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data


class CompiledError:
    """An error definition bound to its message resolver.

    The handler reads ``message`` and ``code`` from the owned definition each
    time it runs.
    """

    def __init__(self, definition: ErrorDefinition, include_code: bool = True) -> None:
        self.definition = definition
        self.include_code = include_code
        self.handler: Callable[[Any], str] = self._compile()

    def _compile(self) -> Callable[[Any], str]:
        definition = self.definition

        def handler(args: Any = None) -> str:
            code = definition.code if self.include_code else None
            return render(definition.message, args, code)

        return handler

    @property
    def title(self) -> str:
        return self.definition.title

    @property
    def code(self) -> Optional[str]:
        return self.definition.code

    def __call__(self, args: Any = None) -> str:
        return self.handler(args)

    def __repr__(self) -> str:
        return f"CompiledError(title={self.title!r}, code={self.code!r})"


__all__ = [
    "Criticity",
    "ErrorDefinition",
    "CompiledError",
]
