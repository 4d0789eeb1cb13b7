from __future__ import annotations

from typing import Any, Dict, Optional

from .events import EventType, Observers
from .exceptions import ArgumentTypeError
from .models import CompiledError
from .template import placeholders


class ErrorMessage:
    """A single error retrieved from an ErrorManager, ready to be rendered.

    ``method`` and ``arg`` record where the error is raised from; that context
    travels with the ``message`` event but does not change the rendered text.

    Example::

        msg = manager.get("invalid_arg").method("connect").arg("port")
        raise ValueError(msg.render({"name": "port"}))
    """

    def __init__(self, error: CompiledError, observers: Optional[Observers] = None) -> None:
        self._error = error
        self._observers = observers
        self.method_name: Optional[str] = None
        self.arg_name: Optional[str] = None

    def method(self, name: str) -> "ErrorMessage":
        if not isinstance(name, str):
            raise ArgumentTypeError("name should be typeof string")
        self.method_name = name
        return self

    def arg(self, name: str) -> "ErrorMessage":
        if not isinstance(name, str):
            raise ArgumentTypeError("name should be typeof string")
        self.arg_name = name
        return self

    @property
    def title(self) -> str:
        return self._error.title

    @property
    def code(self) -> Optional[str]:
        return self._error.code

    @property
    def placeholders(self) -> list[str]:
        return placeholders(self._error.definition.message)

    @property
    def context(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "code": self.code,
            "method": self.method_name,
            "arg": self.arg_name,
        }

    def render(self, args: Any = None) -> str:
        body = self._error.handler(args)
        if self._observers is not None:
            payload: Dict[str, Any] = {"title": self.title, "body": body}
            if self.method_name is not None:
                payload["method"] = self.method_name
            if self.arg_name is not None:
                payload["arg"] = self.arg_name
            self._observers.notify(EventType.MESSAGE, payload)
        return body

    def __repr__(self) -> str:
        return f"ErrorMessage(title={self.title!r}, method={self.method_name!r}, arg={self.arg_name!r})"


__all__ = ["ErrorMessage"]
