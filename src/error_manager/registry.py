from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional, Union

from .config import Settings
from .events import EventType, Observer, Observers
from .exceptions import ArgumentTypeError, StateError, TitleLookupError
from .loader import check_error_file, read_payload, read_payload_sync
from .message import ErrorMessage
from .models import CompiledError, ErrorDefinition
from .schema import PayloadValidator, load_schema, make_validator

logger = logging.getLogger(__name__)


class ErrorManager:
    """Registry of error definitions loaded from a JSON file.

    The file is read at most once per instance, by ``load`` or ``load_sync``.
    Until then every lookup raises StateError.

    Example::

        manager = ErrorManager("errors.json")
        manager.load_sync()
        manager.format("test", {"name": "fraxken"})  # "#HPX0478 - hello world fraxken"

    Events (see EventType):
        initialized: after the first successful load, payload {file, count}
        message: after each rendered message, payload {title, body}
    """

    def __init__(
        self,
        file_path: Union[str, os.PathLike],
        *,
        settings: Optional[Settings] = None,
    ) -> None:
        self._error_file = check_error_file(file_path)
        self.settings = settings or Settings()
        self.observers = Observers()
        self._errors: Optional[Dict[str, CompiledError]] = None

    @property
    def error_file(self) -> Path:
        return self._error_file

    @staticmethod
    def map_from_payload(payload: Any, *, include_code: bool = True) -> Dict[str, CompiledError]:
        """Compile a list of error definitions into a title -> CompiledError map.

        Later items win over earlier ones sharing a title. The input is not
        modified and no instance state is touched.

        Raises:
            ArgumentTypeError: ``payload`` is not a list, or an item is not an object.
            ValidationError: an item has no string ``title`` or ``message``.
        """
        if not isinstance(payload, (list, tuple)):
            raise ArgumentTypeError(
                "Payload should be an instanceof Array!",
                context={"type": type(payload).__name__},
            )

        ret: Dict[str, CompiledError] = {}
        for index, item in enumerate(payload):
            definition = ErrorDefinition.from_dict(item, index)
            if definition.title in ret:
                logger.warning("Duplicate error title '%s' at index %d; overwriting previous definition", definition.title, index)
            ret[definition.title] = CompiledError(definition, include_code=include_code)
        return ret

    @property
    def is_initialized(self) -> bool:
        return self._errors is not None

    @property
    def errors(self) -> FrozenSet[str]:
        """Titles of every loaded error."""
        if self._errors is None:
            raise StateError("ErrorManager should be initialized before getting errors list!")
        return frozenset(self._errors)

    def __contains__(self, title: object) -> bool:
        return self._errors is not None and isinstance(title, str) and title in self._errors

    def _validator(self) -> Optional[PayloadValidator]:
        if not self.settings.validate_schema:
            return None
        if self.settings.schema_path is not None:
            return make_validator(load_schema(self.settings.schema_path))
        return make_validator()

    def _initialize(self, payload: Any) -> None:
        errors = self.map_from_payload(payload, include_code=self.settings.include_code)
        self._errors = errors
        logger.debug("Loaded %d error definition(s) from %s", len(errors), self._error_file)
        self.observers.notify(EventType.INITIALIZED, {"file": str(self._error_file), "count": len(errors)})

    async def load(self) -> None:
        """Load the error file without blocking the running event loop."""
        if self.is_initialized:
            return
        payload = await read_payload(
            self._error_file,
            encoding=self.settings.encoding,
            validator_factory=self._validator,
        )
        # Another load may have finished while this one was suspended.
        if self.is_initialized:
            return
        self._initialize(payload)

    def load_sync(self) -> None:
        """Load the error file, blocking until it is read."""
        if self.is_initialized:
            return
        payload = read_payload_sync(
            self._error_file,
            encoding=self.settings.encoding,
            validator_factory=self._validator,
        )
        self._initialize(payload)

    def _lookup(self, title: Any) -> CompiledError:
        if self._errors is None:
            raise StateError("ErrorManager not initialized yet!")
        if not isinstance(title, str):
            raise ArgumentTypeError(
                "ErrorManager.throw->errorTitle should be a string",
                context={"type": type(title).__name__},
            )
        try:
            return self._errors[title]
        except KeyError:
            raise TitleLookupError(title) from None

    def get(self, title: str) -> ErrorMessage:
        """Return the ErrorMessage registered under ``title``.

        Raises:
            StateError: nothing has been loaded yet.
            ArgumentTypeError: ``title`` is not a string.
            TitleLookupError: no error is registered under ``title``.
        """
        return ErrorMessage(self._lookup(title), self.observers)

    def definition(self, title: str) -> ErrorDefinition:
        return self._lookup(title).definition

    def format(self, title: str, args: Any = None) -> str:
        """Render the error registered under ``title`` with ``args``.

        ``args`` is a mapping (``${name}``), a sequence (``${0}``) or None.
        """
        return self.get(title).render(args)

    def on(self, event: Union[str, EventType], callback: Observer) -> None:
        self.observers.add(event, callback)

    def off(self, event: Union[str, EventType], callback: Observer) -> None:
        self.observers.remove(event, callback)

    def __repr__(self) -> str:
        state = f"{len(self._errors)} errors" if self._errors is not None else "not loaded"
        return f"ErrorManager({str(self._error_file)!r}, {state})"


__all__ = ["ErrorManager"]
