"""Placeholder substitution for error message templates.

A template is a plain string holding ``${identifier}`` slots, where the
identifier is one or more ASCII letters or exactly one digit. Slots are
resolved against caller arguments; a slot with no matching argument renders as
its own identifier text.
"""
from __future__ import annotations

import re
from typing import Any, Mapping, Optional, Protocol, Sequence

from .exceptions import ArgumentTypeError

PLACEHOLDER_PATTERN = re.compile(r"\$\{([A-Za-z]+|[0-9])\}", re.IGNORECASE | re.MULTILINE | re.ASCII)


class Arguments(Protocol):
    def has_key(self, key: str) -> bool: ...

    def get_value(self, key: str) -> Any: ...


class SequenceArguments:
    """Positional arguments, addressed as ``${0}`` .. ``${9}``."""

    def __init__(self, values: Sequence[Any]) -> None:
        self._values = values

    def has_key(self, key: str) -> bool:
        return key.isdigit() and int(key) < len(self._values)

    def get_value(self, key: str) -> Any:
        return self._values[int(key)]


class MappingArguments:
    """Named arguments. A digit placeholder also matches an integer key, so
    ``{0: "a"}`` fills ``${0}``."""

    def __init__(self, values: Mapping[Any, Any]) -> None:
        self._values = values

    def _resolve(self, key: str) -> Any:
        if key in self._values:
            return key
        if key.isdigit() and int(key) in self._values:
            return int(key)
        return None

    def has_key(self, key: str) -> bool:
        return self._resolve(key) is not None

    def get_value(self, key: str) -> Any:
        return self._values[self._resolve(key)]


_EMPTY = MappingArguments({})


def as_arguments(args: Any) -> Arguments:
    """Pick the argument adapter matching the runtime shape of ``args``."""
    if args is None:
        return _EMPTY
    if isinstance(args, (SequenceArguments, MappingArguments)):
        return args
    if isinstance(args, Mapping):
        return MappingArguments(args)
    if isinstance(args, Sequence) and not isinstance(args, (str, bytes, bytearray)):
        return SequenceArguments(args)
    raise ArgumentTypeError(
        f"Template arguments should be a sequence or a mapping, got <{type(args).__name__}>",
        context={"type": type(args).__name__},
    )


def substitute(template: str, args: Any = None) -> str:
    """Resolve every placeholder of ``template`` against ``args``."""
    source = as_arguments(args)

    def _replace(match: re.Match) -> str:
        key = match.group(1)
        if not source.has_key(key):
            return key
        return str(source.get_value(key))

    return PLACEHOLDER_PATTERN.sub(_replace, template)


def placeholders(template: str) -> list[str]:
    """Return the placeholder identifiers of ``template`` in order of appearance."""
    return [m.group(1) for m in PLACEHOLDER_PATTERN.finditer(template)]


def render(template: str, args: Any = None, code: Optional[str] = None) -> str:
    """Substitute ``template`` and prefix it with ``"<code> - "`` when a code is given."""
    body = substitute(template, args)
    if code is None:
        return body
    return f"{code} - {body}"


__all__ = [
    "PLACEHOLDER_PATTERN",
    "Arguments",
    "SequenceArguments",
    "MappingArguments",
    "as_arguments",
    "substitute",
    "placeholders",
    "render",
]
