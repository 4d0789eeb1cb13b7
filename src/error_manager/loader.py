"""Read error definition files from disk.

Both the blocking and the asyncio entry points go through the same
``decode_payload`` step, so parsing and schema validation behave identically
whichever one a caller picks. The async variant only hands the readability
check and the file read to the default executor; a custom schema file is read
in the same executor call as the content.
"""
from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any, Callable, Optional, Tuple, Union

from .exceptions import ArgumentTypeError, ConfigurationError, ErrorFileIOError, ParseError, ValidationError
from .schema import PayloadValidator

logger = logging.getLogger(__name__)

JSON_SUFFIX = ".json"

# Builds the payload validator once the file is known to be readable; None disables validation.
ValidatorFactory = Callable[[], Optional[PayloadValidator]]


def check_error_file(file_path: Union[str, os.PathLike]) -> Path:
    """Validate the error file path given to an ErrorManager.

    Raises:
        ArgumentTypeError: ``file_path`` is not a non-empty string or path.
        ConfigurationError: the path does not end with ``.json``.
    """
    if not isinstance(file_path, (str, os.PathLike)) or (isinstance(file_path, str) and not file_path):
        raise ArgumentTypeError(
            "ErrorManager.constructor->filePath should be typeof <string>",
            context={"type": type(file_path).__name__},
        )
    path = Path(file_path)
    if path.suffix != JSON_SUFFIX:
        raise ConfigurationError(
            "ErrorManager.constructor->filePath - please provide a JSON file",
            context={"path": str(path)},
        )
    return path


def ensure_readable(path: Path) -> None:
    if not path.exists():
        raise ErrorFileIOError(path, "no such file")
    if not path.is_file():
        raise ErrorFileIOError(path, "not a regular file")
    if not os.access(path, os.R_OK):
        raise ErrorFileIOError(path, "permission denied")


def read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise ErrorFileIOError(path, e.strerror or str(e)) from e


def decode_payload(
    raw: bytes,
    path: Path,
    *,
    encoding: str = "utf-8",
    validator: Optional[PayloadValidator] = None,
) -> Any:
    """Parse raw file content and run the optional validator over it."""
    try:
        text = raw.decode(encoding)
    except UnicodeDecodeError as e:
        raise ParseError(path, f"cannot decode content as {encoding}: {e.reason}") from e
    except LookupError as e:
        raise ConfigurationError(f"Unknown encoding {encoding!r}", context={"encoding": encoding}) from e
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(path, e.msg, e.lineno, e.colno) from e
    if validator is not None:
        try:
            validator(payload)
        except ValidationError as e:
            e.context.setdefault("path", str(path))
            raise
    else:
        logger.debug("Schema validation disabled for %s", path)
    return payload


def _read_with_validator(path: Path, validator_factory: Optional[ValidatorFactory]) -> Tuple[bytes, Optional[PayloadValidator]]:
    raw = read_bytes(path)
    logger.debug("Read %d bytes from %s", len(raw), path)
    return raw, validator_factory() if validator_factory is not None else None


def read_payload_sync(
    path: Path,
    *,
    encoding: str = "utf-8",
    validator_factory: Optional[ValidatorFactory] = None,
) -> Any:
    ensure_readable(path)
    raw, validator = _read_with_validator(path, validator_factory)
    return decode_payload(raw, path, encoding=encoding, validator=validator)


async def read_payload(
    path: Path,
    *,
    encoding: str = "utf-8",
    validator_factory: Optional[ValidatorFactory] = None,
) -> Any:
    loop = asyncio.get_running_loop()
    await loop.run_in_executor(None, ensure_readable, path)
    raw, validator = await loop.run_in_executor(None, _read_with_validator, path, validator_factory)
    return decode_payload(raw, path, encoding=encoding, validator=validator)


__all__ = [
    "JSON_SUFFIX",
    "ValidatorFactory",
    "check_error_file",
    "ensure_readable",
    "read_bytes",
    "decode_payload",
    "read_payload_sync",
    "read_payload",
]
