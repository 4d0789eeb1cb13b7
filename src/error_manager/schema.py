from __future__ import annotations

import json
import logging
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from jsonschema import Draft7Validator, exceptions as js_exceptions

from .exceptions import ConfigurationError, ValidationError

logger = logging.getLogger(__name__)

_PKG = "error_manager"
BUNDLED_SCHEMA = "schemas/error.schema.json"

# A validator takes a parsed payload and raises ValidationError when it is rejected.
PayloadValidator = Callable[[Any], None]


@lru_cache(maxsize=1)
def bundled_schema() -> Dict[str, Any]:
    """Return the error-definition schema shipped with the package."""
    entry = resources.files(_PKG).joinpath(BUNDLED_SCHEMA)
    with entry.open("rb") as fh:
        schema = json.load(fh)
    logger.debug("Loaded bundled error schema (%s)", schema.get("$id"))
    return schema


def load_schema(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a custom schema from disk, checking that it is itself a valid schema."""
    p = Path(path)
    try:
        with p.open("r", encoding="utf-8") as fh:
            schema = json.load(fh)
    except OSError as e:
        raise ConfigurationError(f"Unable to read schema file {p}: {e}", context={"path": str(p)}) from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Schema file {p} is not valid JSON: {e.msg}", context={"path": str(p)}) from e
    try:
        Draft7Validator.check_schema(schema)
    except js_exceptions.SchemaError as e:
        raise ConfigurationError(f"Schema file {p} is not a valid JSON schema: {e.message}", context={"path": str(p)}) from e
    return schema


def _format_schema_errors(errors: Sequence[js_exceptions.ValidationError]) -> List[str]:
    lines: List[str] = []
    for err in errors:
        where = ".".join(str(p) for p in err.absolute_path) or "$"
        lines.append(f"At {where}: {err.message}")
    return lines


def make_validator(schema: Optional[Mapping[str, Any]] = None) -> PayloadValidator:
    """Build a payload validator for ``schema`` (the bundled one by default).

    The returned callable collects every violation before raising, so one
    ValidationError describes the whole payload.
    """
    validator = Draft7Validator(schema if schema is not None else bundled_schema())

    def validate(payload: Any) -> None:
        errors = sorted(validator.iter_errors(payload), key=lambda e: [str(p) for p in e.absolute_path])
        if errors:
            raise ValidationError(
                "Failed to validate JSON Payload!",
                _format_schema_errors(errors),
                context={"violations": len(errors)},
            )

    return validate


def validate_payload(payload: Any, schema: Optional[Mapping[str, Any]] = None) -> None:
    make_validator(schema)(payload)


__all__ = [
    "BUNDLED_SCHEMA",
    "PayloadValidator",
    "bundled_schema",
    "load_schema",
    "make_validator",
    "validate_payload",
]
