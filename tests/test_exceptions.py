import json

import pytest

from error_manager.exceptions import (
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


@pytest.mark.parametrize(
    "error, kind, builtin",
    [
        (ArgumentTypeError("bad type"), "ArgumentType", TypeError),
        (ConfigurationError("bad config"), "Configuration", ValueError),
        (ErrorFileIOError("errors.json", "no such file"), "IO", OSError),
        (ParseError("errors.json", "Expecting value", 1, 1), "Parse", ValueError),
        (ValidationError("invalid", ["At $: nope"]), "Validation", ValueError),
        (StateError("not loaded"), "State", RuntimeError),
        (TitleLookupError("missing"), "Lookup", LookupError),
    ],
)
def test_taxonomy(error, kind, builtin):
    assert isinstance(error, ErrorManagerError)
    assert isinstance(error, builtin)
    assert error.kind == kind
    assert error.name == f"ErrorManager::{kind}"


def test_to_dict_without_traceback():
    data = TitleLookupError("missing").to_dict()
    assert data == {
        "name": "ErrorManager::Lookup",
        "kind": "Lookup",
        "message": "No error(s) has been found with title missing",
        "context": {"title": "missing"},
        "stack": None,
    }


def test_to_json_includes_stack_once_raised():
    try:
        raise StateError("not loaded")
    except StateError as e:
        data = json.loads(e.to_json())
    assert data["name"] == "ErrorManager::State"
    assert "StateError: not loaded" in data["stack"]


def test_parse_error_location():
    err = ParseError("errors.json", "Expecting value", 3, 7)
    assert str(err) == "Failed to parse JSON at errors.json (line 3, column 7): Expecting value"
    assert err.context == {"path": "errors.json", "lineno": 3, "colno": 7}


def test_validation_error_human_output():
    err = ValidationError("Failed to validate JSON Payload!", ["At 0: 'code' is a required property"])
    assert err.to_human() == "Failed to validate JSON Payload!\n - At 0: 'code' is a required property"
    assert err.to_dict()["errors"] == ["At 0: 'code' is a required property"]


def test_is_error_manager_error():
    assert is_error_manager_error(StateError("x"))
    assert is_error_manager_error(StateError("x").to_dict())
    assert is_error_manager_error({"name": "ErrorManager::Custom"})
    assert not is_error_manager_error(ValueError("x"))
    assert not is_error_manager_error({"name": "Other::State"})
    assert not is_error_manager_error(None)
    assert not is_error_manager_error("ErrorManager::State")
