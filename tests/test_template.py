import pytest

from error_manager.exceptions import ArgumentTypeError
from error_manager.template import (
    MappingArguments,
    SequenceArguments,
    as_arguments,
    placeholders,
    render,
    substitute,
)


def test_named_placeholder_is_replaced():
    assert substitute("hello world ${name}", {"name": "fraxken"}) == "hello world fraxken"


def test_every_occurrence_is_replaced():
    assert substitute("${a}-${a}-${b}", {"a": 1, "b": "x"}) == "1-1-x"


def test_missing_argument_renders_identifier_text():
    assert substitute("hello world ${name}", {}) == "hello world name"
    assert substitute("hello world ${name}") == "hello world name"


def test_positional_arguments_are_indexed_by_position():
    assert substitute("${0} failed after ${1} attempts", ["connect", 3]) == "connect failed after 3 attempts"
    assert substitute("${0} and ${2}", ("a",)) == "a and 2"


def test_placeholder_pattern_boundaries():
    # Multi-digit indices and mixed identifiers are not placeholders
    assert substitute("${12} ${a1} ${_x}", {"12": "no", "a1": "no", "_x": "no"}) == "${12} ${a1} ${_x}"
    assert substitute("$name {name}", {"name": "no"}) == "$name {name}"


def test_pattern_is_case_insensitive_and_multiline():
    template = "first ${Name}\nsecond ${NAME}"
    assert substitute(template, {"Name": "a", "NAME": "b"}) == "first a\nsecond b"


def test_non_ascii_letters_never_match():
    # KELVIN SIGN and LONG S fold to k and s under case-insensitive unicode matching
    kelvin, long_s = "\u212a", "\u017f"
    template = f"${{{kelvin}}} ${{{long_s}}} ${{{kelvin}elvin}}"
    values = {"k": "x", "K": "x", "s": "x", "S": "x", "kelvin": "x", kelvin: "x", long_s: "x"}
    assert substitute(template, values) == template
    assert placeholders(template) == []


def test_mapping_with_integer_keys_fills_digit_placeholders():
    assert substitute("${0}-${1}-${2}", {0: "a", "1": "b"}) == "a-b-2"
    assert MappingArguments({3: None}).has_key("3") is True
    assert MappingArguments({3: None}).has_key("x") is False


def test_values_are_stringified():
    assert substitute("${a} ${b} ${c}", {"a": 1.5, "b": None, "c": True}) == "1.5 None True"


def test_render_prefixes_code():
    assert render("hello ${name}", {"name": "x"}, "#HPX0478") == "#HPX0478 - hello x"
    assert render("hello ${name}", {"name": "x"}) == "hello x"


def test_render_is_pure():
    args = {"name": "fraxken"}
    first = render("hello ${name} ${name}", args, "#C")
    second = render("hello ${name} ${name}", args, "#C")
    assert first == second == "#C - hello fraxken fraxken"
    assert args == {"name": "fraxken"}


def test_as_arguments_picks_adapter_from_shape():
    assert isinstance(as_arguments({"a": 1}), MappingArguments)
    assert isinstance(as_arguments(["a"]), SequenceArguments)
    assert not as_arguments(None).has_key("a")


@pytest.mark.parametrize("bad", ["text", b"bytes", 42, object()])
def test_unsupported_argument_shapes_raise(bad):
    with pytest.raises(ArgumentTypeError):
        substitute("${a}", bad)


def test_sequence_adapter_rejects_names():
    args = SequenceArguments(["x"])
    assert args.has_key("0")
    assert not args.has_key("1")
    assert not args.has_key("name")


def test_placeholders_lists_identifiers_in_order():
    assert placeholders("${b} then ${a} then ${0} and ${b}") == ["b", "a", "0", "b"]
    assert placeholders("nothing here") == []
