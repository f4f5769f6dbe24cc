import pytest

from roadassign.flatjson import FlatJson, escape_string, is_valid, unescape_string


def test_to_json_sorts_keys():
    message = FlatJson()
    message.add("b", "2")
    message.add("a", "1")
    assert message.to_json() == '{"a": "1", "b": "2"}'


def test_empty_object_serialises_to_braces():
    assert FlatJson().to_json() == "{}"


def test_escape_quote():
    assert escape_string('a"b') == '"a\\"b"'


@pytest.mark.parametrize(
    "text", ["plain", 'quo"te', "back\\slash", "tab\there", "line\nfeed", "\b\f\r", ""]
)
def test_escape_then_unescape_round_trip(text):
    assert unescape_string(escape_string(text)[1:-1]) == text


def test_unknown_escape_yields_character():
    assert unescape_string("\\q") == "q"


def test_trailing_backslash_kept():
    assert unescape_string("end\\") == "end\\"


def test_parse_reads_values():
    message = FlatJson()
    message.parse('{"type":"casual", "roadId" : "e1"}')
    assert message.get("type") == "casual"
    assert message.get("roadId") == "e1"


def test_get_missing_is_empty():
    assert FlatJson().get("absent") == ""


def test_nested_object_as_string_round_trip():
    inner = FlatJson({"roadIds": "e1 e2", "starttime": "0.000000"})
    outer = FlatJson({"action": "changeRoute", "data": inner.to_json()})
    decoded = FlatJson()
    decoded.parse(outer.to_json())
    data = FlatJson()
    data.parse(decoded.get("data"))
    assert data.values == inner.values
    assert decoded.get("action") == "changeRoute"


def test_parse_clears_previous_values():
    message = FlatJson({"old": "x"})
    message.parse('{"new": "y"}')
    assert message.values == {"new": "y"}


def test_parse_empty_object():
    message = FlatJson({"old": "x"})
    message.parse("{}")
    assert message.values == {}


def test_trailing_comma_accepted():
    message = FlatJson()
    message.parse('{"a": "1",}')
    assert message.values == {"a": "1"}


def test_later_duplicate_key_wins():
    message = FlatJson()
    message.parse('{"a": "1", "a": "2"}')
    assert message.get("a") == "2"


@pytest.mark.parametrize(
    "text",
    [
        "",
        "[]",
        "{ }",
        '{a: "b"}',
        '{"a": b}',
        '{"a": "1" "b": "2"}',
        '{"a": "1";}',
    ],
)
def test_parse_rejects_malformed(text):
    with pytest.raises(ValueError):
        FlatJson().parse(text)


def test_add_overwrites():
    message = FlatJson()
    message.add("k", "1")
    message.add("k", "2")
    assert message.get("k") == "2"
    assert len(message.values) == 1