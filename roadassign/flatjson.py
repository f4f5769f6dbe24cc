"""A flat JSON object whose keys and values are all strings."""

from __future__ import annotations

from typing import Mapping, Optional

_WHITESPACE = " \t\n\v\f\r"

_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

_UNESCAPES = {
    '"': '"',
    "\\": "\\",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}


def escape_string(text: str) -> str:
    """Return ``text`` quoted, with special characters escaped."""
    return '"' + "".join(_ESCAPES.get(c, c) for c in text) + '"'


def unescape_string(text: str) -> str:
    """Resolve backslash escapes; an unknown escape yields the character itself."""
    result = []
    chars = iter(enumerate(text))
    for index, char in chars:
        if char == "\\" and index + 1 < len(text):
            _, escaped = next(chars)
            result.append(_UNESCAPES.get(escaped, escaped))
        else:
            result.append(char)
    return "".join(result)


def is_valid(text: str) -> bool:
    """Return True when ``text``, trimmed, is enclosed in braces."""
    stripped = text.strip(_WHITESPACE)
    return bool(stripped) and stripped[0] == "{" and stripped[-1] == "}"


class FlatJson:
    """String-to-string mapping that reads and writes a flat JSON object."""

    def __init__(self, values: Optional[Mapping[str, str]] = None) -> None:
        self.values: dict[str, str] = dict(values or {})

    def add(self, key: str, value: str) -> None:
        """Set ``key`` to ``value``."""
        self.values[key] = value

    def get(self, key: str) -> str:
        """Return the value for ``key``, or an empty string if it is absent."""
        return self.values.get(key, "")

    def to_json(self) -> str:
        """Serialise the mapping with keys in sorted order."""
        body = ", ".join(
            f"{escape_string(key)}: {escape_string(self.values[key])}"
            for key in sorted(self.values)
        )
        return "{" + body + "}"

    def parse(self, text: str) -> None:
        """Replace the contents with the object in ``text``.

        Raises ValueError when the text is not a flat object of strings.
        """
        self.values.clear()
        if not is_valid(text):
            raise ValueError("Invalid JSON format")
        s = text.strip(_WHITESPACE)[1:-1]
        size = len(s)

        def at(i: int) -> str:
            return s[i] if i < size else "\0"

        i = 0
        while i < size:
            while i < size and s[i] in _WHITESPACE:
                i += 1
            if at(i) != '"':
                raise ValueError("Expected '\"' at key start")
            i += 1
            key_start = i
            while i < size and s[i] != '"':
                i += 1
            key = s[key_start:i]
            i += 1

            while i < size and s[i] != ":":
                i += 1
            i += 1
            while i < size and s[i] in _WHITESPACE:
                i += 1
            if at(i) != '"':
                raise ValueError("Expected '\"' at value start")
            i += 1
            value_start = i
            while i < size and s[i] != '"':
                if s[i] == "\\" and i + 1 < size:
                    i += 1
                i += 1
            value = s[value_start:i]
            i += 1

            self.values[unescape_string(key)] = unescape_string(value)

            while i < size and s[i] in _WHITESPACE:
                i += 1
            if i < size:
                if s[i] == ",":
                    i += 1
                else:
                    raise ValueError("Expected ',' or '}'")