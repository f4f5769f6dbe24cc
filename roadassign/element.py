"""A small, forgiving XML element tree with regex attribute lookup."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import Iterator, Mapping, Optional

_ATTR_RE = re.compile(r'(\w+)\s*=\s*"(.*?)"', re.ASCII)
_TEXT_WHITESPACE = " \t\n\r"


@dataclass(eq=False)
class Element:
    """A node of a parsed document: tag, attributes, text and children."""

    tag: str
    attrs: dict[str, str] = field(default_factory=dict)
    content: str = ""
    children: list[Element] = field(default_factory=list)

    def load_xml(self, path: str | os.PathLike[str]) -> None:
        """Parse the file at ``path`` and attach its elements under this node."""
        with open(path, encoding="utf-8") as handle:
            self.load_string(handle.read())

    def load_string(self, text: str) -> None:
        """Parse ``text`` and attach its elements under this node.

        Text between tags is trimmed and appended to the enclosing node's
        content, each piece followed by a comma.
        """
        stack: list[Element] = [self]
        pos = 0
        while pos < len(text):
            lt = text.find("<", pos)
            if lt == -1:
                break
            trimmed = text[pos:lt].strip(_TEXT_WHITESPACE)
            if trimmed:
                stack[-1].content += trimmed + ","
            gt = text.find(">", lt)
            if gt == -1:
                break
            inner = text[lt + 1:gt]
            pos = gt + 1

            if inner.startswith("/"):
                if len(stack) > 1:
                    stack.pop()
                continue

            self_closing = inner.endswith("/")
            if self_closing:
                inner = inner[:-1]
            parts = inner.split(maxsplit=1)
            node = Element(parts[0] if parts else "")
            node.attrs.update(_ATTR_RE.findall(inner))
            stack[-1].children.append(node)
            if not self_closing:
                stack.append(node)

    def get(self, key: str) -> str:
        """Return the attribute ``key``, or an empty string if it is absent."""
        return self.attrs.get(key, "")

    def _matches(self, tag: str, required: Mapping[str, str]) -> bool:
        if self.tag != tag:
            return False
        for key, pattern in required.items():
            value = self.attrs.get(key)
            if value is None or re.fullmatch(pattern, value) is None:
                return False
        return True

    def _walk(self, tag: str, required: Mapping[str, str]) -> Iterator[Element]:
        if self._matches(tag, required):
            yield self
        for child in self.children:
            yield from child._walk(tag, required)

    def find(
        self, tag: str, required: Optional[Mapping[str, str]] = None
    ) -> Optional[Element]:
        """Return the first node in document order matching ``tag``.

        ``required`` maps attribute names to regular expressions that the
        whole attribute value must match.
        """
        return next(self._walk(tag, required or {}), None)

    def find_all(
        self, tag: str, required: Optional[Mapping[str, str]] = None
    ) -> list[Element]:
        """Return every node in document order matching ``tag`` and ``required``."""
        return list(self._walk(tag, required or {}))