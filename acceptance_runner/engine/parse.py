"""Table structure for test markup.

Splits markup into tables, rows and cells while keeping every character
outside the cells (leader and trailer text, tags), so printing a parsed
document reproduces it exactly apart from the annotations fixtures add.
"""

import html
import re
from dataclasses import dataclass, field
from typing import Optional

TABLE_TAGS = ("table", "tr", "td")

_TAG_BOUNDARY = " \t\r\n>/"
_MARKUP = re.compile(r"<[^>]*>")


class ParseError(ValueError):
    """Markup does not contain well-formed tables."""


@dataclass
class Node:
    """A table, row or cell.

    ``leader`` is the text between the previous sibling (or the start of the
    enclosing body) and this element; ``trailer`` is only set on the last
    sibling and holds the text after it.
    """
    leader: str
    tag: str
    body: str
    end: str
    trailer: str = ""
    parts: list["Node"] = field(default_factory=list)

    def add_to_tag(self, text: str) -> None:
        self.tag = self.tag[:-1] + text + ">"

    def add_to_body(self, text: str) -> None:
        self.body += text

    def text(self) -> str:
        """Cell text without markup, entities resolved."""
        plain = html.unescape(_MARKUP.sub("", self.body))
        return plain.replace("\xa0", " ").strip()

    def at(self, i: int) -> Optional["Node"]:
        return self.parts[i] if 0 <= i < len(self.parts) else None

    def print(self) -> str:
        inner = print_nodes(self.parts) if self.parts else self.body
        return self.leader + self.tag + inner + self.end


class Parse:
    """Parsed tables of one document."""

    def __init__(self, text: str):
        self.tables = parse_nodes(text, TABLE_TAGS)

    def print(self) -> str:
        return print_nodes(self.tables)


def print_nodes(nodes: list[Node]) -> str:
    if not nodes:
        return ""
    return "".join(n.print() for n in nodes) + nodes[-1].trailer


def parse_nodes(text: str, tags: tuple[str, ...]) -> list[Node]:
    """Split ``text`` into sibling elements of ``tags[0]``, recursing inward.

    Raises:
        ParseError: If an element is unterminated or a level is empty.
    """
    tag = tags[0]
    lower = text.lower()
    nodes: list[Node] = []
    pos = 0

    while True:
        start = _find_tag(lower, "<" + tag, pos)
        if start < 0:
            break
        start_end = lower.find(">", start)
        if start_end < 0:
            raise ParseError(f"Can't find end of <{tag}> tag")
        end_start = _find_tag(lower, "</" + tag, start_end)
        if end_start < 0:
            raise ParseError(f"Can't find closing </{tag}> tag")
        end_end = lower.find(">", end_start)
        if end_end < 0:
            raise ParseError(f"Can't find end of </{tag}> tag")

        node = Node(
            leader=text[pos:start],
            tag=text[start:start_end + 1],
            body=text[start_end + 1:end_start],
            end=text[end_start:end_end + 1],
        )
        if len(tags) > 1:
            node.parts = parse_nodes(node.body, tags[1:])
        nodes.append(node)
        pos = end_end + 1

    if not nodes:
        raise ParseError(f"Can't find tag: <{tag}>")
    nodes[-1].trailer = text[pos:]
    return nodes


def _find_tag(lower: str, opening: str, pos: int) -> int:
    while True:
        i = lower.find(opening, pos)
        if i < 0:
            return -1
        following = lower[i + len(opening):i + len(opening) + 1]
        if following == "" or following in _TAG_BOUNDARY:
            return i
        pos = i + 1
