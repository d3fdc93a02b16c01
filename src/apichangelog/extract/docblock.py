"""PHPDoc tag extraction.

Only the tags that feed type fallbacks are read: ``@param`` and
``@return``. Types are returned as written, so ``array<string, int>``
survives intact.
"""

from __future__ import annotations

import re

_LINE_PREFIX = re.compile(r"^\s*(?:/\*\*+|\*+/?)?\s?")
_TAG = re.compile(r"^@(?P<tag>[\w-]+)\s*(?P<body>.*)$")
_VARIABLE = re.compile(r"^(?:&\s*)?(?:\.\.\.)?\$(?P<name>\w+)")
_OPENERS = "<({["
_CLOSERS = ">)}]"


def _lines(doc_comment: str) -> list[str]:
    text = doc_comment.strip()
    if text.endswith("*/"):
        text = text[:-2]
    return [_LINE_PREFIX.sub("", line, count=1).strip() for line in text.splitlines()]


def _tags(doc_comment: str | None) -> list[tuple[str, str]]:
    if not doc_comment or not doc_comment.strip():
        return []
    tags = []
    for line in _lines(doc_comment):
        match = _TAG.match(line)
        if match:
            tags.append((match.group("tag"), match.group("body").strip()))
    return tags


def split_type(body: str) -> tuple[str | None, str]:
    """Split a leading type expression off a tag body.

    Whitespace inside ``<>``, ``()``, ``{}`` or ``[]`` belongs to the type.
    Returns ``(None, body)`` when the body starts with a variable.
    """
    if not body or body.startswith(("$", "&$", "...$")):
        return None, body
    depth = 0
    for index, char in enumerate(body):
        if char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth = max(depth - 1, 0)
        elif char.isspace() and depth == 0:
            return body[:index], body[index:].strip()
    return body, ""


def param_types(doc_comment: str | None) -> dict[str, str]:
    """Map parameter name (without ``$``) to its ``@param`` type."""
    types: dict[str, str] = {}
    for tag, body in _tags(doc_comment):
        if tag != "param":
            continue
        type_text, rest = split_type(body)
        match = _VARIABLE.match(rest)
        if type_text and match:
            types[match.group("name")] = type_text
    return types


def return_type(doc_comment: str | None) -> str | None:
    """Type of the first ``@return`` tag, if any."""
    for tag, body in _tags(doc_comment):
        if tag == "return":
            type_text, _ = split_type(body)
            if type_text:
                return type_text
    return None
