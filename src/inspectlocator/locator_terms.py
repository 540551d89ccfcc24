from __future__ import annotations

import re

ID_MARKER = ":id/"

_ID_LOOKUP_PATTERNS = (
    re.compile(r"^\s*By\.id\s*:\s*(?P<value>.*?)\s*$", re.IGNORECASE | re.DOTALL),
    re.compile(r"^\s*id\s*=\s*(?P<value>.*?)\s*$", re.IGNORECASE | re.DOTALL),
    re.compile(r"^\s*\(\s*(['\"])id\1\s*,\s*(['\"])(?P<value>.*)\2\s*\)\s*$", re.IGNORECASE | re.DOTALL),
)

_ACCESSIBILITY_LOOKUP_PATTERNS = (
    re.compile(r"^\s*By\.accessibility[ _]?id\s*:\s*(?P<value>.*?)\s*$", re.IGNORECASE | re.DOTALL),
    re.compile(r"^\s*\(\s*(['\"])accessibility id\1\s*,\s*(['\"])(?P<value>.*)\2\s*\)\s*$", re.IGNORECASE | re.DOTALL),
)

_TEXT_CONDITION = re.compile(r"@text\s*=\s*")
_RESOURCE_ID_CONDITION = re.compile(r"@resource-id\s*=\s*")
_CONTENT_DESC_CONDITION = re.compile(r"@content-desc\s*=\s*")

# A quoted XPath literal, or one piece of a concat(...) argument list.
_QUOTED_LITERAL = re.compile(r"\s*(['\"])(.*?)\1\s*", re.DOTALL)
_CONCAT_CALL = re.compile(r"concat\s*\(")

_UI_SELECTOR_CALL = re.compile(
    r"\.(?P<method>text|textContains|textStartsWith|resourceId|description|descriptionContains)"
    r"\(\s*\"(?P<value>(?:[^\"\\]|\\.)*)\"\s*\)"
)
_UI_SELECTOR_PRIORITY = (
    "text",
    "resourceId",
    "description",
    "textContains",
    "textStartsWith",
    "descriptionContains",
)


def extract_search_term(descriptor: str | None) -> str:
    if not descriptor:
        return ""
    text = str(descriptor)

    identifier = _match_lookup(text, _ID_LOOKUP_PATTERNS)
    if identifier is not None:
        return strip_id_namespace(identifier).strip()

    value = _condition_value(text, _TEXT_CONDITION)
    if value is not None:
        return value.strip()

    value = _condition_value(text, _RESOURCE_ID_CONDITION)
    if value is not None:
        return strip_id_namespace(value).strip()

    value = _condition_value(text, _CONTENT_DESC_CONDITION)
    if value is not None:
        return value.strip()

    accessibility_id = _match_lookup(text, _ACCESSIBILITY_LOOKUP_PATTERNS)
    if accessibility_id is not None:
        return accessibility_id.strip()

    selector_value = _ui_selector_value(text)
    if selector_value is not None:
        return selector_value.strip()

    return text.strip()


def strip_id_namespace(identifier: str) -> str:
    if ID_MARKER in identifier:
        return identifier[identifier.rfind("/") + 1 :]
    return identifier


def describe_locator(by: str, value: str) -> str:
    return f"By.{str(by).strip()}: {value}"


def _condition_value(text: str, condition: re.Pattern[str]) -> str | None:
    """Return the first non-empty literal compared against the attribute in ``condition``."""
    for match in condition.finditer(text):
        value = _read_xpath_literal(text, match.end())
        if value:
            return value
    return None


def _read_xpath_literal(text: str, start: int) -> str | None:
    quoted = _QUOTED_LITERAL.match(text, start)
    if quoted:
        return quoted.group(2)

    call = _CONCAT_CALL.match(text, start)
    if not call:
        return None
    pieces: list[str] = []
    position = call.end()
    while True:
        literal = _QUOTED_LITERAL.match(text, position)
        if not literal:
            return None
        pieces.append(literal.group(2))
        position = literal.end()
        if text.startswith(",", position):
            position += 1
        elif text.startswith(")", position):
            return "".join(pieces)
        else:
            return None


def _match_lookup(text: str, patterns: tuple[re.Pattern[str], ...]) -> str | None:
    for pattern in patterns:
        match = pattern.match(text)
        if match:
            return match.group("value")
    return None


def _ui_selector_value(text: str) -> str | None:
    if "UiSelector" not in text:
        return None
    found: dict[str, str] = {}
    for match in _UI_SELECTOR_CALL.finditer(text):
        found.setdefault(match.group("method"), _unescape_java_string(match.group("value")))
    for method in _UI_SELECTOR_PRIORITY:
        if method in found:
            value = found[method]
            return strip_id_namespace(value) if method == "resourceId" else value
    return None


def _unescape_java_string(value: str) -> str:
    return re.sub(r"\\(.)", r"\1", value)
