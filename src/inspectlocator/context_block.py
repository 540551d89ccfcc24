from __future__ import annotations

import re

from .locator_synthesis import short_class_name
from .locator_terms import ID_MARKER
from .models import UiNode

CONTAINER_TAG_TOKENS = (
    "layout",
    "group",
    "scroll",
    "list",
    "grid",
    "recycler",
    "pager",
    "frame",
    "linear",
    "relative",
    "constraint",
)
BLOCK_ATTRIBUTES = ("text", "resource-id", "content-desc")

DEFAULT_MAX_DEPTH = 4
MAX_ATTRIBUTE_LENGTH = 35
MAX_LINE_LENGTH = 94
ELLIPSIS = "..."
INDENT = "  "


def is_container(node: UiNode) -> bool:
    tag = (node.tag or "").lower()
    return any(token in tag for token in CONTAINER_TAG_TOKENS)


def find_container(node: UiNode) -> UiNode | None:
    for ancestor in node.ancestors():
        if is_container(ancestor):
            return ancestor
    return None


def context_root(node: UiNode) -> UiNode:
    return find_container(node) or node


def truncate(value: str, limit: int) -> str:
    if len(value) <= limit:
        return value
    keep = max(0, limit - len(ELLIPSIS))
    return value[:keep] + ELLIPSIS


def render_context_block(node: UiNode, max_depth: int = DEFAULT_MAX_DEPTH) -> str:
    lines: list[str] = []
    # (node, indent level, remaining depth, closing) entries
    stack: list[tuple[UiNode, int, int, bool]] = [(node, 0, max_depth, False)]
    while stack:
        current, level, remaining, closing = stack.pop()
        indent = INDENT * level
        tag = short_class_name(current.tag)
        if closing:
            lines.append(_fit_line(f"{indent}</{tag}>"))
            continue
        if remaining < 0:
            lines.append(_fit_line(f"{indent}{ELLIPSIS}"))
            continue

        opening = f"{indent}<{tag}{_render_attributes(current)}"
        if not current.children:
            lines.append(_fit_line(f"{opening}/>"))
            continue

        lines.append(_fit_line(f"{opening}>"))
        stack.append((current, level, remaining, True))
        for child in reversed(current.children):
            stack.append((child, level + 1, remaining - 1, False))
    return "\n".join(lines)


def _render_attributes(node: UiNode) -> str:
    rendered: list[str] = []
    for name in BLOCK_ATTRIBUTES:
        value = _normalize_space(node.attr(name))
        if not value:
            continue
        value = truncate(value, MAX_ATTRIBUTE_LENGTH)
        if name == "resource-id" and ID_MARKER in value:
            value = value[value.rfind("/") + 1 :]
        rendered.append(f' {name}="{value}"')
    return "".join(rendered)


def _normalize_space(value: str) -> str:
    return re.sub(r"\s+", " ", value).strip()


def _fit_line(line: str) -> str:
    return truncate(line, MAX_LINE_LENGTH)
