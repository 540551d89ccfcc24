from __future__ import annotations

from .models import LocatorSuggestion, UiNode


def short_class_name(class_name: str | None) -> str:
    if not class_name:
        return "Unknown"
    short = class_name.rsplit(".", 1)[-1]
    short = short.rsplit("$", 1)[-1]
    return short or "Unknown"


def xpath_literal(value: str) -> str:
    if '"' not in value:
        return f'"{value}"'
    if "'" not in value:
        return f"'{value}'"
    parts = value.split('"')
    pieces: list[str] = []
    for index, part in enumerate(parts):
        if part:
            pieces.append(f'"{part}"')
        if index < len(parts) - 1:
            pieces.append("'\"'")
    return f"concat({', '.join(pieces)})"


def escape_java_string(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def ui_selector(method: str, value: str) -> str:
    return f'new UiSelector().{method}("{escape_java_string(value)}")'


def build_xpath(node: UiNode) -> str:
    short_class = short_class_name(node.tag)
    if node.content_desc:
        return f"//{short_class}[@content-desc={xpath_literal(node.content_desc)}]"
    if node.resource_id:
        return f"//*[@resource-id={xpath_literal(node.resource_id)}]"
    if node.text:
        return f"//{short_class}[@text={xpath_literal(node.text)}]"
    return f"//{short_class}"


def synthesize_locators(node: UiNode) -> list[LocatorSuggestion]:
    suggestions: list[LocatorSuggestion] = []
    if node.content_desc:
        suggestions.append(LocatorSuggestion("accessibility id", node.content_desc))
    if node.resource_id:
        suggestions.append(LocatorSuggestion("id", node.resource_id))
        suggestions.append(LocatorSuggestion("-android uiautomator", ui_selector("resourceId", node.resource_id)))
    if node.text:
        suggestions.append(LocatorSuggestion("-android uiautomator", ui_selector("text", node.text)))
    suggestions.append(LocatorSuggestion("xpath", build_xpath(node)))
    return _dedupe(suggestions)


def _dedupe(suggestions: list[LocatorSuggestion]) -> list[LocatorSuggestion]:
    unique: list[LocatorSuggestion] = []
    seen: set[tuple[str, str]] = set()
    for suggestion in suggestions:
        key = (suggestion.strategy, suggestion.selector)
        if key in seen:
            continue
        seen.add(key)
        unique.append(suggestion)
    return unique
