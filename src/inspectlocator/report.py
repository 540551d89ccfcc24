from __future__ import annotations

from dataclasses import dataclass
import unicodedata

from .locator_synthesis import short_class_name
from .models import InspectionReport

BOX_WIDTH = 98
COLUMN_WIDTH = 36
MAX_SELECTOR_LENGTH = 55
MAX_VALUE_LENGTH = 50
EMPTY_VALUE = "-"

TITLE = "\U0001F50D ANDROID ELEMENT INSPECTOR"
NO_MATCH_MESSAGE = "❌ NO SIMILAR ELEMENT FOUND ON PAGE!"
MATCH_MESSAGE = "✅ CLOSEST MATCHING ELEMENT FOUND"


@dataclass(frozen=True, slots=True)
class Palette:
    reset: str = ""
    red: str = ""
    green: str = ""
    yellow: str = ""
    blue: str = ""
    magenta: str = ""
    cyan: str = ""
    white: str = ""
    bold: str = ""
    dim: str = ""


ANSI_PALETTE = Palette(
    reset="\033[0m",
    red="\033[31m",
    green="\033[32m",
    yellow="\033[33m",
    blue="\033[34m",
    magenta="\033[35m",
    cyan="\033[36m",
    white="\033[37m",
    bold="\033[1m",
    dim="\033[2m",
)
PLAIN_PALETTE = Palette()


def shorten(value: str, limit: int) -> str:
    if len(value) <= limit:
        return value
    return value[: limit - 3] + "..."


def display_width(value: str) -> int:
    """Terminal columns taken by ``value``; wide glyphs such as emoji count twice."""
    return sum(2 if unicodedata.east_asian_width(char) in ("W", "F") else 1 for char in value)


def render_report(report: InspectionReport, color: bool = True) -> str:
    p = ANSI_PALETTE if color else PLAIN_PALETTE
    lines: list[str] = ["", ""]

    lines.append(f"{p.red}╔{'═' * BOX_WIDTH}╗{p.reset}")
    title_padding = " " * max(1, BOX_WIDTH - display_width(TITLE) - 1)
    lines.append(f"{p.red}║ {p.bold}{TITLE}{p.reset}{p.red}{title_padding}║{p.reset}")
    lines.append(f"{p.red}╚{'═' * BOX_WIDTH}╝{p.reset}")
    lines.append("")

    lines.append(f"{p.yellow}⚠️  EXCEPTION: {p.reset}{p.red}{report.exception_name}{p.reset}")
    lines.append(f"{p.yellow}\U0001F4CD TARGET LOCATOR: {p.reset}{p.white}{report.locator}{p.reset}")

    if not report.matched:
        lines.append("")
        lines.append(f"{p.red}{NO_MATCH_MESSAGE}{p.reset}")
        lines.append("")
        lines.append("")
        return "\n".join(lines)

    lines.append(f"{p.green}{MATCH_MESSAGE}{p.reset}")

    lines.append("")
    lines.extend(_table_header(p, p.cyan, "Find By", "Selector"))
    for suggestion in report.suggestions:
        selector = shorten(suggestion.selector, MAX_SELECTOR_LENGTH)
        lines.append(f"{p.cyan}│ {p.reset}{suggestion.strategy:<{COLUMN_WIDTH}}{p.green}{selector}{p.reset}")
    lines.append(_box_bottom(p, p.cyan))

    lines.append("")
    lines.extend(_table_header(p, p.magenta, "Attribute", "Value"))
    for name, value in report.attribute_rows():
        if value:
            rendered = f"{p.white}{shorten(value, MAX_VALUE_LENGTH)}{p.reset}"
        else:
            rendered = f"{p.dim}{EMPTY_VALUE}{p.reset}"
        lines.append(f"{p.magenta}│ {p.reset}{name:<{COLUMN_WIDTH}}{rendered}")
    lines.append(_box_bottom(p, p.magenta))

    lines.append("")
    parent = short_class_name(report.container_tag or report.tag)
    lines.append(_box_top(p, p.blue))
    lines.append(f"{p.blue}│ {p.bold}\U0001F4E6 XML Block (Parent: {parent}){p.reset}")
    lines.append(_box_divider(p, p.blue))
    for line in report.context_block.split("\n"):
        if line.strip():
            lines.append(f"{p.blue}│ {p.reset}{p.dim}{line}{p.reset}")
    lines.append(_box_bottom(p, p.blue))
    lines.append("")
    lines.append("")
    return "\n".join(lines)


def _table_header(p: Palette, frame: str, first: str, second: str) -> list[str]:
    heading = f"{first:<{COLUMN_WIDTH}}{second}"
    padding = " " * max(1, BOX_WIDTH - len(heading) - 1)
    return [
        _box_top(p, frame),
        f"{frame}│ {p.bold}{heading}{p.reset}{padding}{frame}│{p.reset}",
        _box_divider(p, frame),
    ]


def _box_top(p: Palette, frame: str) -> str:
    return f"{frame}┌{'─' * BOX_WIDTH}┐{p.reset}"


def _box_divider(p: Palette, frame: str) -> str:
    return f"{frame}├{'─' * BOX_WIDTH}┤{p.reset}"


def _box_bottom(p: Palette, frame: str) -> str:
    return f"{frame}└{'─' * BOX_WIDTH}┘{p.reset}"
