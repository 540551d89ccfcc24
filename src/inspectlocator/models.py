from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Literal, Mapping

ReportStatus = Literal["matched", "no_match"]
FindBy = Literal["accessibility id", "id", "-android uiautomator", "xpath"]

REPORT_ATTRIBUTES = (
    "index",
    "package",
    "class",
    "text",
    "content-desc",
    "resource-id",
    "enabled",
    "bounds",
    "displayed",
)


@dataclass(slots=True, eq=False)
class UiNode:
    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[UiNode] = field(default_factory=list)
    parent: UiNode | None = field(default=None, repr=False)

    def attr(self, name: str) -> str:
        return self.attributes.get(name, "") or ""

    @property
    def text(self) -> str:
        return self.attr("text")

    @property
    def resource_id(self) -> str:
        return self.attr("resource-id")

    @property
    def content_desc(self) -> str:
        return self.attr("content-desc")

    def append(self, child: UiNode) -> UiNode:
        child.parent = self
        self.children.append(child)
        return child

    def ancestors(self) -> Iterator[UiNode]:
        current = self.parent
        while current is not None:
            yield current
            current = current.parent


@dataclass(frozen=True, slots=True)
class MatchCandidate:
    node: UiNode
    score: int
    order: int
    reasons: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class LocatorSuggestion:
    strategy: FindBy
    selector: str


@dataclass(frozen=True, slots=True)
class InspectionReport:
    locator: str
    search_term: str
    status: ReportStatus
    exception_name: str = "NoSuchElementException"
    score: int = 0
    tag: str = ""
    attributes: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    suggestions: tuple[LocatorSuggestion, ...] = ()
    container_tag: str = ""
    context_block: str = ""

    @property
    def matched(self) -> bool:
        return self.status == "matched"

    def attribute(self, name: str) -> str:
        if name == "class":
            return self.tag
        return self.attributes.get(name, "") or ""

    def attribute_rows(self) -> list[tuple[str, str]]:
        return [(name, self.attribute(name)) for name in REPORT_ATTRIBUTES]


def freeze_attributes(node: UiNode) -> Mapping[str, str]:
    return MappingProxyType(dict(node.attributes))
