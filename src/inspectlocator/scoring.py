from __future__ import annotations

from .models import UiNode

EXACT_MATCH_SCORE = 1000
ID_SUFFIX_SCORE = 900
PATH_SUFFIX_SCORE = 800
TEXT_CONTAINS_SCORE = 500
DESC_CONTAINS_SCORE = 500
ID_CONTAINS_SCORE = 400
TAG_CONTAINS_SCORE = 300

PREFIX_WEIGHTS: dict[str, int] = {
    "text": 5,
    "content-desc": 5,
    "resource-id": 3,
}


def prefix_run(first: str, second: str) -> int:
    if not first or not second:
        return 0
    count = 0
    for left, right in zip(first, second):
        if left != right:
            break
        count += 1
    return count


def score_node(node: UiNode, term: str) -> int:
    score, _reasons = explain_score(node, term)
    return score


def explain_score(node: UiNode, term: str | None) -> tuple[int, tuple[str, ...]]:
    search = (term or "").strip().lower()
    if not search:
        return 0, ()

    text = node.text.lower()
    content_desc = node.content_desc.lower()
    resource_id = node.resource_id.lower()
    tag = (node.tag or "").lower()

    score = 0
    reasons: list[str] = []

    def hit(points: int, reason: str) -> None:
        nonlocal score
        score += points
        reasons.append(reason)

    if text and text == search:
        hit(EXACT_MATCH_SCORE, "exact:text")
    if content_desc and content_desc == search:
        hit(EXACT_MATCH_SCORE, "exact:content-desc")
    if resource_id and resource_id == search:
        hit(EXACT_MATCH_SCORE, "exact:resource-id")
    if resource_id.endswith(f":id/{search}"):
        hit(ID_SUFFIX_SCORE, "suffix:id-namespace")
    if resource_id.endswith(f"/{search}"):
        hit(PATH_SUFFIX_SCORE, "suffix:resource-id")

    if search in text:
        hit(TEXT_CONTAINS_SCORE, "contains:text")
    if search in content_desc:
        hit(DESC_CONTAINS_SCORE, "contains:content-desc")
    if search in resource_id:
        hit(ID_CONTAINS_SCORE, "contains:resource-id")
    if search in tag:
        hit(TAG_CONTAINS_SCORE, "contains:class")

    for attribute, value in (("text", text), ("content-desc", content_desc), ("resource-id", resource_id)):
        run = prefix_run(value, search)
        if run:
            hit(run * PREFIX_WEIGHTS[attribute], f"prefix:{attribute}={run}")

    return score, tuple(reasons)
