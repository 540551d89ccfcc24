from __future__ import annotations

from typing import Iterator

from .models import MatchCandidate, UiNode
from .scoring import explain_score


def iter_nodes(root: UiNode) -> Iterator[UiNode]:
    """Yield every node once in pre-order, children in document order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def collect_matches(root: UiNode, term: str) -> list[MatchCandidate]:
    matches: list[MatchCandidate] = []
    for order, node in enumerate(iter_nodes(root)):
        score, reasons = explain_score(node, term)
        if score > 0:
            matches.append(MatchCandidate(node=node, score=score, order=order, reasons=reasons))
    return matches


def find_best_match(root: UiNode | None, term: str) -> MatchCandidate | None:
    """Return the highest-scoring node; ties keep the earliest node in pre-order."""
    if root is None:
        return None
    best: MatchCandidate | None = None
    for candidate in collect_matches(root, term):
        if best is None or candidate.score > best.score:
            best = candidate
    return best


def rank_matches(root: UiNode, term: str, limit: int | None = None) -> list[MatchCandidate]:
    ranked = sorted(collect_matches(root, term), key=lambda item: (-item.score, item.order))
    if limit is None:
        return ranked
    return ranked[: max(0, limit)]
