from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from rapidfuzz.fuzz import WRatio

from tabwin.config import FUZZY_MATCH_THRESHOLD
from tabwin.domain.models import TabItem, TabWindow


@dataclass(frozen=True)
class ScoredItem:
    index: int
    item: TabItem
    score: float


def _normalize(query: str) -> str:
    return query.strip().lower()


def _candidate_text(item: TabItem) -> str:
    parts = [item.title, item.url]
    return " ".join(p for p in parts if p).lower()


def _score(text: str, q: str) -> float:
    if not text:
        return 0.0
    if q in text:
        bonus = 10.0 if text.startswith(q) else 0.0
        return 100.0 + bonus
    return float(WRatio(q, text))


def filter_tab_items(items: Sequence[TabItem], query: str) -> list[TabItem]:
    q = _normalize(query)
    if not q:
        return list(items)

    scored: list[ScoredItem] = []
    for i, item in enumerate(items):
        score = _score(_candidate_text(item), q)
        if score >= FUZZY_MATCH_THRESHOLD:
            scored.append(ScoredItem(index=i, item=item, score=score))

    scored.sort(key=lambda x: (-x.score, x.index))
    return [s.item for s in scored]


def filter_windows(windows: Sequence[TabWindow], query: str) -> list[TabWindow]:
    q = _normalize(query)
    if not q:
        return list(windows)

    out: list[TabWindow] = []
    for window in windows:
        if _score(window.title.lower(), q) >= FUZZY_MATCH_THRESHOLD:
            out.append(window)
            continue
        matched = filter_tab_items(window.tab_items, q)
        if matched:
            # keep display order, not rank order, inside a window
            keep = set(matched)
            out.append(window.set_tab_items(t for t in window.tab_items if t in keep))
    return out
