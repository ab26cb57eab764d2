"""Subsequence fuzzy scoring used by channels to rank candidates."""

from __future__ import annotations

import heapq
from collections.abc import Sequence

WORD_BOUNDARY_CHARS = "/_- .:="


def fuzzy_score(query: str, candidate: str) -> int | None:
    """Score ``candidate`` against ``query``; ``None`` when it does not match.

    Every query character must appear in order (case-insensitively).
    Consecutive runs and word-boundary hits raise the score, gaps and long
    candidates lower it.
    """
    if not query:
        return 0
    query_folded = query.casefold()
    candidate_folded = candidate.casefold()

    score = 0
    prev_idx = -1
    run = 0
    for needle in query_folded:
        idx = candidate_folded.find(needle, prev_idx + 1)
        if idx < 0:
            return None
        if idx == prev_idx + 1:
            run += 1
            score += 20 + min(16, run * 4)
        else:
            run = 0
            score -= min(40, (idx - prev_idx - 1) * 2)
        if idx == 0 or candidate_folded[idx - 1] in WORD_BOUNDARY_CHARS:
            score += 35
        prev_idx = idx

    score -= len(candidate_folded) // 5
    return score


def rank_candidates(query: str, labels: Sequence[str], limit: int | None = None) -> list[int]:
    """Return indices of matching ``labels`` ordered best-first.

    An empty query keeps every label in source order. Ties keep source order.
    """
    if not query:
        indices = range(len(labels))
        return list(indices if limit is None else indices[: max(0, limit)])

    scored: list[tuple[int, int]] = []
    for idx, label in enumerate(labels):
        score = fuzzy_score(query, label)
        if score is not None:
            scored.append((-score, idx))
    if limit is not None:
        return [idx for _neg, idx in heapq.nsmallest(max(0, limit), scored)]
    scored.sort()
    return [idx for _neg, idx in scored]
