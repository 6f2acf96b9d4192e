from __future__ import annotations

from collections import Counter
from typing import Any

FILTER_FIELDS = ["search", "category", "categories", "toolstack", "difficulty", "tags", "sort_by"]


def _top(counter: Counter[str], n: int = 10) -> list[dict[str, Any]]:
    return [{"name": k, "count": c} for k, c in counter.most_common(n)]


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    by_type: Counter[str] = Counter(e["type"] for e in events)

    # Average response time
    times = [e["response_time_ms"] for e in events if "response_time_ms" in e]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    surveys = [e for e in events if e["type"] == "survey"]

    goal_counter: Counter[str] = Counter()
    tool_counter: Counter[str] = Counter()
    level_counter: Counter[str] = Counter()
    recommended_counter: Counter[str] = Counter()
    for s in surveys:
        for g in s.get("automation_goals", []) or []:
            goal_counter[g.lower()] += 1
        for t in s.get("tools_used", []) or []:
            tool_counter[t] += 1
        if s.get("experience_level"):
            level_counter[s["experience_level"]] += 1
        for rid in s.get("recommended_ids", []) or []:
            recommended_counter[str(rid)] += 1

    # Filter usage rates
    filters = [e for e in events if e["type"] == "filter"]
    filter_counts = {f: 0 for f in FILTER_FIELDS}
    for e in filters:
        for f in FILTER_FIELDS:
            if e.get(f):
                filter_counts[f] += 1
    filter_usage = {
        k: round(v / len(filters) * 100, 1) if filters else 0.0
        for k, v in filter_counts.items()
    }

    empty_results = sum(1 for e in events if e.get("results_returned") == 0)

    return {
        "total_events": len(events),
        "total_surveys": by_type["survey"],
        "total_filters": by_type["filter"],
        "total_searches": by_type["search"],
        "avg_response_time_ms": avg_time,
        "empty_results": empty_results,
        "top_goals": _top(goal_counter),
        "top_tools": _top(tool_counter),
        "experience_levels": dict(level_counter),
        "filter_usage": filter_usage,
        "top_recommended": _top(recommended_counter),
    }
