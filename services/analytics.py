# services/analytics.py
"""
Aggregations over work entries and bugs.

All functions take plain document dicts as returned by the repositories and
have no side effects.
"""

from collections import Counter
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List

SEVERITIES = ["Low", "Medium", "High", "Critical"]
COMPLEXITIES = ["Easy", "Medium", "Hard"]


def _skills(entry: Dict[str, Any]) -> List[Dict[str, Any]]:
    return entry.get("extracted_skills") or []


def _technologies(entry: Dict[str, Any]) -> List[str]:
    return entry.get("technologies") or []


def _productivity(entry: Dict[str, Any]) -> Dict[str, Any]:
    return entry.get("productivity") or {}


def _number(value: Any) -> float:
    return value if isinstance(value, (int, float)) else 0


def unique_in_order(values: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(values))


# ---------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------

def report_totals(entries: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "total_entries": len(entries),
        "total_problems_solved": sum(_number(e.get("problems_solved")) for e in entries),
        "total_tasks_completed": sum(_number(_productivity(e).get("tasks_completed")) for e in entries),
        "total_hours_spent": sum(_number(_productivity(e).get("hours_spent")) for e in entries),
        "technologies": unique_in_order(t for e in entries for t in _technologies(e)),
        "skills": [s.get("name") for e in entries for s in _skills(e) if s.get("name")],
    }


def report_data_context(entries: List[Dict[str, Any]], start_date: Any, end_date: Any) -> str:
    """Data block fed to the report prompt."""
    totals = report_totals(entries)
    return (
        f"Period: {start_date} to {end_date}\n"
        f"Total Entries: {totals['total_entries']}\n"
        f"Total Problems Solved: {totals['total_problems_solved']}\n"
        f"Total Tasks Completed: {totals['total_tasks_completed']}\n"
        f"Technologies Used: {', '.join(totals['technologies'])}\n"
        f"Skills Developed: {', '.join(totals['skills'])}\n"
    )


def report_stats(entries: List[Dict[str, Any]]) -> Dict[str, Any]:
    totals = report_totals(entries)

    breakdown: Dict[str, Dict[str, Any]] = {}
    for entry in entries:
        for skill in _skills(entry):
            name = skill.get("name")
            if not name:
                continue
            existing = breakdown.get(name, {"count": 0})
            breakdown[name] = {"count": existing["count"] + 1, "category": skill.get("category")}

    complexity = {level: 0 for level in COMPLEXITIES}
    for entry in entries:
        level = _productivity(entry).get("complexity")
        if level in complexity:
            complexity[level] += 1

    return {
        "total_entries": totals["total_entries"],
        "total_problems_solved": totals["total_problems_solved"],
        "total_tasks_completed": totals["total_tasks_completed"],
        "total_hours_spent": totals["total_hours_spent"],
        "skills_breakdown": sorted(
            ({"name": name, **data} for name, data in breakdown.items()),
            key=lambda s: s["count"],
            reverse=True,
        ),
        "technologies_used": totals["technologies"],
        "complexity_distribution": complexity,
        "top_accomplishments": [a for e in entries for a in (e.get("accomplishments") or [])][:10],
    }


def week_start(value: Any) -> date:
    """Sunday on or before the given date."""
    day = value.date() if isinstance(value, datetime) else value
    return day - timedelta(days=(day.weekday() + 1) % 7)


def weekly_timeline(entries: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Group entries by week, preserving the entries' order."""
    weeks: Dict[str, Dict[str, Any]] = {}

    for entry in entries:
        key = week_start(entry["date"]).isoformat()
        week = weeks.setdefault(key, {
            "week_start": key,
            "entries": [],
            "total_problems": 0,
            "total_tasks": 0,
            "skills": [],
            "technologies": [],
        })
        week["entries"].append(entry)
        week["total_problems"] += _number(entry.get("problems_solved"))
        week["total_tasks"] += _number(_productivity(entry).get("tasks_completed"))
        week["skills"].extend(s.get("name") for s in _skills(entry) if s.get("name"))
        week["technologies"].extend(_technologies(entry))

    timeline = []
    for week in weeks.values():
        week["skills"] = unique_in_order(week["skills"])
        week["technologies"] = unique_in_order(week["technologies"])
        week["entries_count"] = len(week["entries"])
        timeline.append(week)
    return timeline


# ---------------------------------------------------------------------
# Work entry analytics
# ---------------------------------------------------------------------

def skills_summary(entries: List[Dict[str, Any]]) -> Dict[str, Any]:
    skills: Dict[str, Dict[str, Any]] = {}

    for entry in entries:
        for skill in _skills(entry):
            name = skill.get("name")
            if not name:
                continue
            confidence = _number(skill.get("confidence"))
            if name in skills:
                existing = skills[name]
                count = existing["count"]
                existing["category"] = skill.get("category")
                existing["avg_confidence"] = (existing["avg_confidence"] * count + confidence) / (count + 1)
                existing["count"] = count + 1
            else:
                skills[name] = {
                    "name": name,
                    "category": skill.get("category"),
                    "count": 1,
                    "avg_confidence": confidence,
                }

    ranked = sorted(skills.values(), key=lambda s: s["count"], reverse=True)

    by_category: Dict[str, List[Dict[str, Any]]] = {}
    for skill in ranked:
        by_category.setdefault(skill["category"] or "Other", []).append(skill)

    return {"total_skills": len(ranked), "skills": ranked, "by_category": by_category}


def technologies_summary(entries: List[Dict[str, Any]]) -> Dict[str, Any]:
    counts = Counter(t for e in entries for t in _technologies(e))
    technologies = [{"name": name, "count": count} for name, count in counts.most_common()]
    return {"total_technologies": len(technologies), "technologies": technologies}


# ---------------------------------------------------------------------
# Bug analytics
# ---------------------------------------------------------------------

def bug_stats(bugs: List[Dict[str, Any]]) -> Dict[str, Any]:
    by_severity = {severity: 0 for severity in SEVERITIES}
    for bug in bugs:
        if bug.get("severity") in by_severity:
            by_severity[bug["severity"]] += 1

    by_category = Counter(bug.get("category") or "Other" for bug in bugs)
    tags = Counter(tag for bug in bugs for tag in (bug.get("tags") or []))

    return {
        "total": len(bugs),
        "by_severity": by_severity,
        "by_category": dict(by_category),
        "common_tags": [{"tag": tag, "count": count} for tag, count in tags.most_common(10)],
    }
