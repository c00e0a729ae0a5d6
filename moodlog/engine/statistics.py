"""
Period statistics over a user's entries.

Averages are rounded half up for display: one decimal for ratings and sleep,
whole minutes for activity. Symptom severity is averaged only over the entries that
flagged the symptom.
"""
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from statistics import mean
from typing import Dict, List, Optional

PERIOD_DAYS = {
    "week": 7,
    "month": 30,
    "year": 365,
}

PERIOD_TITLES = {
    "week": "Last 7 Days",
    "month": "Last 30 Days",
    "year": "Last 365 Days",
}

AVERAGED_FIELDS = [
    "mood_rating",
    "anxiety_level",
    "sleep_hours",
    "sleep_quality",
    "stress_level",
    "social_interaction",
]


def entries_in_period(entries: list, period: str, today: date) -> list:
    """Entries whose day falls in the last N calendar days, oldest first."""
    days = PERIOD_DAYS[period]
    start = today - timedelta(days=days - 1)
    selected = [e for e in entries if start <= e.date.date() <= today]
    return sorted(selected, key=lambda e: e.date)


def round_half_up(value: float, places: int = 0):
    """Round with ties away from zero, so 12.5 gives 13 and 7.25 gives 7.3."""
    rounded = Decimal(value).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    return int(rounded) if places == 0 else float(rounded)


def _percentage(part: int, whole: int) -> int:
    return round_half_up(part / whole * 100)


def _severity(flagged: list, attr: str) -> float:
    if not flagged:
        return 0.0
    return round_half_up(mean(getattr(e, attr) for e in flagged), 1)


def compute_summary(entries: list) -> Optional[Dict]:
    """Averages and symptom statistics, or None when there is nothing to summarize."""
    if not entries:
        return None

    count = len(entries)
    summary = {
        field: round_half_up(mean(getattr(e, field) for e in entries), 1)
        for field in AVERAGED_FIELDS
    }
    summary["activity_duration"] = round_half_up(mean(e.activity_duration for e in entries))

    active = [e for e in entries if e.activity_duration > 0]
    depressed = [e for e in entries if e.depression_symptoms]
    anxious = [e for e in entries if e.anxiety_symptoms]

    summary.update({
        "entry_count": count,
        "active_percentage": _percentage(len(active), count),
        "depression_percentage": _percentage(len(depressed), count),
        "depression_severity": _severity(depressed, "depression_symptom_severity"),
        "anxiety_percentage": _percentage(len(anxious), count),
        "anxiety_severity": _severity(anxious, "anxiety_symptom_severity"),
    })
    return summary


def chart_series(entries: list) -> List[Dict]:
    return [
        {
            "date": e.date.date().isoformat(),
            "mood": e.mood_rating,
            "anxiety": e.anxiety_level,
            "sleep": e.sleep_hours,
            "sleep_quality": e.sleep_quality,
            "stress": e.stress_level,
            "social": e.social_interaction,
        }
        for e in entries
    ]


def summarize_entries(entries: list, period: str, today: date) -> Dict:
    """Build the statistics payload for one period."""
    selected = entries_in_period(entries, period, today)
    return {
        "period": period,
        "title": PERIOD_TITLES[period],
        "start": (today - timedelta(days=PERIOD_DAYS[period] - 1)).isoformat(),
        "end": today.isoformat(),
        "summary": compute_summary(selected),
        "series": chart_series(selected),
    }
