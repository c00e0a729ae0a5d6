from datetime import date, datetime
from types import SimpleNamespace

from moodlog.engine.statistics import compute_summary, entries_in_period, summarize_entries

from conftest import make_entry_payload


def make_entry(day, **fields):
    values = {
        "mood_rating": 5,
        "anxiety_level": 5,
        "sleep_hours": 7.0,
        "sleep_quality": 5,
        "stress_level": 5,
        "social_interaction": 5,
        "activity_duration": 0,
        "depression_symptoms": False,
        "depression_symptom_severity": 0,
        "anxiety_symptoms": False,
        "anxiety_symptom_severity": 0,
    }
    values.update(fields)
    return SimpleNamespace(date=datetime.combine(day, datetime.min.time()), **values)


SAMPLE = [
    make_entry(date(2024, 3, 5), mood_rating=7, anxiety_level=3, sleep_hours=6.5, sleep_quality=7,
               stress_level=4, social_interaction=6, activity_duration=30,
               anxiety_symptoms=True, anxiety_symptom_severity=2),
    make_entry(date(2024, 3, 1), mood_rating=6, anxiety_level=4, sleep_hours=7.0, sleep_quality=6,
               stress_level=5, social_interaction=5, activity_duration=0,
               anxiety_symptoms=True, anxiety_symptom_severity=6),
    make_entry(date(2024, 3, 4), mood_rating=8, anxiety_level=2, sleep_hours=8.0, sleep_quality=8,
               stress_level=3, social_interaction=7, activity_duration=45,
               depression_symptoms=True, depression_symptom_severity=4),
    make_entry(date(2024, 2, 20), mood_rating=1),
]


def test_entries_in_period_filters_and_sorts():
    selected = entries_in_period(SAMPLE, "week", date(2024, 3, 5))

    assert [e.date.day for e in selected] == [1, 4, 5]


def test_week_covers_seven_calendar_days():
    entries = [make_entry(date(2024, 2, 27)), make_entry(date(2024, 2, 28))]

    selected = entries_in_period(entries, "week", date(2024, 3, 5))

    assert [e.date.date() for e in selected] == [date(2024, 2, 28)]


def test_summary_averages_and_symptoms():
    summary = compute_summary(entries_in_period(SAMPLE, "week", date(2024, 3, 5)))

    assert summary["entry_count"] == 3
    assert summary["mood_rating"] == 7.0
    assert summary["anxiety_level"] == 3.0
    assert summary["sleep_hours"] == 7.2
    assert summary["sleep_quality"] == 7.0
    assert summary["stress_level"] == 4.0
    assert summary["social_interaction"] == 6.0
    assert summary["activity_duration"] == 25
    assert summary["active_percentage"] == 67
    assert summary["depression_percentage"] == 33
    assert summary["depression_severity"] == 4.0
    assert summary["anxiety_percentage"] == 67
    assert summary["anxiety_severity"] == 4.0


def test_summary_without_symptoms_reports_zero_severity():
    summary = compute_summary([make_entry(date(2024, 3, 5))])

    assert summary["depression_percentage"] == 0
    assert summary["depression_severity"] == 0.0
    assert summary["anxiety_severity"] == 0.0


def test_empty_period_has_no_summary():
    result = summarize_entries(SAMPLE, "week", date(2025, 1, 1))

    assert result["summary"] is None
    assert result["series"] == []
    assert result["title"] == "Last 7 Days"


def test_year_includes_older_entries():
    result = summarize_entries(SAMPLE, "year", date(2024, 3, 5))

    assert result["summary"]["entry_count"] == 4
    assert result["series"][0]["date"] == "2024-02-20"
    assert result["start"] == "2023-03-07"


def test_statistics_endpoint(client, auth_headers):
    for day, mood in [("2024-03-01", 4), ("2024-03-04", 6), ("2024-02-01", 10)]:
        response = client.post(
            "/entries",
            json=make_entry_payload(date=f"{day}T12:00:00", mood_rating=mood),
            headers=auth_headers
        )
        assert response.status_code == 201

    response = client.get(
        "/statistics",
        params={"period": "week", "today": "2024-03-05"},
        headers=auth_headers
    )

    assert response.status_code == 200
    data = response.json()
    assert data["summary"]["entry_count"] == 2
    assert data["summary"]["mood_rating"] == 5.0
    assert [point["mood"] for point in data["series"]] == [4, 6]


def test_statistics_rejects_unknown_period(client, auth_headers):
    response = client.get("/statistics", params={"period": "decade"}, headers=auth_headers)
    assert response.status_code == 422


def test_halfway_values_round_up():
    entries = [make_entry(date(2024, 3, day), sleep_hours=7.25) for day in range(1, 8)]
    entries.append(make_entry(date(2024, 3, 8), sleep_hours=7.25, activity_duration=20))

    summary = compute_summary(entries)

    assert summary["active_percentage"] == 13
    assert summary["sleep_hours"] == 7.3
    assert summary["activity_duration"] == 3
