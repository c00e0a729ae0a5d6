from moodlog.config import get_settings

from conftest import make_entry_payload


def add_entry(client, headers, day):
    response = client.post(
        "/entries",
        json=make_entry_payload(date=f"2024-03-{day:02d}T10:00:00"),
        headers=headers
    )
    assert response.status_code == 201
    return response.json()


def test_recommendations_newest_first_with_formatting(client, auth_headers):
    add_entry(client, auth_headers, 1)
    add_entry(client, auth_headers, 3)

    response = client.get("/recommendations", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 2
    assert [item["date"] for item in data["recommendations"]] == ["2024-03-03", "2024-03-01"]
    assert data["recommendations"][0]["formatted"]["final_tip"] == "Drink water"


def test_blank_recommendations_are_hidden(client, auth_headers):
    entry = add_entry(client, auth_headers, 1)
    add_entry(client, auth_headers, 2)
    client.put(
        f"/entries/{entry['id']}",
        json={**make_entry_payload(date="2024-03-01T10:00:00"), "recommendation": "  "},
        headers=auth_headers
    )

    data = client.get("/recommendations", headers=auth_headers).json()

    assert [item["date"] for item in data["recommendations"]] == ["2024-03-02"]


def test_recent_scope_is_limited(client, auth_headers, monkeypatch):
    monkeypatch.setattr(get_settings(), "recent_recommendations_limit", 2)
    for day in range(1, 5):
        add_entry(client, auth_headers, day)

    data = client.get("/recommendations", params={"scope": "recent"}, headers=auth_headers).json()

    assert data["scope"] == "recent"
    assert [item["date"] for item in data["recommendations"]] == ["2024-03-04", "2024-03-03"]


def test_unknown_scope(client, auth_headers):
    assert client.get("/recommendations", params={"scope": "old"}, headers=auth_headers).status_code == 422
