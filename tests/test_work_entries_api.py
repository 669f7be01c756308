"""Work entry endpoints."""

import pytest


def create_entry(client, title="Built auth flow", description="JWT login with FastAPI", date=None):
    payload = {"title": title, "description": description}
    if date:
        payload["date"] = date
    response = client.post("/api/work-entries", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def test_create_work_entry_is_analyzed(client, provider, work_repo):
    provider.embeddings["Built auth flow JWT login with FastAPI"] = [0.1, 0.9]

    response = client.post(
        "/api/work-entries",
        json={"title": "  Built auth flow  ", "description": "JWT login with FastAPI", "date": "2024-05-01T09:00:00"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Work entry created and analyzed successfully"
    assert body["warning"] is None

    data = body["data"]
    assert data["title"] == "Built auth flow"
    assert data["ai_processed"] is True
    assert data["technologies"] == ["Python", "MongoDB"]
    assert data["problems_solved"] == 2
    assert data["productivity"]["complexity"] == "Medium"
    assert "embedding" not in data

    stored = work_repo.get(data["id"])
    assert stored["embedding"] == [0.1, 0.9]


def test_create_work_entry_requires_title_and_description(client, work_repo):
    response = client.post("/api/work-entries", json={"title": "Only a title"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Title and description are required"
    assert work_repo.documents == {}


def test_create_work_entry_survives_analysis_failure(client, provider, work_repo):
    provider.fail_completions = True

    response = client.post("/api/work-entries", json={"title": "Pairing", "description": "Helped a teammate"})

    assert response.status_code == 201
    body = response.json()
    assert body["warning"]
    data = body["data"]
    assert data["ai_processed"] is False
    assert data["processing_error"]
    assert data["extracted_skills"] == []
    assert len(work_repo.documents) == 1


def test_list_work_entries_newest_first(client):
    create_entry(client, title="Older", date="2024-05-01T09:00:00")
    create_entry(client, title="Newer", date="2024-05-03T09:00:00")

    response = client.get("/api/work-entries")

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 2
    assert [e["title"] for e in body["data"]] == ["Newer", "Older"]


def test_list_work_entries_filters(client, provider):
    create_entry(client, title="May", date="2024-05-01T09:00:00")
    provider.analysis = {**provider.analysis, "technologies": ["Go"], "extracted_skills": [
        {"name": "Concurrency", "category": "Backend", "confidence": 0.7},
    ]}
    create_entry(client, title="June", date="2024-06-01T09:00:00")

    by_date = client.get("/api/work-entries", params={"start_date": "2024-05-15T00:00:00"}).json()
    by_tech = client.get("/api/work-entries", params={"technology": "Go"}).json()
    by_skill = client.get("/api/work-entries", params={"skill": "fastapi"}).json()

    assert [e["title"] for e in by_date["data"]] == ["June"]
    assert [e["title"] for e in by_tech["data"]] == ["June"]
    assert [e["title"] for e in by_skill["data"]] == ["May"]


def test_get_work_entry(client):
    entry = create_entry(client)

    response = client.get(f"/api/work-entries/{entry['id']}")

    assert response.status_code == 200
    assert response.json()["title"] == "Built auth flow"


def test_get_missing_work_entry(client):
    response = client.get("/api/work-entries/65f000000000000000000000")

    assert response.status_code == 404
    assert response.json()["detail"] == "Work entry not found"


def test_update_work_entry_reanalyzes_on_text_change(client, provider):
    entry = create_entry(client)
    provider.prompts.clear()

    response = client.put(f"/api/work-entries/{entry['id']}", json={"description": "Added refresh tokens"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["description"] == "Added refresh tokens"
    assert data["ai_processed"] is True
    assert "Description: Added refresh tokens" in provider.prompts[0]
    assert "Built auth flow Added refresh tokens" in provider.embedded


def test_update_work_entry_date_only_skips_analysis(client, provider):
    entry = create_entry(client)
    provider.prompts.clear()

    response = client.put(f"/api/work-entries/{entry['id']}", json={"date": "2024-07-01T00:00:00"})

    assert response.status_code == 200
    assert response.json()["data"]["date"].startswith("2024-07-01")
    assert provider.prompts == []


def test_update_work_entry_analysis_failure(client, provider):
    entry = create_entry(client)
    provider.fail_completions = True

    response = client.put(f"/api/work-entries/{entry['id']}", json={"title": "Renamed"})

    assert response.status_code == 502


def test_update_missing_work_entry(client):
    response = client.put("/api/work-entries/65f000000000000000000000", json={"title": "x"})
    assert response.status_code == 404


def test_delete_work_entry(client, work_repo):
    entry = create_entry(client)

    response = client.delete(f"/api/work-entries/{entry['id']}")

    assert response.status_code == 200
    assert response.json() == {"message": "Work entry deleted successfully"}
    assert work_repo.documents == {}
    assert client.delete(f"/api/work-entries/{entry['id']}").status_code == 404


def test_skills_analytics_ignores_unprocessed_entries(client, provider):
    create_entry(client)
    provider.fail_completions = True
    client.post("/api/work-entries", json={"title": "Unanalyzed", "description": "..."})

    body = client.get("/api/work-entries/analytics/skills").json()

    assert body["total_skills"] == 2
    assert {s["name"] for s in body["skills"]} == {"FastAPI", "MongoDB"}
    assert set(body["by_category"]) == {"Backend", "Database"}


def test_technologies_analytics(client):
    create_entry(client)
    create_entry(client, title="Second")

    body = client.get("/api/work-entries/analytics/technologies").json()

    assert body["total_technologies"] == 2
    assert body["technologies"][0] == {"name": "Python", "count": 2}



def test_create_work_entry_with_oddly_shaped_analysis(client, provider, work_repo):
    provider.reply = lambda prompt: '{"productivity": "Medium", "technologies": 5}'

    response = client.post("/api/work-entries", json={"title": "Refactor", "description": "Split the router"})

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["technologies"] == []
    assert data["productivity"]["complexity"] is None
    assert len(work_repo.documents) == 1


@pytest.mark.parametrize("payload", [{"title": ""}, {"title": "   "}, {"description": ""}])
def test_update_work_entry_rejects_blank_text(client, provider, payload):
    entry = create_entry(client)
    provider.prompts.clear()

    response = client.put(f"/api/work-entries/{entry['id']}", json=payload)

    assert response.status_code == 400
    assert response.json()["detail"] == "Title and description cannot be empty"
    assert client.get(f"/api/work-entries/{entry['id']}").json()["title"] == "Built auth flow"
    assert provider.prompts == []
