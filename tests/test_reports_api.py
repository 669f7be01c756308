"""Report endpoints: generation, audio, PDF, stats and timeline."""

import pytest

REPORT_RANGE = {"start_date": "2024-05-01T00:00:00", "end_date": "2024-05-31T23:59:59"}


def add_entry(client, title, date):
    response = client.post(
        "/api/work-entries",
        json={"title": title, "description": f"{title} details", "date": date},
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.fixture
def may_entries(client):
    return [
        add_entry(client, "Auth API", "2024-05-06T10:00:00"),
        add_entry(client, "Dashboard", "2024-05-08T10:00:00"),
        add_entry(client, "Deploy", "2024-05-14T10:00:00"),
    ]


def test_generate_report(client, provider, may_entries):
    provider.reply = lambda prompt: "**Executive Summary**: a productive month"

    response = client.post("/api/reports/generate", json=REPORT_RANGE)

    assert response.status_code == 200
    body = response.json()
    assert body["report_text"] == "**Executive Summary**: a productive month"
    assert body["metadata"]["entries_count"] == 3
    assert body["metadata"]["period"]["start_date"] == "2024-05-01T00:00:00"
    assert body["audio_file"] is None
    assert body["pdf_file"] is None

    prompt = provider.prompts[-1]
    assert "Period: 2024-05-01 to 2024-05-31" in prompt
    assert "Total Entries: 3" in prompt
    assert "Total Problems Solved: 6" in prompt


def test_generate_report_only_uses_range(client, provider, may_entries):
    add_entry(client, "June work", "2024-06-02T10:00:00")

    response = client.post("/api/reports/generate", json=REPORT_RANGE)

    assert response.json()["metadata"]["entries_count"] == 3


def test_generate_report_with_audio(client, provider, reports_dir, may_entries):
    provider.audio = b"ID3report-audio"

    response = client.post("/api/reports/generate", json={**REPORT_RANGE, "include_audio": True})

    assert response.status_code == 200
    audio = response.json()["audio_file"]
    assert audio["filename"].startswith("report_")
    assert audio["filename"].endswith(".mp3")
    assert audio["url"] == f"/reports/{audio['filename']}"
    assert (reports_dir / audio["filename"]).read_bytes() == b"ID3report-audio"


def test_generate_report_with_pdf(client, reports_dir, may_entries):
    response = client.post("/api/reports/generate", json={**REPORT_RANGE, "include_pdf": True})

    assert response.status_code == 200
    pdf = response.json()["pdf_file"]
    assert pdf["filename"].endswith(".pdf")
    assert pdf["url"] == f"/reports/{pdf['filename']}"
    assert (reports_dir / pdf["filename"]).read_bytes().startswith(b"%PDF")


def test_generate_report_audio_unsupported(client, provider, may_entries):
    provider.speech_supported = False

    response = client.post("/api/reports/generate", json={**REPORT_RANGE, "include_audio": True})

    assert response.status_code == 501


@pytest.mark.parametrize("payload", [{}, {"start_date": "2024-05-01T00:00:00"}, {"end_date": "2024-05-31T00:00:00"}])
def test_generate_report_requires_both_dates(client, payload):
    response = client.post("/api/reports/generate", json=payload)

    assert response.status_code == 400
    assert response.json()["detail"] == "Start date and end date are required"


def test_generate_report_empty_range(client, may_entries):
    response = client.post(
        "/api/reports/generate",
        json={"start_date": "2023-01-01T00:00:00", "end_date": "2023-01-31T00:00:00"},
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "No work entries found in this date range"


def test_generate_report_skips_unprocessed_entries(client, provider):
    provider.fail_completions = True
    add_entry(client, "Unanalyzed", "2024-05-06T10:00:00")
    provider.fail_completions = False

    response = client.post("/api/reports/generate", json=REPORT_RANGE)

    assert response.status_code == 404


def test_generate_report_provider_failure(client, provider, may_entries):
    provider.fail_completions = True

    response = client.post("/api/reports/generate", json=REPORT_RANGE)

    assert response.status_code == 502


def test_report_stats(client, may_entries):
    response = client.get("/api/reports/stats", params=REPORT_RANGE)

    assert response.status_code == 200
    body = response.json()
    assert body["total_entries"] == 3
    assert body["total_problems_solved"] == 6
    assert body["total_tasks_completed"] == 6
    assert body["total_hours_spent"] == 9
    assert body["technologies_used"] == ["Python", "MongoDB"]
    assert body["complexity_distribution"] == {"Easy": 0, "Medium": 3, "Hard": 0}
    assert body["skills_breakdown"][0] == {"name": "FastAPI", "category": "Backend", "count": 3}


def test_report_stats_ignores_half_open_range(client, may_entries):
    add_entry(client, "June work", "2024-06-02T10:00:00")

    response = client.get("/api/reports/stats", params={"start_date": "2024-06-01T00:00:00"})

    assert response.json()["total_entries"] == 4


def test_report_timeline(client, may_entries):
    response = client.get("/api/reports/timeline", params=REPORT_RANGE)

    assert response.status_code == 200
    weeks = response.json()
    assert [w["week_start"] for w in weeks] == ["2024-05-05", "2024-05-12"]
    assert [w["entries_count"] for w in weeks] == [2, 1]
    assert weeks[0]["total_problems"] == 4
    assert weeks[0]["skills"] == ["FastAPI", "MongoDB"]
    assert [e["title"] for e in weeks[0]["entries"]] == ["Auth API", "Dashboard"]


def test_generate_audio(client, provider, reports_dir):
    response = client.post("/api/reports/generate-audio", json={"text": "Read this aloud"})

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Audio generated successfully"
    assert (reports_dir / body["audio_file"]["filename"]).read_bytes() == provider.audio


@pytest.mark.parametrize("payload", [{}, {"text": ""}, {"text": "  "}])
def test_generate_audio_requires_text(client, payload):
    response = client.post("/api/reports/generate-audio", json=payload)

    assert response.status_code == 400
    assert response.json()["detail"] == "Text is required"


def test_generate_audio_unsupported(client, provider):
    provider.speech_supported = False

    response = client.post("/api/reports/generate-audio", json={"text": "hello"})

    assert response.status_code == 501


def test_generate_audio_failure(client, provider, reports_dir):
    provider.audio = b""

    response = client.post("/api/reports/generate-audio", json={"text": "hello"})

    assert response.status_code == 502
    assert not reports_dir.exists() or list(reports_dir.iterdir()) == []
