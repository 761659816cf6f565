import os
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from api.dependencies.database import get_db
from api.main import app
from database.models.candidate_model import Candidate, CandidateSkill, Skill


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_database_health(client):
    r = client.get("/health/db")
    assert r.status_code == 200
    assert r.json()["database"] == "reachable"


def test_populate_test_mode(client):
    r = client.post("/populate/candidates", json={"testMode": True})

    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["results"]["candidatesAdded"] == 2
    assert body["results"]["publicationsAdded"] == 2
    assert body["message"] == "Test mode: Created 2 test candidates"


def test_populate_fatal_error_still_returns_200(client):
    failure = {
        "success": False,
        "message": "Population completed with fatal error",
        "results": {"candidatesAdded": 0, "publicationsAdded": 0, "skillsExtracted": 0, "errors": ["boom"]},
    }
    with patch("api.routers.populate.run_population", new=AsyncMock(return_value=failure)):
        r = client.post("/populate/candidates", json={})

    assert r.status_code == 200
    assert r.json()["success"] is False
    assert r.json()["results"]["errors"] == ["boom"]


def test_populate_passes_request_fields(client):
    ok = {"success": True, "message": "done", "results": {}}
    with patch("api.routers.populate.run_population", new=AsyncMock(return_value=ok)) as run:
        client.post(
            "/populate/candidates",
            json={"universities": ["MIT"], "minCitations": 9, "maxCandidates": 3, "graduationYears": [2027]},
        )

    kwargs = run.await_args.kwargs
    assert kwargs["universities"] == ["MIT"]
    assert kwargs["min_citations"] == 9
    assert kwargs["max_candidates"] == 3
    assert kwargs["graduation_years"] == [2027]
    assert kwargs["test_mode"] is False


def test_status_reports_counts_and_distribution(client, db_session):
    client.post("/populate/candidates", json={"testMode": True})
    db_session.add(Candidate(name="Extra", email="e@mit.edu", university="MIT", graduation_year=2026, years_experience=1))
    db_session.commit()

    body = client.get("/populate/status").json()

    assert body["statistics"] == {"totalCandidates": 3, "totalPublications": 2, "totalSkillAssignments": 0}
    assert len(body["recentCandidates"]) == 3
    assert {"university": "MIT", "count": 2} in body["universityDistribution"]


def test_create_and_list_candidates(client, db_session):
    payload = {
        "name": "Grace Hopper",
        "email": "grace@yale.edu",
        "university": "Yale",
        "graduation_year": 2026,
        "years_experience": 4,
    }
    r = client.post("/candidates", json=payload)
    assert r.status_code == 201
    created = r.json()
    assert created["name"] == "Grace Hopper"

    skill = Skill(name="Python", category="Programming Language")
    db_session.add(skill)
    db_session.flush()
    db_session.add(CandidateSkill(candidate_id=created["id"], skill_id=skill.id))
    db_session.commit()

    listed = client.get("/candidates").json()
    assert len(listed) == 1
    assert listed[0]["email"] == "grace@yale.edu"
    assert listed[0]["publications"] == []
    assert listed[0]["candidate_skills"][0]["skills"] == {"name": "Python", "category": "Programming Language"}


def test_create_candidate_validates_email(client):
    r = client.post("/candidates", json={"name": "X", "email": "not-an-email", "university": "U", "graduation_year": 2026})
    assert r.status_code == 422


def test_scrape_publications(client):
    scraped = {"publications": [], "extractedSkills": ["Python"], "totalFound": 0}
    with patch("api.routers.scrape.scrape_author_publications", new=AsyncMock(return_value=scraped)) as scrape:
        r = client.post("/scrape/publications", json={"authorName": " Jane Doe ", "university": "MIT"})

    assert r.status_code == 200
    assert r.json() == scraped
    scrape.assert_awaited_once_with("Jane Doe")


def test_root_reports_environment(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.json()["env"] == os.environ["APP_ENV"]
