"""Integration tests for the HTTP API"""

import pytest
import httpx

pytestmark = pytest.mark.integration

API = "/api/v1"


async def create_candidate(client: httpx.AsyncClient, number: int, name: str = None, **extra) -> dict:
    response = await client.post(
        f"{API}/candidates",
        json={"candidate_number": number, "name": name or f"Candidate {number}", **extra}
    )
    assert response.status_code == 201, response.text
    return response.json()


async def create_judge(client: httpx.AsyncClient, name: str, email: str = None) -> dict:
    response = await client.post(
        f"{API}/judges",
        json={"name": name, "email": email or f"{name.lower().replace(' ', '.')}@pageant.com"}
    )
    assert response.status_code == 201, response.text
    return response.json()


async def submit(client: httpx.AsyncClient, judge: dict, candidate: dict, category: str, value) -> httpx.Response:
    return await client.post(
        f"{API}/scores",
        json={
            "judge_id": judge["id"],
            "candidate_id": candidate["id"],
            "category": category,
            "value": value,
        }
    )


class TestInfrastructure:
    """Root, health and middleware behavior"""

    async def test_health(self, client):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    async def test_root(self, client):
        response = await client.get("/")
        assert response.json()["status"] == "running"

    async def test_request_id_echoed(self, client):
        response = await client.get("/health", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"

    async def test_request_id_generated(self, client):
        response = await client.get("/health")
        assert response.headers["X-Request-ID"]

    async def test_categories(self, client):
        response = await client.get(f"{API}/scores/categories")

        body = response.json()
        assert body["scheme"] == "standard"
        assert [c["name"] for c in body["categories"]] == ["sports_attire", "swimsuit", "gown", "qa"]
        assert body["categories"][3] == {"name": "qa", "label": "Q&A", "weight": 30.0}


class TestCandidateAPI:
    """Candidate management endpoints"""

    async def test_create_and_get(self, client):
        created = await create_candidate(client, 7, "  Maria Clara ")

        assert created["name"] == "Maria Clara"
        assert created["is_active"] is True

        response = await client.get(f"{API}/candidates/{created['id']}")
        assert response.status_code == 200
        assert response.json()["scores"]["total"] == 0.0

    async def test_duplicate_number_conflicts(self, client):
        await create_candidate(client, 1)

        response = await client.post(f"{API}/candidates", json={"candidate_number": 1, "name": "Again"})

        assert response.status_code == 409
        body = response.json()
        assert "already exists" in body["error"]
        assert body["request_id"]

    async def test_invalid_payload(self, client):
        response = await client.post(f"{API}/candidates", json={"candidate_number": 0, "name": "A"})
        assert response.status_code == 422

    async def test_unknown_candidate(self, client):
        response = await client.get(f"{API}/candidates/00000000-0000-0000-0000-000000000000")
        assert response.status_code == 404

    async def test_list_ordered_filtered_and_searched(self, client):
        await create_candidate(client, 3, "Cara")
        await create_candidate(client, 1, "Ana")
        await create_candidate(client, 2, "Bea", is_active=False)

        listing = (await client.get(f"{API}/candidates")).json()
        assert [c["candidate_number"] for c in listing["candidates"]] == [1, 2, 3]

        active = (await client.get(f"{API}/candidates", params={"active": "true"})).json()
        assert [c["name"] for c in active["candidates"]] == ["Ana", "Cara"]

        search = (await client.get(f"{API}/candidates", params={"search": "car"})).json()
        assert [c["name"] for c in search["candidates"]] == ["Cara"]

    async def test_toggle_status(self, client):
        candidate = await create_candidate(client, 1)

        response = await client.post(f"{API}/candidates/{candidate['id']}/toggle-status")

        assert response.json()["is_active"] is False

    async def test_update(self, client):
        candidate = await create_candidate(client, 1)
        await create_candidate(client, 2)

        response = await client.put(f"{API}/candidates/{candidate['id']}", json={"candidate_number": 2})
        assert response.status_code == 409

        response = await client.put(f"{API}/candidates/{candidate['id']}", json={"candidate_number": 5})
        assert response.json()["candidate_number"] == 5

    async def test_delete_removes_scores(self, client):
        judge = await create_judge(client, "Judge One")
        candidate = await create_candidate(client, 1)
        await submit(client, judge, candidate, "qa", 80)

        response = await client.delete(f"{API}/candidates/{candidate['id']}")
        assert response.status_code == 204

        scores = (await client.get(f"{API}/scores")).json()
        assert scores["total"] == 0


class TestScoringFlow:
    """Score submission through tabulation"""

    async def test_submit_and_conflict(self, client):
        judge = await create_judge(client, "Judge One")
        candidate = await create_candidate(client, 1)

        response = await submit(client, judge, candidate, "gown", 87.456)
        assert response.status_code == 201
        assert response.json()["value"] == 87.46

        response = await submit(client, judge, candidate, "gown", 90)
        assert response.status_code == 409

    @pytest.mark.parametrize("category, value", [
        ("talent", 80),
        ("evening_gown", 80),
        ("qa", -1),
        ("qa", 100.5),
    ])
    async def test_invalid_submission(self, client, category, value):
        judge = await create_judge(client, "Judge One")
        candidate = await create_candidate(client, 1)

        response = await submit(client, judge, candidate, category, value)

        assert response.status_code == 422

    async def test_inactive_judge_forbidden(self, client):
        judge = await create_judge(client, "Judge One")
        candidate = await create_candidate(client, 1)
        await client.post(f"{API}/judges/{judge['id']}/toggle-status")

        response = await submit(client, judge, candidate, "qa", 80)

        assert response.status_code == 403

    async def test_inactive_candidate_forbidden(self, client):
        judge = await create_judge(client, "Judge One")
        candidate = await create_candidate(client, 1, is_active=False)

        response = await submit(client, judge, candidate, "qa", 80)

        assert response.status_code == 403

    async def test_unknown_judge(self, client):
        candidate = await create_candidate(client, 1)
        ghost = {"id": "00000000-0000-0000-0000-000000000000"}

        response = await submit(client, ghost, candidate, "qa", 80)

        assert response.status_code == 404

    async def test_breakdown_analytics_and_results(self, client):
        judge_a = await create_judge(client, "Judge A")
        judge_b = await create_judge(client, "Judge B")
        ana = await create_candidate(client, 1, "Ana")
        bea = await create_candidate(client, 2, "Bea")

        for judge, value in ((judge_a, 80), (judge_b, 90)):
            assert (await submit(client, judge, ana, "gown", value)).status_code == 201
        assert (await submit(client, judge_a, bea, "qa", 95)).status_code == 201

        scores = (await client.get(f"{API}/candidates/{ana['id']}/scores")).json()
        assert scores["breakdown"]["gown"] == 85.0
        assert scores["breakdown"]["total"] == 25.5
        assert len(scores["scores"]["gown"]) == 2

        analytics = (await client.get(f"{API}/scores/analytics")).json()
        assert analytics["metric"] == "total"
        assert [(e["rank"], e["name"]) for e in analytics["rankings"]] == [(1, "Bea"), (2, "Ana")]

        gown = (await client.get(f"{API}/scores/analytics", params={"category": "gown"})).json()
        assert gown["rankings"][0]["name"] == "Ana"

        results = (await client.get(f"{API}/results", params={"filter": "overall"})).json()
        assert results["title"] == "Overall Results"
        assert results["results"][0] == {
            "rank": 1,
            "candidate_number": 2,
            "name": "Bea",
            "sports_attire": "0.00",
            "swimsuit": "0.00",
            "gown": "0.00",
            "qa": "95.00",
            "total": "28.50",
        }
        assert results["results"][1]["total"] == "25.50"

    async def test_results_invalid_filter(self, client):
        response = await client.get(f"{API}/results", params={"filter": "top_talent"})
        assert response.status_code == 422

    async def test_analytics_invalid_category(self, client):
        response = await client.get(f"{API}/scores/analytics", params={"category": "talent"})
        assert response.status_code == 422


class TestJudgingWorkflow:
    """Judge endpoints: progress, next candidate and scoring sheet"""

    async def test_duplicate_email(self, client):
        await create_judge(client, "Judge One", "one@pageant.com")

        response = await client.post(f"{API}/judges", json={"name": "Another", "email": "one@pageant.com"})

        assert response.status_code == 409

    async def test_invalid_email(self, client):
        response = await client.post(f"{API}/judges", json={"name": "Judge", "email": "not-an-email"})
        assert response.status_code == 422

    async def test_progress_next_candidate_and_sheet(self, client):
        judge = await create_judge(client, "Judge One")
        candidates = [await create_candidate(client, n) for n in range(1, 6)]
        for candidate in (candidates[0], candidates[1], candidates[3]):
            assert (await submit(client, judge, candidate, "qa", 88)).status_code == 201

        progress = (await client.get(f"{API}/judges/{judge['id']}/progress", params={"category": "qa"})).json()
        assert progress == {"total": 5, "completed": 3, "remaining": 2, "percentage": 60.0}

        upcoming = (await client.get(
            f"{API}/judges/{judge['id']}/next-candidate", params={"category": "qa"}
        )).json()
        assert upcoming["candidate"]["candidate_number"] == 3
        assert upcoming["completed"] is False

        sheet = (await client.get(f"{API}/judges/{judge['id']}/candidates", params={"category": "qa"})).json()
        assert [c["has_voted"] for c in sheet["candidates"]] == [True, True, False, True, False]

        listing = (await client.get(f"{API}/judges")).json()
        assert listing["judges"][0]["progress"]["qa"]["percentage"] == 60.0
        assert listing["judges"][0]["progress"]["gown"]["completed"] == 0

    async def test_next_candidate_when_finished(self, client):
        judge = await create_judge(client, "Judge One")
        candidate = await create_candidate(client, 1)
        await submit(client, judge, candidate, "swimsuit", 70)

        upcoming = (await client.get(
            f"{API}/judges/{judge['id']}/next-candidate", params={"category": "swimsuit"}
        )).json()

        assert upcoming["candidate"] is None
        assert upcoming["completed"] is True

    async def test_progress_summary(self, client):
        judge_a = await create_judge(client, "Judge A")
        await create_judge(client, "Judge B")
        candidate = await create_candidate(client, 1)
        await submit(client, judge_a, candidate, "gown", 90)

        summary = (await client.get(f"{API}/scores/progress")).json()

        assert summary["total_candidates"] == 1
        assert summary["total_judges"] == 2
        assert summary["categories_progress"]["gown"] == {
            "total_possible": 2,
            "submitted": 1,
            "percentage": 50.0,
        }

    async def test_delete_judge_removes_scores(self, client):
        judge = await create_judge(client, "Judge One")
        candidate = await create_candidate(client, 1)
        await submit(client, judge, candidate, "qa", 80)

        response = await client.delete(f"{API}/judges/{judge['id']}")
        assert response.status_code == 204

        assert (await client.get(f"{API}/judges/{judge['id']}")).status_code == 404
        breakdown = (await client.get(f"{API}/candidates/{candidate['id']}")).json()["scores"]
        assert breakdown["qa"] == 0.0

    async def test_judge_scores(self, client):
        judge = await create_judge(client, "Judge One")
        candidate = await create_candidate(client, 1, "Ana")
        await submit(client, judge, candidate, "qa", 80)
        await submit(client, judge, candidate, "gown", 82)

        scores = (await client.get(f"{API}/judges/{judge['id']}/scores", params={"category": "gown"})).json()

        assert scores["total"] == 1
        assert scores["scores"][0]["candidate_name"] == "Ana"
        assert scores["scores"][0]["value"] == 82.0
