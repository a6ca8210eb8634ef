import asyncio

from fastapi.testclient import TestClient
from prometheus_client import REGISTRY
from sqlalchemy import func, select

from app.api.deps import db_session
from app.main import create_app
from app.models.domain import Submission
from tests.helpers import RECURSION_KEY, add_round

REGISTRATION = {
    "teamName": "Null Pointers",
    "participantName": "Ada",
    "email": "ada@example.com",
    "phone": "+15550001",
    "language": "python",
    "experience": "intermediate",
    "teamType": "solo",
}


def seed_round(session_factory, **overrides) -> int:
    async def scenario():
        async with session_factory() as db:
            return (await add_round(db, **overrides)).id

    return asyncio.run(scenario())


def submission_count(session_factory) -> int:
    async def scenario():
        async with session_factory() as db:
            return int((await db.execute(select(func.count(Submission.id)))).scalar())

    return asyncio.run(scenario())


def register(client, **overrides) -> int:
    res = client.post("/api/register", json={**REGISTRATION, **overrides})
    assert res.status_code == 201
    return res.json()["participantId"]


def test_root_banner(client):
    res = client.get("/")
    assert res.status_code == 200
    assert res.json()["message"] == "Bug Rush API is running!"


def test_register_and_fetch_participant(client):
    res = client.post("/api/register", json=REGISTRATION)
    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    assert body["data"] == {
        "teamName": "Null Pointers",
        "participantName": "Ada",
        "email": "ada@example.com",
        "language": "python",
    }

    detail = client.get(f"/api/participants/{body['participantId']}")
    assert detail.status_code == 200
    assert detail.json()["data"]["teamType"] == "solo"

    listing = client.get("/api/participants").json()
    assert listing["count"] == 1


def test_register_missing_field_is_400(client):
    payload = {k: v for k, v in REGISTRATION.items() if k != "phone"}
    res = client.post("/api/register", json=payload)
    assert res.status_code == 400
    assert res.json() == {"success": False, "message": "Missing required fields"}


def test_register_duplicate_email_is_409(client):
    register(client)
    res = client.post("/api/register", json={**REGISTRATION, "participantName": "Imposter"})
    assert res.status_code == 409
    assert res.json() == {"success": False, "message": "Email already registered!"}
    assert client.get("/api/participants").json()["count"] == 1


def test_rounds_hide_answer_key(client, session_factory):
    round_id = seed_round(session_factory)
    seed_round(session_factory, round_number=2, is_active=False)

    listing = client.get("/api/rounds").json()
    assert listing["count"] == 1
    detail = client.get(f"/api/rounds/{round_id}").json()["data"]
    for view in [listing["data"][0], detail]:
        assert "correctAnswer" not in view
        assert "correct_answer" not in view
        assert "explanation" not in view


def test_inactive_or_missing_round_is_404(client, session_factory):
    inactive_id = seed_round(session_factory, is_active=False)
    for round_id in [inactive_id, 999]:
        res = client.get(f"/api/rounds/{round_id}")
        assert res.status_code == 404
        assert res.json() == {"success": False, "message": "Round not found"}


def test_submit_flow_updates_leaderboard_and_progress(client, session_factory):
    round_id = seed_round(session_factory)
    ada = register(client)
    bob = register(client, email="bob@example.com", participantName="Bob")

    res = client.post(
        "/api/submit",
        json={"participantId": ada, "roundId": round_id, "answer": "I think recursion causes stack overflow", "timeTaken": 40},
    )
    assert res.status_code == 200
    assert res.json() == {
        "success": True,
        "isCorrect": True,
        "pointsEarned": 20,
        "explanation": "The function has no base case.",
    }
    client.post("/api/submit", json={"participantId": bob, "roundId": round_id, "answer": RECURSION_KEY, "timeTaken": 25})

    board = client.get("/api/leaderboard").json()
    assert board["count"] == 2
    assert [(row["participantName"], row["rankPosition"]) for row in board["data"]] == [("Bob", 1), ("Ada", 2)]

    progress = client.get(f"/api/participants/{ada}/progress").json()["data"]
    assert progress["submissionsCount"] == 1
    assert progress["correctAnswers"] == 1

    stats = client.get("/api/stats").json()["data"]
    assert stats["totalSubmissions"] == 2
    assert stats["correctSubmissions"] == 2
    assert stats["languageDistribution"] == [{"language": "python", "count": 2}]


def test_submit_missing_answer_is_400(client, session_factory):
    round_id = seed_round(session_factory)
    ada = register(client)
    for payload in [
        {"participantId": ada, "roundId": round_id},
        {"participantId": ada, "roundId": round_id, "answer": ""},
    ]:
        res = client.post("/api/submit", json=payload)
        assert res.status_code == 400
        assert res.json()["success"] is False
    assert submission_count(session_factory) == 0


def test_submit_unknown_round_is_404_and_writes_nothing(client, session_factory):
    ada = register(client)
    res = client.post("/api/submit", json={"participantId": ada, "roundId": 999, "answer": "anything"})
    assert res.status_code == 404
    assert res.json() == {"success": False, "message": "Round not found"}
    assert submission_count(session_factory) == 0


def test_leaderboard_language_filter_and_limit(client, session_factory):
    round_id = seed_round(session_factory)
    ada = register(client)
    cy = register(client, email="cy@example.com", participantName="Cy", language="java")
    for participant_id in [ada, cy]:
        client.post("/api/submit", json={"participantId": participant_id, "roundId": round_id, "answer": RECURSION_KEY})

    java = client.get("/api/leaderboard", params={"language": "java"}).json()
    assert [row["participantName"] for row in java["data"]] == ["Cy"]
    assert client.get("/api/leaderboard", params={"language": "cobol"}).json() == {
        "success": True,
        "count": 0,
        "data": [],
    }
    assert client.get("/api/leaderboard", params={"limit": 0}).json()["count"] == 1


def test_unknown_participant_is_404(client):
    for path in ["/api/participants/77", "/api/participants/77/progress"]:
        res = client.get(path)
        assert res.status_code == 404
        assert res.json() == {"success": False, "message": "Participant not found"}


def test_unmatched_route_uses_error_envelope(client):
    res = client.get("/api/nope")
    assert res.status_code == 404
    assert res.json() == {"success": False, "message": "Endpoint not found"}


def test_unhandled_error_does_not_leak_details():
    app = create_app()

    async def broken_session():
        raise RuntimeError("password=hunter2")
        yield

    app.dependency_overrides[db_session] = broken_session
    res = TestClient(app, raise_server_exceptions=False).get("/api/stats")
    assert res.status_code == 500
    assert res.json() == {"success": False, "message": "Something went wrong!"}


def test_health_live(client):
    assert client.get("/api/health/live").json()["status"] == "ok"


def requests_counted(path: str) -> float:
    return REGISTRY.get_sample_value("bug_rush_api_requests_total", {"path": path}) or 0.0


def test_failed_requests_are_still_counted():
    app = create_app()

    async def broken_session():
        raise RuntimeError("database exploded")
        yield

    app.dependency_overrides[db_session] = broken_session
    before = requests_counted("/api/stats")
    res = TestClient(app, raise_server_exceptions=False).get("/api/stats")
    assert res.status_code == 500
    assert requests_counted("/api/stats") == before + 1


def test_openapi_documents_the_error_envelope(client):
    schema = client.get("/openapi.json").json()
    assert schema["components"]["schemas"]["ErrorResponse"]["properties"].keys() == {"success", "message"}
    submit_responses = schema["paths"]["/api/submit"]["post"]["responses"]
    for code in ("400", "404", "503"):
        assert submit_responses[code]["content"]["application/json"]["schema"] == {
            "$ref": "#/components/schemas/ErrorResponse"
        }
