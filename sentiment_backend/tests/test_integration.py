from __future__ import annotations

from datetime import UTC, datetime

from flask import Flask
from sqlalchemy import func, select

from sentiment_backend.domain.analyses.exceptions import ClassifierUnavailableError
from sentiment_backend.infrastructure.container import Container
from sentiment_backend.infrastructure.db.models import Analysis


def _login(client, username: str = "alice", password: str = "pw1") -> dict[str, str]:
    response = client.post("/login", json={"username": username, "password": password})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.get_json()['token']}"}


def test_register_login_analyze_history_flow(app: Flask, stub_classifier) -> None:
    with app.test_client() as client:
        register = client.post("/register", json={"username": "alice", "password": "pw1"})
        assert register.status_code == 200
        assert register.get_json()["user"]["username"] == "alice"

        headers = _login(client)

        analyze = client.post("/analyze", json={"text": "I love it"}, headers=headers)
        assert analyze.status_code == 200
        assert analyze.get_json() == {"sentiment": "Positive", "confidence": 0.9}
        assert stub_classifier.calls == ["I love it"]

        history = client.get("/history", headers=headers)
        assert history.status_code == 200
        [entry] = history.get_json()
        assert entry["text"] == "I love it"
        assert entry["sentiment"] == "Positive"
        assert entry["confidence"] == 0.9

        summary = client.get("/history/summary", headers=headers)
        assert summary.status_code == 200
        body = summary.get_json()
        assert body["distribution"] == {"Positive": 1, "Negative": 0, "Neutral": 0}
        today = datetime.now(UTC).date().isoformat()
        assert body["daily_trend"] == [
            {"date": today, "Positive": 1, "Negative": 0, "Neutral": 0}
        ]


def test_users_only_see_their_own_history(app: Flask) -> None:
    with app.test_client() as client:
        for name in ("alice", "bob"):
            client.post("/register", json={"username": name, "password": "pw1"})
        alice = _login(client, "alice")
        bob = _login(client, "bob")

        client.post("/analyze", json={"text": "alice says hi"}, headers=alice)

        assert client.get("/history", headers=bob).get_json() == []
        assert len(client.get("/history", headers=alice).get_json()) == 1


def test_duplicate_registration_is_rejected(app: Flask) -> None:
    with app.test_client() as client:
        client.post("/register", json={"username": "alice", "password": "pw1"})
        duplicate = client.post("/register", json={"username": "alice", "password": "pw2"})

    assert duplicate.status_code == 400
    assert duplicate.get_json()["error"] == "user_already_exists"


def test_wrong_password_is_rejected(app: Flask) -> None:
    with app.test_client() as client:
        client.post("/register", json={"username": "alice", "password": "pw1"})
        response = client.post("/login", json={"username": "alice", "password": "nope"})

    assert response.status_code == 400
    assert response.get_json() == {
        "error": "invalid_credentials",
        "message": "Invalid credentials",
    }


def test_oversized_text_is_rejected_without_classifying(app: Flask, stub_classifier) -> None:
    with app.test_client() as client:
        client.post("/register", json={"username": "alice", "password": "pw1"})
        headers = _login(client)
        response = client.post("/analyze", json={"text": "x" * 501}, headers=headers)

    assert response.status_code == 400
    assert response.get_json()["error"] == "text_too_long"
    assert stub_classifier.calls == []


def test_failed_classification_writes_nothing(
    app: Flask, container: Container, stub_classifier
) -> None:
    stub_classifier.error = ClassifierUnavailableError()

    with app.test_client() as client:
        client.post("/register", json={"username": "alice", "password": "pw1"})
        headers = _login(client)
        response = client.post("/analyze", json={"text": "hello"}, headers=headers)

    assert response.status_code == 500
    assert response.get_json()["message"] == "Sentiment analysis failed"
    with container.database.session_scope() as session:
        assert session.scalar(select(func.count()).select_from(Analysis)) == 0


def test_health_reports_database(app: Flask) -> None:
    with app.test_client() as client:
        response = client.get("/health")

    assert response.status_code == 200
    assert response.get_json() == {"ok": True, "database": "ok"}


def test_security_headers_are_set(app: Flask) -> None:
    with app.test_client() as client:
        response = client.get("/health")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


def test_request_id_is_echoed(app: Flask) -> None:
    with app.test_client() as client:
        response = client.get("/health", headers={"X-Request-ID": "req-42"})

    assert response.headers["X-Request-ID"] == "req-42"
