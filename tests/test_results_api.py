"""Tests for result submission, listing and stats endpoints."""

from __future__ import annotations

import logging
from collections.abc import Callable

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from typetester.models import TestResult
from typetester.services.results import parse_limit


def _submit(client: TestClient, headers: dict | None = None, **fields) -> httpx.Response:
    body = {"wpm": 60, "accuracy": 95}
    body.update(fields)
    return client.post("/api/results", json=body, headers=headers or {})


class TestSubmitResult:
    """Tests for POST /api/results."""

    def test_anonymous_submission_stores_null_user(self, client: TestClient, db: Session) -> None:
        response = _submit(client)

        assert response.status_code == 201
        result = response.json()["result"]
        assert result["userId"] is None
        assert db.get(TestResult, result["id"]).user_id is None

    def test_authenticated_submission_stores_user_id(
        self, client: TestClient, alice: dict, db: Session
    ) -> None:
        response = _submit(client, headers=alice["headers"])

        assert response.status_code == 201
        result = response.json()["result"]
        assert result["userId"] == alice["id"]
        assert db.get(TestResult, result["id"]).user_id == alice["id"]

    def test_invalid_token_is_ignored(self, client: TestClient) -> None:
        response = _submit(client, headers={"Authorization": "Bearer not-a-token"})

        assert response.status_code == 201
        assert response.json()["result"]["userId"] is None

    def test_defaults_for_optional_fields(self, client: TestClient) -> None:
        result = _submit(client, wpm=72.5).json()["result"]

        assert result["wpm"] == 72.5
        assert result["rawWpm"] == 72.5
        assert result["accuracy"] == 95
        assert result["consistency"] == 100
        assert result["charsCorrect"] == 0
        assert result["charsWrong"] == 0
        assert result["duration"] == 30
        assert result["charErrors"] == {}
        assert result["wpmTimeline"] == []
        assert "createdAt" in result

    def test_full_payload_is_stored(self, client: TestClient) -> None:
        result = _submit(
            client,
            wpm=80,
            rawWpm=85,
            accuracy=97.5,
            consistency=88,
            charsCorrect=400,
            charsWrong=12,
            duration=60,
            charErrors={"e": 3, "t": 1},
            wpmTimeline=[70, 78, 82, 80],
        ).json()["result"]

        assert result["rawWpm"] == 85
        assert result["consistency"] == 88
        assert result["charsCorrect"] == 400
        assert result["charsWrong"] == 12
        assert result["duration"] == 60
        assert result["charErrors"] == {"e": 3, "t": 1}
        assert result["wpmTimeline"] == [70, 78, 82, 80]

    def test_numeric_strings_are_coerced(self, client: TestClient) -> None:
        result = _submit(client, wpm="64.5", accuracy="91", duration="15").json()["result"]

        assert result["wpm"] == 64.5
        assert result["accuracy"] == 91
        assert result["duration"] == 15

    def test_snake_case_fields_accepted(self, client: TestClient) -> None:
        result = _submit(client, raw_wpm=99, chars_correct=10).json()["result"]

        assert result["rawWpm"] == 99
        assert result["charsCorrect"] == 10

    @pytest.mark.parametrize(
        "body",
        [
            {"accuracy": 95},
            {"wpm": 60},
            {"wpm": 0, "accuracy": 95},
            {"wpm": 60, "accuracy": 0},
            {"wpm": None, "accuracy": 95},
        ],
    )
    def test_missing_or_zero_required_fields(
        self, client: TestClient, db: Session, body: dict
    ) -> None:
        response = client.post("/api/results", json=body)

        assert response.status_code == 400
        assert response.json()["detail"] == "Missing required fields"
        assert db.query(TestResult).count() == 0


class TestListResults:
    """Tests for GET /api/results/me."""

    @pytest.fixture
    def three_results(self, client: TestClient, alice: dict) -> None:
        for wpm in (50, 90, 70):
            assert _submit(client, headers=alice["headers"], wpm=wpm).status_code == 201

    def test_requires_auth(self, client: TestClient) -> None:
        assert client.get("/api/results/me").status_code == 401

    @pytest.mark.usefixtures("three_results")
    def test_default_order_is_newest_first(self, client: TestClient, alice: dict) -> None:
        results = client.get("/api/results/me", headers=alice["headers"]).json()["results"]

        assert [r["wpm"] for r in results] == [70, 90, 50]

    @pytest.mark.usefixtures("three_results")
    def test_sort_by_wpm_descending(self, client: TestClient, alice: dict) -> None:
        results = client.get(
            "/api/results/me", params={"sort": "wpm"}, headers=alice["headers"]
        ).json()["results"]

        assert [r["wpm"] for r in results] == [90, 70, 50]

    @pytest.mark.usefixtures("three_results")
    def test_unknown_sort_falls_back_to_created_at(self, client: TestClient, alice: dict) -> None:
        response = client.get("/api/results/me", params={"sort": "bogus"}, headers=alice["headers"])

        assert response.status_code == 200
        assert [r["wpm"] for r in response.json()["results"]] == [70, 90, 50]

    @pytest.mark.usefixtures("three_results")
    def test_limit(self, client: TestClient, alice: dict) -> None:
        results = client.get(
            "/api/results/me", params={"limit": "2"}, headers=alice["headers"]
        ).json()["results"]

        assert [r["wpm"] for r in results] == [70, 90]

    @pytest.mark.usefixtures("three_results")
    def test_junk_limit_uses_default(self, client: TestClient, alice: dict) -> None:
        response = client.get("/api/results/me", params={"limit": "abc"}, headers=alice["headers"])

        assert response.status_code == 200
        assert len(response.json()["results"]) == 3

    @pytest.mark.usefixtures("three_results")
    def test_only_own_results(
        self, client: TestClient, register: Callable[..., httpx.Response]
    ) -> None:
        _submit(client)  # anonymous
        bob = register(email="bob@example.com", username="bob").json()

        response = client.get(
            "/api/results/me", headers={"Authorization": f"Bearer {bob['token']}"}
        )

        assert response.json()["results"] == []


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, 50),
        ("", 50),
        ("abc", 50),
        ("0", 50),
        ("-5", 50),
        ("10", 10),
        ("10.7", 10),
        ("100", 100),
        ("500", 100),
    ],
)
def test_parse_limit(raw: str | None, expected: int) -> None:
    assert parse_limit(raw) == expected


class TestStats:
    """Tests for GET /api/results/stats."""

    def test_requires_auth(self, client: TestClient) -> None:
        assert client.get("/api/results/stats").status_code == 401

    def test_no_results_is_zeroed(self, client: TestClient, alice: dict) -> None:
        response = client.get("/api/results/stats", headers=alice["headers"])

        assert response.status_code == 200
        assert response.json() == {
            "bestWpm": 0,
            "avgWpm": 0,
            "avg10Wpm": 0,
            "bestAccuracy": 0,
            "avgAccuracy": 0,
            "totalTests": 0,
            "totalTimeSeconds": 0,
            "totalCharsTyped": 0,
        }

    def test_stats_over_stored_results(self, client: TestClient, alice: dict) -> None:
        _submit(client, headers=alice["headers"], wpm=60, accuracy=90, duration=30,
                charsCorrect=100, charsWrong=5)
        _submit(client, headers=alice["headers"], wpm=81, accuracy=97.46, duration=60,
                charsCorrect=200, charsWrong=3)
        _submit(client, wpm=150, accuracy=100)  # anonymous, not counted

        stats = client.get("/api/results/stats", headers=alice["headers"]).json()

        assert stats["bestWpm"] == 81
        assert stats["avgWpm"] == 71
        assert stats["avg10Wpm"] == 71
        assert stats["bestAccuracy"] == 97.5
        assert stats["totalTests"] == 2
        assert stats["totalTimeSeconds"] == 90
        assert stats["totalCharsTyped"] == 308

    def test_avg10_over_fifteen_stored_results(self, client: TestClient, alice: dict) -> None:
        # five old slow tests, then ten recent fast ones
        for _ in range(5):
            _submit(client, headers=alice["headers"], wpm=10)
        for _ in range(10):
            _submit(client, headers=alice["headers"], wpm=100)

        stats = client.get("/api/results/stats", headers=alice["headers"]).json()

        assert stats["avg10Wpm"] == 100
        assert stats["avgWpm"] == 70
        assert stats["totalTests"] == 15


class TestNonFiniteInput:
    """Infinite values are coerced to NaN, which the store refuses."""

    @pytest.mark.parametrize(
        "body",
        ['{"wpm": 1e999, "accuracy": 95}', '{"wpm": "Infinity", "accuracy": 95}',
         '{"wpm": 60, "accuracy": 95, "duration": "-inf"}'],
    )
    def test_rejected_and_stats_stay_usable(
        self, client: TestClient, alice: dict, db: Session, body: str
    ) -> None:
        headers = {**alice["headers"], "Content-Type": "application/json"}

        response = client.post("/api/results", content=body, headers=headers)

        assert response.status_code == 500
        assert response.json() == {"detail": "Server error"}
        assert db.query(TestResult).count() == 0

        assert _submit(client, headers=alice["headers"], wpm=64).status_code == 201
        stats = client.get("/api/results/stats", headers=alice["headers"])
        assert stats.status_code == 200
        assert stats.json()["avgWpm"] == 64
        assert stats.json()["totalTests"] == 1


def test_integer_fields_round_half_away_from_zero(client: TestClient) -> None:
    result = _submit(client, charsCorrect=2.5, charsWrong=0.4, duration=10.5).json()["result"]

    assert result["charsCorrect"] == 3
    assert result["charsWrong"] == 0
    assert result["duration"] == 11


class TestStorageFailure:
    """A storage error is logged and surfaces as a bare 500."""

    def test_failed_commit_on_submit(
        self, client: TestClient, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        rollbacks: list[Session] = []
        original_rollback = Session.rollback

        def failing_commit(self: Session) -> None:
            raise OperationalError("INSERT INTO test_results", {}, Exception("disk I/O error"))

        def tracking_rollback(self: Session) -> None:
            rollbacks.append(self)
            original_rollback(self)

        monkeypatch.setattr(Session, "commit", failing_commit)
        monkeypatch.setattr(Session, "rollback", tracking_rollback)

        with caplog.at_level(logging.ERROR, logger="typetester.services.results"):
            response = _submit(client)

        assert response.status_code == 500
        assert response.json() == {"detail": "Server error"}
        assert "INSERT" not in response.text
        assert "Traceback" not in response.text
        assert rollbacks
        assert "Save result error" in caplog.text

    def test_failed_query_on_list(
        self,
        client: TestClient,
        alice: dict,
        monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        def failing_scalars(self: Session, *args, **kwargs):
            raise OperationalError("SELECT test_results.id", {}, Exception("database is locked"))

        monkeypatch.setattr(Session, "scalars", failing_scalars)

        with caplog.at_level(logging.ERROR, logger="typetester.services.results"):
            response = client.get("/api/results/me", headers=alice["headers"])

        assert response.status_code == 500
        assert response.json() == {"detail": "Server error"}
        assert "SELECT" not in response.text
        assert "Get results error" in caplog.text
