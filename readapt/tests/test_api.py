# readapt/tests/test_api.py
import pytest
import requests
from fastapi.testclient import TestClient

from readapt.ai import remote_client
from readapt.ai.remote_client import RemoteScoringUnavailable, request_remote_assessment
from readapt.engine.recommendations import derive_recommendations
from readapt.main import app
from readapt.settings import Settings, get_settings

client = TestClient(app)


class _FakeResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        return self._payload


REMOTE_RESULT = {
    "scores": {
        "ReadingDifficulty": {"category": "mild", "confidence": 0.91, "raw_score": 0.35},
        "AttentionDifficulty": {"category": "hyperactive", "confidence": 0.88, "raw_score": 0.45},
        "VisualDifficulty": {"category": "normal", "confidence": 0.9, "raw_score": 0.1},
    },
    "recommendations": ["Remote tip"],
}


@pytest.fixture
def remote_on(monkeypatch):
    s = get_settings()
    monkeypatch.setattr(s, "REMOTE_URL", "http://scoring.test")
    monkeypatch.setattr(s, "REMOTE_ENABLED", True)
    return s


def test_health():
    r = client.get("/")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_list_traits():
    r = client.get("/assessments/traits")
    assert r.status_code == 200
    traits = {t["trait"]: t for t in r.json()["traits"]}
    assert set(traits) == {"ReadingDifficulty", "AttentionDifficulty", "VisualDifficulty"}
    assert len(traits["AttentionDifficulty"]["questions"]) == 18


def test_score_local(answers_factory):
    r = client.post("/assessments/score", json={"answers": answers_factory(reading=[3, 3, 3, 3, 3])})
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["source"] == "local"
    assert data["scores"]["ReadingDifficulty"] == {"category": "severe", "confidence": 0.8, "raw_score": 1.0}
    assert data["recommendations"][0] == "Use heavy letter and word spacing"


def test_score_missing_answers_is_422(answers_factory):
    answers = answers_factory()
    del answers["ReadingDifficulty"]["spelling_difficulty"]
    r = client.post("/assessments/score", json={"answers": answers})
    assert r.status_code == 422
    body = r.json()
    assert body["error"] == "MISSING_ANSWERS"
    assert body["trait"] == "ReadingDifficulty"
    assert body["missing"] == ["spelling_difficulty"]


def test_string_answers_are_rejected_before_scoring(baseline_answers):
    for bad in ("3", "true"):
        answers = {**baseline_answers["ReadingDifficulty"], "word_recognition": bad}
        r = client.post("/assessments/traits/ReadingDifficulty/score", json={"answers": answers})
        assert r.status_code == 422, bad
        # request validation, not an engine InvalidAnswer payload
        assert "error" not in r.json()

    answers = {**baseline_answers["VisualDifficulty"], "blurry_text": True}
    r = client.post("/assessments/traits/VisualDifficulty/score", json={"answers": answers})
    assert r.status_code == 200


def test_single_trait_endpoint(baseline_answers):
    r = client.post(
        "/assessments/traits/VisualDifficulty/score",
        json={"answers": {**baseline_answers["VisualDifficulty"], "blurry_text": 1, "eye_strain": 1}},
    )
    assert r.status_code == 200
    assert r.json()["category"] == "mild"

    r = client.post("/assessments/traits/MemoryDifficulty/score", json={"answers": {}})
    assert r.status_code == 422
    assert r.json()["error"] == "UNKNOWN_TRAIT"


def test_unknown_question_is_422(baseline_answers):
    r = client.post(
        "/assessments/traits/ReadingDifficulty/score",
        json={"answers": {**baseline_answers["ReadingDifficulty"], "shoe_size": 3}},
    )
    assert r.status_code == 422
    assert r.json() == {
        "error": "UNKNOWN_QUESTION",
        "detail": "ReadingDifficulty: unknown question 'shoe_size'",
        "trait": "ReadingDifficulty",
        "question": "shoe_size",
    }


def test_enhanced_form_endpoint(reading_ids):
    r = client.post("/assessments/enhanced", json={
        "reading_speed": 0.2,
        "reading_answers": {qid: 3 for qid in reading_ids},
        "attention_answers": [3] * 9 + [0] * 9,
        "vision_difficulties": ["Bright lights cause discomfort"],
        "has_glasses": True,
        "lens_prescription": -4.0,
    })
    assert r.status_code == 200, r.text
    scores = r.json()["scores"]
    assert scores["ReadingDifficulty"]["category"] == "severe"
    assert scores["AttentionDifficulty"]["category"] == "inattentive"
    # (1 + 2 * 0.4) / 8
    assert scores["VisualDifficulty"]["raw_score"] == pytest.approx(0.225)


def test_quick_form_endpoint():
    r = client.post("/assessments/quick", json={"answers": {
        "reading_speed": "very_slow",
        "word_recognition": "sometimes",
        "letter_confusion": "never",
        "attention_span": "30_minutes",
        "visual_stress": "never",
    }})
    assert r.status_code == 200
    assert r.json()["trait"] == "QuickScreen"
    assert r.json()["category"] == "moderate"


def test_unknown_route_uses_error_envelope():
    r = client.get("/nope")
    assert r.status_code == 404
    assert r.json()["error"] == "HTTP_404"


# -------------------------
# REMOTE SCORING + FALLBACK
# -------------------------
def test_remote_result_supersedes_local(monkeypatch, remote_on, answers_factory):
    calls = []

    def fake_post(url, json=None, timeout=None):
        calls.append((url, json, timeout))
        return _FakeResponse(REMOTE_RESULT)

    monkeypatch.setattr(remote_client.requests, "post", fake_post)

    answers = answers_factory()
    r = client.post("/assessments/score", json={"answers": answers, "use_remote": True})
    assert r.status_code == 200
    data = r.json()
    assert data["source"] == "remote"
    assert data["scores"]["AttentionDifficulty"]["category"] == "hyperactive"
    assert data["recommendations"] == derive_recommendations(
        {tid: s["category"] for tid, s in REMOTE_RESULT["scores"].items()}
    )
    assert "Remote tip" not in data["recommendations"]

    url, sent, timeout = calls[0]
    assert url == "http://scoring.test/api/assessment/score"
    assert sent == {"answers": answers}
    assert timeout == remote_on.REMOTE_TIMEOUT_SECONDS


def test_remote_result_without_bullets_gets_local_recommendations(monkeypatch, remote_on, answers_factory):
    scores_only = {
        "scores": {
            "ReadingDifficulty": {"category": "severe", "confidence": 0.9, "raw_score": 0.8},
            "AttentionDifficulty": {"category": "normal", "confidence": 0.9, "raw_score": 0.1},
            "VisualDifficulty": {"category": "low_vision", "confidence": 0.9, "raw_score": 0.7},
        }
    }
    monkeypatch.setattr(remote_client.requests, "post", lambda *a, **k: _FakeResponse(scores_only))

    r = client.post("/assessments/score", json={"answers": answers_factory(), "use_remote": True})
    assert r.status_code == 200
    data = r.json()
    assert data["source"] == "remote"
    assert data["recommendations"]
    assert "Prefer audio-first reading for long passages" in data["recommendations"]
    assert data["recommendations"] == derive_recommendations(
        {"ReadingDifficulty": "severe", "AttentionDifficulty": "normal", "VisualDifficulty": "low_vision"}
    )


@pytest.mark.parametrize(
    "behaviour",
    ["timeout", "connection", "http_500", "bad_category", "missing_trait", "not_json"],
)
def test_remote_failure_falls_back_to_local(monkeypatch, remote_on, answers_factory, behaviour):
    def fake_post(url, json=None, timeout=None):
        if behaviour == "timeout":
            raise requests.Timeout("read timed out")
        if behaviour == "connection":
            raise requests.ConnectionError("refused")
        if behaviour == "http_500":
            return _FakeResponse({}, status_code=500)
        if behaviour == "bad_category":
            bad = {**REMOTE_RESULT, "scores": dict(REMOTE_RESULT["scores"])}
            bad["scores"]["VisualDifficulty"] = {"category": "blurry", "confidence": 0.9, "raw_score": 0.1}
            return _FakeResponse(bad)
        if behaviour == "missing_trait":
            partial = {"scores": {"ReadingDifficulty": REMOTE_RESULT["scores"]["ReadingDifficulty"]}}
            return _FakeResponse(partial)
        return _FakeResponse(["not", "an", "object"])

    monkeypatch.setattr(remote_client.requests, "post", fake_post)

    answers = answers_factory()
    local = client.post("/assessments/score", json={"answers": answers}).json()
    r = client.post("/assessments/score", json={"answers": answers, "use_remote": True})

    assert r.status_code == 200
    assert r.json() == local


def test_incomplete_answers_never_reach_remote(monkeypatch, remote_on, answers_factory):
    def fake_post(*args, **kwargs):
        raise AssertionError("remote should not be called")

    monkeypatch.setattr(remote_client.requests, "post", fake_post)

    answers = answers_factory()
    del answers["AttentionDifficulty"]["fidgeting"]
    r = client.post("/assessments/score", json={"answers": answers, "use_remote": True})
    assert r.status_code == 422
    assert r.json()["missing"] == ["fidgeting"]


def test_remote_disabled_without_url(monkeypatch, answers_factory):
    s = Settings()
    s.REMOTE_URL = ""
    monkeypatch.setattr(remote_client.requests, "post", lambda *a, **k: pytest.fail("called"))
    with pytest.raises(RemoteScoringUnavailable):
        request_remote_assessment(answers_factory(), s)


# -------------------------
# ADAPTATION
# -------------------------
def test_preferences_from_result(answers_factory):
    scored = client.post(
        "/assessments/score",
        json={"answers": answers_factory(vision=[1, 1, 1, 1, 0, 0])},
    ).json()
    scored.pop("source")

    r = client.post("/adaptation/preferences", json=scored)
    assert r.status_code == 200
    prefs = r.json()
    assert prefs["font_size"] == 24
    assert prefs["color_scheme"] == "high_contrast"


def test_preferences_reject_foreign_category():
    bad = {**REMOTE_RESULT, "scores": dict(REMOTE_RESULT["scores"])}
    bad["scores"]["ReadingDifficulty"] = {"category": "extreme", "confidence": 0.5, "raw_score": 0.9}
    r = client.post("/adaptation/preferences", json=bad)
    assert r.status_code == 422


def test_adapt_text_endpoint():
    prefs = client.get("/adaptation/presets").json()["defaults"]
    prefs.update({"sentence_chunking": True})
    r = client.post("/adaptation/adapt-text", json={
        "text": "Focus on the main idea. Then relax.",
        "preferences": prefs,
    })
    assert r.status_code == 200
    body = r.json()
    assert "<mark" in body["adapted_text"]
    assert body["plain_text"] == "Focus on the main idea.\n\nThen relax."
