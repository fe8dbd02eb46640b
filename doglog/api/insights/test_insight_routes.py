# doglog/api/insights/test_insight_routes.py
"""
인사이트 / AI 분석 / 훈련 계획 API 테스트

사용법: python -m pytest doglog/api/insights/test_insight_routes.py -v
"""
import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import openai
import pytest


def _completion(payload):
    content = "```json\n" + json.dumps(payload) + "\n```"
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture
def dog_id(client):
    return client.post('/api/dogs/', json={"name": "Bori", "breed": "Border Collie"}).get_json()["dog_id"]


@pytest.fixture
def logged_week(client, dog_id):
    for day in range(1, 6):
        client.put(f'/api/dogs/{dog_id}/days/2024-03-0{day}',
                   json={"activities": [{"activity_type": "Walk", "outcome": "good"}], "rating": "good"})
    return dog_id


@pytest.fixture
def gateway(app):
    service = app.services['openai']
    service.api_key = "sk-test-key-1234567890"
    service.client = MagicMock()
    return service


def test_insights_with_too_little_data(client, dog_id):
    response = client.get(f'/api/dogs/{dog_id}/insights')

    assert response.status_code == 200
    body = response.get_json()
    assert body["time_range"] == "All Time"
    assert body["range_tag"] == "alltime"
    assert body["has_cached_analysis"] is False
    assert body["confidence"] == 0.1
    assert body["overall_mood"] == {"current": "okay", "direction": "stable", "consistency": 0.5, "improvement": 0.0}
    assert [i["title"] for i in body["behavior_insights"]] == ["Building Your Profile"]
    assert body["recommendations"][0]["title"] == "Start Logging Activities"
    assert body["recommendations"][0]["priority"] == "high"


def test_insights_for_logged_week(client, logged_week):
    body = client.get(f'/api/dogs/{logged_week}/insights').get_json()

    assert body["overall_mood"]["current"] == "good"
    assert body["overall_mood"]["direction"] == "stable"
    assert body["confidence"] == 0.7
    walk = body["activity_patterns"][0]
    assert walk["activity_type"] == "Walk"
    assert walk["success_rate"] == 1.0
    assert walk["average_outcome"] == "good"
    titles = [i["title"] for i in body["behavior_insights"]]
    assert titles == ["Favorite Activity", "Great Week!", "High Success Activity"]
    assert body["recommendations"] == []


def test_insights_for_a_month_ignore_other_months(client, logged_week):
    body = client.get(f'/api/dogs/{logged_week}/insights?range=month&month=2024-02').get_json()

    assert body["time_range"] == "This Month"
    assert body["range_tag"] == "2024-02"
    assert body["confidence"] == 0.1


def test_insights_validation_and_missing_dog(client, dog_id):
    assert client.get(f'/api/dogs/{dog_id}/insights?range=week').status_code == 400
    assert client.get('/api/dogs/nope/insights').status_code == 404


def test_ai_analysis_without_key(client, logged_week):
    response = client.post(f'/api/dogs/{logged_week}/ai-analysis', json={"range": "all"})

    assert response.status_code == 400
    assert response.get_json()["error_code"] == "MISSING_CREDENTIAL"


def test_ai_analysis_is_cached_per_range(client, gateway, logged_week, analysis_payload):
    gateway.client.chat.completions.create.return_value = _completion(analysis_payload)

    first = client.post(f'/api/dogs/{logged_week}/ai-analysis', json={"range": "all"})
    second = client.post(f'/api/dogs/{logged_week}/ai-analysis', json={"range": "all"})

    assert first.status_code == 200
    assert first.get_json()["summary"] == analysis_payload["summary"]
    assert first.get_json()["generatedAt"] is not None
    assert second.get_json() == first.get_json()
    assert gateway.client.chat.completions.create.call_count == 1

    cached = client.get(f'/api/dogs/{logged_week}/ai-analysis/cached?range=all')
    assert cached.status_code == 200
    assert cached.get_json()["behaviorAssessment"]["overallScore"] == 82

    other_range = client.get(f'/api/dogs/{logged_week}/ai-analysis/cached?range=month&month=2024-03')
    assert other_range.status_code == 404
    assert other_range.get_json()["error_code"] == "ANALYSIS_NOT_CACHED"

    insights = client.get(f'/api/dogs/{logged_week}/insights').get_json()
    assert insights["has_cached_analysis"] is True


def test_delete_cache_and_new_records_invalidate_analysis(client, gateway, logged_week, analysis_payload):
    gateway.client.chat.completions.create.return_value = _completion(analysis_payload)
    client.post(f'/api/dogs/{logged_week}/ai-analysis', json={"range": "all"})

    assert client.delete(f'/api/dogs/{logged_week}/ai-analysis/cache').status_code == 204
    assert client.get(f'/api/dogs/{logged_week}/ai-analysis/cached').status_code == 404

    client.post(f'/api/dogs/{logged_week}/ai-analysis', json={"range": "all"})
    client.put(f'/api/dogs/{logged_week}/days/2024-03-06', json={"rating": "okay"})
    assert client.get(f'/api/dogs/{logged_week}/ai-analysis/cached').status_code == 404


@pytest.mark.parametrize("error, status_code, error_code", [
    (openai.AuthenticationError, 401, "INVALID_CREDENTIAL"),
    (openai.RateLimitError, 429, "RATE_LIMITED"),
    (openai.InternalServerError, 500, "REMOTE_ERROR"),
])
def test_ai_analysis_gateway_errors(client, gateway, logged_week, error, status_code, error_code):
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    gateway.client.chat.completions.create.side_effect = error(
        "failed", response=httpx.Response(status_code, request=request), body=None
    )

    response = client.post(f'/api/dogs/{logged_week}/ai-analysis', json={"range": "all"})

    assert response.get_json()["error_code"] == error_code
    assert response.status_code == {401: 401, 429: 429, 500: 502}[status_code]


def test_ai_analysis_malformed_response(client, gateway, logged_week):
    gateway.client.chat.completions.create.return_value = SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content="Sorry, I cannot help with that."))]
    )

    response = client.post(f'/api/dogs/{logged_week}/ai-analysis', json={"range": "all"})

    assert response.status_code == 502
    assert response.get_json()["error_code"] == "MALFORMED_RESPONSE"


def test_training_plan_requires_analysis(client, gateway, logged_week):
    response = client.post(f'/api/dogs/{logged_week}/training-plan', json={"range": "all"})

    assert response.status_code == 409
    assert response.get_json()["error_code"] == "ANALYSIS_REQUIRED"
    gateway.client.chat.completions.create.assert_not_called()


def test_training_plan_from_cached_analysis(client, gateway, logged_week, analysis_payload, training_plan_payload):
    gateway.client.chat.completions.create.return_value = _completion(analysis_payload)
    client.post(f'/api/dogs/{logged_week}/ai-analysis', json={"range": "all"})
    gateway.client.chat.completions.create.return_value = _completion(training_plan_payload)

    response = client.post(f'/api/dogs/{logged_week}/training-plan', json={"range": "all"})

    assert response.status_code == 200
    body = response.get_json()
    assert body["weekTitle"] == "Perfect Training Week for Bori"
    assert body["days"][0]["activities"][0]["trainingGoal"] == "Loose leash"
    kwargs = gateway.client.chat.completions.create.call_args.kwargs
    assert kwargs["temperature"] == 0.4
    assert "Stop-and-go walking" in kwargs["messages"][1]["content"]


def test_training_plan_from_supplied_analysis(client, gateway, dog_id, analysis_payload, training_plan_payload):
    gateway.client.chat.completions.create.return_value = _completion(training_plan_payload)

    response = client.post(f'/api/dogs/{dog_id}/training-plan', json={"analysis": analysis_payload})

    assert response.status_code == 200
    assert response.get_json()["weekGoal"] == "Loose-leash walking"
