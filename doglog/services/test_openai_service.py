# doglog/services/test_openai_service.py
import json
from datetime import date
from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import openai
import pytest

from doglog.analytics.time_range import TimeRange
from doglog.core.errors import (
    MissingCredentialError, InvalidCredentialError, RateLimitedError,
    RemoteError, MalformedResponseError,
)
from doglog.models.dog import Dog
from doglog.models.insights import DogInsights
from doglog.analytics.insight_rules import insufficient_data_insights
from doglog.schemas.llm_analysis_schema import LLMAnalysisSchema
from doglog.services.openai_service import OpenAIService

REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def _status_error(error_class, status_code):
    response = httpx.Response(status_code, request=REQUEST)
    return error_class(f"HTTP {status_code}", response=response, body=None)


@pytest.fixture
def dog():
    return Dog(dog_id="dog-1", name="Bori", breed="Border Collie", birthdate=date(2020, 5, 1))


@pytest.fixture
def insights() -> DogInsights:
    return insufficient_data_insights()


@pytest.fixture
def fake_client():
    return MagicMock()


@pytest.fixture
def service(fake_client):
    return OpenAIService(api_key="sk-test-key-1234567890", client=fake_client)


def test_missing_credential_fails_before_any_call(fake_client, dog, insights):
    service = OpenAIService(api_key=None, client=fake_client)

    with pytest.raises(MissingCredentialError):
        service.request_analysis(dog, TimeRange.all_time(), insights)
    with pytest.raises(MissingCredentialError):
        OpenAIService(api_key="   ", client=fake_client).request_analysis(dog, TimeRange.all_time(), insights)
    fake_client.chat.completions.create.assert_not_called()


def test_request_analysis_sends_prompt_and_caches(service, fake_client, dog, insights, analysis_payload):
    fake_client.chat.completions.create.return_value = _completion(
        "Here you go:\n" + json.dumps(analysis_payload) + "\nGood luck!"
    )

    analysis = service.request_analysis(dog, TimeRange.all_time(), insights)

    assert analysis.summary == analysis_payload["summary"]
    assert analysis.generated_at is not None
    kwargs = fake_client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-4o-mini"
    assert kwargs["temperature"] == 0.3
    assert kwargs["max_tokens"] == 1500
    assert kwargs["messages"][0]["role"] == "system"
    assert "Dr. Sarah Chen" in kwargs["messages"][0]["content"]
    assert "Name: Bori" in kwargs["messages"][1]["content"]

    # 두 번째 요청은 캐시에서 반환
    again = service.request_analysis(dog, TimeRange.all_time(), insights)
    assert fake_client.chat.completions.create.call_count == 1
    assert LLMAnalysisSchema().dumps(again) == LLMAnalysisSchema().dumps(analysis)
    assert service.has_cached_analysis("dog-1", TimeRange.all_time())
    assert not service.has_cached_analysis("dog-1", TimeRange.this_month(date(2024, 3, 1)))


def test_invalidate_cache_forces_new_request(service, fake_client, dog, insights, analysis_payload):
    fake_client.chat.completions.create.return_value = _completion(json.dumps(analysis_payload))

    service.request_analysis(dog, TimeRange.all_time(), insights)
    service.invalidate_cache("dog-1")
    assert service.get_cached_analysis("dog-1", TimeRange.all_time()) is None

    service.request_analysis(dog, TimeRange.all_time(), insights)
    assert fake_client.chat.completions.create.call_count == 2


@pytest.mark.parametrize("error, expected", [
    (_status_error(openai.AuthenticationError, 401), InvalidCredentialError),
    (_status_error(openai.RateLimitError, 429), RateLimitedError),
    (_status_error(openai.InternalServerError, 500), RemoteError),
    (_status_error(openai.NotFoundError, 404), RemoteError),
    (openai.APIConnectionError(request=REQUEST), RemoteError),
    (openai.APITimeoutError(request=REQUEST), RemoteError),
])
def test_sdk_errors_are_translated(service, fake_client, dog, insights, error, expected):
    fake_client.chat.completions.create.side_effect = error

    with pytest.raises(expected):
        service.request_analysis(dog, TimeRange.all_time(), insights)
    assert not service.has_cached_analysis("dog-1", TimeRange.all_time())
    assert not service.is_loading


def test_remote_error_carries_status_code(service, fake_client, dog, insights):
    fake_client.chat.completions.create.side_effect = _status_error(openai.InternalServerError, 503)

    with pytest.raises(RemoteError) as exc_info:
        service.request_analysis(dog, TimeRange.all_time(), insights)
    assert exc_info.value.status_code == 503


@pytest.mark.parametrize("content", [None, "", "no json here", '{"summary": "only a summary"}'])
def test_malformed_responses(service, fake_client, dog, insights, content):
    fake_client.chat.completions.create.return_value = _completion(content)

    with pytest.raises(MalformedResponseError):
        service.request_analysis(dog, TimeRange.all_time(), insights)


def test_request_training_plan(service, fake_client, dog, analysis_payload, training_plan_payload):
    analysis = LLMAnalysisSchema().load(analysis_payload)
    fake_client.chat.completions.create.return_value = _completion(json.dumps(training_plan_payload))

    plan = service.request_training_plan(dog, analysis)

    assert plan.week_goal == "Loose-leash walking"
    kwargs = fake_client.chat.completions.create.call_args.kwargs
    assert kwargs["temperature"] == 0.4
    assert kwargs["max_tokens"] == 2000
    assert "Leash pulling: Use Stop-and-go walking" in kwargs["messages"][1]["content"]


def test_training_plan_requires_credential(fake_client, dog, analysis_payload):
    service = OpenAIService(client=fake_client)
    with pytest.raises(MissingCredentialError):
        service.request_training_plan(dog, LLMAnalysisSchema().load(analysis_payload))


def test_init_app_reads_flask_config(app):
    service = OpenAIService()
    app.config.update(OPENAI_API_KEY="sk-configured", OPENAI_MODEL="gpt-4o", AI_CACHE_TTL_HOURS=12)

    service.init_app(app)

    assert service.has_credential
    assert service.model == "gpt-4o"
    assert service.cache.ttl.total_seconds() == 12 * 3600
