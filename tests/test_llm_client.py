"""
Tests for the chat completion gateway and reply parsing.
"""
import asyncio
import json
from datetime import datetime

import httpx
import pytest

from app.settings import Settings
from domain.errors import AIGatewayError
from domain.schemas import NO_SUMMARY, Job
from infra.llm.client import ChatCompletionGateway, build_match_messages, parse_match_reply

JOB = Job(
    id=1,
    title="Engineer",
    description="Build things",
    requirements="5 yrs exp",
    created_at=datetime(2024, 1, 1),
)


def _completion(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def _gateway(handler, **overrides):
    settings = Settings(OPENAI_API_KEY="test-key", OPENROUTER_API_KEY=None, **overrides)
    return ChatCompletionGateway(settings=settings, transport=httpx.MockTransport(handler))


def _analyze(gateway):
    return asyncio.run(gateway.analyze_resume_against_job(JOB, "5 years experience building things"))


def test_request_contract_and_parsed_result():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_completion(json.dumps({
            "matchScore": 90,
            "summary": "Great fit",
            "strengths": ["exp"],
            "weaknesses": [],
            "missingQualifications": [],
        })))

    result = _analyze(_gateway(handler, OPENAI_MODEL="gpt-test"))

    assert result.match_score == 90
    assert result.summary == "Great fit"
    assert result.strengths == ["exp"]
    assert seen["url"] == "https://api.openai.com/v1/chat/completions"
    assert seen["auth"] == "Bearer test-key"
    assert seen["body"]["model"] == "gpt-test"
    assert seen["body"]["response_format"] == {"type": "json_object"}
    roles = [m["role"] for m in seen["body"]["messages"]]
    assert roles == ["system", "user"]
    prompt = seen["body"]["messages"][1]["content"]
    assert "Engineer" in prompt
    assert "5 yrs exp" in prompt
    assert "5 years experience building things" in prompt


def test_custom_base_url():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        return httpx.Response(200, json=_completion("{}"))

    _analyze(_gateway(handler, OPENAI_BASE_URL="http://llm.local/v1/"))
    assert seen["url"] == "http://llm.local/v1/chat/completions"


def test_transport_error_raises_gateway_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(AIGatewayError) as excinfo:
        _analyze(_gateway(handler))
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


def test_http_error_raises_gateway_error():
    def handler(request):
        return httpx.Response(401, json={"error": {"message": "bad key"}})

    with pytest.raises(AIGatewayError) as excinfo:
        _analyze(_gateway(handler))
    assert "401" in excinfo.value.message


def test_malformed_json_reply_raises_gateway_error():
    def handler(request):
        return httpx.Response(200, json=_completion("Sure! Here is the analysis: {"))

    with pytest.raises(AIGatewayError):
        _analyze(_gateway(handler))


def test_unexpected_envelope_raises_gateway_error():
    def handler(request):
        return httpx.Response(200, json={"choices": []})

    with pytest.raises(AIGatewayError):
        _analyze(_gateway(handler))


def test_no_provider_configured():
    gateway = ChatCompletionGateway(
        settings=Settings(OPENAI_API_KEY=None, OPENROUTER_API_KEY=None))
    with pytest.raises(AIGatewayError):
        _analyze(gateway)


def test_openrouter_used_when_only_its_key_is_set():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        return httpx.Response(200, json=_completion("{}"))

    settings = Settings(OPENAI_API_KEY=None, OPENROUTER_API_KEY="or-key")
    gateway = ChatCompletionGateway(settings=settings, transport=httpx.MockTransport(handler))
    _analyze(gateway)
    assert seen["url"] == "https://openrouter.ai/api/v1/chat/completions"
    assert seen["auth"] == "Bearer or-key"


def test_parse_reply_defaults_missing_fields():
    result = parse_match_reply('{"matchScore": 55}')
    assert result.match_score == 55
    assert result.summary == NO_SUMMARY
    assert result.strengths == []
    assert result.weaknesses == []
    assert result.missing_qualifications == []


def test_parse_reply_null_content_is_empty_object():
    result = parse_match_reply(None)
    assert result.match_score == 0
    assert result.summary == NO_SUMMARY


def test_parse_reply_rejects_non_object():
    with pytest.raises(AIGatewayError):
        parse_match_reply('["not", "an", "object"]')


@pytest.mark.parametrize("raw, expected", [
    (85, 85),
    (150, 100),
    (-5, 0),
    (72.6, 73),
    ("64", 64),
    ("high", 0),
    (None, 0),
    ("inf", 100),
    ("-inf", 0),
])
def test_parse_reply_score_coercion(raw, expected):
    result = parse_match_reply(json.dumps({"matchScore": raw}))
    assert result.match_score == expected


def test_parse_reply_overflowing_score_clamps():
    # 1e400 is valid JSON that decodes to float infinity
    result = parse_match_reply('{"matchScore": 1e400, "summary": "Strong"}')
    assert result.match_score == 100
    assert result.summary == "Strong"


def test_overflowing_score_completes_through_gateway():
    def handler(request):
        return httpx.Response(200, content=(
            b'{"choices": [{"message": {"role": "assistant", '
            b'"content": "{\\"matchScore\\": 1e400}"}}]}'),
            headers={"content-type": "application/json"})

    result = _analyze(_gateway(handler))
    assert result.match_score == 100


def test_parse_reply_normalizes_lists():
    result = parse_match_reply(json.dumps({
        "strengths": "Python",
        "weaknesses": ["a", None, 3],
        "missingQualifications": None,
    }))
    assert result.strengths == ["Python"]
    assert result.weaknesses == ["a", "3"]
    assert result.missing_qualifications == []


def test_prompt_without_requirements():
    job = JOB.model_copy(update={"requirements": None})
    messages = build_match_messages(job, "resume")
    assert "Requirements: Not specified" in messages[1]["content"]
