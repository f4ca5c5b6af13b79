import asyncio
import json
import logging
from typing import Dict, List, Optional, Tuple

import httpx
from pydantic import ValidationError

from app.settings import Settings, settings as app_settings
from domain.errors import AIGatewayError
from domain.schemas import Job, MatchResult
from domain.services.resume_analyzer import ResumeAnalyzer
from infra.llm.prompts import MATCH_PROMPT, MATCH_SYSTEM_PROMPT

logger = logging.getLogger(__name__)

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"


async def _post_with_retries(
    url: str,
    headers: Dict[str, str],
    payload: Dict,
    *,
    timeout: float = 60,
    max_attempts: int = 1,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dict:
    backoff = 1.0
    for attempt in range(1, max_attempts + 1):
        try:
            async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
                response = await client.post(url, headers=headers, json=payload)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            retriable = status >= 500 or status in {408, 429}
            if not retriable or attempt == max_attempts:
                raise
        except httpx.RequestError:
            if attempt == max_attempts:
                raise
        logger.warning("Completion request attempt %d/%d failed, retrying in %.1fs",
                       attempt, max_attempts, backoff)
        await asyncio.sleep(backoff)
        backoff *= 2
    raise RuntimeError("Unexpected retry exhaustion")


def build_match_messages(job: Job, resume_text: str) -> List[Dict[str, str]]:
    content = MATCH_PROMPT.format(
        title=job.title,
        description=job.description,
        requirements=job.requirements or "Not specified",
        resume=resume_text,
    )
    return [
        {"role": "system", "content": MATCH_SYSTEM_PROMPT},
        {"role": "user", "content": content},
    ]


def parse_match_reply(raw_text: Optional[str]) -> MatchResult:
    # a null message body counts as an empty object
    try:
        data = json.loads(raw_text or "{}")
    except json.JSONDecodeError as exc:
        raise AIGatewayError("LLM response was not valid JSON") from exc
    if not isinstance(data, dict):
        raise AIGatewayError("LLM response was not a JSON object")
    try:
        return MatchResult.model_validate(data)
    except ValidationError as exc:
        raise AIGatewayError(f"LLM response failed validation: {exc}") from exc


class ChatCompletionGateway(ResumeAnalyzer):
    """Resume analysis through an OpenAI-compatible chat completion endpoint."""

    def __init__(
        self,
        settings: Settings = app_settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings
        self.transport = transport

    def _provider(self) -> Tuple[str, Dict[str, str], str]:
        s = self.settings
        if s.OPENAI_API_KEY:
            url = f"{s.OPENAI_BASE_URL.rstrip('/')}/chat/completions"
            headers = {"Authorization": f"Bearer {s.OPENAI_API_KEY}"}
            return url, headers, s.OPENAI_MODEL
        if s.OPENROUTER_API_KEY:
            headers = {
                "Authorization": f"Bearer {s.OPENROUTER_API_KEY}",
                "HTTP-Referer": "http://localhost",
                "X-Title": s.APP_NAME,
            }
            return f"{OPENROUTER_BASE_URL}/chat/completions", headers, s.OPENROUTER_MODEL
        raise AIGatewayError("No LLM provider configured")

    async def _chat_json(self, messages: List[Dict[str, str]]) -> Optional[str]:
        url, headers, model = self._provider()
        payload = {
            "model": model,
            "messages": messages,
            "temperature": self.settings.LLM_TEMPERATURE,
            "response_format": {"type": "json_object"},
        }
        try:
            data = await _post_with_retries(
                url,
                headers,
                payload,
                timeout=self.settings.LLM_TIMEOUT_SECONDS,
                max_attempts=max(1, self.settings.LLM_MAX_ATTEMPTS),
                transport=self.transport,
            )
        except httpx.HTTPStatusError as exc:
            raise AIGatewayError(
                f"Completion provider returned HTTP {exc.response.status_code}") from exc
        except httpx.RequestError as exc:
            raise AIGatewayError(f"Completion request failed: {exc!r}") from exc
        except ValueError as exc:
            raise AIGatewayError("Completion provider returned a non-JSON body") from exc
        try:
            return data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise AIGatewayError("Unexpected completion response shape") from exc

    async def analyze_resume_against_job(self, job: Job, resume_text: str) -> MatchResult:
        messages = build_match_messages(job, resume_text)
        logger.info("Requesting match analysis for job %s (%d resume chars)",
                    job.id, len(resume_text))
        raw = await self._chat_json(messages)
        result = parse_match_reply(raw)
        logger.info("Match analysis for job %s scored %d", job.id, result.match_score)
        return result
