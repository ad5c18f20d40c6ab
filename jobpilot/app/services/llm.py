"""
LLM provider access shared by the analyzer, scorer and cover letter generator:
client construction, audited chat completions, and the strict
parse-and-validate step every JSON response goes through.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Generic, Optional, Type, TypeVar

from openai import OpenAI
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from jobpilot.app.core.config import settings
from jobpilot.app.core.exceptions import JobPilotError
from jobpilot.app.core.logging_config import get_logger
from jobpilot.app.services.api_logger import audited_call

logger = get_logger("services.llm")

OPENAI_SERVICE = "OpenAI"
OPENAI_CHAT_ENDPOINT = "https://api.openai.com/v1/chat/completions"

M = TypeVar("M", bound=BaseModel)
_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*|\s*```$")


def resolve_openai_key(api_key: str | None = None) -> str:
    """User key first, application key as fallback."""
    return (api_key or "").strip() or settings.openai_api_key


def get_openai_client(api_key: str) -> OpenAI:
    # max_retries=0: every failure surfaces to the caller on the first attempt
    return OpenAI(api_key=api_key, max_retries=0)


def chat_completion(
    messages: list[dict[str, str]],
    *,
    user_id: int | None,
    error_cls: Type[JobPilotError],
    error_message: str,
    api_key: str | None = None,
    json_mode: bool = False,
    temperature: float = 0.1,
    max_tokens: int | None = None,
) -> str:
    """
    Run one chat completion and return the message content.
    Provider failures (network, auth, rate limit, missing key) raise error_cls.
    """
    key = resolve_openai_key(api_key)
    if not key:
        raise error_cls(f"{error_message} OpenAI API key is not configured.")

    params: dict = {
        "model": settings.openai_model,
        "messages": messages,
        "temperature": temperature,
    }
    if json_mode:
        params["response_format"] = {"type": "json_object"}
    if max_tokens:
        params["max_tokens"] = max_tokens

    client = get_openai_client(key)
    try:
        resp = audited_call(
            OPENAI_SERVICE,
            OPENAI_CHAT_ENDPOINT,
            "POST",
            lambda: client.chat.completions.create(**params),
            request_data=params,
            user_id=user_id,
        )
    except Exception as e:
        logger.warning("OpenAI call failed user_id=%s error=%s", user_id, e)
        raise error_cls(f"{error_message} Please check your API key and try again.") from e

    try:
        return (resp.choices[0].message.content or "").strip()
    except (AttributeError, IndexError, TypeError) as e:
        raise error_cls(f"{error_message} The provider returned no content.") from e


@dataclass
class ParseResult(Generic[M]):
    """Tagged result of parsing model output: ok + payload, or not ok + error."""
    ok: bool
    payload: Optional[M] = None
    error: Optional[str] = None


def parse_llm_json(content: str | None, model: Type[M]) -> ParseResult[M]:
    """Strip code fences, decode JSON, validate into `model`. Never raises."""
    text = _FENCE_RE.sub("", (content or "").strip()).strip()
    if not text:
        return ParseResult(ok=False, error="Empty response")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        return ParseResult(ok=False, error=f"Invalid JSON: {e.msg}")
    if not isinstance(data, dict):
        return ParseResult(ok=False, error="Expected a JSON object")
    try:
        return ParseResult(ok=True, payload=model.model_validate(data))
    except PydanticValidationError as e:
        return ParseResult(ok=False, error=f"Unexpected shape: {e.error_count()} validation error(s)")
