"""OpenAI chat-completions adapter shared by the assistant and journal analysis.
"""

from typing import Any, Dict, List, Optional
import logging
from openai import OpenAI, OpenAIError

from app.config import settings
from app.exceptions import ExternalServiceError

logger = logging.getLogger("lyfe.openai")

_client: Optional[OpenAI] = None


def is_configured() -> bool:
    return bool(settings.openai_api_key)


def _get_client() -> OpenAI:
    """Lazy init the SDK client."""
    global _client
    if not is_configured():
        raise ExternalServiceError("OpenAI API key is not configured")
    if _client is None:
        _client = OpenAI(api_key=settings.openai_api_key)
    return _client


def reset_client():
    """Drop the cached client (used after settings change)."""
    global _client
    _client = None


def chat_completion(
    messages: List[Dict[str, Any]],
    model: Optional[str] = None,
    tools: Optional[List[Dict[str, Any]]] = None,
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
    json_mode: bool = False,
):
    """Run a chat completion and return the first choice's message.

    Raises:
        ExternalServiceError: when the key is missing or the API call fails
    """
    client = _get_client()
    kwargs: Dict[str, Any] = {
        "model": model or settings.openai_model,
        "messages": messages,
        "temperature": settings.openai_temperature if temperature is None else temperature,
        "max_tokens": max_tokens or settings.openai_max_tokens,
    }
    if tools:
        kwargs["tools"] = tools
        kwargs["tool_choice"] = "auto"
    if json_mode:
        kwargs["response_format"] = {"type": "json_object"}

    try:
        resp = client.chat.completions.create(**kwargs)
    except OpenAIError as exc:
        logger.warning(f"OpenAI chat completion failed: {exc}")
        raise ExternalServiceError(f"OpenAI request failed: {exc}") from exc

    usage = getattr(resp, "usage", None)
    if usage is not None:
        logger.info(
            f"OpenAI completion model={kwargs['model']} "
            f"prompt_tokens={usage.prompt_tokens} completion_tokens={usage.completion_tokens}"
        )
    return resp.choices[0].message
