"""HTTP client for OpenAI-compatible chat completion endpoints."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen


@dataclass
class LLMRequest:
    """One chat completion call, fully resolved."""

    prompt: str
    system: Optional[str]
    model: str
    temperature: Optional[float]
    max_tokens: Optional[int]
    base_url: str
    api_key: Optional[str]
    request_timeout: Optional[float]

    def endpoint(self) -> str:
        return f"{self.base_url}/chat/completions"

    def messages(self) -> List[Dict[str, str]]:
        messages = [{"role": "system", "content": self.system}] if self.system else []
        messages.append({"role": "user", "content": self.prompt})
        return messages


def _first_env(keys: Sequence[str]) -> Optional[str]:
    return next((os.environ[key] for key in keys if os.environ.get(key)), None)


class LLMRunner:
    """Sends a system/user prompt pair and returns the reply text.

    Unset settings fall back to ``CODEPROSE_LLM_*`` then ``OPENAI_*``
    environment variables, then to the OpenAI defaults. Every failure is a
    ``RuntimeError`` whose message is shown to the reader as is.
    """

    DEFAULT_MODEL = "gpt-4o-mini"
    DEFAULT_BASE_URL = "https://api.openai.com/v1"
    ENV_MODEL_KEYS = ("CODEPROSE_LLM_MODEL", "OPENAI_MODEL")
    ENV_BASE_URL_KEYS = ("CODEPROSE_LLM_BASE_URL", "OPENAI_BASE_URL")
    ENV_API_KEY_KEYS = ("CODEPROSE_LLM_API_KEY", "OPENAI_API_KEY")

    def __init__(
        self,
        model: str | None = None,
        *,
        base_url: str | None = None,
        api_key: str | None = None,
        temperature: Optional[float] = 0.2,
        max_tokens: Optional[int] = None,
        request_timeout: Optional[float] = 60.0,
        runner: Callable[[LLMRequest], str] | None = None,
    ) -> None:
        self.model = model or _first_env(self.ENV_MODEL_KEYS) or self.DEFAULT_MODEL
        base = base_url or _first_env(self.ENV_BASE_URL_KEYS) or self.DEFAULT_BASE_URL
        self.base_url = base.rstrip("/")
        self.api_key = api_key or _first_env(self.ENV_API_KEY_KEYS)
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.request_timeout = request_timeout
        self._transport = runner or _post_chat_completion

    def run(self, prompt: str, *, system: str | None = None) -> str:
        return self._transport(
            LLMRequest(
                prompt=prompt,
                system=system,
                model=self.model,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                base_url=self.base_url,
                api_key=self.api_key,
                request_timeout=self.request_timeout,
            )
        )


def _post_chat_completion(request: LLMRequest) -> str:
    payload: Dict[str, object] = {"model": request.model, "messages": request.messages()}
    if request.temperature is not None:
        payload["temperature"] = request.temperature
    if request.max_tokens is not None:
        payload["max_tokens"] = request.max_tokens

    headers = {"Content-Type": "application/json"}
    if request.api_key:
        headers["Authorization"] = f"Bearer {request.api_key}"
    http_request = Request(
        request.endpoint(),
        data=json.dumps(payload).encode("utf-8"),
        headers=headers,
        method="POST",
    )

    try:
        with urlopen(http_request, timeout=request.request_timeout or 60.0) as response:
            raw = response.read()
    except HTTPError as exc:
        detail = exc.read().decode("utf-8", errors="ignore").strip()
        raise RuntimeError(f"API error {exc.code}: {detail or exc.reason}") from exc
    except URLError as exc:
        raise RuntimeError(f"Network error: {exc.reason}") from exc

    try:
        reply = json.loads(raw.decode("utf-8"))
    except json.JSONDecodeError as exc:
        raise RuntimeError("Chat completions endpoint returned invalid JSON") from exc

    text = _reply_text(reply)
    if not text:
        raise RuntimeError("Unexpected API response format")
    return text.strip()


def _reply_text(reply: object) -> str:
    """``choices[0].message.content``, or the legacy ``choices[0].text``."""
    choices = reply.get("choices") if isinstance(reply, dict) else None
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return ""
    first = choices[0]
    message = first.get("message")
    content = message.get("content") if isinstance(message, dict) else first.get("text")
    return content if isinstance(content, str) else ""


__all__ = ["LLMRequest", "LLMRunner"]
