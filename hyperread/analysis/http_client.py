"""Minimal JSON-over-HTTP transport for the analysis service."""

from __future__ import annotations

import json
from typing import Any
from urllib import request
from urllib.error import HTTPError, URLError

from hyperread.exceptions import AnalysisServiceError


def post_json(url: str, payload: dict, timeout: int = 120) -> dict[str, Any]:
    data = json.dumps(payload, ensure_ascii=False).encode("utf-8")
    req = request.Request(
        url,
        data=data,
        headers={"Content-Type": "application/json"},
        method="POST",
    )
    try:
        with request.urlopen(req, timeout=timeout) as resp:
            raw = resp.read().decode("utf-8")
            return json.loads(raw)
    except HTTPError as exc:
        body = exc.read().decode("utf-8") if exc.fp else ""
        raise AnalysisServiceError(f"HTTP {exc.code} calling {url}: {body}") from exc
    except URLError as exc:
        raise AnalysisServiceError(f"Cannot reach {url}: {exc.reason}") from exc
    except (OSError, ValueError) as exc:
        # Timeouts and non-JSON bodies
        raise AnalysisServiceError(f"Bad response from {url}: {exc}") from exc


def chat(
    base_url: str,
    model: str,
    system_prompt: str,
    user_prompt: str,
    *,
    response_schema: dict[str, Any] | None = None,
    temperature: float = 0.2,
    output_tokens: int = 512,
    timeout: int = 120,
    transport=post_json,
) -> str:
    """Send one Ollama-style /api/chat request and return the message content."""
    payload: dict[str, Any] = {
        "model": model,
        "stream": False,
        "messages": [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ],
        "options": {
            "temperature": temperature,
            "num_predict": output_tokens,
        },
    }
    if response_schema is not None:
        payload["format"] = response_schema

    url = f"{base_url.rstrip('/')}/api/chat"
    response = transport(url, payload, timeout=timeout)
    if not isinstance(response, dict):
        kind = type(response).__name__
        raise AnalysisServiceError(f"Unexpected response shape from {url}: {kind}")

    message = response.get("message") or {}
    content = message.get("content", "") if isinstance(message, dict) else None
    if not isinstance(content, str):
        raise AnalysisServiceError(f"Unexpected response shape from {url}: no message content")
    return content
