"""
Summarization and question answering over a document's raw text.

The service is optional for playback, so failures never propagate:
they are logged and replaced by an explanatory placeholder.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from hyperread.analysis.http_client import chat, post_json
from hyperread.analysis.prompts import (
    ANALYSIS_SCHEMA,
    SYSTEM_PROMPT,
    analysis_prompt,
    question_prompt,
)
from hyperread.config import AnalysisConfig
from hyperread.exceptions import AnalysisServiceError
from hyperread.models import Analysis, ReadingMode

logger = logging.getLogger(__name__)

ANALYSIS_PLACEHOLDER = (
    "Could not generate analysis. "
    "Please check your analysis service or try a shorter document."
)
ANSWER_PLACEHOLDER = "The analysis service is unavailable right now."


class AnalysisService:
    """Client for an Ollama-compatible chat endpoint.

    Usage:
        service = AnalysisService(AnalysisConfig.from_env())
        analysis = service.summarize(doc.raw_text, ReadingMode.TECHNICAL)
        print(analysis.summary)
    """

    def __init__(self, config: AnalysisConfig | None = None, *, transport=post_json):
        """Initialize the service.

        Args:
            config: Endpoint settings (default reads environment).
            transport: ``post_json``-compatible callable, swappable in tests.
        """
        self.config = config or AnalysisConfig.from_env()
        self.transport = transport

    def summarize(self, raw_text: str, mode: ReadingMode | str) -> Analysis:
        """Summary, key points and reading-time estimate for ``raw_text``.

        Never raises for service failures; returns a placeholder instead.
        """
        try:
            return self._summarize(raw_text, ReadingMode.coerce(mode))
        except AnalysisServiceError as e:
            logger.warning("Analysis failed: %s", e)
            return Analysis.placeholder(ANALYSIS_PLACEHOLDER)

    def ask(self, raw_text: str, question: str, mode: ReadingMode | str) -> str:
        """Free-text answer to ``question`` about ``raw_text``."""
        mode = ReadingMode.coerce(mode)
        prompt = question_prompt(self._truncate(raw_text), question, mode)
        try:
            answer = self._chat(prompt).strip()
        except AnalysisServiceError as e:
            logger.warning("Question answering failed (%s mode): %s", mode.value, e)
            return ANSWER_PLACEHOLDER
        return answer or ANSWER_PLACEHOLDER

    def _summarize(self, raw_text: str, mode: ReadingMode) -> Analysis:
        if not raw_text.strip():
            raise AnalysisServiceError("No text to analyze")

        content = self._chat(
            analysis_prompt(self._truncate(raw_text), mode), schema=ANALYSIS_SCHEMA
        )
        payload = _parse_json_object(content)
        analysis = Analysis.from_dict(payload)
        if not analysis.summary:
            raise AnalysisServiceError("Response has no summary")
        return analysis

    def _chat(self, user_prompt: str, schema: dict[str, Any] | None = None) -> str:
        return chat(
            self.config.base_url,
            self.config.model,
            SYSTEM_PROMPT,
            user_prompt,
            response_schema=schema,
            temperature=self.config.temperature,
            output_tokens=self.config.output_tokens,
            timeout=self.config.timeout,
            transport=self.transport,
        )

    def _truncate(self, raw_text: str) -> str:
        return raw_text[: self.config.max_chars]


def _parse_json_object(text: str) -> dict[str, Any]:
    """Parse a model response, tolerating prose around the JSON object."""
    if not text:
        raise AnalysisServiceError("Empty response")

    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        start, end = text.find("{"), text.rfind("}")
        if start < 0 or end <= start:
            raise AnalysisServiceError("Response is not JSON") from None
        try:
            data = json.loads(text[start : end + 1])
        except json.JSONDecodeError as e:
            raise AnalysisServiceError(f"Response is not JSON: {e}") from e

    if not isinstance(data, dict):
        raise AnalysisServiceError("Response JSON is not an object")
    return data
