from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Optional

import httpx

from ..attendance.model import TimeLog
from ..core.constants import INSIGHT_SAMPLE_SIZE

logger = logging.getLogger(__name__)

GEMINI_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

MISSING_KEY_MESSAGE = "Insight API key is missing. Please check your configuration."
FAILURE_MESSAGE = "Unable to generate insights at this moment. Please try again later."
EMPTY_MESSAGE = "No insights available."

PROMPT_TEMPLATE = """
You are an expert HR Analyst. Analyze the following attendance data for a company.
Provide a concise, premium-style summary of:
1. Overall attendance trends.
2. Any employees working excessive hours (burnout risk).
3. Any patterns of lateness (assuming 9:00 AM start).
4. A positive observation.

Data: {data}

Format the response in professional markdown with clear headings. Keep it brief.
"""


def simplify_logs(logs: Iterable[TimeLog], limit: int = INSIGHT_SAMPLE_SIZE) -> list[dict[str, str]]:
    """Compact tuples sent to the model, bounded to the first ``limit`` logs."""
    sample = []
    for log in list(logs)[:limit]:
        sample.append(
            {
                "employee": log.user_name,
                "date": log.date,
                "hours": f"{log.duration_minutes / 60:.1f}" if log.duration_minutes else "Active",
                "start": log.check_in.strftime("%H:%M"),
            }
        )
    return sample


def build_prompt(logs: Iterable[TimeLog], limit: int = INSIGHT_SAMPLE_SIZE) -> str:
    return PROMPT_TEMPLATE.format(data=json.dumps(simplify_logs(logs, limit)))


def _extract_text(body: dict[str, Any]) -> str:
    parts = body["candidates"][0]["content"]["parts"]
    return "".join(part.get("text", "") for part in parts).strip()


class InsightService:
    """Narrative attendance summary from a generative model.

    Never raises: every failure degrades to a fixed placeholder text.
    """

    def __init__(
        self,
        api_key: Optional[str],
        *,
        model: str = "gemini-2.5-flash",
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None,
    ):
        self._api_key = api_key
        self._model = model
        self._timeout = timeout
        self._client = client

    def analyze_attendance(self, logs: Iterable[TimeLog]) -> str:
        if not self._api_key:
            logger.warning("Insight API key not found in configuration.")
            return MISSING_KEY_MESSAGE

        payload = {"contents": [{"parts": [{"text": build_prompt(logs)}]}]}
        client = self._client or httpx.Client(timeout=self._timeout)
        try:
            response = client.post(
                GEMINI_ENDPOINT.format(model=self._model),
                params={"key": self._api_key},
                json=payload,
            )
            response.raise_for_status()
            text = _extract_text(response.json())
        except httpx.HTTPStatusError as e:
            logger.error("Insight API returned %s: %s", e.response.status_code, e.response.text)
            return FAILURE_MESSAGE
        except (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError) as e:
            logger.error("Insight generation failed: %s", e)
            return FAILURE_MESSAGE
        finally:
            if self._client is None:
                client.close()

        return text or EMPTY_MESSAGE
