from __future__ import annotations

import json
import logging
from typing import Sequence

import requests

from ..core.exceptions import AIServiceError
from ..entries.model import TimeEntry
from .csv_export import summarize

log = logging.getLogger(__name__)

GEMINI_API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

NO_ENTRIES_SUMMARY = "No time entries available to analyze."

ENHANCE_PROMPT = """You are a professional business writing assistant. Rewrite this rough work note as a clear, professional task description in one or two sentences.

Rough note: "{note}"

Professional description:"""

SUMMARY_PROMPT = """You are a management consultant. Read these time tracking statistics and write a short executive summary (2-3 paragraphs) on resource allocation, efficiency and recommendations.

Statistics:
- Total Hours Tracked: {total_hours} hours
- Number of Entries: {entry_count}
- Companies: {companies}
- Team Members: {members}

Recent Tasks Sample:
{sample}

Executive Summary:"""


class GeminiClient:
    """Thin client for the Gemini generateContent endpoint."""

    def __init__(self, api_key: str, *, model: str = "gemini-pro", timeout: float = 30.0):
        self._api_key = (api_key or "").strip()
        self._model = model
        self._timeout = timeout

    def generate(self, prompt: str) -> str:
        if not self._api_key:
            raise AIServiceError("Gemini API key is not configured. Please set GEMINI_API_KEY.")

        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": 0.7, "maxOutputTokens": 500},
        }
        try:
            resp = requests.post(
                GEMINI_API_URL.format(model=self._model),
                params={"key": self._api_key},
                json=payload,
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            log.error("Gemini API error: %s", exc)
            raise AIServiceError("AI service is unavailable") from exc

        if not resp.ok:
            try:
                message = resp.json().get("error", {}).get("message")
            except ValueError:
                message = None
            log.error("Gemini API returned %s: %s", resp.status_code, message)
            raise AIServiceError(message or f"API request failed with status {resp.status_code}")

        try:
            candidates = resp.json().get("candidates") or []
            text = candidates[0]["content"]["parts"][0]["text"] if candidates else ""
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise AIServiceError("Unexpected response from AI service") from exc

        if not text:
            raise AIServiceError("No response generated from AI")
        return text.strip()

    def enhance_description(self, rough: str) -> str:
        return self.generate(ENHANCE_PROMPT.format(note=rough))

    def generate_executive_summary(self, entries: Sequence[TimeEntry]) -> str:
        if not entries:
            return NO_ENTRIES_SUMMARY

        summary = summarize(entries)
        sample = "\n".join(
            f"- {e.user_name}: {e.description} ({(e.seconds or 0) / 3600:.1f}h) for {e.company_name}"
            for e in list(entries)[:10]
        )
        prompt = SUMMARY_PROMPT.format(
            total_hours=summary.total_hours,
            entry_count=summary.total_entries,
            companies=json.dumps({k: round(v / 3600, 2) for k, v in summary.company_seconds.items()}, indent=2),
            members=json.dumps({k: round(v / 3600, 2) for k, v in summary.user_seconds.items()}, indent=2),
            sample=sample,
        )
        return self.generate(prompt)
