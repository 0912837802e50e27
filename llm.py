"""Gemini client shared by the classifier and the recommendation endpoint."""
import logging
from typing import Optional

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from rate_gate import RateGate

logger = logging.getLogger(__name__)


class QuotaExceededError(Exception):
    """The model rejected a call because the request quota is exhausted."""


def is_quota_error(exc: Exception) -> bool:
    return isinstance(exc, google_exceptions.ResourceExhausted) or "429" in str(exc)


def get_gemini_model(api_key: Optional[str], model_name: str):
    """Initialize the Gemini model, or return None when no key is configured."""
    if not api_key:
        return None

    genai.configure(api_key=api_key)
    return genai.GenerativeModel(
        model_name=model_name,
        generation_config={
            "temperature": 0.2,
            "top_p": 0.95,
            "max_output_tokens": 1024,
        }
    )


class GeminiClient:
    """Single prompt-in / text-out calls, each one paced by the shared rate gate."""

    def __init__(self, model, gate: RateGate):
        self.model = model
        self.gate = gate

    async def generate(self, prompt: str) -> str:
        await self.gate.wait()
        try:
            response = await self.model.generate_content_async(prompt)
        except Exception as e:
            if is_quota_error(e):
                raise QuotaExceededError(str(e)) from e
            raise
        return response.text
