import logging
import traceback
from typing import Optional

import requests

from mermaid_app.config import Settings, get_settings

logger = logging.getLogger(__name__)


class ModelCallError(Exception):
    """Raised for every failure of the Gemini call: config, transport or payload."""

    def __init__(self, message: str, stack: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.stack = stack


class GeminiClient:
    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    def _build_payload(self, prompt, system_instruction=None, temperature=None, max_output_tokens=None):
        payload = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        if system_instruction:
            payload["systemInstruction"] = {"parts": [{"text": system_instruction}]}

        generation_config = {}
        if temperature is not None:
            generation_config["temperature"] = temperature
        if max_output_tokens is not None:
            generation_config["maxOutputTokens"] = max_output_tokens
        if generation_config:
            payload["generationConfig"] = generation_config
        return payload

    def _call_gemini(self, model, payload):
        settings = self.settings
        if not settings.gemini_api_key:
            raise RuntimeError("GEMINI_API_KEY environment variable not set")

        # The key travels only in a header, never in the URL
        gemini_url = f"{settings.gemini_api_base}/models/{model}:generateContent"
        headers = {"Content-Type": "application/json", "x-goog-api-key": settings.gemini_api_key}
        response = requests.post(
            gemini_url, json=payload, headers=headers,
            timeout=settings.request_timeout
        )
        if response.status_code != 200:
            raise RuntimeError(f"Gemini API failed: {response.status_code}: {response.text}")
        data = response.json()
        parts = data['candidates'][0]['content']['parts']
        return "".join(part.get("text", "") for part in parts)

    def generate_text(
        self,
        prompt: str,
        system_instruction: Optional[str] = None,
        temperature: Optional[float] = None,
        max_output_tokens: Optional[int] = None,
        model: Optional[str] = None,
    ) -> str:
        """
        Send a single generateContent request and return the response text.

        Args:
            prompt: The user turn sent to the model
            system_instruction: Optional system prompt
            temperature: Optional sampling temperature
            max_output_tokens: Optional cap on generated tokens
            model: Model name, defaults to the configured chat model

        Returns:
            The concatenated text parts of the first candidate

        Raises:
            ModelCallError: on any failure; there are no retries
        """
        model = model or self.settings.chat_model
        try:
            if not isinstance(prompt, str):
                raise TypeError(f"prompt must be a string, got {type(prompt).__name__}")
            payload = self._build_payload(prompt, system_instruction, temperature, max_output_tokens)
            return self._call_gemini(model, payload)
        except Exception as exc:
            logger.error(f"Gemini call to {model} failed: {exc}")
            raise ModelCallError(str(exc) or type(exc).__name__, stack=traceback.format_exc()) from exc
