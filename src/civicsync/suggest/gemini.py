"""Gemini REST client for issue description suggestions."""

from __future__ import annotations

from typing import Any, Optional

import httpx

from civicsync.config import Settings
from civicsync.utils.logging import get_logger


logger = get_logger(__name__)


NO_TEXT_FALLBACK = "Unable to analyze the image. Please provide a manual description."
UNAVAILABLE_FALLBACK = "AI description unavailable. Please describe the issue manually."

PROMPT_TEMPLATE = (
    "Analyze this civic issue image and provide a concise description (2-3 sentences max). "
    "Location: {location}. Focus on: What type of civic problem is visible, key details "
    "that would help authorities understand the issue. Avoid personal information or "
    "assumptions. Provide only the description, no introductory text."
)


def _image_payload(photo_data_uri: str) -> str:
    """Return the base64 body of a data URI (or the input if it has no header)."""
    if "," in photo_data_uri:
        return photo_data_uri.split(",", 1)[1]
    return photo_data_uri


def _extract_text_from_response(payload: dict[str, Any]) -> Optional[str]:
    candidates = payload.get("candidates") or []
    if not candidates:
        return None

    content = candidates[0].get("content") or {}
    parts = content.get("parts") or []
    if not parts:
        return None
    text = parts[0].get("text")
    if isinstance(text, str) and text.strip():
        return text.strip()
    return None


class DescriptionSuggester:
    """Suggest a report description from a photo and a location string.

    Never raises: any failure yields a fallback sentence the UI can show.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.settings = settings or Settings()
        self._client = client

    def suggest(self, photo_data_uri: str, location: str) -> str:
        if not self.settings.google_api_key:
            logger.warning("suggest.skipped reason=missing_api_key")
            return UNAVAILABLE_FALLBACK

        try:
            payload = self._request(photo_data_uri, location)
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("suggest.failed: %s", exc)
            return UNAVAILABLE_FALLBACK

        if not isinstance(payload, dict):
            return NO_TEXT_FALLBACK
        return _extract_text_from_response(payload) or NO_TEXT_FALLBACK

    def _request(self, photo_data_uri: str, location: str) -> Any:
        url = (
            f"{self.settings.gemini_api_base_url}/models/"
            f"{self.settings.gemini_model_id}:generateContent"
        )
        params = {"key": self.settings.google_api_key}
        body: dict[str, Any] = {
            "contents": [
                {
                    "parts": [
                        {"text": PROMPT_TEMPLATE.format(location=location)},
                        {
                            "inline_data": {
                                "mime_type": "image/jpeg",
                                "data": _image_payload(photo_data_uri),
                            }
                        },
                    ]
                }
            ]
        }

        if self._client is not None:
            response = self._client.post(url, params=params, json=body)
        else:
            with httpx.Client(timeout=self.settings.gemini_timeout_seconds) as client:
                response = client.post(url, params=params, json=body)
        response.raise_for_status()
        return response.json()
