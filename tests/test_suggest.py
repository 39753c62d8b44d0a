import httpx
import orjson

from civicsync.config import Settings
from civicsync.suggest import DescriptionSuggester
from civicsync.suggest.gemini import NO_TEXT_FALLBACK, UNAVAILABLE_FALLBACK


PHOTO = "data:image/jpeg;base64,aGVsbG8="


def _suggester(handler, api_key="test-key") -> DescriptionSuggester:
    settings = Settings(google_api_key=api_key, gemini_api_base_url="http://gemini.test/v1")
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return DescriptionSuggester(settings, client=client)


def test_suggest_returns_model_text():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["path"] = request.url.path
        captured["key"] = request.url.params["key"]
        captured["body"] = orjson.loads(request.content)
        return httpx.Response(
            200,
            json={"candidates": [{"content": {"parts": [{"text": "  Overflowing bin on the kerb. "}]}}]},
        )

    text = _suggester(handler).suggest(PHOTO, "12.97,77.59")

    assert text == "Overflowing bin on the kerb."
    assert captured["path"] == "/v1/models/gemini-2.5-flash:generateContent"
    assert captured["key"] == "test-key"
    parts = captured["body"]["contents"][0]["parts"]
    assert "Location: 12.97,77.59." in parts[0]["text"]
    assert parts[1]["inline_data"] == {"mime_type": "image/jpeg", "data": "aGVsbG8="}


def test_suggest_without_candidates_uses_manual_fallback():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"candidates": []})

    assert _suggester(handler).suggest(PHOTO, "MG Road") == NO_TEXT_FALLBACK


def test_suggest_http_error_uses_unavailable_fallback():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "boom"})

    assert _suggester(handler).suggest(PHOTO, "MG Road") == UNAVAILABLE_FALLBACK


def test_suggest_invalid_json_uses_unavailable_fallback():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>")

    assert _suggester(handler).suggest(PHOTO, "MG Road") == UNAVAILABLE_FALLBACK


def test_suggest_without_api_key_skips_request():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={})

    assert _suggester(handler, api_key=None).suggest(PHOTO, "MG Road") == UNAVAILABLE_FALLBACK
    assert calls == []
