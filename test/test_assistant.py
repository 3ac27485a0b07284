"""Tests for the remote assistant boundary."""

import json
import os
from unittest.mock import patch

import httpx
import pytest

from espgen.assistant import (
    API_KEY_ENVS,
    DEFAULT_MODEL,
    MODEL_ENV,
    Assistant,
    AssistantError,
    Completion,
    create_prompt,
    fix_prompt,
    format_error,
    has_code_fences,
    resolve_api_key,
    resolve_model,
    strip_code_fences,
)


def reply(text: str, finish_reason: str = "STOP") -> dict:
    return {
        "candidates": [
            {"content": {"parts": [{"text": text}]}, "finishReason": finish_reason}
        ]
    }


def make_assistant(handler, **kwargs) -> Assistant:
    kwargs.setdefault("api_key", "test-key")
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return Assistant(client=client, **kwargs)


class TestStripCodeFences:
    """Test markdown fence removal."""

    def test_yaml_fence(self):
        assert strip_code_fences("```yaml\nfoo: 1\n```") == "foo: 1"

    def test_bare_fence(self):
        assert strip_code_fences("```\nfoo: 1\nbar: 2\n```") == "foo: 1\nbar: 2"

    def test_surrounding_whitespace(self):
        assert strip_code_fences("\n\n  ```yml\nfoo: 1\n```  \n") == "foo: 1"

    def test_unfenced_only_trimmed(self):
        assert strip_code_fences("  foo: 1\n\n") == "foo: 1"

    def test_inner_fences_kept(self):
        text = "foo: |\n  ```\n  not a fence\n  ```\nbar: 2"
        assert strip_code_fences(text) == text

    @pytest.mark.parametrize("text", [None, "", "   \n"])
    def test_empty(self, text):
        assert strip_code_fences(text) == ""

    def test_has_code_fences(self):
        assert has_code_fences("```yaml\nfoo: 1\n```")
        assert has_code_fences("foo: 1\n```\n")
        assert not has_code_fences("foo: 1\n")


class TestFormatError:
    """Test error categorization."""

    @pytest.mark.parametrize(
        "message, title",
        [
            ("401 Unauthorized", "Authentication Failed"),
            ("API key not valid", "Authentication Failed"),
            ("429 Too Many Requests", "Rate Limit Exceeded"),
            ("Quota exceeded for project", "Rate Limit Exceeded"),
            ("503 Service Unavailable", "Service Unavailable"),
            ("The model is overloaded: service unavailable", "Service Unavailable"),
            ("Response blocked by SAFETY filters", "Content Blocked"),
            ("Connection reset by peer", "Request to the assistant failed"),
        ],
    )
    def test_categories(self, message, title):
        assert format_error(message).splitlines()[0] == f"# Error: {title}"

    def test_every_line_commented(self):
        text = format_error("something broke\non two lines")
        assert all(line.startswith("#") for line in text.splitlines())
        assert "# something broke" in text
        assert "# on two lines" in text

    def test_uncategorized_keeps_message(self):
        assert "Connection reset" in format_error("Connection reset")

    def test_empty_message(self):
        assert format_error("").startswith("# Error: ")


class TestSettings:
    """Test key and model resolution."""

    def test_explicit_key_wins(self):
        with patch.dict(os.environ, {API_KEY_ENVS[0]: "from-env"}):
            assert resolve_api_key("explicit") == "explicit"

    def test_key_lookup_order(self):
        env = {"ESPGEN_API_KEY": "primary", "GEMINI_API_KEY": "fallback"}
        with patch.dict(os.environ, env, clear=True):
            assert resolve_api_key() == "primary"
        with patch.dict(os.environ, {"GEMINI_API_KEY": "fallback"}, clear=True):
            assert resolve_api_key() == "fallback"

    def test_no_key(self):
        with patch.dict(os.environ, {}, clear=True):
            assert resolve_api_key() is None

    def test_model(self):
        with patch.dict(os.environ, {}, clear=True):
            assert resolve_model() == DEFAULT_MODEL
        with patch.dict(os.environ, {MODEL_ENV: "gemini-custom"}):
            assert resolve_model() == "gemini-custom"
            assert resolve_model("explicit") == "explicit"


class TestPrompts:
    """Test prompt composition."""

    def test_create_without_context(self):
        prompt = create_prompt("ESP32 with a relay")
        assert "User Request: ESP32 with a relay" in prompt
        assert "Current YAML context" not in prompt

    def test_create_with_context(self):
        prompt = create_prompt("add a sensor", "esphome:\n  name: x")
        assert prompt.index("Current YAML context") < prompt.index("User Request")
        assert "esphome:\n  name: x" in prompt

    def test_fix(self):
        prompt = fix_prompt("ota:", "ota requires a platform key")
        assert "ota:" in prompt
        assert "ota requires a platform key" in prompt


class TestAssistant:
    """Test requests against a mocked endpoint."""

    def test_create_request(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=reply("esphome:\n  name: relay\n"))

        with make_assistant(handler, model="gemini-test") as assistant:
            result = assistant.create("ESP32 relay board")

        assert result == Completion("esphome:\n  name: relay")
        assert result.ok
        request = seen[0]
        assert request.method == "POST"
        assert "models/gemini-test:generateContent" in str(request.url)
        assert request.headers["x-goog-api-key"] == "test-key"

        body = json.loads(request.content)
        assert body["generationConfig"]["temperature"] == 0.4
        assert "ESP32 relay board" in body["contents"][0]["parts"][0]["text"]
        assert "ESPHome" in body["systemInstruction"]["parts"][0]["text"]

    def test_fix_request(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(json.loads(request.content))
            return httpx.Response(200, json=reply("ota:\n  - platform: esphome"))

        with make_assistant(handler) as assistant:
            result = assistant.fix("ota:", "ota requires a platform key")

        assert result.text == "ota:\n  - platform: esphome"
        assert result.error is None
        assert seen[0]["generationConfig"]["temperature"] == 0.2
        assert "debugger" in seen[0]["systemInstruction"]["parts"][0]["text"]

    def test_fenced_response_stripped(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=reply("```yaml\nfoo: 1\n```"))

        with make_assistant(handler) as assistant:
            assert assistant.create("anything").text == "foo: 1"

    def test_multi_part_response_joined(self):
        payload = {
            "candidates": [
                {"content": {"parts": [{"text": "foo: 1\n"}, {"text": "bar: 2"}]}}
            ]
        }

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=payload)

        with make_assistant(handler) as assistant:
            assert assistant.create("anything").text == "foo: 1\nbar: 2"

    @pytest.mark.parametrize(
        "status, title",
        [
            (401, "Authentication Failed"),
            (429, "Rate Limit Exceeded"),
            (503, "Service Unavailable"),
        ],
    )
    def test_http_errors(self, status, title):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status, json={"error": {"message": "nope"}})

        with make_assistant(handler) as assistant:
            result = assistant.create("anything")

        assert not result.ok
        assert result.text.startswith(f"# Error: {title}")

    def test_error_without_json_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, text="upstream down")

        with make_assistant(handler) as assistant:
            assert assistant.create("anything").text.startswith("# Error: Service Unavailable")

    def test_safety_finish_reason(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=reply("", finish_reason="SAFETY"))

        with make_assistant(handler) as assistant:
            assert assistant.create("anything").text.startswith("# Error: Content Blocked")

    def test_blocked_prompt(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"promptFeedback": {"blockReason": "SAFETY"}})

        with make_assistant(handler) as assistant:
            assert assistant.create("anything").text.startswith("# Error: Content Blocked")

    def test_no_candidates(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"candidates": []})

        with make_assistant(handler) as assistant:
            result = assistant.create("anything")

        assert not result.ok
        assert result.text.startswith("# Error: Request to the assistant failed")
        assert "no candidates" in result.error

    def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused")

        with make_assistant(handler) as assistant:
            result = assistant.fix("foo: 1", "error")

        assert not result.ok
        assert result.text.startswith("# Error: Request to the assistant failed")
        assert "connection refused" in result.text

    def test_missing_key(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json=reply("foo: 1"))

        with patch.dict(os.environ, {}, clear=True):
            assistant = make_assistant(handler, api_key=None)

        with assistant:
            assert assistant.create("anything").text.startswith("# Error: Authentication Failed")
        assert calls == []

    def test_generate_content_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"candidates": [{"content": {"parts": []}}]})

        with make_assistant(handler) as assistant:
            with pytest.raises(AssistantError, match="empty response"):
                assistant.generate_content("prompt", "system", 0.4)
