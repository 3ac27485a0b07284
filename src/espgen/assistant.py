"""Remote language model assistant for creating and repairing documents.

The assistant sends a request to the Gemini ``generateContent`` endpoint and
returns the document text. Failures never propagate to the caller: they are
rendered as a commented-out pseudo-document so the result is always
displayable text, and flagged so callers can refuse to persist it.
"""

from __future__ import annotations

import logging
import os
import re
from typing import Any, NamedTuple

import httpx

# Environment variables holding the API key, in lookup order
API_KEY_ENVS = ("ESPGEN_API_KEY", "GEMINI_API_KEY")
# Environment variable overriding the model name
MODEL_ENV = "ESPGEN_MODEL"

DEFAULT_MODEL = "gemini-2.5-flash"
API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

CREATE_TEMPERATURE = 0.4
FIX_TEMPERATURE = 0.2

SYSTEM_INSTRUCTION = """\
You are an expert ESPHome YAML configuration generator.
Generate complete, valid and safe YAML configuration files for Home Assistant.

Rules:
1. Always include the esphome, wifi, api and ota sections unless told otherwise.
2. The ota section is a list and must set '- platform: esphome'.
3. Beken chips (BK7231T, BK7231N, ...) use the top-level 'bk72xx' key, e.g. 'bk72xx:\\n  board: cb2s'.
4. Use the GPIOs the user names. Otherwise use a 'GPIOXX' placeholder with a comment.
5. wifi must include 'min_auth_mode: WPA2' and 'fast_connect: true'.
6. neopixelbus lights set the chip model with 'variant' (default 'variant: WS2812'), never 'type'.
7. Never add 'framework: type: arduino' to esp8266; it is only valid for esp32.
8. Prefer block-style lists over flow-style lists.
9. Every key is followed by a colon; check indentation carefully.
10. Font glyphs are a single double-quoted string; fonts use 'file: gfonts://<Family>'.
11. ssd1306_i2c models use full names such as 'SSD1306_128X64'.
12. Lambdas read the time with 'auto now = id(time_id).now();' and check 'now.is_valid()'.
13. on_boot is nested inside the esphome section, never at the root.
14. Sensor platforms (dht, dallas, uptime, wifi_signal, ...) go under 'sensor:' as '- platform: ...'.
15. WiFi credentials use '!secret wifi_ssid' and '!secret wifi_password'.
"""

DEBUG_SYSTEM_INSTRUCTION = """\
You are an expert ESPHome YAML debugger.
Fix the provided configuration so the reported error goes away.

Rules:
1. 'ota requires a platform key': change 'ota:' to 'ota:\\n  - platform: esphome'.
2. neopixelbus missing 'variant' or 'Must have R in type': use 'variant: WS2812' instead of 'type'.
3. min_auth_mode warnings: add 'min_auth_mode: WPA2' to wifi.
4. '[type] is an invalid option for [framework]' on esp8266: remove the framework type.
5. Flow-style list errors: convert '[...]' lists to block-style lists.
6. 'could not find expected ':'': add the missing colon or fix the indentation.
7. Glyph quoting errors: use one double-quoted ASCII glyph string.
8. Missing font files: use 'file: gfonts://Roboto'.
9. Unknown display model: use the full model name from the error, e.g. 'SSD1306_128X64'.
10. Time lambdas: use 'id(time_id).now().is_valid()' and 'auto' instead of 'time::ESPTime'.
11. 'Component not found: on_boot': move on_boot inside the esphome section.
12. 'cannot be loaded via YAML (no CONFIG_SCHEMA)': move the platform under 'sensor:'.
13. Beken board errors: the top-level key is 'bk72xx'.
14. Return the COMPLETE fixed file with a comment near each fix. Output only YAML.
"""

_OPENING_FENCE = re.compile(r"^```[\w+-]*[ \t]*\n?")
_CLOSING_FENCE = re.compile(r"\n?[ \t]*```$")


class AssistantError(Exception):
    """The model returned no usable document."""


class Completion(NamedTuple):
    """Result of an assistant request.

    ``text`` is always displayable: the cleaned document on success, the
    rendered error otherwise. ``error`` holds the failure message.
    """

    text: str
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def strip_code_fences(text: str | None) -> str:
    """Remove markdown code fences wrapping a document.

    A leading fence may carry a language tag (```yaml). Text without fences
    is only trimmed.
    """
    if not text:
        return ""
    cleaned = text.strip()
    cleaned = _OPENING_FENCE.sub("", cleaned, count=1)
    cleaned = _CLOSING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def has_code_fences(text: str) -> bool:
    """Return True if the document starts or ends with a markdown fence."""
    stripped = text.strip()
    return stripped.startswith("```") or stripped.endswith("```")


def _commented(title: str, detail: str) -> str:
    lines = [f"# Error: {title}"]
    lines += [f"# {line}".rstrip() for line in detail.splitlines() or [""]]
    return "\n".join(lines)


def format_error(message: str) -> str:
    """Render an error message as a commented-out pseudo-document."""
    lowered = message.lower()

    if "401" in message or "api key" in lowered:
        return _commented(
            "Authentication Failed",
            "The provided API Key is invalid or missing. Please check your configuration.",
        )
    if "429" in message or "quota" in lowered:
        return _commented(
            "Rate Limit Exceeded",
            "You have sent too many requests in a short period. "
            "Please wait a moment and try again.",
        )
    if "503" in message or "service unavailable" in lowered:
        return _commented(
            "Service Unavailable",
            "The AI service is currently experiencing high load. Please try again later.",
        )
    if "safety" in lowered:
        return _commented(
            "Content Blocked",
            "The request was blocked by safety filters. Please try rephrasing your request.",
        )
    return _commented("Request to the assistant failed", message)


def resolve_api_key(api_key: str | None = None) -> str | None:
    """Return the explicit key or the first one found in the environment."""
    if api_key:
        return api_key
    for env in API_KEY_ENVS:
        if os.environ.get(env):
            return os.environ[env]
    return None


def resolve_model(model: str | None = None) -> str:
    return model or os.environ.get(MODEL_ENV) or DEFAULT_MODEL


def create_prompt(prompt: str, current: str | None = None) -> str:
    """Compose the user message for document generation."""
    parts = []
    if current:
        parts.append(f"Current YAML context:\n```yaml\n{current}\n```")
    parts.append(f"User Request: {prompt}")
    parts.append(
        "Please generate the full valid ESPHome YAML configuration. "
        "If you are modifying the context, return the updated full YAML. "
        "Handle the specific platform requirements (ESP8266 vs ESP32 vs Beken/bk72xx). "
        "Do not wrap the output in markdown code blocks, just return the raw YAML."
    )
    return "\n\n".join(parts)


def fix_prompt(current: str, error_message: str) -> str:
    """Compose the user message for document repair."""
    return (
        f"Current YAML Configuration:\n```yaml\n{current}\n```\n\n"
        f"Error Log / Issue Description:\n{error_message}\n\n"
        "Task: Fix the YAML configuration above to resolve the error. "
        "Return the full, corrected YAML. "
        "Do not wrap the output in markdown code blocks, just return the raw YAML text."
    )


class Assistant:
    """Client for the remote model.

    Example:
        >>> assistant = Assistant(api_key="...")
        >>> result = assistant.create("ESP32 with a DHT22 on GPIO4")
        >>> if result.ok:
        ...     print(result.text)
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        client: httpx.Client | None = None,
        timeout: float = 60.0,
    ):
        self.api_key = resolve_api_key(api_key)
        self.model = resolve_model(model)
        self._client = client or httpx.Client(timeout=timeout)
        self._log = logging.getLogger("espgen")

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> Assistant:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def create(self, prompt: str, current: str | None = None) -> Completion:
        """Generate a document from a natural-language request."""
        return self._complete(
            create_prompt(prompt, current), SYSTEM_INSTRUCTION, CREATE_TEMPERATURE
        )

    def fix(self, current: str, error_message: str) -> Completion:
        """Repair a document given the validator's error output."""
        return self._complete(
            fix_prompt(current, error_message), DEBUG_SYSTEM_INSTRUCTION, FIX_TEMPERATURE
        )

    def _complete(
        self, prompt: str, system_instruction: str, temperature: float
    ) -> Completion:
        try:
            text = self.generate_content(prompt, system_instruction, temperature)
        except Exception as e:
            self._log.error(f"Assistant request failed: {e}")
            return Completion(format_error(str(e)), str(e))
        return Completion(strip_code_fences(text))

    def generate_content(
        self, prompt: str, system_instruction: str, temperature: float
    ) -> str:
        """Send one request and return the raw response text.

        Raises:
            AssistantError: If no key is configured or the response holds no text.
            httpx.HTTPError: On transport failures.
        """
        if not self.api_key:
            raise AssistantError(
                f"No API key configured. Set {API_KEY_ENVS[0]} or pass --api-key."
            )

        self._log.debug(f"Requesting completion from {self.model}")
        response = self._client.post(
            API_URL.format(model=self.model),
            headers={"x-goog-api-key": self.api_key},
            json={
                "systemInstruction": {"parts": [{"text": system_instruction}]},
                "contents": [{"role": "user", "parts": [{"text": prompt}]}],
                "generationConfig": {"temperature": temperature},
            },
        )
        if response.is_error:
            raise AssistantError(f"{response.status_code} {_error_detail(response)}")

        return _response_text(response.json())


def _error_detail(response: httpx.Response) -> str:
    try:
        return response.json()["error"]["message"]
    except Exception:
        return response.reason_phrase


def _response_text(payload: dict[str, Any]) -> str:
    block_reason = payload.get("promptFeedback", {}).get("blockReason")
    if block_reason:
        raise AssistantError(f"Prompt blocked by safety filters ({block_reason})")

    candidates = payload.get("candidates") or []
    if not candidates:
        raise AssistantError("The model returned no candidates")

    candidate = candidates[0]
    if candidate.get("finishReason") == "SAFETY":
        raise AssistantError("Response blocked by safety filters")

    parts = candidate.get("content", {}).get("parts", [])
    text = "".join(part.get("text", "") for part in parts)
    if not text:
        raise AssistantError("The model returned an empty response")
    return text
