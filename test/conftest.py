"""Shared fixtures for the espgen test suite."""

from pathlib import Path
from typing import Any, Callable

import pytest
import yaml

from espgen.config import DeviceConfig
from espgen.generator import ConfigGenerator, SecretLoader

CONFIGS_PATH = Path(__file__).parent / "configs"


@pytest.fixture
def configs_path() -> Path:
    return CONFIGS_PATH


@pytest.fixture
def make_config() -> Callable[..., DeviceConfig]:
    """Build a validated DeviceConfig from keyword sections."""

    def _make(**sections: Any) -> DeviceConfig:
        sections.setdefault("device", {"name": "test-device", "platform": "ESP32"})
        return DeviceConfig.model_validate(sections)

    return _make


@pytest.fixture
def render() -> Callable[[DeviceConfig], str]:
    return ConfigGenerator().render


@pytest.fixture
def load_document() -> Callable[[str], dict[str, Any]]:
    """Parse a generated document, keeping secret references as strings."""

    def _load(text: str) -> dict[str, Any]:
        return yaml.load(text, Loader=SecretLoader)

    return _load
