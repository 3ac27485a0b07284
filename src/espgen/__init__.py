"""espgen - ESPHome configuration generator.

Generates ESPHome device configuration documents from structured device
descriptions, or delegates creation and repair to a remote language model.

Example usage:
    >>> from espgen import DeviceConfig, generate
    >>>
    >>> config = DeviceConfig.model_validate({
    ...     "device": {"name": "attic-fan", "platform": "ESP32"},
    ...     "switches": [{"id": "s1", "name": "Fan", "pin": "GPIO5"}],
    ... })
    >>> print(generate(config))
"""

from .assistant import (
    Assistant,
    Completion,
    format_error,
    has_code_fences,
    strip_code_fences,
)
from .config import DeviceConfig
from .domains import ComponentDomain, EmittedBlocks
from .domains.device import (
    ChipPlatform,
    DeviceDescription,
    FeatureToggles,
    NetworkCredentials,
)
from .generator import COMPONENT_DOMAINS, ConfigGenerator, generate
from .util import Debouncer

__all__ = [
    # Core
    "ConfigGenerator",
    "generate",
    "COMPONENT_DOMAINS",
    "ComponentDomain",
    "EmittedBlocks",
    # Models
    "DeviceConfig",
    "DeviceDescription",
    "ChipPlatform",
    "FeatureToggles",
    "NetworkCredentials",
    # Assistant
    "Assistant",
    "Completion",
    "format_error",
    "has_code_fences",
    "strip_code_fences",
    # Utilities
    "Debouncer",
]
