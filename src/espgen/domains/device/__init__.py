"""Device identity, platform and network preamble."""

from .generator import DevicePreamble
from .models import (
    PLATFORMS,
    ChipPlatform,
    DeviceDescription,
    FeatureToggles,
    NetworkCredentials,
    PlatformInfo,
)

preamble = DevicePreamble()

__all__ = [
    "ChipPlatform",
    "DeviceDescription",
    "DevicePreamble",
    "FeatureToggles",
    "NetworkCredentials",
    "PLATFORMS",
    "PlatformInfo",
    "preamble",
]
