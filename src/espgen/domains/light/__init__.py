"""Light domain: simple, PWM, RGB(W) and addressable lights."""

from .generator import CompanionOutput, LightDomain, companion_outputs
from .models import (
    BinaryLight,
    Chipset,
    Light,
    MonochromaticLight,
    NeopixelLight,
    RgbLight,
    RgbwLight,
)

domain = LightDomain()

__all__ = [
    "BinaryLight",
    "Chipset",
    "CompanionOutput",
    "Light",
    "LightDomain",
    "MonochromaticLight",
    "NeopixelLight",
    "RgbLight",
    "RgbwLight",
    "companion_outputs",
    "domain",
]
