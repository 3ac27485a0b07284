"""Light domain models."""

from enum import StrEnum
from typing import Annotated, Literal, Union

from pydantic import Field

from ...models import Component, Pin


class Chipset(StrEnum):
    """Addressable LED chipsets."""

    WS2812 = "WS2812"
    WS2811 = "WS2811"
    SK6812 = "SK6812"
    APA102 = "APA102"


class BinaryLight(Component):
    """On/off light switched by a GPIO output."""

    kind: Literal["binary"]
    pin: Pin


class MonochromaticLight(Component):
    """Single channel dimmable light driven by PWM."""

    kind: Literal["monochromatic"]
    pin: Pin


class _ColorChannels(Component):
    red_pin: Pin = "GPIO12"
    green_pin: Pin = "GPIO13"
    blue_pin: Pin = "GPIO14"


class RgbLight(_ColorChannels):
    """Three channel PWM light."""

    kind: Literal["rgb"]


class RgbwLight(_ColorChannels):
    """Three color channels plus a white channel."""

    kind: Literal["rgbw"]
    white_pin: Pin = "GPIO15"


class NeopixelLight(Component):
    """Addressable LED strip."""

    kind: Literal["neopixel"]
    pin: Pin
    num_leds: int = Field(default=30, gt=0)
    chipset: Chipset = Chipset.WS2812


Light = Annotated[
    Union[BinaryLight, MonochromaticLight, RgbLight, RgbwLight, NeopixelLight],
    Field(discriminator="kind"),
]
