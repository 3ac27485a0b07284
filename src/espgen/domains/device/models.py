"""Device, platform and network models."""

from enum import StrEnum
from typing import NamedTuple, Optional

from pydantic import Field

from ...models import BlankAsUnset, ConfigModel, Token


class ChipPlatform(StrEnum):
    """Microcontroller family targeted by the configuration."""

    ESP8266 = "ESP8266"
    ESP32 = "ESP32"
    BK72XX = "BK72xx"
    RTL87XX = "RTL87xx"


class PlatformInfo(NamedTuple):
    """Static facts about a chip platform."""

    key: str
    default_board: str
    framework: Optional[tuple[str, str]] = None
    # Chips without a native addressable LED peripheral drive neopixels
    # through neopixelbus instead of fastled.
    native_addressable_leds: bool = True
    pwm_output: str = "ledc"


PLATFORMS: dict[ChipPlatform, PlatformInfo] = {
    ChipPlatform.ESP8266: PlatformInfo(
        key="esp8266",
        default_board="nodemcuv2",
        native_addressable_leds=False,
        pwm_output="esp8266_pwm",
    ),
    ChipPlatform.ESP32: PlatformInfo(
        key="esp32",
        default_board="esp32dev",
        framework=("type", "arduino"),
    ),
    ChipPlatform.BK72XX: PlatformInfo(
        key="bk72xx",
        default_board="cb2s",
    ),
    ChipPlatform.RTL87XX: PlatformInfo(
        key="libretiny",
        default_board="generic-rtl8710bn-2mb-788a",
        framework=("version", "recommended"),
    ),
}


class DeviceDescription(BlankAsUnset):
    """Identity and hardware of the device."""

    name: str = Field(default="my-device", pattern=r"^[a-z0-9-]+$")
    friendly_name: str = "My Device"
    platform: ChipPlatform = ChipPlatform.ESP32
    board: Optional[Token] = None

    @property
    def platform_info(self) -> PlatformInfo:
        return PLATFORMS[self.platform]

    @property
    def resolved_board(self) -> str:
        """Board identifier, falling back to the platform default."""
        return self.board or self.platform_info.default_board


class NetworkCredentials(ConfigModel):
    """WiFi credentials, either literal values or secret references."""

    ssid: str = "!secret wifi_ssid"
    password: str = "!secret wifi_password"


class FeatureToggles(ConfigModel):
    """Optional top-level components of the firmware."""

    logger: bool = True
    api: bool = True
    ota: bool = True
    web_server: bool = True
