"""Top-level device configuration model."""

from typing import Any

from pydantic import Field, model_validator

from .domains.binary_sensor import BinarySensor
from .domains.button import Button
from .domains.device import DeviceDescription, FeatureToggles, NetworkCredentials
from .domains.light import Light
from .domains.sensor import Sensor
from .domains.switch import Switch
from .models import ConfigModel

COMPONENT_FIELDS = ("sensors", "binary_sensors", "switches", "lights", "buttons")

# Keys accepted at the top level for compatibility with flat form payloads
_FLAT_TOGGLES = {
    "logger": "logger",
    "api": "api",
    "ota": "ota",
    "web_server": "web_server",
    "webServer": "web_server",
}


class DeviceConfig(ConfigModel):
    """A complete device description: identity, network and components."""

    device: DeviceDescription = Field(default_factory=DeviceDescription)
    wifi: NetworkCredentials = Field(default_factory=NetworkCredentials)
    features: FeatureToggles = Field(default_factory=FeatureToggles)
    sensors: list[Sensor] = Field(default_factory=list)
    binary_sensors: list[BinarySensor] = Field(default_factory=list)
    switches: list[Switch] = Field(default_factory=list)
    lights: list[Light] = Field(default_factory=list)
    buttons: list[Button] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def lift_flat_toggles(cls, data: Any) -> Any:
        """Move top-level feature flags into ``features``."""
        if not isinstance(data, dict):
            return data
        flat = {key: data[key] for key in _FLAT_TOGGLES if key in data}
        if not flat:
            return data

        data = {key: value for key, value in data.items() if key not in flat}
        features = dict(data.get("features") or {})
        for key, value in flat.items():
            features.setdefault(_FLAT_TOGGLES[key], value)
        data["features"] = features
        return data

    @model_validator(mode="after")
    def check_unique_ids(self) -> "DeviceConfig":
        """Reject duplicate component ids within a list.

        Generated cross-reference names (such as light output ids) are derived
        from component ids, so duplicates would collide silently.
        """
        for field in COMPONENT_FIELDS:
            seen: set[str] = set()
            for component in getattr(self, field):
                if component.id in seen:
                    raise ValueError(f"Duplicate id '{component.id}' in {field}")
                seen.add(component.id)
        return self
