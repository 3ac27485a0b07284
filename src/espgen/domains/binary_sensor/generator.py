"""Binary sensor domain generator."""

from typing import Any

from jinja2 import Template

from .. import ComponentDomain, EmittedBlocks
from ..device.models import ChipPlatform


class BinarySensorDomain(ComponentDomain):
    """GPIO binary sensors such as contacts and PIR motion sensors."""

    @property
    def name(self) -> str:
        return "binary_sensor"

    @property
    def title(self) -> str:
        return "Binary Sensors"

    @property
    def field(self) -> str:
        return "binary_sensors"

    def render(
        self, component: Any, template: Template, platform: ChipPlatform
    ) -> EmittedBlocks:
        # PIR sensors are plain GPIO inputs as far as the firmware is concerned
        return EmittedBlocks(template.render(sensor=component))
