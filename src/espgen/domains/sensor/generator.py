"""Sensor domain generator."""

from typing import Any

from jinja2 import Template

from .. import ComponentDomain, EmittedBlocks
from ..device.models import ChipPlatform


class SensorDomain(ComponentDomain):
    """Sensors, one block per sensor with its kind-specific readings."""

    @property
    def name(self) -> str:
        return "sensor"

    @property
    def title(self) -> str:
        return "Sensors"

    @property
    def field(self) -> str:
        return "sensors"

    def render(
        self, component: Any, template: Template, platform: ChipPlatform
    ) -> EmittedBlocks:
        return EmittedBlocks(template.render(sensor=component))
