"""Switch domain generator."""

from typing import Any

from jinja2 import Template

from .. import ComponentDomain, EmittedBlocks
from ..device.models import ChipPlatform


class SwitchDomain(ComponentDomain):
    """GPIO switches and relays."""

    @property
    def name(self) -> str:
        return "switch"

    @property
    def title(self) -> str:
        return "Switches"

    @property
    def field(self) -> str:
        return "switches"

    def render(
        self, component: Any, template: Template, platform: ChipPlatform
    ) -> EmittedBlocks:
        return EmittedBlocks(template.render(switch=component))
