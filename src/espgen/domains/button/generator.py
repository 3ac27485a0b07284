"""Button domain generator."""

from typing import Any

from jinja2 import Template

from .. import ComponentDomain, EmittedBlocks
from ..device.models import ChipPlatform


class ButtonDomain(ComponentDomain):
    """Push buttons on pulled-up GPIO pins."""

    @property
    def name(self) -> str:
        return "button"

    @property
    def title(self) -> str:
        return "Buttons"

    @property
    def field(self) -> str:
        return "buttons"

    def render(
        self, component: Any, template: Template, platform: ChipPlatform
    ) -> EmittedBlocks:
        return EmittedBlocks(template.render(button=component))
