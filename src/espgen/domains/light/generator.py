"""Light domain generator."""

from typing import Any, NamedTuple, Optional

from jinja2 import Template

from .. import ComponentDomain, EmittedBlocks
from ..device.models import PLATFORMS, ChipPlatform, PlatformInfo
from .models import BinaryLight, MonochromaticLight, RgbLight, RgbwLight

# (channel key, id suffix, pin field)
RGB_CHANNELS = (
    ("red", "r", "red_pin"),
    ("green", "g", "green_pin"),
    ("blue", "b", "blue_pin"),
)
RGBW_CHANNELS = RGB_CHANNELS + (("white", "w", "white_pin"),)


class CompanionOutput(NamedTuple):
    """Hardware output backing a light or one of its color channels."""

    id: str
    platform: str
    pin: str
    channel: Optional[str] = None


def companion_outputs(light: Any, platform: PlatformInfo) -> list[CompanionOutput]:
    """Build the outputs a light references, in declaration order.

    Addressable lights drive their pin directly and need none.
    """
    base_id = f"output_{light.id}"

    if isinstance(light, BinaryLight):
        return [CompanionOutput(base_id, "gpio", light.pin)]
    if isinstance(light, MonochromaticLight):
        return [CompanionOutput(base_id, platform.pwm_output, light.pin)]
    if isinstance(light, (RgbLight, RgbwLight)):
        channels = RGBW_CHANNELS if isinstance(light, RgbwLight) else RGB_CHANNELS
        return [
            CompanionOutput(
                f"{base_id}_{suffix}",
                platform.pwm_output,
                getattr(light, pin_field),
                channel,
            )
            for channel, suffix, pin_field in channels
        ]
    return []


class LightDomain(ComponentDomain):
    """Lights plus the ``output:`` declarations they reference."""

    auxiliary_name = "output"
    auxiliary_title = "Light Outputs"
    output_template_name = "output.yaml.j2"

    @property
    def name(self) -> str:
        return "light"

    @property
    def title(self) -> str:
        return "Lights"

    @property
    def field(self) -> str:
        return "lights"

    def render(
        self, component: Any, template: Template, platform: ChipPlatform
    ) -> EmittedBlocks:
        info = PLATFORMS[platform]
        outputs = companion_outputs(component, info)

        primary = template.render(light=component, platform=info, outputs=outputs)

        output_template = template.environment.get_template(self.output_template_name)
        auxiliary = "".join(output_template.render(output=output) for output in outputs)

        return EmittedBlocks(primary, auxiliary)
