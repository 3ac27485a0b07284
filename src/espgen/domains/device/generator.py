"""Device preamble generator."""

from pathlib import Path

from jinja2 import Template

from .models import DeviceDescription, FeatureToggles, NetworkCredentials


class DevicePreamble:
    """Renders the fixed top-level sections preceding the component sections.

    The preamble covers the device identity, the platform block, the feature
    toggles and the network block, in that order.
    """

    template_name = "device.yaml.j2"

    @property
    def templates_path(self) -> Path:
        return Path(__file__).parent / "templates"

    def render(
        self,
        device: DeviceDescription,
        wifi: NetworkCredentials,
        features: FeatureToggles,
        template: Template,
    ) -> str:
        return template.render(
            device=device,
            platform=device.platform_info,
            wifi=wifi,
            features=features,
        )
