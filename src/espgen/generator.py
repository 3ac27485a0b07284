"""Configuration document generation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from jinja2 import Environment

from .config import DeviceConfig
from .domains import ComponentDomain
from .domains import binary_sensor, button, device, light, sensor, switch
from .templates import get_env

# Default filename of the generated document
DEFAULT_OUTPUT_FILENAME = "esphome.yaml"


class SecretLoader(yaml.SafeLoader):
    """SafeLoader that reads `!secret name` tags as secret reference strings."""


def _construct_secret(loader: SecretLoader, node: yaml.Node) -> str:
    return f"!secret {loader.construct_scalar(node)}"


SecretLoader.add_constructor("!secret", _construct_secret)

# Component sections in document order
COMPONENT_DOMAINS: tuple[ComponentDomain, ...] = (
    sensor.domain,
    binary_sensor.domain,
    switch.domain,
    light.domain,
    button.domain,
)


def render_section(title: str, key: str, blocks: list[str]) -> str:
    """Render a commented top-level list section from its item blocks."""
    return f"\n# {title}\n{key}:\n" + "\n".join(blocks)


class ConfigGenerator:
    """Orchestrates generation of an ESPHome document from a device description.

    This class encapsulates the entire generation workflow:
    1. Parse and validate YAML input
    2. Set up the Jinja2 environment
    3. Render the preamble and every component section
    4. Write the document

    Example:
        >>> from espgen.generator import ConfigGenerator
        >>>
        >>> config_gen = ConfigGenerator()
        >>> path = config_gen.generate_from_file(
        ...     Path("device.yml"), Path("esphome.yaml")
        ... )
    """

    def __init__(self, domains: tuple[ComponentDomain, ...] = COMPONENT_DOMAINS):
        """Initialize the generator.

        Args:
            domains: Component domains to render, in document order.
        """
        self.domains = domains
        self._env: Environment | None = None
        self._log = logging.getLogger("espgen")

    @property
    def env(self) -> Environment:
        """Get or create the Jinja2 environment."""
        if self._env is None:
            paths = [device.preamble.templates_path]
            paths += [domain.templates_path for domain in self.domains]
            self._env = get_env(paths)
        return self._env

    def parse_yaml(self, input_path: Path) -> dict[str, Any]:
        """Parse a YAML file and return the data as a dictionary.

        Args:
            input_path: Path to the YAML file.

        Returns:
            Parsed YAML data as a dictionary.

        Raises:
            FileNotFoundError: If the file doesn't exist or isn't a YAML file.
            RuntimeError: If parsing fails.
        """
        input_path = Path(input_path).resolve()

        if not input_path.exists():
            raise FileNotFoundError(f"Input file {input_path} does not exist")
        if not input_path.is_file():
            raise FileNotFoundError(f"Input file {input_path} is not a file")
        if input_path.suffix not in [".yml", ".yaml"]:
            raise FileNotFoundError(f"Input file {input_path} is not a YAML file")

        self._log.info(f"Loading YAML file from {input_path.as_posix()}")

        try:
            with open(input_path, "r") as file:
                data = yaml.load(file, Loader=SecretLoader)
        except Exception as e:
            raise RuntimeError("Failed to load YAML file") from e

        return data or {}

    def validate(self, data: dict[str, Any]) -> DeviceConfig:
        """Validate YAML data against the device schema.

        Raises:
            RuntimeError: If validation fails.
        """
        self._log.debug("Validating device configuration")

        try:
            return DeviceConfig.model_validate(data)
        except Exception as e:
            self._log.error(f"Failed to validate device configuration: {e}")
            raise RuntimeError("Failed to validate device configuration") from e

    def render(self, config: DeviceConfig) -> str:
        """Render a validated configuration to document text.

        Sections are emitted in a fixed order. Empty component lists produce
        no section at all; auxiliary blocks (light outputs) are gathered into
        one section following their domain's section.
        """
        platform = config.device.platform
        parts = [
            device.preamble.render(
                config.device,
                config.wifi,
                config.features,
                self.env.get_template(device.preamble.template_name),
            )
        ]

        for domain in self.domains:
            components = getattr(config, domain.field)
            if not components:
                continue

            template = self.env.get_template(domain.template_name)
            emitted = [domain.render(c, template, platform) for c in components]
            parts.append(
                render_section(domain.title, domain.name, [e.primary for e in emitted])
            )

            auxiliary = [e.auxiliary for e in emitted if e.auxiliary]
            if auxiliary and domain.auxiliary_name:
                parts.append(
                    render_section(
                        domain.auxiliary_title or domain.auxiliary_name,
                        domain.auxiliary_name,
                        auxiliary,
                    )
                )

        return "".join(parts)

    def write(self, config: DeviceConfig, output_path: Path) -> Path:
        """Render a configuration and write it to a file.

        Args:
            config: Validated configuration.
            output_path: Target file, or a directory to place
                ``esphome.yaml`` in.

        Returns:
            The path written.

        Raises:
            FileNotFoundError: If the parent directory doesn't exist.
        """
        output_path = Path(output_path).resolve()
        if output_path.is_dir():
            output_path = output_path / DEFAULT_OUTPUT_FILENAME
        if not output_path.parent.exists():
            raise FileNotFoundError(
                f"Output directory {output_path.parent} does not exist"
            )

        content = self.render(config)

        self._log.debug(f"Writing configuration to '{output_path.name}'")
        with open(output_path, "w") as f:
            f.write(content)

        self._log.info(f"Wrote {output_path.as_posix()}")
        return output_path

    def generate_from_file(self, input_path: Path, output_path: Path) -> Path:
        """Parse a device description file and write the generated document.

        This is the main entry point for file-based generation.
        """
        data = self.parse_yaml(input_path)
        config = self.validate(data)
        return self.write(config, output_path)


def generate(config: DeviceConfig) -> str:
    """Generate the configuration document for a device description."""
    return ConfigGenerator().render(config)
