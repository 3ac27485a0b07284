"""Component domain interface.

A component domain is one peripheral category of an ESPHome configuration
(sensors, switches, lights, ...). Each domain owns its models, its template
and an emitter that turns one component into YAML text.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, NamedTuple

from jinja2 import Template

from ..models import Component
from .device.models import ChipPlatform

__all__ = ["ComponentDomain", "Component", "EmittedBlocks"]


class EmittedBlocks(NamedTuple):
    """Text produced for a single component.

    ``primary`` belongs in the domain's own section. ``auxiliary`` holds
    companion declarations for the domain's auxiliary section and is empty
    for domains that do not have one.
    """

    primary: str
    auxiliary: str = ""


class ComponentDomain(ABC):
    """Abstract base class that every component domain must implement.

    A component domain is responsible for:
    - Naming its top-level YAML section and the section comment
    - Naming the DeviceConfig list it consumes
    - Rendering one component of that list into text blocks

    Domains that synthesize companion declarations (lights) also name the
    auxiliary section those blocks are collected into.
    """

    #: Top-level key of the auxiliary section, if the domain emits one.
    auxiliary_name: str | None = None
    #: Comment placed above the auxiliary section.
    auxiliary_title: str | None = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Top-level YAML key of the section (e.g. 'sensor')."""
        ...

    @property
    @abstractmethod
    def title(self) -> str:
        """Comment placed above the section (e.g. 'Sensors')."""
        ...

    @property
    @abstractmethod
    def field(self) -> str:
        """Name of the DeviceConfig list holding this domain's components."""
        ...

    @abstractmethod
    def render(
        self, component: Any, template: Template, platform: ChipPlatform
    ) -> EmittedBlocks:
        """Render a component to its text blocks.

        Args:
            component: A validated component of this domain.
            template: The domain's Jinja2 template.
            platform: The chip platform the document targets.

        Returns:
            The primary block and the (possibly empty) auxiliary block.
        """
        ...

    @property
    def templates_path(self) -> Path:
        """Path to this domain's templates directory."""
        return Path(__file__).parent / self.name / "templates"

    @property
    def template_name(self) -> str:
        """Filename of the template rendering one component."""
        return f"{self.name}.yaml.j2"
