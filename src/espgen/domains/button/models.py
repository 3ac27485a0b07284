"""Button domain models."""

from typing import Literal

from ...models import Component, Pin


class Button(Component):
    """Push button wired to ground on a GPIO pin."""

    kind: Literal["gpio"] = "gpio"
    pin: Pin
