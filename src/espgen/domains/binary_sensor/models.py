"""Binary sensor domain models."""

from typing import Literal

from ...models import Component, Pin, Token


class BinarySensor(Component):
    """GPIO-backed binary sensor such as a contact or PIR motion sensor."""

    kind: Literal["gpio", "pir"] = "gpio"
    pin: Pin
    inverted: bool = False
    device_class: Token = "motion"
