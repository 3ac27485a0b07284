"""Switch domain models."""

from enum import StrEnum
from typing import Literal, Optional

from ...models import Component, Pin


class RestoreMode(StrEnum):
    """State a switch takes after the device boots."""

    RESTORE_DEFAULT_OFF = "RESTORE_DEFAULT_OFF"
    RESTORE_DEFAULT_ON = "RESTORE_DEFAULT_ON"
    ALWAYS_OFF = "ALWAYS_OFF"
    ALWAYS_ON = "ALWAYS_ON"


class Switch(Component):
    """GPIO output switch, optionally driving a relay."""

    kind: Literal["gpio", "relay"] = "gpio"
    pin: Pin
    inverted: bool = False
    restore_mode: Optional[RestoreMode] = None
