"""Binary sensor domain."""

from .generator import BinarySensorDomain
from .models import BinarySensor

domain = BinarySensorDomain()

__all__ = ["BinarySensor", "BinarySensorDomain", "domain"]
