"""Switch domain."""

from .generator import SwitchDomain
from .models import RestoreMode, Switch

domain = SwitchDomain()

__all__ = ["RestoreMode", "Switch", "SwitchDomain", "domain"]
