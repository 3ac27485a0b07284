"""Button domain."""

from .generator import ButtonDomain
from .models import Button

domain = ButtonDomain()

__all__ = ["Button", "ButtonDomain", "domain"]
