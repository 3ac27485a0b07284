"""Template utilities and YAML scalar filters."""

from pathlib import Path
from typing import Iterable

import yaml
from jinja2 import Environment, FileSystemLoader

# Values starting with this prefix reference secrets.yaml and stay unquoted
SECRET_PREFIX = "!secret "


def quote(value: object) -> str:
    """Render a value as a double-quoted YAML scalar.

    Quotes, backslashes and control characters are escaped, so the scalar
    always stays on one line and loads back to the same string.
    """
    dumped = yaml.safe_dump(
        str(value), default_style='"', width=float("inf"), allow_unicode=True
    )
    return dumped.splitlines()[0]


def is_secret(value: str) -> bool:
    """Return True if the value is a secret reference."""
    return value.startswith(SECRET_PREFIX)


def credential(value: str) -> str:
    """Render a credential, leaving secret references untouched."""
    if is_secret(value):
        return value
    return quote(value)


def get_env(templates_paths: Path | Iterable[Path]) -> Environment:
    """Create a Jinja2 environment for the given templates directories."""
    if isinstance(templates_paths, Path):
        templates_paths = [templates_paths]
    env = Environment(
        loader=FileSystemLoader(list(templates_paths)),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["quote"] = quote
    env.filters["credential"] = credential
    return env
