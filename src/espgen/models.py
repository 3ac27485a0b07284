"""Base models shared across all domains."""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

# Values emitted as plain (unquoted) YAML scalars
Identifier = Annotated[str, Field(pattern=r"^[A-Za-z0-9_]+$")]
Pin = Annotated[str, Field(pattern=r"^[A-Za-z0-9_]+$")]
Token = Annotated[str, Field(pattern=r"^[A-Za-z0-9_.\-]+$")]
Duration = Annotated[str, Field(pattern=r"^(never|\d+(\.\d+)?(us|ms|s|min|h|d)?)$")]


class ConfigModel(BaseModel):
    """Immutable model accepting both snake_case and camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        coerce_numbers_to_str=True,
    )


class BlankAsUnset(ConfigModel):
    """Model whose blank string fields fall back to their defaults.

    Form-style inputs send empty strings for fields the user never filled in.
    Dropping them before validation lets the field defaults apply.
    """

    @model_validator(mode="before")
    @classmethod
    def drop_blank_strings(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {
                key: value
                for key, value in data.items()
                if not (isinstance(value, str) and not value.strip())
            }
        return data


class Component(BlankAsUnset):
    """Fields common to every peripheral component."""

    id: Identifier
    name: str
