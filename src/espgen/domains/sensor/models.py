"""Sensor domain models."""

from enum import StrEnum
from typing import Annotated, Any, Literal, Union

from pydantic import Field, field_validator

from ...models import Component, Duration, Pin, Token


class DhtModel(StrEnum):
    DHT11 = "DHT11"
    DHT22 = "DHT22"
    AM2302 = "AM2302"


class SensorBase(Component):
    """Fields shared by all sensor kinds."""

    update_interval: Duration = "60s"


class DhtSensor(SensorBase):
    """DHT temperature and humidity sensor."""

    kind: Literal["dht"]
    pin: Pin
    model: DhtModel = DhtModel.DHT22


class DallasSensor(SensorBase):
    """Dallas one-wire temperature sensor."""

    kind: Literal["dallas"]
    pin: Pin


class _BoschSensor(SensorBase):
    pin: Pin
    address: str = Field(default="0x76", pattern=r"^0x[0-9a-fA-F]{1,2}$")

    # YAML reads an unquoted 0x76 as the integer 118
    @field_validator("address", mode="before")
    @classmethod
    def validate_address(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return f"0x{v:02x}"
        return v


class Bme280Sensor(_BoschSensor):
    """BME280 temperature, pressure and humidity sensor."""

    kind: Literal["bme280"]


class Bmp280Sensor(_BoschSensor):
    """BMP280 temperature and pressure sensor."""

    kind: Literal["bmp280"]


class AdcSensor(SensorBase):
    """Analog input."""

    kind: Literal["adc"]
    pin: Pin
    attenuation: Token = "auto"


class WifiSignalSensor(SensorBase):
    kind: Literal["wifi_signal"]


class UptimeSensor(SensorBase):
    kind: Literal["uptime"]


Sensor = Annotated[
    Union[
        DhtSensor,
        DallasSensor,
        Bme280Sensor,
        Bmp280Sensor,
        AdcSensor,
        WifiSignalSensor,
        UptimeSensor,
    ],
    Field(discriminator="kind"),
]
