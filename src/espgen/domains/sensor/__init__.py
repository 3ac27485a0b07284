"""Sensor domain: environmental, analog and diagnostic sensors."""

from .generator import SensorDomain
from .models import (
    AdcSensor,
    Bme280Sensor,
    Bmp280Sensor,
    DallasSensor,
    DhtModel,
    DhtSensor,
    Sensor,
    UptimeSensor,
    WifiSignalSensor,
)

domain = SensorDomain()

__all__ = [
    "AdcSensor",
    "Bme280Sensor",
    "Bmp280Sensor",
    "DallasSensor",
    "DhtModel",
    "DhtSensor",
    "Sensor",
    "SensorDomain",
    "UptimeSensor",
    "WifiSignalSensor",
    "domain",
]
