from typing import Literal

from pydantic import BaseModel, Field


class Airport(BaseModel):
    code: str = Field(description="IATA code")
    name: str
    latitude: float
    longitude: float


class WeatherReading(BaseModel):
    """Current conditions shown on the destination weather card."""

    temperature: int = Field(description="Temperature in degrees Celsius")
    condition: str = Field(description="Human readable weather category")
    wind_speed: int = Field(description="Wind speed in km/h")
    source: Literal["live", "simulated", "unavailable"] = "live"
