import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, PositiveInt

Airline = Literal["SkyHigh", "AeroJet", "CloudAir"]
Trend = Literal["Increasing", "Decreasing"]


class PriceSample(BaseModel):
    """One day of the simulated price trajectory."""

    model_config = ConfigDict(frozen=True)

    date: datetime.date = Field(description="Calendar day of the fare")
    price: PositiveInt = Field(description="Fare in whole dollars")
    airline: Airline = Field(description="Carrier offering the fare")


class PriceSummary(BaseModel):
    """Figures derived from the leading window of a price series."""

    current_price: int
    average_price: int
    trend: Trend
    window_size: int
