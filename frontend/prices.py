import datetime
import random
from typing import Optional

import pandas as pd
from config import PRICE_SERIES_DAYS

from backend.models.prices import PriceSample

AIRLINES = ("SkyHigh", "AeroJet", "CloudAir")
STARTING_PRICE = 450.0
PRICE_FLOOR = 200.0
MAX_DAILY_CHANGE = 50.0


def generate_price_series(
    days: int = PRICE_SERIES_DAYS,
    start: Optional[datetime.date] = None,
    rng: Optional[random.Random] = None,
) -> list[PriceSample]:
    """Simulate daily fares as a random walk that never drops below the floor."""
    rng = rng or random.Random()
    start = start or datetime.date.today()

    samples = []
    price = STARTING_PRICE
    for offset in range(days):
        price += (rng.random() - 0.5) * MAX_DAILY_CHANGE
        price = max(PRICE_FLOOR, price)
        samples.append(
            PriceSample(
                date=start + datetime.timedelta(days=offset),
                price=round(price),
                airline=rng.choice(AIRLINES),
            )
        )
    return samples


def price_frame(samples: list[PriceSample]) -> pd.DataFrame:
    """Price series as a date-indexed DataFrame for charting."""
    if not samples:
        return pd.DataFrame(columns=["price", "airline"])

    df = pd.DataFrame([sample.model_dump() for sample in samples])
    df["date"] = pd.to_datetime(df["date"])
    return df.set_index("date")
