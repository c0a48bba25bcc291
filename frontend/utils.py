from typing import Optional

import pandas as pd
import streamlit as st
from prediction import PredictionTracker, summarize_prices

from backend.models.prices import PriceSample
from backend.models.weather import WeatherReading

WEATHER_ICONS = {
    "Clear Sky": "☀️",
    "Sunny": "☀️",
    "Clear": "☀️",
    "Partly Cloudy": "⛅",
    "Cloudy": "☁️",
    "Foggy": "🌫️",
    "Rainy": "🌧️",
    "Snowy": "❄️",
    "Heavy Rain": "🌧️",
    "Thunderstorm": "⛈️",
}


def price_statistics(samples: list[PriceSample]) -> Optional[dict]:
    """Headline figures for the price metrics row."""
    if not samples:
        return None

    summary = summarize_prices(samples)
    prices = [sample.price for sample in samples]
    return {
        "current_price": summary.current_price,
        "average_price": summary.average_price,
        "trend": summary.trend,
        "change": summary.average_price - summary.current_price,
        "min_price": min(prices),
        "max_price": max(prices),
    }


def display_price_metrics(samples: list[PriceSample]) -> None:
    """Display current, average, lowest and highest prices in four columns."""
    stats = price_statistics(samples)
    if not stats:
        return

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("💰 Current Price", f"${stats['current_price']}")
    with col2:
        # Rising fares are bad news for the buyer
        st.metric(
            "📊 10-Day Average",
            f"${stats['average_price']}",
            delta=f"{stats['change']:+d} ({stats['trend']})",
            delta_color="inverse",
        )
    with col3:
        st.metric("📉 Lowest", f"${stats['min_price']}")
    with col4:
        st.metric("📈 Highest", f"${stats['max_price']}")


def display_price_chart(df: pd.DataFrame) -> None:
    if df.empty:
        st.warning("No price data to display.")
        return

    st.area_chart(df["price"], y_label="Price ($)")


def display_weather(reading: Optional[WeatherReading], airport_name: str) -> None:
    """Render the destination weather card."""
    st.subheader(f"🌍 Weather at {airport_name}")
    if reading is None:
        st.info("Weather loads with the next search.")
        return

    icon = WEATHER_ICONS.get(reading.condition, "🌡️")
    col1, col2 = st.columns(2)
    with col1:
        st.metric("Temperature", f"{reading.temperature}°C")
    with col2:
        st.metric("Wind", f"{reading.wind_speed} km/h")
    st.markdown(f"**{icon} {reading.condition}**")

    if reading.source == "simulated":
        st.caption("No live data for this airport; showing a typical reading.")


def display_prediction(tracker: PredictionTracker) -> None:
    """Render the AI analyst panel from the tracker state."""
    st.subheader("🧠 AI Price Analyst")

    if tracker.pending:
        st.caption("Analyzing price trajectory...")
        return

    if tracker.result is None:
        st.caption("Run a search to get buy/wait advice.")
        return

    if tracker.result.status == "failure":
        st.error(tracker.result.display_text)
    else:
        st.info(tracker.result.display_text)
