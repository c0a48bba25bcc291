import datetime

import streamlit as st
from api import check_api_health, request_prediction
from config import DEFAULT_DESTINATION, DEFAULT_ORIGIN
from prediction import PredictionTracker
from prices import generate_price_series, price_frame
from utils import (
    display_prediction,
    display_price_chart,
    display_price_metrics,
    display_weather,
)
from weather import AIRPORTS, fetch_weather

# Configure the page
st.set_page_config(
    page_title="Flight Price Dashboard",
    page_icon="✈️",
    layout="wide",
    initial_sidebar_state="collapsed",
)


def init_session_state() -> None:
    defaults = {
        "origin": DEFAULT_ORIGIN,
        "destination": DEFAULT_DESTINATION,
        "travel_date": datetime.date.today(),
        "price_samples": [],
        "weather": None,
        "tracker": PredictionTracker(),
        "searched": False,
        "searched_route": (DEFAULT_ORIGIN, DEFAULT_DESTINATION),
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def render_search_form() -> bool:
    """Render the route inputs and return whether a search was requested."""
    col1, col2, col3, col4 = st.columns([2, 2, 2, 1])
    with col1:
        origin = st.text_input("Origin", value=st.session_state.origin, max_chars=3)
    with col2:
        destination = st.text_input(
            "Destination", value=st.session_state.destination, max_chars=3
        )
    with col3:
        travel_date = st.date_input("Date", value=st.session_state.travel_date)
    with col4:
        st.write("")
        search_button = st.button("🔍 Search", type="primary", use_container_width=True)

    st.session_state.origin = origin.strip().upper()
    st.session_state.destination = destination.strip().upper()
    st.session_state.travel_date = travel_date
    return search_button


def run_search() -> None:
    """Load prices and weather, then ask the analyst for advice."""
    origin = st.session_state.origin
    destination = st.session_state.destination
    tracker: PredictionTracker = st.session_state.tracker

    with st.spinner("Loading price trajectory and destination weather..."):
        samples = generate_price_series(start=st.session_state.travel_date)
        st.session_state.price_samples = samples
        st.session_state.weather = fetch_weather(destination)

    sequence = tracker.begin()
    with st.spinner("🤖 AI analyst is reviewing the price trend..."):
        result = request_prediction(origin, destination, samples)
    tracker.resolve(sequence, result)
    st.session_state.searched_route = (origin, destination)
    st.session_state.searched = True


def main():
    """Main application function."""
    init_session_state()

    st.title("✈️ Flight Price Dashboard")
    st.markdown("Price trajectory, destination weather and AI buy/wait advice")

    if not check_api_health():
        st.warning(
            "🟠 Backend API is not running. Price advice will be unavailable until it starts."
        )

    search_requested = render_search_form()

    if search_requested or not st.session_state.searched:
        if st.session_state.origin and st.session_state.destination:
            run_search()
        else:
            st.warning("⚠️ Please enter both origin and destination codes.")

    samples = st.session_state.price_samples
    searched_origin, searched_destination = st.session_state.searched_route
    st.header(f"📋 {searched_origin} → {searched_destination}")
    display_price_metrics(samples)

    chart_col, side_col = st.columns([2, 1])
    with chart_col:
        st.subheader("📈 Price Trajectory")
        display_price_chart(price_frame(samples))
    with side_col:
        airport = AIRPORTS.get(searched_destination)
        display_weather(
            st.session_state.weather,
            airport.name if airport else searched_destination,
        )
        display_prediction(st.session_state.tracker)


if __name__ == "__main__":
    main()
