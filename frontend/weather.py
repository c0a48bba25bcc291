import logging
import random
from typing import Optional

import requests
from config import WEATHER_API_URL, WEATHER_TIMEOUT

from backend.models.weather import Airport, WeatherReading

logger = logging.getLogger(__name__)

AIRPORTS = {
    airport.code: airport
    for airport in [
        Airport(code="PEK", name="Beijing Capital", latitude=40.0799, longitude=116.6031),
        Airport(code="TYO", name="Tokyo", latitude=35.6895, longitude=139.6917),
        Airport(code="HND", name="Tokyo Haneda", latitude=35.5494, longitude=139.7798),
        Airport(code="NRT", name="Tokyo Narita", latitude=35.7720, longitude=140.3929),
        Airport(code="LAX", name="Los Angeles", latitude=33.9416, longitude=-118.4085),
        Airport(code="JFK", name="New York JFK", latitude=40.6413, longitude=-73.7781),
        Airport(code="LHR", name="London Heathrow", latitude=51.4700, longitude=-0.4543),
        Airport(code="DXB", name="Dubai", latitude=25.2532, longitude=55.3657),
        Airport(code="SIN", name="Singapore Changi", latitude=1.3644, longitude=103.9915),
        Airport(code="CDG", name="Paris Charles de Gaulle", latitude=49.0097, longitude=2.5479),
        Airport(code="AMS", name="Amsterdam Schiphol", latitude=52.3105, longitude=4.7683),
        Airport(code="FRA", name="Frankfurt", latitude=50.0379, longitude=8.5622),
        Airport(code="HKG", name="Hong Kong", latitude=22.3080, longitude=113.9185),
        Airport(code="SYD", name="Sydney", latitude=-33.9399, longitude=151.1753),
    ]
}

UNAVAILABLE_READING = WeatherReading(
    temperature=22, condition="Data Unavailable", wind_speed=0, source="unavailable"
)


def weather_condition(code: int) -> str:
    """Map a WMO weather code to a display category."""
    if code == 0:
        return "Clear Sky"
    if 1 <= code <= 3:
        return "Partly Cloudy"
    if 45 <= code <= 48:
        return "Foggy"
    if 51 <= code <= 67:
        return "Rainy"
    if 71 <= code <= 77:
        return "Snowy"
    if 80 <= code <= 82:
        return "Heavy Rain"
    if code >= 95:
        return "Thunderstorm"
    return "Unknown"


def simulated_weather(rng: Optional[random.Random] = None) -> WeatherReading:
    rng = rng or random.Random()
    return WeatherReading(
        temperature=20 + rng.randrange(10),
        condition=rng.choice(["Sunny", "Cloudy", "Clear"]),
        wind_speed=10 + rng.randrange(15),
        source="simulated",
    )


def fetch_weather(airport_code: str, rng: Optional[random.Random] = None) -> WeatherReading:
    """Current weather at an airport; never raises."""
    airport = AIRPORTS.get(airport_code.strip().upper())
    if airport is None:
        logger.info(f"No coordinates for {airport_code}, using simulated weather")
        return simulated_weather(rng)

    try:
        response = requests.get(
            WEATHER_API_URL,
            params={
                "latitude": airport.latitude,
                "longitude": airport.longitude,
                "current": "temperature_2m,weather_code,wind_speed_10m",
            },
            timeout=WEATHER_TIMEOUT,
        )
        response.raise_for_status()
        current = response.json()["current"]

        return WeatherReading(
            temperature=round(current["temperature_2m"]),
            condition=weather_condition(int(current["weather_code"])),
            wind_speed=round(current["wind_speed_10m"]),
        )
    except (requests.exceptions.RequestException, ValueError, KeyError, TypeError) as e:
        logger.error(f"Weather fetch failed for {airport.code}: {e}")
        return UNAVAILABLE_READING
