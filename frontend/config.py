import os

# API configuration
API_BASE_URL = os.environ.get("API_BASE_URL", "http://localhost:8000")
PREDICTION_PATH = "/api/predict-price"
PREDICTION_TIMEOUT = 60
HEALTH_CHECK_TIMEOUT = 5

# Weather service
WEATHER_API_URL = "https://api.open-meteo.com/v1/forecast"
WEATHER_TIMEOUT = 10

# Price series
PRICE_SERIES_DAYS = 45
PREDICTION_WINDOW = 10

# Search defaults
DEFAULT_ORIGIN = "PEK"
DEFAULT_DESTINATION = "TYO"
