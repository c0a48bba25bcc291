import logging
from collections.abc import Sequence

import requests
from config import API_BASE_URL, HEALTH_CHECK_TIMEOUT, PREDICTION_PATH, PREDICTION_TIMEOUT
from prediction import analysis_error, analysis_result, build_prompt

from backend.models.prediction import PredictionResult
from backend.models.prices import PriceSample

logger = logging.getLogger(__name__)


def check_api_health() -> bool:
    """Check if the backend API is running."""
    try:
        response = requests.get(f"{API_BASE_URL}/health", timeout=HEALTH_CHECK_TIMEOUT)
        return response.status_code == 200
    except requests.exceptions.RequestException:
        return False


def _error_detail(error: requests.exceptions.RequestException) -> str:
    """Prefer the proxy's ``details`` field over the transport error text."""
    if error.response is not None:
        try:
            details = error.response.json().get("details")
        except (ValueError, AttributeError):
            details = None
        if details:
            return str(details)
    return str(error)


def request_prediction(
    origin: str, destination: str, price_samples: Sequence[PriceSample]
) -> PredictionResult:
    """Ask the backend proxy for buy/wait advice on a price series."""
    try:
        prompt = build_prompt(origin, destination, price_samples)
    except ValueError as e:
        logger.error(f"Cannot build prediction prompt: {e}")
        return analysis_error(str(e))

    try:
        response = requests.post(
            f"{API_BASE_URL}{PREDICTION_PATH}",
            json={"prompt": prompt},
            timeout=PREDICTION_TIMEOUT,
        )
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        logger.error(f"Prediction request failed: {e}")
        return analysis_error(_error_detail(e))

    try:
        body = response.json()
    except ValueError as e:
        # Unparseable success bodies fall through to the fallback text
        logger.warning(f"Prediction response was not JSON: {e}")
        body = None

    return analysis_result(body)
