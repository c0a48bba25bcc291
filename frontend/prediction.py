"""
Prompt construction and response normalization for the AI analyst panel.
"""

import logging
from collections.abc import Callable, Sequence
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

from config import PREDICTION_WINDOW

from backend.models.prediction import PredictionFailure, PredictionSuccess
from backend.models.prices import PriceSample, PriceSummary

logger = logging.getLogger(__name__)

FALLBACK_PREDICTION = "Unable to generate prediction at this time."

PROMPT_TEMPLATE = """
Analyze flight prices from {origin} to {destination}.
Current price: ${current_price}.
Next {window_size} days average: ${average_price}.
Trend: {trend}.

Provide a short, strategic advice (max 50 words) on whether to buy now or wait.
Be professional and concise.
"""


def summarize_prices(samples: Sequence[PriceSample]) -> PriceSummary:
    """Summarize the leading window of up to ten samples."""
    if not samples:
        raise ValueError("At least one price sample is required")

    prices = [sample.price for sample in samples[:PREDICTION_WINDOW]]
    average = Decimal(sum(prices)) / len(prices)

    return PriceSummary(
        current_price=prices[0],
        average_price=int(average.quantize(Decimal(1), rounding=ROUND_HALF_UP)),
        trend="Increasing" if prices[-1] > prices[0] else "Decreasing",
        window_size=len(prices),
    )


def build_prompt(origin: str, destination: str, samples: Sequence[PriceSample]) -> str:
    summary = summarize_prices(samples)
    return PROMPT_TEMPLATE.format(
        origin=origin,
        destination=destination,
        **summary.model_dump(),
    ).strip()


def _choices_content(body: Any) -> Optional[str]:
    try:
        content = body["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    return content if isinstance(content, str) and content else None


def _wrapped_choices_content(body: Any) -> Optional[str]:
    try:
        return _choices_content(body["data"])
    except (KeyError, TypeError):
        return None


# Tried in order; the first string found wins
EXTRACTION_STRATEGIES: tuple[Callable[[Any], Optional[str]], ...] = (
    _choices_content,
    _wrapped_choices_content,
)


def extract_prediction_text(body: Any) -> str:
    """Pull the generated text out of a proxy success body."""
    for strategy in EXTRACTION_STRATEGIES:
        text = strategy(body)
        if text is not None:
            return text

    logger.warning("Prediction response had no recognizable content")
    return FALLBACK_PREDICTION


def analysis_error(detail: str) -> PredictionFailure:
    return PredictionFailure(
        message=f"Analysis Error: {detail}. Please check API Key configuration."
    )


def analysis_result(body: Any) -> PredictionSuccess:
    return PredictionSuccess(text=extract_prediction_text(body))


class PredictionTracker:
    """
    Keeps only the result of the most recently issued prediction request.

    Each search calls ``begin()`` for a sequence number and hands it back to
    ``resolve()`` with the result; results from superseded searches are dropped.
    """

    def __init__(self):
        self._latest = 0
        self.result = None
        self.pending = False

    def begin(self) -> int:
        self._latest += 1
        self.pending = True
        return self._latest

    def resolve(self, sequence: int, result) -> bool:
        if sequence != self._latest:
            logger.debug(
                f"Discarding stale prediction #{sequence} (latest is #{self._latest})"
            )
            return False

        self.result = result
        self.pending = False
        return True
