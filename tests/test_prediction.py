import pytest
from conftest import make_samples

from backend.models.prediction import PredictionFailure, PredictionSuccess
from prediction import (
    EXTRACTION_STRATEGIES,
    FALLBACK_PREDICTION,
    PredictionTracker,
    analysis_error,
    build_prompt,
    extract_prediction_text,
    summarize_prices,
)


class TestSummarizePrices:
    """Test suite for the price window summary."""

    def test_rising_window(self, rising_samples):
        summary = summarize_prices(rising_samples)
        assert summary.current_price == 450
        assert summary.average_price == 460
        assert summary.trend == "Increasing"
        assert summary.window_size == 10

    def test_average_of_window_summing_to_4600(self):
        """Ten prices summing to 4600 average exactly 460."""
        prices = [450, 460, 440, 455, 465, 470, 450, 455, 455, 500]
        assert sum(prices) == 4600
        summary = summarize_prices(make_samples(prices))
        assert summary.average_price == 460
        assert summary.trend == "Increasing"

    def test_falling_window(self, falling_samples):
        summary = summarize_prices(falling_samples)
        assert summary.current_price == 500
        assert summary.average_price == 460
        assert summary.trend == "Decreasing"

    def test_equal_ends_are_decreasing(self):
        summary = summarize_prices(make_samples([450, 470, 450]))
        assert summary.trend == "Decreasing"

    def test_only_leading_ten_samples_used(self, rising_samples):
        """Samples past the tenth do not affect the summary."""
        samples = rising_samples + make_samples([9000, 9000, 9000])
        summary = summarize_prices(samples)
        assert summary.average_price == 460
        assert summary.window_size == 10

    @pytest.mark.parametrize("length", range(1, 10))
    def test_short_window_uses_all_samples(self, length):
        prices = [400 + 10 * i for i in range(length)]
        summary = summarize_prices(make_samples(prices))
        assert summary.window_size == length
        assert summary.current_price == 400
        assert summary.average_price == round(sum(prices) / length)

    def test_single_sample(self):
        summary = summarize_prices(make_samples([321]))
        assert summary.current_price == 321
        assert summary.average_price == 321
        assert summary.trend == "Decreasing"

    def test_average_rounds_half_up(self):
        assert summarize_prices(make_samples([450, 451])).average_price == 451

    def test_empty_series_rejected(self):
        with pytest.raises(ValueError):
            summarize_prices([])


class TestBuildPrompt:
    """Test suite for prompt rendering."""

    def test_prompt_contents(self, rising_samples):
        prompt = build_prompt("PEK", "TYO", rising_samples)
        assert "from PEK to TYO" in prompt
        assert "Current price: $450." in prompt
        assert "average: $460." in prompt
        assert "Trend: Increasing." in prompt
        assert "max 50 words" in prompt


class TestExtractPredictionText:
    """Test suite for response normalization."""

    def test_direct_shape(self):
        body = {"choices": [{"message": {"content": "Buy now"}}]}
        assert extract_prediction_text(body) == "Buy now"

    def test_wrapped_shape(self):
        body = {"data": {"choices": [{"message": {"content": "Wait"}}]}}
        assert extract_prediction_text(body) == "Wait"

    def test_direct_shape_wins(self):
        body = {
            "choices": [{"message": {"content": "Buy now"}}],
            "data": {"choices": [{"message": {"content": "Wait"}}]},
        }
        assert extract_prediction_text(body) == "Buy now"

    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"result": "Buy now"},
            {"choices": []},
            {"choices": [{"message": {"content": None}}]},
            {"choices": [{"message": {"content": 42}}]},
            {"choices": [{"message": {"content": ""}}]},
            {"data": None},
            {"data": "Wait"},
            [],
            None,
            "Buy now",
        ],
    )
    def test_unrecognized_shapes_fall_back(self, body):
        assert extract_prediction_text(body) == FALLBACK_PREDICTION

    def test_fallback_text(self):
        assert FALLBACK_PREDICTION == "Unable to generate prediction at this time."

    def test_strategies_never_raise(self):
        for strategy in EXTRACTION_STRATEGIES:
            assert strategy({"choices": "oops"}) is None


class TestAnalysisError:
    def test_message_format(self):
        result = analysis_error("Invalid API key")
        assert isinstance(result, PredictionFailure)
        assert (
            result.display_text
            == "Analysis Error: Invalid API key. Please check API Key configuration."
        )


class TestPredictionTracker:
    """Test suite for stale-response handling."""

    def test_latest_result_applied(self):
        tracker = PredictionTracker()
        seq = tracker.begin()
        assert tracker.pending is True

        assert tracker.resolve(seq, PredictionSuccess(text="Buy now")) is True
        assert tracker.pending is False
        assert tracker.result.display_text == "Buy now"

    def test_stale_result_discarded(self):
        """A slow first response cannot overwrite a newer one."""
        tracker = PredictionTracker()
        first = tracker.begin()
        second = tracker.begin()

        assert tracker.resolve(second, PredictionSuccess(text="Wait")) is True
        assert tracker.resolve(first, PredictionSuccess(text="Buy now")) is False
        assert tracker.result.display_text == "Wait"

    def test_stale_result_keeps_pending(self):
        tracker = PredictionTracker()
        first = tracker.begin()
        tracker.begin()

        tracker.resolve(first, PredictionSuccess(text="Buy now"))

        assert tracker.pending is True
        assert tracker.result is None

    def test_sequence_numbers_increase(self):
        tracker = PredictionTracker()
        assert [tracker.begin() for _ in range(3)] == [1, 2, 3]
