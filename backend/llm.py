import logging
from typing import Any, Optional

import openai
from openai import OpenAI

from backend.config import API_KEY_ENV_VARS, Settings

logger = logging.getLogger(__name__)


class PredictionProxyError(Exception):
    """A failure that the proxy turns into a structured error response."""

    def __init__(
        self,
        details: str,
        status_code: int = 500,
        error_type: Optional[str] = None,
        code: Optional[str] = None,
    ):
        super().__init__(details)
        self.details = details
        self.status_code = status_code
        self.error_type = error_type
        self.code = code


class MissingCredentialError(PredictionProxyError):
    def __init__(self):
        super().__init__(
            f"Missing {API_KEY_ENV_VARS[0]} environment variable",
            status_code=500,
            error_type="configuration_error",
            code="missing_credential",
        )


def create_client(settings: Settings) -> OpenAI:
    """Build an OpenAI-compatible client for the configured endpoint."""
    if not settings.api_key:
        raise MissingCredentialError()

    logger.info(f"Using API key ending in {settings.masked_api_key}")
    return OpenAI(
        api_key=settings.api_key,
        base_url=settings.base_url,
        timeout=settings.timeout_seconds,
        max_retries=0,
    )


def _upstream_error(error: openai.APIError, status_code: int) -> PredictionProxyError:
    return PredictionProxyError(
        error.message or str(error),
        status_code=status_code,
        error_type=getattr(error, "type", None) or "Unknown",
        code=getattr(error, "code", None) or "Unknown",
    )


def complete_prompt(settings: Settings, prompt: str) -> dict[str, Any]:
    """
    Forward a prompt as a single user message and return the raw upstream body.

    Exactly one upstream call is made; nothing is retried.
    """
    client = create_client(settings)

    try:
        response = client.chat.completions.create(
            model=settings.model,
            messages=[{"role": "user", "content": prompt}],
        )
    except openai.APITimeoutError as e:
        logger.error(f"LLM API timed out after {settings.timeout_seconds}s: {e}")
        raise _upstream_error(e, status_code=504) from e
    except openai.APIError as e:
        logger.error(f"LLM API error: {e}")
        raise _upstream_error(e, status_code=502) from e

    return response.model_dump(mode="json", exclude_unset=True)
