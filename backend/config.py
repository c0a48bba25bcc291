import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

# Credential variables, checked in order
API_KEY_ENV_VARS = ("ARK_API_KEY", "DOUBAO_API_KEY")

DEFAULT_BASE_URL = "https://ark.cn-beijing.volces.com/api/v3"
DEFAULT_MODEL = "doubao-seed-1-6-251015"
DEFAULT_TIMEOUT_SECONDS = 30.0


class Settings(BaseModel):
    """Process-wide proxy configuration, read once at startup."""

    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls) -> "Settings":
        api_key = None
        for name in API_KEY_ENV_VARS:
            value = os.environ.get(name, "").strip()
            if value:
                api_key = value
                break

        return cls(
            api_key=api_key,
            base_url=os.environ.get("LLM_BASE_URL", DEFAULT_BASE_URL),
            model=os.environ.get("LLM_MODEL", DEFAULT_MODEL),
            timeout_seconds=float(
                os.environ.get("LLM_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)
            ),
        )

    @property
    def masked_api_key(self) -> str:
        if not self.api_key:
            return "<unset>"
        return f"****{self.api_key[-4:]}"


@lru_cache
def get_settings() -> Settings:
    load_dotenv()
    return Settings.from_env()
