"""Application configuration loaded from environment variables."""

import os
from typing import Optional
from pydantic import BaseModel, Field


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).lower() == "true"


class AppConfig(BaseModel):
    """Runtime settings for the app core."""
    splash_delay_ms: int = Field(default=2500, gt=0, description="Splash auto-advance delay")
    toast_duration_ms: int = Field(default=3000, gt=0, description="Toast display duration")
    reset_on_logout: bool = Field(
        default=False,
        description="Clear role and selections when the user logs out"
    )
    require_listing_title: bool = Field(
        default=False,
        description="Refuse to publish a listing without a title"
    )
    llm_provider: str = Field(default="anthropic", description="anthropic or openai")
    llm_model: Optional[str] = Field(None, description="Model name, provider default when unset")
    llm_timeout_seconds: float = Field(default=30.0, gt=0, description="Generation call timeout")

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Build the configuration from RENTLINK_* and LLM_* variables."""
        return cls(
            splash_delay_ms=int(os.environ.get("RENTLINK_SPLASH_DELAY_MS", "2500")),
            toast_duration_ms=int(os.environ.get("RENTLINK_TOAST_DURATION_MS", "3000")),
            reset_on_logout=_env_flag("RENTLINK_RESET_ON_LOGOUT"),
            require_listing_title=_env_flag("RENTLINK_REQUIRE_LISTING_TITLE"),
            llm_provider=os.environ.get("LLM_PROVIDER", "anthropic").lower(),
            llm_model=os.environ.get("LLM_MODEL") or None,
            llm_timeout_seconds=float(os.environ.get("LLM_TIMEOUT_SECONDS", "30")),
        )
