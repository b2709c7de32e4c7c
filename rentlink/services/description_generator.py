"""LLM-backed listing description and search-query interpretation."""

import os
import asyncio
import time
from typing import Optional
from langchain_anthropic import ChatAnthropic
from langchain_openai import ChatOpenAI
from rentlink.models.listing_draft import DescriptionFeatures
from rentlink.utils.config import AppConfig
from rentlink.utils.errors import AIServiceUnavailableError, DescriptionGenerationError
from rentlink.utils.logging import (
    get_structured_logger,
    log_timing,
    preview,
)

logger = get_structured_logger(__name__)

DEFAULT_MODELS = {
    "anthropic": "claude-sonnet-4-20250514",
    "openai": "gpt-4o-mini",
}

SEARCH_CATEGORIES = "Apartment, House, Office, Shop, Land"


def build_description_prompt(features: DescriptionFeatures) -> str:
    """Prompt asking for a short rental description."""
    return f"""Write a compelling, professional, and attractive rental property description for a
{features.bedrooms}-bedroom {features.type} located in {features.location}.

Key highlights to mention: {features.highlights}.

The tone should be inviting and trustworthy. Keep it under 150 words.
Do not include placeholders."""


def build_search_prompt(query: str) -> str:
    """Prompt asking for a filter label summarizing a free-text search."""
    return f"""A user is searching for a rental property with this query: "{query}".
Extract keywords that match these categories: {SEARCH_CATEGORIES}.
Also extract location or price constraints if any.
Return a very short summary string for a filter label. e.g. "2-bed Apartment in Downtown\""""


def get_llm_model(provider: str, model_name: Optional[str] = None):
    """Get the configured chat model.

    Raises AIServiceUnavailableError when the provider has no API key.
    """
    model_name = model_name or DEFAULT_MODELS.get(provider)

    logger.debug(
        "Getting LLM model",
        llm_provider=provider,
        llm_model=model_name
    )

    if provider == "anthropic":
        api_key = os.environ.get("ANTHROPIC_API_KEY")
        if not api_key:
            raise AIServiceUnavailableError("ANTHROPIC_API_KEY not set")
        return ChatAnthropic(model=model_name, api_key=api_key)
    elif provider == "openai":
        api_key = os.environ.get("OPENAI_API_KEY")
        if not api_key:
            raise AIServiceUnavailableError("OPENAI_API_KEY not set")
        return ChatOpenAI(model=model_name, api_key=api_key)
    else:
        raise AIServiceUnavailableError(f"Unsupported LLM provider: {provider}")


def _response_text(response) -> str:
    content = response.content if hasattr(response, "content") else response
    if isinstance(content, list):
        # Anthropic may return content blocks
        content = "".join(
            block.get("text", "") if isinstance(block, dict) else str(block)
            for block in content
        )
    return (content or "").strip()


class DescriptionGenerator:
    """Text generation capability used by the listing composer."""

    def __init__(self, config: Optional[AppConfig] = None):
        self.config = config or AppConfig.from_env()

    async def _complete(self, prompt: str, operation: str) -> str:
        model = get_llm_model(self.config.llm_provider, self.config.llm_model)

        llm_start_time = time.perf_counter()
        with log_timing(operation, logger=logger, llm_provider=self.config.llm_provider):
            response = await asyncio.wait_for(
                model.ainvoke(prompt),
                timeout=self.config.llm_timeout_seconds
            )
        text = _response_text(response)

        logger.info(
            "LLM response received",
            operation=operation,
            llm_provider=self.config.llm_provider,
            llm_latency_ms=round((time.perf_counter() - llm_start_time) * 1000, 2),
            response_length=len(text)
        )
        return text

    async def generate_description(self, features: DescriptionFeatures) -> str:
        """Generate a listing description.

        Raises AIServiceUnavailableError when no credential is configured and
        DescriptionGenerationError for any other failure, including an empty
        response or a timeout.
        """
        logger.info(
            "Description generation started",
            property_type=features.type,
            bedrooms=features.bedrooms,
            location=preview(features.location)
        )

        try:
            text = await self._complete(build_description_prompt(features), "generate_description")
        except AIServiceUnavailableError:
            logger.warning("Description generation skipped, AI service unavailable")
            raise
        except asyncio.TimeoutError as e:
            logger.error(
                "Description generation timed out",
                timeout_seconds=self.config.llm_timeout_seconds
            )
            raise DescriptionGenerationError("Description generation timed out") from e
        except Exception as e:
            logger.error(
                "Description generation error",
                error=str(e),
                exc_info=True
            )
            raise DescriptionGenerationError(f"Description generation failed: {e}") from e

        if not text:
            raise DescriptionGenerationError("Empty description returned")
        return text

    async def interpret_search_query(self, query: str) -> str:
        """Summarize a free-text search as a short filter label. Empty string on failure."""
        if not query or not query.strip():
            return ""

        try:
            return await self._complete(build_search_prompt(query), "interpret_search_query")
        except AIServiceUnavailableError:
            logger.warning("Search interpretation skipped, AI service unavailable")
            return ""
        except Exception as e:
            logger.error(
                "Search interpretation error",
                query=preview(query),
                error=str(e),
                exc_info=True
            )
            return ""
