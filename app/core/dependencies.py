# app/core/dependencies.py
import logging

from app.database import get_db
from app.exceptions.ai import AIConfigurationError
from app.services.completion_client import CompletionClient

logger = logging.getLogger(__name__)

# Process-wide completion client, built on first use and read-only afterwards.
_completion_client: CompletionClient | None = None


def get_completion_client() -> CompletionClient:
    """Return the shared completion client.

    Raises:
        AIConfigurationError: If the provider API key is not configured.
    """
    global _completion_client
    if _completion_client is None:
        _completion_client = CompletionClient()
    return _completion_client


def get_optional_completion_client() -> CompletionClient | None:
    """Shared completion client, or None when the provider is not configured.

    Used by routes where a completion call is only sometimes needed.
    """
    try:
        return get_completion_client()
    except AIConfigurationError as e:
        logger.warning(f"Completion client unavailable: {e.message}")
        return None


async def close_completion_client() -> None:
    global _completion_client
    if _completion_client is not None:
        await _completion_client.aclose()
        _completion_client = None


__all__ = [
    "get_db",
    "get_completion_client",
    "get_optional_completion_client",
    "close_completion_client",
]
