"""Chat-completion client for the OpenRouter API."""

import logging
from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from app.core.config import COMPLETION_MAX_TOKENS, COMPLETION_TEMPERATURE, settings
from app.exceptions.ai import AIConfigurationError, EmptyResponseError, UpstreamError
from app.prompts.builder import ChatMessage, ConversationContext, build_messages
from app.prompts.system_instructions import DEFAULT_SYSTEM_INSTRUCTION, SystemInstruction


logger = logging.getLogger(__name__)


def _is_retryable(exc: BaseException) -> bool:
    return isinstance(exc, UpstreamError) and exc.is_retryable


class CompletionClient:
    """Request/response wrapper around ``POST {base_url}/chat/completions``.

    Configuration is read once at construction and never changes afterwards.
    The client persists nothing; callers store the returned reply text.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        max_retries: int | None = None,
        instruction: SystemInstruction = DEFAULT_SYSTEM_INSTRUCTION,
    ):
        """Initialize the client.

        Args:
            api_key: Provider API key, defaults to ``OPENROUTER_API_KEY``.
            base_url: Provider base URL, defaults to ``OPENROUTER_BASE_URL``.
            model: Model identifier, defaults to ``OPENROUTER_MODEL``.
            http_client: Optional pre-built httpx client (used by tests).
            max_retries: Extra attempts on 429/5xx responses, defaults to
                ``COMPLETION_MAX_RETRIES`` (0, i.e. a single request).
            instruction: Static system instruction used for the system message.

        Raises:
            AIConfigurationError: If no API key is configured.
        """
        api_key = api_key if api_key is not None else settings.openrouter_api_key
        if not api_key:
            raise AIConfigurationError("OPENROUTER_API_KEY environment variable is not set")

        self._api_key = api_key
        self._base_url = (base_url or settings.openrouter_base_url).rstrip("/")
        self._model = model or settings.openrouter_model
        self._max_retries = settings.completion_max_retries if max_retries is None else max_retries
        self._instruction = instruction
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=settings.completion_timeout)

        logger.info(f"OpenRouter client initialized with model: {self._model}")

    @property
    def model(self) -> str:
        """Model identifier sent with every request."""
        return self._model

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def max_retries(self) -> int:
        return self._max_retries

    async def send_message(
        self,
        user_message: str,
        conversation_history: list[ChatMessage] | tuple[ChatMessage, ...] = (),
        context: ConversationContext | None = None,
    ) -> str:
        """Send a user turn with its history and return the assistant reply.

        Args:
            user_message: Text of the newest user turn.
            conversation_history: Prior turns, oldest first.
            context: Optional per-call context rendered into the system message.

        Returns:
            Content of the first choice, unmodified.

        Raises:
            UpstreamError: Provider answered with a non-success status.
            EmptyResponseError: Provider answered without any usable choice.
        """
        messages = build_messages(user_message, conversation_history, context, self._instruction)

        logger.debug(
            f"Sending request to OpenRouter (model={self._model}, message_count={len(messages)})"
        )

        if self._max_retries <= 0:
            return await self._request_completion(messages)

        retrying = AsyncRetrying(
            retry=retry_if_exception(_is_retryable),
            stop=stop_after_attempt(self._max_retries + 1),
            wait=wait_exponential(
                min=settings.completion_retry_min_wait,
                max=settings.completion_retry_max_wait,
            ),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        return await retrying(self._request_completion, messages)

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http.aclose()

    # Private helper methods

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": settings.openrouter_http_referer,
            "X-Title": settings.openrouter_app_title,
        }

    def _payload(self, messages: list[ChatMessage]) -> dict[str, Any]:
        return {
            "model": self._model,
            "messages": messages,
            "temperature": COMPLETION_TEMPERATURE,
            "max_tokens": COMPLETION_MAX_TOKENS,
        }

    async def _request_completion(self, messages: list[ChatMessage]) -> str:
        response = await self._http.post(
            f"{self._base_url}/chat/completions",
            headers=self._headers(),
            json=self._payload(messages),
        )

        if not response.is_success:
            logger.error(f"OpenRouter API error: status={response.status_code} body={response.text}")
            raise UpstreamError(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"OpenRouter returned a non-JSON body: {response.text[:200]}")
            raise EmptyResponseError("Malformed response from OpenRouter API") from e

        return self._extract_reply(data)

    def _extract_reply(self, data: Any) -> str:
        choices = data.get("choices") if isinstance(data, dict) else None
        if not choices:
            raise EmptyResponseError()

        message = choices[0].get("message") if isinstance(choices[0], dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if content is None:
            raise EmptyResponseError("Malformed response from OpenRouter API")

        usage = data.get("usage") or {}
        logger.info(
            f"Received response from OpenRouter (model={data.get('model')}, "
            f"tokens={usage.get('total_tokens')})"
        )
        return content
