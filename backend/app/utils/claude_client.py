from anthropic import AsyncAnthropic, Timeout, APIStatusError, APIConnectionError, APITimeoutError, AuthenticationError
from typing import Optional, Dict, Any
import asyncio
import random
import httpx
from app.core.config import settings
from app.core.exceptions import AIServiceError
from app.core.logging_config import logger

RETRYABLE_ERRORS = ['overloaded_error', 'rate_limit_error', 'api_error']
RETRYABLE_STATUS_CODES = [429, 500, 502, 503, 529]


class ClaudeClient:
    """Claude API client wrapper for copy generation requests"""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        client_kwargs: Dict[str, Any] = {"api_key": api_key if api_key is not None else settings.ANTHROPIC_API_KEY}

        # Only set base_url if it's a non-empty string with actual content
        if settings.ANTHROPIC_BASE_URL and settings.ANTHROPIC_BASE_URL.strip():
            client_kwargs["base_url"] = settings.ANTHROPIC_BASE_URL.strip()
            logger.info(f"Using custom Claude API base URL: {settings.ANTHROPIC_BASE_URL}")

        request_timeout = float(settings.CLAUDE_REQUEST_TIMEOUT)
        client_kwargs["timeout"] = Timeout(
            connect=float(settings.CLAUDE_CONNECT_TIMEOUT),
            read=request_timeout,
            write=request_timeout,
            pool=request_timeout
        )
        # Retries are handled here so they show up in our logs
        client_kwargs["max_retries"] = 0

        try:
            self.async_client = AsyncAnthropic(**client_kwargs)
        except Exception as e:
            logger.error(
                f"Claude client setup failed: {type(e).__name__}: {e}",
                extra={"event_type": "claude_client_error", "error_type": type(e).__name__}
            )
            raise AIServiceError(f"Claude client setup failed: {type(e).__name__}") from e
        self.model = model or settings.CLAUDE_MODEL
        self.max_retries = settings.CLAUDE_MAX_RETRIES
        self.base_delay = settings.CLAUDE_RETRY_BASE_DELAY
        self.max_delay = settings.CLAUDE_RETRY_MAX_DELAY

        logger.debug(f"Claude client initialized: timeout={request_timeout}s, model={self.model}")

    def _is_retryable_error(self, error: Exception) -> bool:
        """Check if an error is retryable (overload, rate limit, network issues)"""
        if isinstance(error, AuthenticationError):
            return False

        # Network/connection errors are always retryable
        if isinstance(error, (APIConnectionError, APITimeoutError)):
            return True

        if isinstance(error, (httpx.ConnectError, httpx.TimeoutException, httpx.NetworkError)):
            return True

        if isinstance(error, APIStatusError):
            body = error.body if isinstance(error.body, dict) else {}
            error_type = body.get('error', {}).get('type', '') if isinstance(body.get('error'), dict) else ''
            if error_type:
                return error_type in RETRYABLE_ERRORS
            return error.status_code in RETRYABLE_STATUS_CODES

        return False

    def _calculate_retry_delay(self, attempt: int) -> float:
        """Calculate delay with exponential backoff and jitter"""
        delay = min(self.base_delay * (2 ** attempt), self.max_delay)
        # Add jitter (0-25% of delay)
        return delay + delay * random.uniform(0, 0.25)

    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None
    ) -> Dict[str, Any]:
        """
        Generate response from Claude (non-streaming)

        Args:
            prompt: User prompt
            system_prompt: System prompt
            max_tokens: Maximum tokens to generate
            temperature: Temperature for generation

        Returns:
            Dict with response text and usage metadata

        Raises:
            AIServiceError: when the request fails after retries
        """
        conversation = [{"role": "user", "content": prompt}]

        if max_tokens is None:
            max_tokens = settings.CLAUDE_MAX_TOKENS
        if temperature is None:
            temperature = settings.CLAUDE_TEMPERATURE

        logger.info(f"Claude API: model={self.model}, max_tokens={max_tokens}, prompt_len={len(prompt)}")

        for attempt in range(self.max_retries + 1):
            try:
                response = await self.async_client.messages.create(
                    model=self.model,
                    max_tokens=max_tokens,
                    temperature=temperature,
                    system=system_prompt or "",
                    messages=conversation
                )
            except Exception as e:
                error_type = type(e).__name__
                if self._is_retryable_error(e) and attempt < self.max_retries:
                    delay = self._calculate_retry_delay(attempt)
                    logger.warning(
                        f"Claude API error [{error_type}] (attempt {attempt + 1}/{self.max_retries + 1}), retrying in {delay:.1f}s...",
                        extra={
                            "event_type": "claude_api_retry",
                            "error_type": error_type,
                            "attempt": attempt + 1,
                            "retry_delay": delay
                        }
                    )
                    await asyncio.sleep(delay)
                    continue

                logger.error(
                    f"Claude API error (non-retryable or max retries exceeded): {error_type}: {e}",
                    extra={
                        "event_type": "claude_api_error",
                        "error_type": error_type,
                        "attempt": attempt + 1
                    }
                )
                raise AIServiceError(f"Claude request failed: {error_type}") from e

            content = "".join(
                block.text for block in response.content if getattr(block, "type", "") == "text"
            )
            result = {
                "content": content,
                "model": self.model,
                "input_tokens": response.usage.input_tokens,
                "output_tokens": response.usage.output_tokens,
                "total_tokens": response.usage.input_tokens + response.usage.output_tokens,
                "stop_reason": response.stop_reason,
                "id": response.id
            }
            logger.log_ai_event(
                "completion",
                tokens_used=result["total_tokens"],
                model=self.model,
                stop_reason=response.stop_reason,
            )
            return result

        raise AIServiceError("Claude request failed: retries exhausted")


_claude_client: Optional[ClaudeClient] = None


def get_claude_client() -> ClaudeClient:
    """Get or create the shared Claude client"""
    global _claude_client
    if _claude_client is None:
        _claude_client = ClaudeClient()
    return _claude_client
