"""
Chat completion client.

Provides a single interface for calling an OpenAI-compatible chat
completion endpoint. OpenRouter, OpenAI, Anthropic and Ollama differ only
in base URL and headers, selected from Settings.
"""

import logging
from typing import Optional

import openai
from openai import AsyncOpenAI

from treatment_assistant.config import Settings
from treatment_assistant.errors import ModelUnavailableError
from treatment_assistant.models.llm import LLMResponse


logger = logging.getLogger(__name__)


class LLMClient:
    """
    Async client for OpenAI-compatible providers.

    Uses the OpenAI SDK with the provider's base URL. SDK retries are
    disabled; a failed call surfaces as ModelUnavailableError.
    """

    def __init__(self, settings: Settings):
        """
        Initialize the LLM client.

        Args:
            settings: Provider, API key, base URLs and timeout.
        """
        self.settings = settings
        self.provider = settings.provider

        api_key = settings.api_key
        if self.provider == "ollama":
            api_key = api_key or "ollama"  # Ollama ignores the key
        if not api_key:
            raise ValueError(
                f'No API key found for provider "{self.provider}". '
                f"Set PROVIDER_API_KEY or {self.provider.upper()}_API_KEY environment variable."
            )
        self.api_key = api_key

        default_headers = {}
        if self.provider == "openrouter":
            default_headers = {
                "HTTP-Referer": settings.app_url,
                "X-Title": settings.app_name,
            }

        self.client = AsyncOpenAI(
            api_key=self.api_key,
            base_url=settings.base_url,
            default_headers=default_headers or None,
            timeout=settings.llm_timeout,
            max_retries=0,
        )

        # Track token usage for this session
        self._session_costs: list[dict] = []

    async def complete(
        self,
        model: str,
        messages: list[dict],
        temperature: float = 0.3,
        max_tokens: Optional[int] = None,
        json_mode: bool = False,
    ) -> LLMResponse:
        """
        Generate a completion from the specified model.

        Args:
            model: Model identifier (e.g., "gpt-4o", "anthropic/claude-3.5-sonnet")
            messages: List of message dicts with "role" and "content" keys
            temperature: Sampling temperature (0.0 to 2.0)
            max_tokens: Maximum tokens to generate (optional)
            json_mode: Ask the provider to return a JSON object only

        Returns:
            LLMResponse with content and token usage

        Raises:
            ModelUnavailableError: On authentication failure, timeout,
                transport error or an empty completion
        """
        kwargs = {
            "model": model,
            "messages": messages,
            "temperature": temperature,
        }
        if max_tokens:
            kwargs["max_tokens"] = max_tokens
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = await self.client.chat.completions.create(**kwargs)
        except openai.AuthenticationError as e:
            raise ModelUnavailableError(
                "Authentication failed (401). Check that the API key is correct, "
                "that PROVIDER matches the key type, and that the key is still valid.",
                reason=ModelUnavailableError.AUTHENTICATION,
                provider=self.provider,
                model=model,
            ) from e
        except openai.APITimeoutError as e:
            raise ModelUnavailableError(
                "Request timeout - LLM inference too slow",
                reason=ModelUnavailableError.TIMEOUT,
                provider=self.provider,
                model=model,
            ) from e
        except openai.APIError as e:
            raise ModelUnavailableError(
                f"LLM provider error: {e}",
                reason=ModelUnavailableError.UPSTREAM,
                provider=self.provider,
                model=model,
            ) from e

        if not response.choices or not response.choices[0].message.content:
            raise ModelUnavailableError(
                "No response from LLM",
                reason=ModelUnavailableError.UPSTREAM,
                provider=self.provider,
                model=model,
            )

        content = response.choices[0].message.content
        finish_reason = response.choices[0].finish_reason or "stop"

        input_tokens = response.usage.prompt_tokens if response.usage else 0
        output_tokens = response.usage.completion_tokens if response.usage else 0

        self._session_costs.append({
            "model": model,
            "input_tokens": input_tokens,
            "output_tokens": output_tokens,
        })

        return LLMResponse(
            content=content,
            model=model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            finish_reason=finish_reason,
        )

    def get_session_usage(self) -> dict:
        """
        Get total token usage for this session.

        Returns:
            Dict with total input/output tokens by model
        """
        return _summarize_usage(self._session_costs)

    def reset_session(self):
        """Reset session usage tracking."""
        self._session_costs = []


class MockLLMClient:
    """
    Mock LLM client for testing.

    Returns predefined responses without making actual API calls.
    """

    def __init__(self, responses: Optional[dict[str, str]] = None, default: Optional[str] = None):
        """
        Initialize mock client.

        Args:
            responses: Optional dict mapping model names to response content.
            default: Content returned for models not in ``responses``.
        """
        self.responses = responses or {}
        self.default = default
        self.calls: list[dict] = []
        self._session_costs: list[dict] = []

    async def complete(
        self,
        model: str,
        messages: list[dict],
        temperature: float = 0.3,
        max_tokens: Optional[int] = None,
        json_mode: bool = False,
    ) -> LLMResponse:
        """Return a mock response."""
        self.calls.append({
            "model": model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
            "json_mode": json_mode,
        })

        if model in self.responses:
            content = self.responses[model]
        elif self.default is not None:
            content = self.default
        else:
            content = f"Mock response from {model}"

        # Rough token estimate
        input_tokens = sum(len(m.get("content", "")) // 4 for m in messages)
        output_tokens = len(content) // 4

        self._session_costs.append({
            "model": model,
            "input_tokens": input_tokens,
            "output_tokens": output_tokens,
        })

        return LLMResponse(
            content=content,
            model=model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            finish_reason="stop",
        )

    def get_session_usage(self) -> dict:
        """Get mock session usage."""
        return _summarize_usage(self._session_costs)

    def reset_session(self):
        """Reset mock session."""
        self._session_costs = []
        self.calls = []


class UnconfiguredLLMClient:
    """
    Stand-in used when no provider credentials are configured.

    Requests still validate and enrich; the model call itself fails with
    an authentication error carrying the configuration message.
    """

    def __init__(self, provider: str, message: str):
        self.provider = provider
        self.message = message

    async def complete(
        self,
        model: str,
        messages: list[dict],
        temperature: float = 0.3,
        max_tokens: Optional[int] = None,
        json_mode: bool = False,
    ) -> LLMResponse:
        raise ModelUnavailableError(
            self.message,
            reason=ModelUnavailableError.AUTHENTICATION,
            provider=self.provider,
            model=model,
        )

    def get_session_usage(self) -> dict:
        return {}


def _summarize_usage(calls: list[dict]) -> dict:
    usage_by_model: dict[str, dict] = {}
    for call in calls:
        model = call["model"]
        if model not in usage_by_model:
            usage_by_model[model] = {
                "input_tokens": 0,
                "output_tokens": 0,
                "calls": 0,
            }
        usage_by_model[model]["input_tokens"] += call["input_tokens"]
        usage_by_model[model]["output_tokens"] += call["output_tokens"]
        usage_by_model[model]["calls"] += 1
    return usage_by_model
