"""
Protocol definitions for the model client.

Lets the pipeline accept the real client, the mock, or any test double
with the same shape.
"""

from typing import Optional, Protocol

from treatment_assistant.models.llm import LLMResponse


class LLMClientProtocol(Protocol):
    """Interface the analysis pipeline expects from an LLM client."""

    async def complete(
        self,
        model: str,
        messages: list[dict],
        temperature: float,
        max_tokens: Optional[int] = None,
        json_mode: bool = False,
    ) -> LLMResponse:
        """
        Complete a chat conversation with the LLM.

        Args:
            model: Model identifier (e.g., "openai/gpt-4o")
            messages: List of message dicts with "role" and "content"
            temperature: Sampling temperature
            max_tokens: Optional maximum tokens to generate
            json_mode: Request a JSON-object-only reply

        Returns:
            LLMResponse with content and token usage
        """
        ...

    def get_session_usage(self) -> dict:
        """Token usage statistics for the current session."""
        ...
