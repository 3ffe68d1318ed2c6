"""Language model client."""

from treatment_assistant.llm.client import LLMClient, MockLLMClient, UnconfiguredLLMClient
from treatment_assistant.llm.protocols import LLMClientProtocol

__all__ = ["LLMClient", "MockLLMClient", "UnconfiguredLLMClient", "LLMClientProtocol"]
