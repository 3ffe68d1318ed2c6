"""Language model response model."""

from pydantic import BaseModel, Field


class LLMResponse(BaseModel):
    """Response from an LLM API call."""

    content: str = Field(..., description="Response content")
    model: str = Field(..., description="Model that generated the response")
    input_tokens: int = Field(default=0)
    output_tokens: int = Field(default=0)
    finish_reason: str = Field(default="stop")
