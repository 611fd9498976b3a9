"""Wire DTOs for the OpenAI-compatible chat completions API."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """A single chat message."""

    role: Literal["system", "user", "assistant"]
    content: str


class ChatCompletionRequest(BaseModel):
    """Body of POST /chat/completions."""

    model: str
    max_tokens: int = Field(..., gt=0)
    messages: list[ChatMessage] = Field(..., min_length=1)
    temperature: float
    stream: bool = False
    n: int = 1  # Number of completions to generate
    seed: int = 0  # Helps determinism
    service_tier: str = "auto"  # Let the API handle rate limits
    user: str | None = Field(None, description="Opaque end-user identifier for abuse monitoring")


class ResponseMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    role: str | None = None
    content: str | None = None


class Choice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    index: int = 0
    message: ResponseMessage = Field(default_factory=ResponseMessage)
    finish_reason: str | None = None


class ChatCompletionResponse(BaseModel):
    """Response of POST /chat/completions (only the fields we read)."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    model: str | None = None
    choices: list[Choice] = Field(default_factory=list)

    @property
    def content(self) -> str:
        """Return the first choice's stripped content, or empty text."""
        if not self.choices:
            return ""
        return (self.choices[0].message.content or "").strip()


class ModelItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    owned_by: str | None = None


class ModelsPage(BaseModel):
    """Response of GET /models."""

    model_config = ConfigDict(extra="ignore")

    data: list[ModelItem] = Field(default_factory=list)

    @property
    def model_ids(self) -> list[str]:
        return [item.id for item in self.data]
