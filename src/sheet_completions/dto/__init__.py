"""Data transfer objects for the completion API wire format."""

from .openai import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
    Choice,
    ModelItem,
    ModelsPage,
    ResponseMessage,
)

__all__ = [
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    "ChatMessage",
    "Choice",
    "ModelItem",
    "ModelsPage",
    "ResponseMessage",
]
