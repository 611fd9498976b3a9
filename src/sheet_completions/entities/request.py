"""Normalized completion request domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NormalizedRequest:
    """A cleaned, validated request for a single cell.

    Built fresh per cell by the request builder and never mutated.

    Attributes:
        prompt: Cleaned user prompt, never empty
        system_prompt: Cleaned system instruction, may be empty
        model: Model identifier
        max_tokens: Maximum number of generated tokens
        temperature: Sampling temperature
    """

    prompt: str
    system_prompt: str
    model: str
    max_tokens: int
    temperature: float

    def __post_init__(self) -> None:
        if not self.prompt:
            raise ValueError("prompt must not be empty")
        if not self.model:
            raise ValueError("model must not be empty")
        if isinstance(self.max_tokens, bool) or not isinstance(self.max_tokens, int) or self.max_tokens <= 0:
            raise ValueError(f"max_tokens must be a positive integer, got {self.max_tokens!r}")

    def messages(self) -> list[dict[str, str]]:
        """Return the chat messages, system instruction first when present."""
        messages = []
        if self.system_prompt:
            messages.append({"role": "system", "content": self.system_prompt})
        messages.append({"role": "user", "content": self.prompt})
        return messages
