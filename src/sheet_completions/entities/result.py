"""Completion result types.

A single result type covers every outcome of a cell: generated text, the
"no content" sentinel, and fatal failure. Fatal failures are carried as
values through the pipeline and only raised at the formula boundary.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from sheet_completions.entities.prompt import Grid, Scalar
from sheet_completions.errors import CompletionError

# Value returned to a cell when there is nothing to show
EMPTY = "EMPTY"


class ResultKind(str, Enum):
    TEXT = "text"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass(frozen=True)
class CompletionResult:
    """Outcome of the single-cell pipeline.

    Attributes:
        kind: Which variant this result is
        text: Generated text (TEXT only)
        error: The failure cause (FAILED only)
    """

    kind: ResultKind
    text: str = ""
    error: CompletionError | None = None

    @classmethod
    def of_text(cls, text: str) -> "CompletionResult":
        """Wrap generated text, degrading blank text to the empty result."""
        text = text.strip()
        if not text:
            return cls.empty()
        return cls(kind=ResultKind.TEXT, text=text)

    @classmethod
    def empty(cls) -> "CompletionResult":
        return cls(kind=ResultKind.EMPTY)

    @classmethod
    def failed(cls, error: CompletionError) -> "CompletionResult":
        return cls(kind=ResultKind.FAILED, error=error)

    @property
    def is_fatal(self) -> bool:
        return self.kind is ResultKind.FAILED

    @property
    def is_cacheable(self) -> bool:
        """Only non-empty generated text is ever stored."""
        return self.kind is ResultKind.TEXT

    def unwrap(self) -> str:
        """Return the cell value, or raise the carried error.

        Raises:
            CompletionError: If the result is a failure
        """
        if self.kind is ResultKind.FAILED:
            raise self.error
        if self.kind is ResultKind.EMPTY:
            return EMPTY
        return self.text


@dataclass(frozen=True)
class BatchResult:
    """Shaped outcome of mapping the pipeline over a prompt value.

    Exactly one of ``value`` and ``failure`` is set. ``value`` mirrors the
    input shape and holds one CompletionResult per cell.
    """

    value: Scalar | Grid | None = None
    failure: CompletionResult | None = None

    @property
    def is_fatal(self) -> bool:
        return self.failure is not None

    def unwrap(self) -> Any:
        """Return a native str or list[list[str]], or raise the failure."""
        if self.failure is not None:
            return self.failure.unwrap()
        return self.value.map(CompletionResult.unwrap).to_native()
