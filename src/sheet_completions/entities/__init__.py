"""Domain entities for internal representation.

These are pure frozen dataclasses used by services and handlers. Wire
formats for the completion API live in the dto package.
"""

from .prompt import CellValue, Grid, PromptValue, Scalar, resolve_prompt
from .request import NormalizedRequest
from .result import EMPTY, BatchResult, CompletionResult, ResultKind

__all__ = [
    "EMPTY",
    "BatchResult",
    "CellValue",
    "CompletionResult",
    "Grid",
    "NormalizedRequest",
    "PromptValue",
    "ResultKind",
    "Scalar",
    "resolve_prompt",
]
