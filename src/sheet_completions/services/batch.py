"""Shape-preserving mapping of the single-cell pipeline."""

import logging
from collections.abc import Callable
from typing import Any

from sheet_completions.entities import BatchResult, CompletionResult, Grid, Scalar, resolve_prompt

logger = logging.getLogger(__name__)


class BatchShapeMapper:
    """Apply a per-cell resolver to a scalar or every cell of a grid.

    Cells are visited strictly sequentially in row-major order. The first
    fatal result aborts the batch; cells already processed keep whatever
    they wrote to the cache.
    """

    def run(self, prompt: Any, resolve: Callable[[Any], CompletionResult]) -> BatchResult:
        """Map resolve over the prompt, preserving its shape.

        Args:
            prompt: Raw formula argument or a resolved Scalar/Grid
            resolve: Single-cell pipeline

        Returns:
            BatchResult holding results in the input's shape, or the first failure

        Raises:
            ValueError: If the prompt is not a scalar or a rectangular grid
        """
        value = resolve_prompt(prompt)

        if isinstance(value, Scalar):
            result = resolve(value.value)
            if result.is_fatal:
                return BatchResult(failure=result)
            return BatchResult(value=Scalar(result))

        row_count, column_count = value.shape
        resolved = []
        for (i, j), cell in value.cells():
            result = resolve(cell)
            if result.is_fatal:
                logger.error(
                    "Aborting %dx%d batch at cell (%d, %d)",
                    row_count,
                    column_count,
                    i + 1,
                    j + 1,
                )
                return BatchResult(failure=result)
            resolved.append(result)

        rows = tuple(
            tuple(resolved[i * column_count : (i + 1) * column_count]) for i in range(row_count)
        )
        return BatchResult(value=Grid(rows))
