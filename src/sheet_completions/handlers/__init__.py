"""Handler layer for spreadsheet formulas.

Handlers depend on services (business logic), not directly on
repositories, except when wiring the default stack in ``create()``.

Architecture:
    Handler   -> Service    -> Repository
    (Formula) -> (Pipeline) -> (Transport / Cache / Credentials)
"""

from .sheet_functions import API_KEY_PROPERTY, SheetFunctions

__all__ = [
    "API_KEY_PROPERTY",
    "SheetFunctions",
]
