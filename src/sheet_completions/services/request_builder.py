"""Turn raw cell content into a normalized completion request."""

from sheet_completions.entities import NormalizedRequest
from sheet_completions.services.cache_keys import stringify


def clean_value(value: object) -> str:
    """Coerce a cell value to trimmed text.

    None becomes empty text, numbers are stringified as displayed,
    anything else is converted with str() and stripped.
    """
    if value is None:
        return ""
    if isinstance(value, (bool, int, float)):
        return stringify(value)
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace").strip()
    return str(value).strip()


def coerce_max_tokens(value: object) -> int:
    """Accept ints and integral floats (spreadsheets pass numbers as floats).

    Raises:
        ValueError: If value is not a positive whole number
    """
    if isinstance(value, bool):
        raise ValueError(f"max_tokens must be a positive integer, got {value!r}")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int) or value <= 0:
        raise ValueError(f"max_tokens must be a positive integer, got {value!r}")
    return value


def coerce_temperature(value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"temperature must be a number, got {value!r}")
    return float(value)


def build_request(
    prompt: object,
    system_prompt: object,
    model: str,
    max_tokens: object,
    temperature: object,
) -> NormalizedRequest | None:
    """Build a NormalizedRequest, or None when the prompt cleans to empty.

    Returning None short-circuits the pipeline: no cache lookup and no
    external call is made for that cell.

    Args:
        prompt: Raw cell value
        system_prompt: Raw system instruction
        model: Model identifier
        max_tokens: Maximum generated tokens
        temperature: Sampling temperature

    Returns:
        The normalized request, or None for empty input

    Raises:
        ValueError: If max_tokens or temperature are invalid
    """
    cleaned = clean_value(prompt)
    if cleaned == "":
        return None

    return NormalizedRequest(
        prompt=cleaned,
        system_prompt=clean_value(system_prompt),
        model=clean_value(model),
        max_tokens=coerce_max_tokens(max_tokens),
        temperature=coerce_temperature(temperature),
    )
