"""Deterministic cache keys for completion requests."""

import hashlib


def stringify(value: object) -> str:
    """Render a key field the way a spreadsheet displays it.

    Integral floats drop the trailing ``.0`` so ``0`` and ``0.0`` (or ``150``
    and ``150.0``) produce the same key.
    """
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def derive_cache_key(
    prompt: str,
    model: str,
    max_tokens: int,
    temperature: float,
    system_prompt: str | None = None,
) -> str:
    """Return the SHA-1 hex digest of the request fields.

    Fields are concatenated in a fixed order: prompt, model, max_tokens,
    temperature, then system_prompt when given. No salt, so keys are stable
    across processes and shared between users.

    Args:
        prompt: Cleaned user prompt
        model: Model identifier
        max_tokens: Maximum generated tokens
        temperature: Sampling temperature
        system_prompt: Only passed when the key includes the system prompt

    Returns:
        40-character lowercase hex digest
    """
    fields = [prompt, model, max_tokens, temperature]
    if system_prompt is not None:
        fields.append(system_prompt)
    payload = "".join(stringify(field) for field in fields)
    return hashlib.sha1(payload.encode("utf-8")).hexdigest()
