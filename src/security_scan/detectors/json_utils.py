"""JSON extraction utilities for language model responses."""

import re

_FENCE_PATTERN = re.compile(
    r"^```[ \t]*(?:json)?[ \t]*\n?(.*?)\n?```$", re.DOTALL | re.IGNORECASE
)


def strip_code_fence(llm_response: str) -> str:
    """Remove a surrounding markdown code fence from a model response.

    Models often wrap JSON in ```json ... ``` blocks even when told not to.
    Text that is not fenced is returned stripped but otherwise unchanged.

    Args:
        llm_response: Raw response from the model

    Returns:
        The fenced body, or the whole response when there is no fence

    """
    cleaned = llm_response.strip()
    fence_match = _FENCE_PATTERN.match(cleaned)
    if fence_match:
        return fence_match.group(1).strip()
    return cleaned
