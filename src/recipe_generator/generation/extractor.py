"""Extraction of structured data from raw provider text.

Models are told to return bare JSON but regularly wrap it in a markdown code
fence anyway. The extractor removes that wrapping and parses what remains.
It performs no semantic validation; that is the validator's job.
"""

import json
import re
from typing import Any

from recipe_generator.generation.errors import InvalidResponseFormat
from recipe_generator.utils.logger import logger


# ```json\n...\n```  or  ```\n...\n```  (language tag optional)
_FENCE_PATTERN = re.compile(r"```[A-Za-z0-9_+-]*[ \t]*\n?(.*?)\n?[ \t]*```", re.DOTALL)


def strip_code_fence(text: str) -> str:
    """Remove an enclosing markdown code fence, keeping inner content verbatim.

    Text that is not entirely wrapped in a single fence is returned unchanged.
    """
    match = _FENCE_PATTERN.fullmatch(text)
    if match:
        return match.group(1)
    return text


def extract_json(raw_text: str) -> dict[str, Any]:
    """Parse provider text into a JSON object.

    Steps:
    1. Trim surrounding whitespace
    2. Strip an enclosing code fence (with or without language tag)
    3. json.loads() the remainder

    Args:
        raw_text: Raw response text from the provider.

    Returns:
        dict: The parsed top-level JSON object.

    Raises:
        InvalidResponseFormat: If the text is empty, not valid JSON (malformed or
            truncated), or the top-level value is not an object.
    """
    text = (raw_text or "").strip()
    text = strip_code_fence(text)

    if not text:
        raise InvalidResponseFormat("AI returned an empty response")

    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError) as e:
        # Oversized integers raise a plain ValueError, deep nesting a RecursionError
        snippet = text.replace("\n", " ")
        snippet = (snippet[:200] + "...") if len(snippet) > 200 else snippet
        if isinstance(e, json.JSONDecodeError):
            logger.debug(f"JSON parse failed at line {e.lineno} col {e.colno}: {snippet}")
            reason = e.msg
        else:
            logger.debug(f"JSON parse failed ({type(e).__name__}): {snippet}")
            reason = f"{type(e).__name__}: {e}"
        raise InvalidResponseFormat(f"AI returned invalid JSON format: {reason}") from e

    if not isinstance(parsed, dict):
        raise InvalidResponseFormat(
            f"AI returned JSON {type(parsed).__name__}, expected an object"
        )

    return parsed
