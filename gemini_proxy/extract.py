import json
import logging

logger = logging.getLogger(__name__)

# Checked in order, first non-null value wins.
TEXT_PATHS = (
    ("text",),
    ("output", 0, "content", 0, "text"),
    ("candidates", 0, "content", 0, "text"),
)


def _dig(data, path):
    """Follow a key/index path, returning None on any missing or mistyped step."""
    current = data
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list) or len(current) <= step:
                return None
        elif not isinstance(current, dict):
            return None
        current = current[step] if isinstance(step, int) else current.get(step)
        if current is None:
            return None
    return current


def find_text(data):
    for path in TEXT_PATHS:
        value = _dig(data, path)
        if value is not None:
            return value
    return None


def parse_json_text(text):
    """Parse text that looks like a JSON object or array, else return None."""
    if not isinstance(text, str):
        return None
    trimmed = text.strip()
    if not trimmed.startswith(("{", "[")):
        return None
    try:
        return json.loads(trimmed)
    except ValueError:
        logger.debug("Model text looked like JSON but did not parse")
        return None


def extract_gemini_output(data) -> dict:
    """
    Best-effort extraction of the model's text from a Gemini response.

    Response shapes differ between models and generation configs, so this
    never raises: anything it cannot find comes back as None.
    Returns {"raw": data, "text": str | None, "parsed": object | None}.
    """
    text = find_text(data)
    return {"raw": data, "text": text, "parsed": parse_json_text(text)}
