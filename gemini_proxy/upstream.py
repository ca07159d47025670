import logging
from urllib.parse import quote

import requests

from gemini_proxy import config
from gemini_proxy.errors import UpstreamError

logger = logging.getLogger(__name__)


def generate_content_url(model: str) -> str:
    return f"{config.GEMINI_API_BASE.rstrip('/')}/models/{quote(model, safe='')}:generateContent"


def redact(text: str, api_key: str) -> str:
    return text.replace(api_key, "***") if api_key else text


def call_generate_content(model: str, body: dict, api_key: str):
    """
    POST a generateContent body to Gemini and return (status_code, json_body).

    Non-2xx responses are returned as-is. Transport failures raise
    UpstreamError with the key scrubbed from the message; non-JSON bodies
    raise ValueError.
    """
    url = generate_content_url(model)
    logger.debug("POST %s?key=***", url)
    try:
        resp = requests.post(
            url,
            params={"key": api_key},
            json=body,
            headers={"Content-Type": "application/json"},
            timeout=config.UPSTREAM_TIMEOUT,
        )
    except requests.RequestException as e:
        # requests puts the full URL, key included, in its messages
        raise UpstreamError(redact(str(e), api_key)) from None
    return resp.status_code, resp.json()
