import logging

from gemini_proxy import config
from gemini_proxy.errors import ValidationError
from gemini_proxy.extract import extract_gemini_output
from gemini_proxy.upstream import call_generate_content

logger = logging.getLogger(__name__)

GENERATE_TEMPERATURE = 0.2
ANALYZE_TEMPERATURE = 0.05

PURCHASE_ORDER_PROMPT = """Analyze this Purchase Order. Extract ONLY these fields (return JSON matching the schema if possible):
- customerInternalId
- customerRequestDate
- poNumber
- shipToSelect
- lineItems (array of { item, quantity })

Return a pure JSON object only."""


class ProxyResult:
    """Upstream status plus the envelope returned to the caller."""

    def __init__(self, status: int, raw):
        self.status = status
        self.raw = raw
        self.extracted = extract_gemini_output(raw)

    def to_dict(self) -> dict:
        return {"status": self.status, "extracted": self.extracted, "raw": self.raw}


# ----------------------
# Request building
# ----------------------
def _model_from(payload: dict) -> str:
    model = payload.get("model")
    if model is None:
        return config.DEFAULT_MODEL
    if not isinstance(model, str) or not model.strip():
        raise ValidationError("'model' must be a non-empty string.")
    return model


def build_generate_body(prompt: str) -> dict:
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": {"temperature": GENERATE_TEMPERATURE},
    }


def normalize_text_parts(text_parts) -> list:
    """Turn a mix of strings and {"text": ...} objects into text parts."""
    if not isinstance(text_parts, list):
        return []
    normalized = []
    for index, part in enumerate(text_parts):
        if isinstance(part, str):
            normalized.append({"text": part})
        elif isinstance(part, dict) and "text" in part:
            normalized.append({"text": part["text"]})
        else:
            raise ValidationError(
                f"textParts[{index}] must be a string or an object with a 'text' field."
            )
    return normalized


def build_analyze_body(file_base64: str, mime_type: str, text_parts=None, response_schema=None) -> dict:
    # order matters: caller text, then the extraction prompt, then the document
    parts = normalize_text_parts(text_parts or [])
    parts.append({"text": PURCHASE_ORDER_PROMPT})
    parts.append({"inlineData": {"mimeType": mime_type, "data": file_base64}})

    generation_config = {"responseMimeType": "application/json"}
    if response_schema:
        generation_config["responseSchema"] = response_schema
    generation_config["temperature"] = ANALYZE_TEMPERATURE

    return {"contents": [{"parts": parts}], "generationConfig": generation_config}


# ----------------------
# Operations
# ----------------------
def generate(payload: dict, api_key: str) -> ProxyResult:
    """Forward a single text prompt to Gemini."""
    prompt = payload.get("prompt")
    if not prompt or not isinstance(prompt, str):
        raise ValidationError("Missing 'prompt' string in request body.")
    model = _model_from(payload)

    status, data = call_generate_content(model, build_generate_body(prompt), api_key)
    logger.info("generate model=%s -> status %s", model, status)
    return ProxyResult(status, data)


def analyze_document(payload: dict, api_key: str) -> ProxyResult:
    """
    Send a base64 document plus optional text parts to Gemini and ask for
    the purchase-order fields back as JSON.
    """
    file_base64 = payload.get("fileBase64")
    mime_type = payload.get("mimeType")
    if not file_base64 or not mime_type:
        raise ValidationError("Missing fileBase64 or mimeType in request body.")
    if not isinstance(file_base64, str) or not isinstance(mime_type, str):
        raise ValidationError("fileBase64 and mimeType must be strings.")
    model = _model_from(payload)

    body = build_analyze_body(
        file_base64,
        mime_type,
        text_parts=payload.get("textParts"),
        response_schema=payload.get("responseSchema"),
    )
    status, data = call_generate_content(model, body, api_key)
    # never log the document itself
    logger.info(
        "analyzeDocument model=%s mimeType=%s size=%d -> status %s",
        model, mime_type, len(file_base64), status,
    )
    return ProxyResult(status, data)
