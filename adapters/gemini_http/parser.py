from __future__ import annotations
import json
from pydantic import ValidationError
from adapters.adapter_types import ExtractedInvoiceData
from .validators import ExtractionResponseError, sanitize_json_text


def parse_extraction(text: str) -> ExtractedInvoiceData:
    """
    Parse the model's JSON answer into ExtractedInvoiceData.

    Field values are coerced leniently (missing -> default, "2Nos" -> 2);
    only an answer that is not a JSON object at all is rejected.
    """
    cleaned = sanitize_json_text(text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ExtractionResponseError(f"Answer is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ExtractionResponseError(f"Answer is a JSON {type(data).__name__}, expected an object")
    try:
        return ExtractedInvoiceData.model_validate(data)
    except ValidationError as e:
        raise ExtractionResponseError(f"Answer does not match the invoice schema: {e}") from e
