from __future__ import annotations
import re
from adapters.adapter_types import ExtractionError


class ExtractionHTTPError(ExtractionError):
    """Transport-level failure talking to the extraction service."""
    pass


class ExtractionResponseError(ExtractionError):
    """The service answered, but not with usable invoice data."""
    pass


_FENCE = re.compile(r"^\s*```(?:json)?\s*(.*?)\s*```\s*$", re.DOTALL | re.IGNORECASE)

# finishReason values that still carry a complete answer
_OK_FINISH = {None, "", "STOP", "FINISH_REASON_UNSPECIFIED"}


def sanitize_json_text(text: str) -> str:
    """
    Strip markdown code fences and a byte-order mark from a model answer.
    The schema request usually yields bare JSON, but not always.
    """
    text = (text or "").lstrip("\ufeff").strip()
    m = _FENCE.match(text)
    if m:
        text = m.group(1)
    return text


def ensure_candidate_text(payload: dict) -> str:
    """
    Return the text of the first candidate of a generateContent response.
    Raises ExtractionResponseError if the prompt was blocked, there is no
    candidate, the candidate stopped abnormally, or it carries no text.
    """
    if not isinstance(payload, dict):
        raise ExtractionResponseError("Response is not a JSON object")

    feedback = payload.get("promptFeedback") or {}
    if feedback.get("blockReason"):
        raise ExtractionResponseError(f"Prompt blocked: {feedback['blockReason']}")

    candidates = payload.get("candidates") or []
    if not candidates:
        raise ExtractionResponseError("Response has no candidates")

    candidate = candidates[0] or {}
    finish = candidate.get("finishReason")
    if finish not in _OK_FINISH:
        raise ExtractionResponseError(f"Generation stopped early: {finish}")

    parts = (candidate.get("content") or {}).get("parts") or []
    text = "".join(p.get("text", "") for p in parts if isinstance(p, dict))
    if not text.strip():
        raise ExtractionResponseError("Response candidate carries no text")
    return text
