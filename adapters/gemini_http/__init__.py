"""Invoice extraction through the Gemini REST API."""
from .adapter import GeminiInvoiceExtractor
from .client import GeminiClient
from .validators import ExtractionHTTPError, ExtractionResponseError

__all__ = [
    "GeminiInvoiceExtractor",
    "GeminiClient",
    "ExtractionHTTPError",
    "ExtractionResponseError",
]
