from __future__ import annotations
import base64
from typing import Optional
from jinja2 import Template
from adapters.adapter_types import ExtractedInvoiceData, InvoiceDocument
from ledger_engine.config import EngineConfig
from ledger_engine.errors import ConfigError
from .client import GeminiClient
from .parser import parse_extraction
from .requests import TEMPLATE_DIR, TEMPLATES
from .validators import ensure_candidate_text

# Structured-output schema sent with every request (Gemini OpenAPI subset)
RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "sellerName": {"type": "STRING"},
        "invoiceNumber": {"type": "STRING"},
        "invoiceDate": {"type": "STRING", "description": "YYYY-MM-DD format"},
        "subtotal": {"type": "NUMBER", "description": "Total before tax"},
        "cgstAmount": {"type": "NUMBER", "description": "CGST amount"},
        "sgstAmount": {"type": "NUMBER", "description": "SGST amount"},
        "totalAmount": {"type": "NUMBER", "description": "Grand total after tax"},
        "lineItems": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "itemDescription": {"type": "STRING"},
                    "hsnCode": {"type": "STRING"},
                    "quantity": {"type": "NUMBER"},
                    "rate": {"type": "NUMBER"},
                },
                "required": ["itemDescription", "hsnCode", "quantity", "rate"],
            },
        },
    },
    "required": [
        "sellerName", "invoiceNumber", "invoiceDate", "subtotal",
        "cgstAmount", "sgstAmount", "totalAmount", "lineItems",
    ],
}


def render_prompt(date_format: str = "YYYY-MM-DD", currency_symbol: str = "₹") -> str:
    template_str = (TEMPLATE_DIR / TEMPLATES["invoice_extraction"]).read_text(encoding="utf-8")
    return Template(template_str).render(date_format=date_format, currency_symbol=currency_symbol)


def build_request(document: InvoiceDocument, prompt: str) -> dict:
    return {
        "contents": [{
            "parts": [
                {
                    "inlineData": {
                        "mimeType": document.mime_type,
                        "data": base64.b64encode(document.data).decode("ascii"),
                    }
                },
                {"text": prompt},
            ]
        }],
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": RESPONSE_SCHEMA,
        },
    }


class GeminiInvoiceExtractor:
    """ExtractionService backed by Gemini. One ``extract`` call is one attempt."""

    def __init__(self, config: Optional[EngineConfig] = None, client: Optional[GeminiClient] = None):
        self.config = config or EngineConfig.from_env()
        if client is None and not self.config.gemini_api_key:
            raise ConfigError("GEMINI_API_KEY is required for invoice extraction")
        self.client = client or GeminiClient(
            api_key=self.config.gemini_api_key,
            model=self.config.gemini_model,
            base_url=self.config.gemini_base_url,
            timeout=self.config.request_timeout,
        )
        self.prompt = render_prompt()

    def extract(self, document: InvoiceDocument) -> ExtractedInvoiceData:
        payload = self.client.generate_content(build_request(document, self.prompt))
        return parse_extraction(ensure_candidate_text(payload))

    def close(self):
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
