import requests
from loguru import logger
from .validators import ExtractionHTTPError, ExtractionResponseError

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
    "User-Agent": "ledger-engine/0.1",
}


class GeminiClient:
    """
    Thin client for the Gemini generateContent REST endpoint.

    One call is one attempt; retries belong to the caller (see
    ``ledger_engine.ingest``), which tracks per-file attempts.
    """

    def __init__(self, api_key: str, model: str, base_url: str, timeout: int = 120):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update(DEFAULT_HEADERS)
        self.session.headers["x-goog-api-key"] = api_key

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def generate_content(self, body: dict) -> dict:
        """
        POST a generateContent request and return the decoded JSON response.

        Raises:
            ExtractionHTTPError: On connection failure, timeout or HTTP error status
            ExtractionResponseError: If the body is not JSON
        """
        try:
            r = self.session.post(self.endpoint, json=body, timeout=self.timeout)
            r.raise_for_status()
        except requests.Timeout as e:
            logger.error(f"Extraction request timed out after {self.timeout}s")
            raise ExtractionHTTPError(f"Request timeout: {e}") from e
        except requests.RequestException as e:
            logger.error(f"Extraction request failed: {e}")
            raise ExtractionHTTPError(f"Request failed: {e}") from e

        try:
            return r.json()
        except ValueError as e:
            raise ExtractionResponseError(f"Invalid JSON from extraction service: {e}") from e

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
