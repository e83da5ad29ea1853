"""
Configuration management for the ledger engine.

Loads settings from environment variables (and a local .env file) with
sensible defaults.
"""
from __future__ import annotations
import os
from dataclasses import dataclass, field
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


def _env_float(name: str, default: str) -> float:
    try:
        return float(os.getenv(name, default))
    except (TypeError, ValueError):
        return float(default)


def _env_int(name: str, default: str) -> int:
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return int(default)


@dataclass
class EngineConfig:
    """Configuration settings for report derivation and invoice import."""

    # Company state used when the books snapshot does not carry one
    company_state: Optional[str] = field(
        default_factory=lambda: os.getenv("COMPANY_STATE") or None
    )

    # GST rate applied to line items whose stock item is unknown or has no rate
    default_gst_rate: float = field(
        default_factory=lambda: _env_float("DEFAULT_GST_RATE", "18")
    )

    # Extraction service (Gemini REST API)
    gemini_api_key: str = field(default_factory=lambda: os.getenv("GEMINI_API_KEY", ""))
    gemini_model: str = field(
        default_factory=lambda: os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    )
    gemini_base_url: str = field(
        default_factory=lambda: os.getenv(
            "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
        )
    )

    # Extraction batch settings
    request_timeout: int = field(
        default_factory=lambda: _env_int("EXTRACTION_TIMEOUT", "120")
    )
    retry_attempts: int = field(
        default_factory=lambda: _env_int("EXTRACTION_RETRY_ATTEMPTS", "3")
    )
    retry_delay: float = field(
        default_factory=lambda: _env_float("EXTRACTION_RETRY_DELAY", "1.0")
    )
    max_workers: int = field(
        default_factory=lambda: _env_int("EXTRACTION_MAX_WORKERS", "1")
    )

    # Logging
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_file: Optional[str] = field(
        default_factory=lambda: os.getenv("LEDGER_ENGINE_LOG_FILE")
    )

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Create config from environment variables."""
        return cls()

    def validate(self, require_extraction: bool = False) -> list[str]:
        """Validate configuration and return list of errors."""
        errors = []
        if self.default_gst_rate < 0:
            errors.append("DEFAULT_GST_RATE must not be negative")
        if self.retry_attempts < 1:
            errors.append("EXTRACTION_RETRY_ATTEMPTS must be at least 1")
        if self.retry_delay < 0:
            errors.append("EXTRACTION_RETRY_DELAY must not be negative")
        if self.max_workers < 1:
            errors.append("EXTRACTION_MAX_WORKERS must be at least 1")
        if require_extraction:
            if not self.gemini_api_key:
                errors.append("GEMINI_API_KEY is required")
            if not self.gemini_base_url:
                errors.append("GEMINI_BASE_URL is required")
        return errors
