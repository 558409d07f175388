"""
Configuration management for the grading functions.
"""
import os
import logging
import json
from dotenv import load_dotenv

from .errors import ConfigError

logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()

# Tables touched by the extraction pipelines
DEFAULT_RUBRICS_TABLE = "rubrics"
DEFAULT_SUBMISSIONS_TABLE = "submissions"
DEFAULT_HTTP_TIMEOUT = 30.0

# Server configuration
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class ServiceAccount:
    """Google service account credential used to mint Vision API tokens."""

    def __init__(self, client_email, private_key, token_uri=None):
        self.client_email = client_email
        self.private_key = private_key
        self.token_uri = token_uri

    @classmethod
    def from_json(cls, raw):
        """Parse the JSON blob Google hands out for a service account."""
        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"GOOGLE_SERVICE_ACCOUNT_JSON is not valid JSON: {e}")

        if not isinstance(data, dict):
            raise ConfigError("GOOGLE_SERVICE_ACCOUNT_JSON must be a JSON object")

        missing = [k for k in ("client_email", "private_key") if not data.get(k)]
        if missing:
            raise ConfigError(f"GOOGLE_SERVICE_ACCOUNT_JSON is missing: {', '.join(missing)}")

        return cls(
            client_email=data["client_email"],
            private_key=data["private_key"],
            token_uri=data.get("token_uri"),
        )

    def __repr__(self):
        return f"ServiceAccount(client_email={self.client_email!r})"


class ExtractionConfig:
    """Settings handed to the extraction services at construction."""

    def __init__(self, supabase_url="", supabase_key="", service_account=None,
                 rubrics_table=DEFAULT_RUBRICS_TABLE, submissions_table=DEFAULT_SUBMISSIONS_TABLE,
                 http_timeout=DEFAULT_HTTP_TIMEOUT, service_account_error=None):
        self.supabase_url = supabase_url
        self.supabase_key = supabase_key
        self.service_account = service_account
        self.service_account_error = service_account_error
        self.rubrics_table = rubrics_table
        self.submissions_table = submissions_table
        self.http_timeout = http_timeout

    @classmethod
    def from_env(cls):
        """Build a config from the process environment (and .env)."""
        # Google Cloud Vision is optional - simulated OCR when missing.
        # A malformed credential only fails image extractions.
        account = None
        account_error = None
        raw_account = os.getenv("GOOGLE_SERVICE_ACCOUNT_JSON", "")
        if raw_account.strip():
            try:
                account = ServiceAccount.from_json(raw_account)
            except ConfigError as e:
                logger.error("Ignoring Google service account: %s", e)
                account_error = str(e)

        return cls(
            supabase_url=os.getenv("SUPABASE_URL", ""),
            supabase_key=os.getenv("SUPABASE_SERVICE_ROLE_KEY") or os.getenv("SUPABASE_SERVICE_KEY", ""),
            service_account=account,
            rubrics_table=os.getenv("RUBRICS_TABLE", DEFAULT_RUBRICS_TABLE),
            submissions_table=os.getenv("SUBMISSIONS_TABLE", DEFAULT_SUBMISSIONS_TABLE),
            http_timeout=float(os.getenv("HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT)),
            service_account_error=account_error,
        )

    @property
    def ocr_configured(self):
        return self.service_account is not None

    def to_dict(self):
        return {
            "supabase_url": self.supabase_url,
            "ocr_configured": self.ocr_configured,
            "ocr_error": self.service_account_error,
            "rubrics_table": self.rubrics_table,
            "submissions_table": self.submissions_table,
            "http_timeout": self.http_timeout,
        }
