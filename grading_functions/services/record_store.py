"""
Supabase persistence for extraction results.
"""
import logging

from supabase import create_client, Client

from ..errors import PersistenceError, ConfigError

logger = logging.getLogger(__name__)

COMPLETED = "completed"
FAILED = "failed"
PROCESSING = "processing"


class RecordStore:
    """Updates ``extracted_text``/``status`` on rows of one Supabase table."""

    def __init__(self, table, client=None, url=None, key=None):
        self.table = table
        self._client = client
        self._url = url
        self._key = key

    @property
    def client(self) -> Client:
        """Get or create the Supabase client."""
        if self._client is None:
            if not self._url or not self._key:
                raise ConfigError(
                    "Supabase credentials not configured. "
                    "Check SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY in .env"
                )
            self._client = create_client(self._url, self._key)
        return self._client

    def update(self, record_id, fields):
        try:
            self.client.table(self.table).update(fields).eq('id', record_id).execute()
        except ConfigError:
            raise
        except Exception as e:
            raise PersistenceError(f"Failed to update {self.table} {record_id}: {e}")

    def mark_completed(self, record_id, extracted_text):
        self.update(record_id, {"extracted_text": extracted_text, "status": COMPLETED})
        logger.info("Saved extracted text for %s %s (%d chars)", self.table, record_id, len(extracted_text))

    def mark_failed(self, record_id, extracted_text):
        self.update(record_id, {"extracted_text": extracted_text, "status": FAILED})
        logger.info("Marked %s %s as failed", self.table, record_id)
