"""
Error taxonomy for the extraction pipelines.

Every error carries a ``kind`` tag. Routes collapse all of them into the
same HTTP 500 envelope, but the tag is logged so failures stay diagnosable.
PDF parse failures and "no text found" results are not errors; they come
back as degraded results instead.
"""


class ExtractionError(Exception):
    """Base class for pipeline failures."""

    kind = "extraction"

    def __init__(self, message, detail=None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def __str__(self):
        return self.message


class ValidationError(ExtractionError):
    """Required request fields are missing."""
    kind = "validation"


class FetchError(ExtractionError):
    """The source file could not be downloaded."""
    kind = "fetch"


class AuthExchangeError(ExtractionError):
    """A Vision API access token could not be minted."""
    kind = "auth_exchange"


class VisionApiError(ExtractionError):
    """The OCR call failed at transport or API level."""
    kind = "vision_api"


class PersistenceError(ExtractionError):
    """Writing the extracted text back to the database failed."""
    kind = "persistence"


class ConfigError(ExtractionError):
    """Environment configuration is present but unusable."""
    kind = "config"


def error_kind(error):
    """Return the kind tag for any exception ('internal' for unexpected ones)."""
    return getattr(error, "kind", "internal")
