"""
Google Cloud Vision OCR client.

Unlike PDF parsing, Vision failures are hard dependency failures and
propagate as ``VisionApiError``. Only "nothing detected" comes back as a
degraded placeholder.
"""
import base64
import logging

import requests

from ..errors import VisionApiError
from .google_auth import fetch_access_token
from .results import Extracted, Degraded

logger = logging.getLogger(__name__)

ANNOTATE_URL = "https://vision.googleapis.com/v1/images:annotate"
MAX_IMAGE_BYTES = 10 * 1024 * 1024  # Vision rejects larger inline images

NO_TEXT_DETECTED = "[No text detected in image]"
NO_RESPONSE = "[No response from Vision API]"

# Submissions carry guidance for the student along with the marker
SUBMISSION_IMAGE_PLACEHOLDERS = {
    "no_text": NO_TEXT_DETECTED + "\n\nThe image may not contain readable text, "
               "or the text may be too small/blurry to detect.",
    "no_response": NO_RESPONSE + "\n\nPlease try uploading the image again.",
}


def build_annotate_request(image):
    """Request body for DOCUMENT_TEXT_DETECTION on a single inline image."""
    return {
        "requests": [{
            "image": {"content": base64.b64encode(image).decode("ascii")},
            "features": [{
                "type": "DOCUMENT_TEXT_DETECTION",
                "maxResults": 1,
            }],
        }]
    }


def parse_annotate_response(payload):
    """Pull the transcript out of an images:annotate response body."""
    responses = payload.get("responses") or []
    if not responses:
        return Degraded(NO_RESPONSE, reason="no_response")

    response = responses[0]
    error = response.get("error")
    if error:
        message = error.get("message", "unknown error") if isinstance(error, dict) else str(error)
        raise VisionApiError(f"Vision API error: {message}")

    full_text = response.get("fullTextAnnotation")
    if full_text:
        return Extracted(full_text.get("text", ""))

    annotations = response.get("textAnnotations") or []
    if annotations:
        return Extracted(annotations[0].get("description", ""))

    return Degraded(NO_TEXT_DETECTED, reason="no_text")


class VisionClient:
    """Runs document text detection for one service account."""

    def __init__(self, account, session=None, timeout=30, token_provider=fetch_access_token):
        self.account = account
        # Without an injected session each call goes through requests' module API
        self.session = session or requests
        self.timeout = timeout
        self.token_provider = token_provider

    def access_token(self):
        return self.token_provider(self.account, session=self.session, timeout=self.timeout)

    def detect_document_text(self, image, token):
        """OCR ``image`` bytes using an already minted bearer ``token``."""
        try:
            response = self.session.post(
                ANNOTATE_URL,
                json=build_annotate_request(image),
                headers={"Authorization": f"Bearer {token}"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise VisionApiError(f"Google Vision API error: {e}")

        if not response.ok:
            raise VisionApiError(f"Google Vision API error: {response.text}", detail=response.text)

        try:
            payload = response.json()
        except ValueError as e:
            raise VisionApiError(f"Google Vision API returned invalid JSON: {e}")

        return parse_annotate_response(payload)

    def extract_text(self, image):
        """Mint a token and OCR ``image``. Oversized images are refused up front."""
        if len(image) > MAX_IMAGE_BYTES:
            size_mb = round(len(image) / 1024 / 1024)
            raise VisionApiError(
                f"Image too large ({size_mb}MB). Maximum size is 10MB. "
                "Please compress or resize the image."
            )

        token = self.access_token()
        logger.info("Extracting text from image (%d bytes) with Google Vision", len(image))
        return self.detect_document_text(image, token)
