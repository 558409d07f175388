"""
PDF text extraction using PyMuPDF.

Malformed PDFs never abort a pipeline: parse errors come back as a
``Degraded`` placeholder so the record is still marked completed.
"""
import logging

import fitz  # PyMuPDF

from .results import Extracted, Degraded

logger = logging.getLogger(__name__)

RUBRIC = "rubric"
SUBMISSION = "submission"

_NO_TEXT_HELP = (
    "\n\nPossible reasons:\n"
    "- The PDF contains only images/scans\n"
    "- The PDF is encrypted or protected\n"
    "- The text is embedded as images\n\n"
    "Recommendation: Convert PDF pages to images (JPG/PNG) and upload for OCR processing."
)

_FAILED_HELP = (
    "\n\nThis PDF may be:\n"
    "- Password protected\n"
    "- Corrupted\n"
    "- Using an unsupported format\n\n"
    "Please try:\n"
    "1. Converting to images (JPG/PNG) for OCR\n"
    "2. Saving as a different PDF version\n"
    "3. Ensuring the file is not password protected"
)


def read_pdf(data):
    """Return (text, page_count) for PDF bytes. Raises on unparseable input."""
    doc = fitz.open(stream=data, filetype="pdf")
    try:
        pages = [page.get_text() for page in doc]
    finally:
        doc.close()
    return "\n\n".join(pages).strip(), len(pages)


def extract_pdf_text(data, style=RUBRIC):
    """Extract text from PDF bytes, annotated with the page count."""
    try:
        text, page_count = read_pdf(data)
    except Exception as e:
        logger.error("PDF parsing error: %s", e)
        message = f"[PDF TEXT EXTRACTION FAILED]\n\nError: {e}"
        if style == SUBMISSION:
            message += _FAILED_HELP
        return Degraded(message, reason="parse_error")

    if not text:
        if style == SUBMISSION:
            return Degraded(
                f"[PDF Processed - No Text Found]\n\nThis PDF has {page_count} page(s) "
                f"but no extractable text was found.{_NO_TEXT_HELP}",
                reason="no_text",
            )
        return Degraded(
            f"[PDF Processed - No Text Found]\n\nThis PDF has {page_count} page(s) "
            "but no extractable text.",
            reason="no_text",
        )

    if style == SUBMISSION:
        return Extracted(f"[PDF TEXT EXTRACTION]\n\nPages: {page_count}\n\n{text}")
    return Extracted(f"[RUBRIC - {page_count} page(s)]\n\n{text}")
