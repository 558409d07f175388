"""
Word, plain-text and fallback extractors for student submissions.
"""
import io
import re
import logging

from docx import Document
from docx.table import Table
from docx.text.paragraph import Paragraph

from .results import Extracted, Degraded

logger = logging.getLogger(__name__)

_CONTROL_CHARS = re.compile(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]')

SUPPORTED_FORMATS_HELP = (
    "Supported formats:\n"
    "- PDF documents (.pdf)\n"
    "- Word documents (.docx, .doc)\n"
    "- Images (.jpg, .jpeg, .png, .gif, .bmp, .webp) - requires OCR\n"
    "- Plain text (.txt, .md)"
)


def sanitize_text(text):
    """Drop NUL and control characters (tabs and newlines survive), then trim."""
    if not text:
        return ''
    return _CONTROL_CHARS.sub('', text).strip()


def _docx_lines(data):
    doc = Document(io.BytesIO(data))
    lines = []
    for element in doc.element.body:
        if element.tag.endswith('}p'):
            para = Paragraph(element, doc)
            if para.text.strip():
                lines.append(para.text)
        elif element.tag.endswith('}tbl'):
            table = Table(element, doc)
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if cells:
                    lines.append(' | '.join(cells))
    return lines


def extract_docx_text(data):
    """Extract paragraphs and table rows from a Word document, in body order."""
    try:
        lines = _docx_lines(data)
    except Exception as e:
        logger.error("DOCX parsing error: %s", e)
        return Degraded(
            f"[DOCX EXTRACTION FAILED]\n\nError: {e}\n\n"
            "This DOCX file may be:\n"
            "- Corrupted or incomplete\n"
            "- Password protected\n"
            "- Created with an incompatible version\n\n"
            "Please try:\n"
            "1. Opening and re-saving the file in Microsoft Word\n"
            "2. Converting to PDF format\n"
            "3. Copying text into a plain text (.txt) file",
            reason="parse_error",
        )

    text = '\n'.join(lines)
    if not text.strip():
        return Degraded(
            "[DOCX Processed - No Text Found]\n\n"
            "The document appears to be empty or contains only formatting/images.\n\n"
            "Please verify the document contains actual text content.",
            reason="no_text",
        )
    return Extracted(f"[DOCX TEXT EXTRACTION]\n\n{text}")


def extract_plain_text(data):
    """Decode a UTF-8 text file."""
    try:
        text = data.decode('utf-8')
    except UnicodeDecodeError:
        return Degraded(
            "[Text File Error]\n\nCould not decode text file. It may use an unsupported encoding.",
            reason="decode_error",
        )

    if not text.strip():
        return Degraded("[Empty File]\n\nThe text file appears to be empty.", reason="no_text")
    return Extracted(f"[TEXT FILE CONTENT]\n\n{text}")


def extract_unknown(data, file_name, extension):
    """Best-effort read of a file with an unrecognised extension."""
    label = extension.upper() if extension else 'Unknown'
    unsupported = Degraded(
        f"[Unsupported File Type]\n\nFile: {file_name}\nType: {label}\n\n"
        "This file type is not supported for text extraction.\n\n"
        f"{SUPPORTED_FORMATS_HELP}\n\n"
        f"Your file type: {label}\n\n"
        "Please convert your file to one of the supported formats and try again.",
        reason="unsupported_type",
    )

    try:
        text = data.decode('utf-8')
    except UnicodeDecodeError:
        return unsupported

    if '�' in text or '\x00' in text or not text.strip():
        return unsupported
    return Extracted(f"[Text Extraction Attempt]\n\n{text}")
