"""
File type detection by extension.
"""
from enum import Enum
from urllib.parse import urlsplit, unquote


class FileCategory(Enum):
    PDF = "pdf"
    IMAGE = "image"
    DOCX = "docx"
    TEXT = "text"
    UNSUPPORTED = "other"


IMAGE_EXTENSIONS = ('jpg', 'jpeg', 'png', 'gif', 'bmp', 'webp')
DOCX_EXTENSIONS = ('docx', 'doc')
TEXT_EXTENSIONS = ('txt', 'text', 'md')


def file_name_from_url(file_url):
    """Last path segment of a URL, ignoring any query string or fragment."""
    path = urlsplit(file_url or '').path
    return unquote(path.rstrip('/').split('/')[-1]) if path else ''


def file_extension(file_name):
    """Lower-cased text after the last '.', or '' when there is none."""
    name = (file_name or '').split('/')[-1]
    if '.' not in name:
        return ''
    return name.rsplit('.', 1)[-1].lower()


def classify(file_name):
    """Map a file name onto the category of extractor that handles it."""
    ext = file_extension(file_name)
    if ext == 'pdf':
        return FileCategory.PDF
    if ext in IMAGE_EXTENSIONS:
        return FileCategory.IMAGE
    if ext in DOCX_EXTENSIONS:
        return FileCategory.DOCX
    if ext in TEXT_EXTENSIONS:
        return FileCategory.TEXT
    return FileCategory.UNSUPPORTED


def classify_rubric(file_name):
    """Rubrics are only read from PDFs and images; everything else is unsupported."""
    category = classify(file_name)
    if category in (FileCategory.PDF, FileCategory.IMAGE):
        return category
    return FileCategory.UNSUPPORTED
