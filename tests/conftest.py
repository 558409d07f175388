"""
Shared test fixtures for the extraction pipelines.
Zero network calls: HTTP sessions, Supabase and Vision are all fakes.
"""
from unittest.mock import MagicMock

import fitz
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from grading_functions.config import ExtractionConfig, ServiceAccount


def fake_response(status=200, content=b"", json_data=None, text=""):
    """Stand-in for a requests.Response."""
    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 300
    response.content = content
    response.text = text
    if json_data is None:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = json_data
    return response


def make_pdf(*page_texts):
    """Build PDF bytes with one page per entry ('' leaves the page blank)."""
    doc = fitz.open()
    for text in page_texts:
        page = doc.new_page()
        if text:
            page.insert_text((72, 72), text)
    data = doc.tobytes()
    doc.close()
    return data


class FakeStore:
    """Records writes instead of talking to Supabase."""

    def __init__(self, fail_with=None):
        self.updates = []
        self.fail_with = fail_with

    def mark_completed(self, record_id, extracted_text):
        if self.fail_with:
            raise self.fail_with
        self.updates.append((record_id, {"extracted_text": extracted_text, "status": "completed"}))

    def mark_failed(self, record_id, extracted_text):
        self.updates.append((record_id, {"extracted_text": extracted_text, "status": "failed"}))


@pytest.fixture(scope="session")
def rsa_key_pair():
    """(private PEM, public PEM) for signing test assertions."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()
    public_pem = key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()
    return private_pem, public_pem


@pytest.fixture
def service_account(rsa_key_pair):
    return ServiceAccount(
        client_email="ocr@grading-test.iam.gserviceaccount.com",
        private_key=rsa_key_pair[0],
    )


@pytest.fixture
def config():
    """Config with Supabase set and no OCR credential."""
    return ExtractionConfig(supabase_url="https://db.example.supabase.co", supabase_key="service-key")


@pytest.fixture
def ocr_config(config, service_account):
    config.service_account = service_account
    return config


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def serve_file(session):
    """Make session.get return ``data`` for any URL."""
    def _serve(data, status=200):
        session.get.return_value = fake_response(status=status, content=data)
        return session
    return _serve
