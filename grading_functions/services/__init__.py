"""
Grading Functions Services
==========================

Business logic for the extraction endpoints.

Services:
- extraction_service: rubric and submission pipelines
- vision_client / google_auth: Google Cloud Vision OCR
- record_store: Supabase writes
"""

# Services are imported directly when needed to avoid circular imports
# Example: from grading_functions.services.extraction_service import RubricExtractionService

__all__ = [
    'extraction_service',
    'vision_client',
    'google_auth',
    'record_store',
]
