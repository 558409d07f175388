"""
Grading Functions Package
=========================

Flask backend that extracts text from rubric and submission uploads for
the AI grading assistant.

Structure:
- routes/: API route blueprints
- services/: Extraction pipelines, OCR and Supabase clients
- config.py: Configuration management
- errors.py: Error taxonomy
"""

from .config import ExtractionConfig, ServiceAccount

__version__ = "1.0.0"

__all__ = ['ExtractionConfig', 'ServiceAccount']
