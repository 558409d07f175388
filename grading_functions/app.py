#!/usr/bin/env python3
"""
Grading Functions - rubric and submission text extraction
=========================================================
Run: python3 -m grading_functions.app
Then POST to: http://localhost:3000/extract-rubric-text
"""
import logging

from flask import Flask
from flask_cors import CORS

from .config import ExtractionConfig, HOST, PORT, LOG_LEVEL
from .routes import register_routes
from .services.extraction_service import RubricExtractionService, SubmissionExtractionService

CORS_HEADERS = ['authorization', 'x-client-info', 'apikey', 'content-type']


def configure_logging(level=LOG_LEVEL):
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(config=None, rubric_service=None, submission_service=None):
    """Build the Flask app. Services default to ones built from ``config``."""
    config = config or ExtractionConfig.from_env()

    app = Flask(__name__)
    CORS(app, origins='*', send_wildcard=True, allow_headers=CORS_HEADERS)

    # Services keep one requests.Session per worker thread
    app.extensions['grading_functions'] = {
        'config': config,
        'rubric': rubric_service or RubricExtractionService.from_config(config),
        'submission': submission_service or SubmissionExtractionService.from_config(config),
    }

    register_routes(app)
    return app


if __name__ == '__main__':
    configure_logging()
    create_app().run(host=HOST, port=PORT)
