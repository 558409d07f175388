"""
Grading Functions API Routes
============================

Route blueprints for the extraction service.

Usage:
    from grading_functions.routes import register_routes
    register_routes(app)
"""
from .extraction_routes import extraction_bp


def register_routes(app):
    """Register all route blueprints with the Flask app."""
    app.register_blueprint(extraction_bp)


__all__ = [
    'register_routes',
    'extraction_bp',
]
