"""
Text extraction API routes.
Turns uploaded rubric and submission files into text stored in Supabase.
"""
import logging
from flask import Blueprint, request, jsonify, current_app

from ..errors import error_kind

logger = logging.getLogger(__name__)

extraction_bp = Blueprint('extraction', __name__)


def _services():
    return current_app.extensions['grading_functions']


def _failure(error, label):
    logger.error("%s error: %s", label, error, extra={"error_kind": error_kind(error)})
    return jsonify({"success": False, "error": str(error)}), 500


@extraction_bp.route('/extract-rubric-text', methods=['POST'])
def extract_rubric_text():
    """Extract text from an uploaded rubric (PDF or image) and save it on the rubric."""
    data = request.get_json(silent=True) or {}

    try:
        outcome = _services()['rubric'].run(data.get('fileUrl'), data.get('rubricId'))
        return jsonify({
            "success": True,
            "extractedText": outcome.text,
            "message": "Rubric extraction completed successfully",
        })
    except Exception as e:
        return _failure(e, "Rubric extraction")


@extraction_bp.route('/extract-text', methods=['POST'])
def extract_submission_text():
    """Extract text from a student submission and save it on the submission."""
    data = request.get_json(silent=True) or {}

    try:
        outcome = _services()['submission'].run(data.get('fileUrl'), data.get('submissionId'))
        return jsonify({
            "success": True,
            "extractedText": outcome.text,
            "fileType": outcome.category.value,
            "message": "Text extraction completed successfully",
        })
    except Exception as e:
        return _failure(e, "Text extraction")


@extraction_bp.route('/health')
def health():
    config = _services()['config']
    return jsonify({"status": "ok", "ocr_configured": config.ocr_configured})
