from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from reflected.services.insight_service import (
    InsightGenerationError,
    InsightService,
    ProvidersNotConfiguredError,
)
from reflected.utils.validation import ValidationError, validate_answer

insight_bp = Blueprint("insight", __name__, url_prefix="/api")


@insight_bp.post("/insight")
def create_insight():
    """
    POST /api/insight
    Body: { "answer": string }

    Returns { "report": string } or { "error": string } with 400/500.
    """
    data = request.get_json(silent=True) or {}

    try:
        answer = validate_answer(data, current_app.config.get("MIN_ANSWER_LENGTH", 10))
    except ValidationError as err:
        return jsonify({"error": str(err)}), 400

    service = InsightService()
    try:
        result = service.generate_report(answer)
    except (ProvidersNotConfiguredError, InsightGenerationError) as err:
        return jsonify({"error": str(err)}), 500

    return jsonify(result.to_dict()), 200
