from __future__ import annotations

from datetime import datetime, timezone

from flask import Blueprint, jsonify

from reflected.services.insight_service import InsightService

health_bp = Blueprint("health", __name__, url_prefix="/api")


@health_bp.get("/health")
def health_check():
    """Lightweight readiness endpoint; never calls the providers."""
    service = InsightService()
    return jsonify(
        {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "providers": {
                "groq": bool(service.groq_key),
                "huggingface": bool(service.hf_key),
            },
        }
    )
