"""HTTP entrypoint that scores a lead by proximity (Cloud Run friendly)."""

from __future__ import annotations

import hmac
import logging
import os
from typing import Any

from flask import Flask, jsonify, request

from lead_proximity.core.config import get_settings
from lead_proximity.core.errors import GeocodeError, InputError, LeadScoringError, ProviderError, StoreError
from lead_proximity.core.orchestrator import LeadScorer

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

# ---------- App ----------
app = Flask(__name__)

_ERROR_STATUS = {
    InputError: 400,
    GeocodeError: 422,
    ProviderError: 502,
    StoreError: 502,
}


@app.after_request
def add_cors_headers(response):
    response.headers["Access-Control-Allow-Origin"] = "*"
    return response


# ---------- Routes ----------


@app.get("/")
def root() -> Any:
    """Simple root to avoid 404 on GET /"""
    return "ok", 200


@app.get("/healthz")
def healthcheck() -> Any:
    """Lightweight health endpoint; reads settings but calls no upstream service."""
    settings = get_settings()
    return (
        jsonify(
            {
                "status": "ok",
                "pools": [pool.label for pool in settings.pools],
                "revision": os.getenv("K_REVISION", "unknown"),
            }
        ),
        200,
    )


@app.route("/score", methods=["POST", "OPTIONS"])
def score_lead() -> Any:
    """
    Score a lead address against the candidate pools.
    Required JSON fields: student_address
    Optional: student_record_id (echoed back)
    """
    if request.method == "OPTIONS":
        response = app.make_response(("", 204))
        response.headers["Access-Control-Allow-Methods"] = "POST"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type, Authorization"
        return response

    settings = get_settings()
    if not _authorized(request.headers.get("Authorization", ""), settings.auth_secret):
        return jsonify({"error": "Unauthorized"}), 401

    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        payload = {}
    address = payload.get("student_address")
    record_id = payload.get("student_record_id")

    try:
        result = LeadScorer(settings).score_lead(address, lead_record_id=record_id)
    except LeadScoringError as exc:
        status_code = _ERROR_STATUS.get(type(exc), 500)
        logger.error("Scoring failed (%s): %s", type(exc).__name__, exc)
        return jsonify({"error": exc.to_dict()}), status_code
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected scoring failure for %r: %s", address, exc)
        return jsonify({"error": {"type": "InternalError", "message": "lead scoring failed"}}), 500

    logger.info("Scored lead %r as %s", address, result.lead_score.value)
    return jsonify({"data": result.to_dict()}), 200


# ---------- Internals ----------


def _authorized(header: str, secret: str) -> bool:
    if not secret:
        return False
    return hmac.compare_digest(header.encode(), f"Bearer {secret}".encode())


def main() -> None:
    """Bind on the PORT injected by the platform; fall back to the configured port locally."""
    port = int(os.getenv("PORT") or get_settings().port)
    logger.info("[BOOT] Binding on 0.0.0.0:%d", port)
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
