"""Prediction routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from lottery_app.db import get_session
from lottery_app.errors import RateLimitError
from lottery_app.schemas.prediction import PredictRequestSchema, PredictResponseSchema
from lottery_app.utils.responses import ok

prediction_bp = Blueprint("prediction", __name__)

_request_schema = PredictRequestSchema()
_response_schema = PredictResponseSchema()


def _client_key() -> str:
    forwarded = (request.headers.get("X-Forwarded-For") or "").split(",")[0].strip()
    return forwarded or request.remote_addr or "unknown"


@prediction_bp.post("/predict")
def predict_numbers():
    limiter = current_app.extensions["predict_rate_limiter"]
    if not limiter.allow(_client_key()):
        raise RateLimitError("Rate limit exceeded. Please wait before making more predictions.")

    payload = request.get_json(silent=True) or {}
    data = _request_schema.load(payload)

    service = current_app.extensions["prediction_service"]
    result = service.predict(
        get_session(),
        lottery_id=int(data["lottery_id"]),
        count=int(data["count"]),
        preferences=data["preferences"],
    )
    return ok(_response_schema.dump(result))
