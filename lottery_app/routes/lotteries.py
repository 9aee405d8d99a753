"""Lottery routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from lottery_app.db import get_session
from lottery_app.errors import ValidationError
from lottery_app.schemas.lottery import (
    HeatmapCellSchema,
    LotteryResultCreateSchema,
    LotteryResultSchema,
    LotterySchema,
)
from lottery_app.services.frequency_analysis_service import FrequencyAnalysisService
from lottery_app.services.lottery_service import LotteryService
from lottery_app.utils.responses import created, ok

lotteries_bp = Blueprint("lotteries", __name__)

_lottery_schema = LotterySchema()
_lotteries_schema = LotterySchema(many=True)
_results_schema = LotteryResultSchema(many=True)
_result_schema = LotteryResultSchema()
_result_create_schema = LotteryResultCreateSchema()
_heatmap_schema = HeatmapCellSchema(many=True)
_service = LotteryService()
_frequency_service = FrequencyAnalysisService()


def _positive_int_arg(name: str, default: int | None) -> int | None:
    raw = (request.args.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ValidationError(f"{name} must be an integer") from e
    if value <= 0:
        raise ValidationError(f"{name} must be positive")
    return value


@lotteries_bp.get("/lotteries")
def list_lotteries():
    """List the lottery catalogue."""

    return ok(_lotteries_schema.dump(_service.list_lotteries(get_session())))


@lotteries_bp.get("/lotteries/<int:lottery_id>")
def get_lottery(lottery_id: int):
    return ok(_lottery_schema.dump(_service.get_lottery(get_session(), lottery_id)))


@lotteries_bp.get("/lotteries/<int:lottery_id>/results")
def list_results(lottery_id: int):
    """Latest results first. Query param ``limit`` (default 20)."""

    limit = _positive_int_arg("limit", 20)
    results = _service.list_results(get_session(), lottery_id, limit=int(limit or 20))
    return ok(_results_schema.dump(results))


@lotteries_bp.post("/lotteries/<int:lottery_id>/results")
def add_result(lottery_id: int):
    """Record one official draw and refresh the frequency table."""

    payload = request.get_json(silent=True) or {}
    data = _result_create_schema.load(payload)

    session = get_session()
    result = _service.add_result(session, lottery_id, **data)
    _frequency_service.recompute(session, lottery_id, window=current_app.config.get("FREQUENCY_WINDOW"))

    return created(_result_schema.dump(result))


@lotteries_bp.get("/lotteries/<int:lottery_id>/analysis")
def get_analysis(lottery_id: int):
    """Hot/cold/mixed classification of the lottery's numbers."""

    result = _frequency_service.analyze(get_session(), lottery_id)
    return ok(
        {
            "lotteryId": result.lottery_id,
            "hot": result.hot_numbers,
            "cold": result.cold_numbers,
            "mixed": result.mixed_numbers,
            "meanFrequency": result.mean_frequency,
            "minCount": result.min_count,
            "maxCount": result.max_count,
            "counts": {str(n): c for n, c in result.counts.items()},
            "degraded": result.degraded,
        }
    )


@lotteries_bp.get("/lotteries/<int:lottery_id>/frequencies")
def get_frequencies(lottery_id: int):
    """Heat map rows for every number of the range."""

    return ok(_heatmap_schema.dump(_frequency_service.heatmap(get_session(), lottery_id)))


@lotteries_bp.post("/lotteries/<int:lottery_id>/frequencies/recompute")
def recompute_frequencies(lottery_id: int):
    window = _positive_int_arg("window", current_app.config.get("FREQUENCY_WINDOW"))
    result = _frequency_service.recompute(get_session(), lottery_id, window=window)
    return ok(
        {
            "lotteryId": result.lottery_id,
            "drawsUsed": result.draws_used,
            "window": result.window,
            "numbersWritten": result.numbers_written,
        }
    )
