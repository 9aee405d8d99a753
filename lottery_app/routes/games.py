"""User game routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from lottery_app.db import get_session
from lottery_app.errors import ValidationError
from lottery_app.schemas.user_game import (
    CheckGameSchema,
    CheckOutcomeSchema,
    GameOutcomeSchema,
    UserGameCreateSchema,
    UserGameSchema,
    UserStatsSchema,
)
from lottery_app.services.user_game_service import UserGameService
from lottery_app.utils.responses import created, ok

games_bp = Blueprint("games", __name__)

_game_schema = UserGameSchema()
_games_schema = UserGameSchema(many=True)
_create_schema = UserGameCreateSchema()
_check_schema = CheckGameSchema()
_outcome_schema = CheckOutcomeSchema()
_outcomes_schema = GameOutcomeSchema(many=True)
_stats_schema = UserStatsSchema()
_service = UserGameService()


def _current_user_id() -> str:
    # No auth layer: an optional header selects the user.
    return (request.headers.get("X-User-Id") or "").strip() or str(current_app.config["DEFAULT_USER_ID"])


@games_bp.post("/games")
def create_game():
    payload = request.get_json(silent=True) or {}
    data = _create_schema.load(payload)

    game = _service.create_game(get_session(), _current_user_id(), **data)
    return created(_game_schema.dump(game))


@games_bp.get("/games")
def list_games():
    raw = (request.args.get("lotteryId") or "").strip()
    lottery_id: int | None = None
    if raw:
        try:
            lottery_id = int(raw)
        except ValueError as e:
            raise ValidationError("lotteryId must be an integer") from e

    games = _service.list_games(get_session(), _current_user_id(), lottery_id)
    return ok(_games_schema.dump(games))


@games_bp.get("/games/results")
def list_game_results():
    """Stored check outcomes of the current user, newest first."""

    outcomes = _service.list_results(get_session(), _current_user_id())
    return ok(_outcomes_schema.dump(outcomes))


@games_bp.post("/games/<int:game_id>/check")
def check_game(game_id: int):
    payload = request.get_json(silent=True) or {}
    data = _check_schema.load(payload)

    outcome = _service.check_game(get_session(), _current_user_id(), game_id, data["contest_number"])
    return ok(_outcome_schema.dump(outcome))


@games_bp.get("/users/stats")
def user_stats():
    stats = _service.user_stats(get_session(), _current_user_id())
    return ok(_stats_schema.dump(stats))
