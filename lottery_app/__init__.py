"""Flask application package."""

from __future__ import annotations

import random
from collections.abc import Mapping
from typing import Any

from flask import Flask

from dotenv import load_dotenv


def create_app(overrides: Mapping[str, Any] | None = None) -> Flask:
    """Application factory.

    Args:
        overrides: config values applied after the environment config.

    Returns:
        Configured Flask application.
    """
    load_dotenv()

    from lottery_app.config import get_config
    from lottery_app.db import init_db, session_scope
    from lottery_app.error_handlers import register_error_handlers
    from lottery_app.logging_config import configure_logging
    from lottery_app.routes.games import games_bp
    from lottery_app.routes.health import health_bp
    from lottery_app.routes.lotteries import lotteries_bp
    from lottery_app.routes.prediction import prediction_bp
    from lottery_app.services.lottery_service import LotteryService
    from lottery_app.services.prediction_service import PredictionService
    from lottery_app.utils.rate_limit import RateLimiter

    app = Flask(__name__)
    app.config.from_object(get_config())
    if overrides:
        app.config.update(overrides)

    configure_logging(app)
    init_db(app)
    register_error_handlers(app)

    seed = app.config.get("RANDOM_SEED")
    rng = random.Random(seed) if seed is not None else random.SystemRandom()
    app.extensions["prediction_service"] = PredictionService(
        rng=rng,
        max_attempts=int(app.config["MAX_SELECTION_ATTEMPTS"]),
        frequency_window=app.config.get("FREQUENCY_WINDOW"),
    )
    app.extensions["predict_rate_limiter"] = RateLimiter(
        limit=int(app.config["PREDICT_RATE_LIMIT"]),
        window_seconds=float(app.config["PREDICT_RATE_WINDOW_SECONDS"]),
    )

    if app.config.get("SEED_LOTTERIES"):
        with session_scope(app) as session:
            LotteryService().initialize_lotteries(session)

    app.register_blueprint(health_bp)
    app.register_blueprint(lotteries_bp, url_prefix="/api")
    app.register_blueprint(prediction_bp, url_prefix="/api")
    app.register_blueprint(games_bp, url_prefix="/api")

    return app
