"""ORM models."""

from lottery_app.models.game_result import GameResult
from lottery_app.models.lottery import Lottery
from lottery_app.models.lottery_result import LotteryResult
from lottery_app.models.number_frequency import NumberFrequency
from lottery_app.models.user_game import UserGame

__all__ = ["GameResult", "Lottery", "LotteryResult", "NumberFrequency", "UserGame"]
