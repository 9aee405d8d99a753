"""Marshmallow schemas for user games."""

from __future__ import annotations

from marshmallow import Schema, ValidationError, fields, validate, validates


class UserGameSchema(Schema):
    id = fields.Int()
    user_id = fields.Str(data_key="userId")
    lottery_id = fields.Int(data_key="lotteryId")
    numbers = fields.List(fields.Int())
    contest_number = fields.Int(allow_none=True, data_key="contestNumber")
    is_played = fields.Bool(data_key="isPlayed")
    created_at = fields.DateTime(data_key="createdAt")


class UserGameCreateSchema(Schema):
    lottery_id = fields.Int(required=True, data_key="lotteryId", validate=validate.Range(min=1))
    numbers = fields.List(fields.Int(), required=True, validate=validate.Length(min=1, max=100))
    contest_number = fields.Int(load_default=None, allow_none=True, data_key="contestNumber")
    is_played = fields.Bool(load_default=False, data_key="isPlayed")

    @validates("numbers")
    def _validate_unique(self, value, **kwargs):  # type: ignore[no-untyped-def]
        if len(value) != len(set(value)):
            raise ValidationError("Numbers must be unique")


class CheckGameSchema(Schema):
    contest_number = fields.Int(load_default=None, allow_none=True, data_key="contestNumber")


class CheckOutcomeSchema(Schema):
    game_id = fields.Int(data_key="gameId")
    contest_number = fields.Int(data_key="contestNumber")
    drawn_numbers = fields.List(fields.Int(), data_key="drawnNumbers")
    matched_numbers = fields.List(fields.Int(), data_key="matchedNumbers")
    hits = fields.Int()
    is_winner = fields.Bool(data_key="isWinner")


class UserStatsSchema(Schema):
    total_games = fields.Int(data_key="totalGames")
    checked_games = fields.Int(data_key="checkedGames")
    total_wins = fields.Int(data_key="totalWins")
    total_earnings = fields.Decimal(as_string=True, data_key="totalEarnings")
    win_rate = fields.Float(data_key="winRate")


class GameOutcomeSchema(Schema):
    id = fields.Int()
    game_id = fields.Int(data_key="gameId")
    lottery_id = fields.Int(data_key="lotteryId")
    contest_number = fields.Int(data_key="contestNumber")
    numbers = fields.List(fields.Int())
    drawn_numbers = fields.List(fields.Int(), data_key="drawnNumbers")
    matched_numbers = fields.List(fields.Int(), data_key="matchedNumbers")
    hits = fields.Int()
    is_winner = fields.Bool(data_key="isWinner")
    prize_value = fields.Decimal(as_string=True, data_key="prizeValue")
    checked_at = fields.DateTime(allow_none=True, data_key="checkedAt")
