"""Marshmallow schemas for lotteries and their results."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class LotterySchema(Schema):
    """Serialize Lottery."""

    id = fields.Int(required=True)
    name = fields.Str(required=True)
    slug = fields.Str(required=True)
    max_number = fields.Int(data_key="maxNumber")
    min_numbers = fields.Int(data_key="minNumbers")
    max_numbers = fields.Int(data_key="maxNumbers")
    draw_size = fields.Int(data_key="drawSize")
    min_prize_hits = fields.Int(data_key="minPrizeHits")
    special_count = fields.Int(data_key="specialCount")
    special_max = fields.Int(data_key="specialMax")
    draw_days = fields.List(fields.Str(), data_key="drawDays")
    description = fields.Str(allow_none=True)
    game_type = fields.Str(data_key="gameType")
    bet_value = fields.Decimal(as_string=True, data_key="betValue")


class LotteryResultSchema(Schema):
    """Serialize LotteryResult."""

    id = fields.Int()
    lottery_id = fields.Int(data_key="lotteryId")
    contest_number = fields.Int(data_key="contestNumber")
    drawn_numbers = fields.List(fields.Int(), data_key="drawnNumbers")
    draw_date = fields.DateTime(allow_none=True, data_key="drawDate")
    special_number = fields.Str(allow_none=True, data_key="specialNumber")
    is_accumulated = fields.Bool(data_key="isAccumulated")


class LotteryResultCreateSchema(Schema):
    """Validate an ingested draw; range checks depend on the lottery and live in the service."""

    contest_number = fields.Int(required=True, data_key="contestNumber", validate=validate.Range(min=1))
    drawn_numbers = fields.List(
        fields.Int(validate=validate.Range(min=1)),
        required=True,
        data_key="drawnNumbers",
        validate=validate.Length(min=1),
    )
    draw_date = fields.DateTime(load_default=None, allow_none=True, data_key="drawDate")
    special_number = fields.Str(
        load_default=None, allow_none=True, data_key="specialNumber", validate=validate.Length(max=20)
    )
    is_accumulated = fields.Bool(load_default=False, data_key="isAccumulated")


class HeatmapCellSchema(Schema):
    number = fields.Int()
    frequency = fields.Int()
    last_drawn_contest = fields.Int(allow_none=True, data_key="lastDrawnContest")
    is_hot = fields.Bool(data_key="isHot")
    is_cold = fields.Bool(data_key="isCold")
