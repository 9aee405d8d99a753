"""Schemas for the prediction API."""

from __future__ import annotations

from marshmallow import Schema, fields, post_load, validate

from lottery_app.services.number_selection_engine import GenerationPreferences


class PreferencesSchema(Schema):
    use_hot = fields.Boolean(load_default=False, data_key="useHot")
    use_cold = fields.Boolean(load_default=False, data_key="useCold")
    use_mixed = fields.Boolean(load_default=False, data_key="useMixed")

    @post_load
    def _to_preferences(self, data, **kwargs):  # type: ignore[no-untyped-def]
        return GenerationPreferences(**data)


class PredictRequestSchema(Schema):
    lottery_id = fields.Integer(required=True, data_key="lotteryId", validate=validate.Range(min=1))
    count = fields.Integer(required=True, validate=validate.Range(min=1))
    preferences = fields.Nested(
        PreferencesSchema,
        load_default=GenerationPreferences,
    )


class PredictResponseSchema(Schema):
    lottery_id = fields.Int(data_key="lotteryId")
    numbers = fields.List(fields.Integer(), required=True)
    special_numbers = fields.List(fields.Integer(), data_key="specialNumbers")
    repeated = fields.Bool()
    degraded = fields.Bool()
    attempts = fields.Int()
