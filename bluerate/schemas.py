"""Schemas for API requests and responses."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields


class HealthStatusSchema(Schema):
    status = fields.String(required=True)
    app = fields.String()


class HealthRatesSchema(Schema):
    status = fields.String(required=True)
    provider = fields.String(required=True)
    latest_date = fields.String(allow_none=True)
    latest_age_seconds = fields.Float(allow_none=True)
    latest_fresh = fields.Boolean(allow_none=True)
    historical_entries = fields.Integer(required=True)


class ExchangeRateQuerySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    # Presence is checked by validate_date_param so the 400 envelope stays uniform.
    date = fields.String(load_default=None)


class ExchangeRateSchema(Schema):
    date = fields.String(required=True)
    base = fields.String(required=True)
    target = fields.String(required=True)
    rate = fields.Float(required=True)
    source = fields.String(required=True)


class ErrorSchema(Schema):
    error = fields.String(required=True)
