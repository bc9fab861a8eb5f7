"""Exchange rate blueprint module."""

from __future__ import annotations

from flask_smorest import Blueprint

blp = Blueprint("ExchangeRate", __name__, description="USD to ARS blue dollar rate lookups")

from . import routes  # noqa: E402,F401
