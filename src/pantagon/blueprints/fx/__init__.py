"""FX conversion blueprint package."""

from __future__ import annotations

from flask import Blueprint

bp = Blueprint("fx", __name__, url_prefix="/fx")

from . import routes  # noqa: E402,F401 - ensure routes get registered

__all__ = ["bp"]
