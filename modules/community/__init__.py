"""Community module package: partners and newsletter subscribers."""

from flask import Blueprint

bp = Blueprint("community", __name__)

from . import models  # noqa: E402  pylint: disable=wrong-import-position
from . import routes  # noqa: E402  pylint: disable=wrong-import-position

__all__ = ["bp", "models", "routes"]
