"""Catalog module package: countries, study levels, categories and tags."""

from flask import Blueprint

bp = Blueprint("catalog", __name__)

from . import models  # noqa: E402  pylint: disable=wrong-import-position
from . import routes  # noqa: E402  pylint: disable=wrong-import-position

__all__ = ["bp", "models", "routes"]
