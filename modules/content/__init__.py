"""Editorial content: articles (posts), static pages and success stories."""

from flask import Blueprint

bp = Blueprint("content", __name__)

from . import models  # noqa: E402  pylint: disable=wrong-import-position
from . import routes  # noqa: E402  pylint: disable=wrong-import-position

__all__ = ["bp", "models", "routes"]
