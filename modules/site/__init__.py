"""Public site, site settings and homepage statistics."""

from flask import Blueprint

bp = Blueprint("site", __name__)

from . import models  # noqa: E402  pylint: disable=wrong-import-position
from . import routes  # noqa: E402  pylint: disable=wrong-import-position
from . import public  # noqa: E402  pylint: disable=wrong-import-position

__all__ = ["bp", "models", "routes", "public"]
