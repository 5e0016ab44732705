"""Accounts module package: login, logout, identity and user management."""

from flask import Blueprint

bp = Blueprint("accounts", __name__)

from . import routes  # noqa: E402  pylint: disable=wrong-import-position
from . import resources  # noqa: E402  pylint: disable=wrong-import-position

__all__ = ["bp", "routes", "resources"]
