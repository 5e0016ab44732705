"""Login, logout and identity routes for the admin back office."""

import logging

from flask import flash, redirect, render_template, request, session, url_for
from flask_login import current_user, login_required, login_user, logout_user
from pydantic import ValidationError

from api import ApiError, error_response, success_response, wants_json
from crud import REGISTRY
from extensions import db, login_manager
from i18n import gettext as _
from models import User
from permissions import has_any_role
from schemas import LoginIn
from security import verify_password
from utils import safe_redirect_target

from . import bp

logger = logging.getLogger(__name__)


@login_manager.user_loader
def load_user(user_id: str | None) -> User | None:
    """Resolve the session's user id against the user table on every request.

    A session pointing at a user that no longer exists is anonymous, and its
    server-side record is dropped.
    """
    if not user_id:
        return None
    try:
        user = db.session.get(User, int(user_id))
    except (TypeError, ValueError):
        user = None
    if user is None:
        logger.warning("Session references unknown user %r; discarding it", user_id)
        session.clear()
    return user


@login_manager.unauthorized_handler
def unauthorized():
    if wants_json():
        if getattr(session, "expired", False):
            return error_response(_("session_expired"), 401, code="session_expired")
        return error_response(_("not_authenticated"), 401, code="not_authenticated")
    flash(_("session_expired") if getattr(session, "expired", False) else _("not_authenticated"), "warning")
    return redirect(url_for("accounts.login", next=request.path))


# ---------- helpers ----------
def authenticate(username: str, password: str) -> User | None:
    """The user when the username exists AND the password verifies, else None."""
    user = User.query.filter_by(username=username).first()
    if user is None or not verify_password(user.password, password):
        return None
    return user


def start_session(user: User) -> None:
    session.regenerate()
    login_user(user)
    logger.info("User %s signed in", user.username)


def end_session() -> None:
    username = getattr(current_user, "username", None)
    logout_user()
    session.clear()
    if username:
        logger.info("User %s signed out", username)


# ---------- JSON ----------
@bp.route("/api/auth/login", methods=["POST"])
def api_login():
    try:
        credentials = LoginIn.model_validate(request.get_json(silent=True) or {})
    except ValidationError:
        raise ApiError(400, _("credentials_required"), code="credentials_required")

    user = authenticate(credentials.username, credentials.password)
    if user is None:
        raise ApiError(401, _("invalid_credentials"), code="invalid_credentials")

    start_session(user)
    return success_response(user.to_dict(), _("login_success"))


@bp.route("/api/auth/logout", methods=["POST"])
def api_logout():
    end_session()
    return success_response(None, _("logout_success"))


@bp.route("/api/auth/me")
def api_me():
    if current_user.is_authenticated:
        return success_response(current_user.to_dict())
    if getattr(session, "expired", False):
        raise ApiError(401, _("session_expired"), code="session_expired")
    raise ApiError(401, _("not_authenticated"), code="not_authenticated")


# ---------- HTML ----------
@bp.route("/admin/login", methods=["GET", "POST"])
def login():
    if current_user.is_authenticated:
        return redirect(url_for("accounts.dashboard"))

    if request.method == "POST":
        username = (request.form.get("username") or "").strip()
        password = request.form.get("password") or ""
        user = authenticate(username, password) if username and password else None
        if user is not None:
            start_session(user)
            flash(_("login_success"), "success")
            return redirect(safe_redirect_target(request.args.get("next")) or url_for("accounts.dashboard"))
        flash(_("invalid_credentials") if username and password else _("credentials_required"), "danger")

    return render_template("admin/login.html", username=request.form.get("username", ""))


@bp.route("/admin/logout", methods=["GET", "POST"])
def logout():
    end_session()
    # the old record is gone; the flash message rides on a fresh sid
    session.regenerate()
    flash(_("logout_success"), "info")
    return redirect(url_for("accounts.login"))


@bp.route("/admin/")
@login_required
def dashboard():
    counts = [
        (resource, resource.model.query.count())
        for resource in REGISTRY.values()
        if has_any_role(*(resource.read_roles or resource.write_roles))
    ]
    return render_template("admin/dashboard.html", counts=counts)
