# permissions.py
"""
Role checks for the back office.
- role_required([...]): main decorator for admin HTML views (admin always passes).
- api_role_required(*roles): JSON variant: 401/403 envelopes instead of redirects.
- can_* helpers for templates: return True/False.

Roles:
- editor: creates and edits content (scholarships, posts, pages, taxonomy...)
- admin : everything an editor can do + delete, users, site settings, subscribers
"""

from functools import wraps
from typing import Iterable, Set

from flask import abort, flash, redirect, url_for
from flask_login import current_user, login_required

from api import ApiError, wants_json
from i18n import gettext as _


def _normalize(allowed_roles) -> Set[str]:
    if isinstance(allowed_roles, str):
        return {allowed_roles}
    return set(allowed_roles or [])


def _role_allowed(allowed: Set[str]) -> bool:
    role = getattr(current_user, "role", None)
    return role == "admin" or role in allowed


# ----------------------------- HTML DECORATORS ----------------------------- #
def role_required(allowed_roles: Iterable[str]):
    """
    Restrict an admin view to the given roles.

        @role_required(["editor"])
        def view(): ...

    - anonymous → login_manager.unauthorized() (redirect to the login page)
    - admin always passes
    - wrong role → 403 for JSON clients, otherwise flash + redirect to the dashboard
    """
    allowed = _normalize(allowed_roles)

    def decorator(view_func):
        @wraps(view_func)
        @login_required
        def wrapped(*args, **kwargs):
            if _role_allowed(allowed):
                return view_func(*args, **kwargs)

            if wants_json():
                abort(403)

            flash(_("forbidden"), "warning")
            return redirect(url_for("accounts.dashboard"))

        return wrapped
    return decorator


# ----------------------------- API DECORATORS ------------------------------ #
def api_role_required(*roles: str):
    """JSON guard: 401 when anonymous, 403 when the role is not allowed."""
    allowed = _normalize(roles)

    def decorator(view_func):
        @wraps(view_func)
        def wrapped(*args, **kwargs):
            if not current_user.is_authenticated:
                raise ApiError(401, _("not_authenticated"), code="not_authenticated")
            if allowed and not _role_allowed(allowed):
                raise ApiError(403, _("forbidden"), code="forbidden")
            return view_func(*args, **kwargs)

        return wrapped
    return decorator


# --------------------------- TEMPLATE HELPERS ------------------------------ #
def has_any_role(*roles: str) -> bool:
    return bool(current_user.is_authenticated and _role_allowed(set(roles)))


def can_create(resource) -> bool:
    return has_any_role(*resource.write_roles)


def can_edit(resource) -> bool:
    return has_any_role(*resource.write_roles)


def can_delete(resource) -> bool:
    return resource.allow_delete and has_any_role(*resource.delete_roles)


def can_manage_users() -> bool:
    return has_any_role("admin")


def can_manage_settings() -> bool:
    return has_any_role("admin")


def is_admin() -> bool:
    return bool(current_user.is_authenticated and getattr(current_user, "role", None) == "admin")
