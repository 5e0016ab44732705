"""User management (admin only). Users are never deleted through the app."""

from api import ApiError
from crud import FormField, Resource
from i18n import gettext as _
from models import ROLES, User
from schemas import UserIn
from security import hash_password

from . import bp


def _hash_password(user, data, creating):
    password = data.get("password")
    if password:
        user.password = hash_password(password)
    elif creating:
        raise ApiError(
            400,
            _("validation_failed"),
            errors=[{"field": "password", "message": _("password_required")}],
            code="validation_error",
        )


users = Resource(
    "users",
    User,
    UserIn,
    label="مستخدم",
    label_plural="المستخدمون",
    fields=[
        FormField("username", "اسم المستخدم", required=True),
        FormField("email", "البريد الإلكتروني", kind="email"),
        FormField("full_name", "الاسم الكامل"),
        FormField("password", "كلمة المرور", kind="password", help_text="اتركها فارغة للإبقاء على كلمة المرور الحالية"),
        FormField("role", "الدور", kind="select", required=True, choices=[(r, r) for r in ROLES]),
    ],
    display_field="username",
    list_columns=["username", "email", "full_name", "role"],
    filters={"role": str},
    search_fields=("username", "email", "full_name"),
    unique_fields={"username": "username_taken", "email": "email_taken"},
    write_only=("password",),
    write_roles=("admin",),
    read_roles=("admin",),
    allow_delete=False,
    before_save=_hash_password,
).register(bp)
