"""Site settings, statistics and the aggregated search API."""

import logging

from flask import flash, redirect, render_template, request, url_for
from flask_login import current_user
from pydantic import ValidationError
from sqlalchemy import or_

from api import ApiError, success_response, validation_errors
from crud import FormField, Resource, parse_int
from extensions import db
from i18n import gettext as _
from modules.content.models import Post, SuccessStory
from modules.scholarships.models import Scholarship
from permissions import api_role_required, role_required
from schemas import SeoSettingIn, SiteSettingsIn, StatisticIn
from utils import LIKE_ESCAPE, like_pattern

from . import bp
from .models import SeoSetting, SiteSettings, Statistic

logger = logging.getLogger(__name__)


statistics = Resource(
    "statistics",
    Statistic,
    StatisticIn,
    label="إحصائية",
    label_plural="الإحصائيات",
    fields=[
        FormField("title", "العنوان", required=True),
        FormField("value", "القيمة", required=True, help_text="مثال: +500"),
        FormField("icon", "الأيقونة"),
        FormField("display_order", "ترتيب العرض", kind="number"),
        FormField("is_active", "نشطة", kind="checkbox"),
    ],
    display_field="title",
    list_columns=["title", "value", "display_order", "is_active"],
    filters={"is_active": bool},
    search_fields=("title",),
    order_by=lambda model: (model.display_order.asc(), model.id.asc()),
).register(bp)


# ---------- per-path SEO ----------
seo_settings = Resource(
    "seo-settings",
    SeoSetting,
    SeoSettingIn,
    label="إعداد SEO",
    label_plural="إعدادات SEO",
    fields=[
        FormField("page_path", "مسار الصفحة", required=True, help_text="مثال: /scholarships"),
        FormField("meta_title", "عنوان الصفحة"),
        FormField("meta_description", "وصف الصفحة", kind="textarea"),
        FormField("og_image", "صورة المشاركة"),
        FormField("keywords", "الكلمات المفتاحية"),
    ],
    display_field="page_path",
    list_columns=["page_path", "meta_title"],
    search_fields=("page_path", "meta_title"),
    order_by=lambda model: (model.page_path.asc(),),
    unique_fields={"page_path": "page_path_taken"},
    write_roles=("admin",),
).register(bp)


@bp.route("/api/seo-settings/path/", defaults={"page_path": ""})
@bp.route("/api/seo-settings/path/<path:page_path>")
def api_seo_for_path(page_path):
    item = SeoSetting.for_path("/" + page_path)
    if item is None:
        raise ApiError(404, _("not_found"), code="not_found")
    return success_response(item.to_dict())


# ---------- site settings ----------
SETTINGS_FIELDS = [
    FormField("site_name", "اسم الموقع", required=True),
    FormField("site_tagline", "الشعار النصي"),
    FormField("site_description", "وصف الموقع", kind="textarea"),
    FormField("logo", "الشعار"),
    FormField("logo_dark", "الشعار (الوضع الداكن)"),
    FormField("favicon", "أيقونة الموقع"),
    FormField("email", "البريد الإلكتروني", kind="email"),
    FormField("phone", "الهاتف"),
    FormField("whatsapp", "واتساب"),
    FormField("address", "العنوان"),
    FormField("facebook", "فيسبوك", kind="url"),
    FormField("twitter", "تويتر", kind="url"),
    FormField("instagram", "إنستغرام", kind="url"),
    FormField("youtube", "يوتيوب", kind="url"),
    FormField("linkedin", "لينكدإن", kind="url"),
    FormField("primary_color", "اللون الأساسي", kind="color"),
    FormField("secondary_color", "اللون الثانوي", kind="color"),
    FormField("accent_color", "لون التمييز", kind="color"),
    FormField("default_language", "اللغة الافتراضية", kind="select", choices=[("ar", "العربية"), ("en", "English")]),
    FormField("enable_dark_mode", "تفعيل الوضع الداكن", kind="checkbox"),
    FormField("rtl_direction", "اتجاه من اليمين لليسار", kind="checkbox"),
    FormField("enable_newsletter", "تفعيل النشرة البريدية", kind="checkbox"),
    FormField("enable_scholarship_search", "تفعيل البحث عن المنح", kind="checkbox"),
    FormField("footer_text", "نص التذييل", kind="textarea"),
]

_SETTINGS_COLUMNS = set(SiteSettingsIn.model_fields)


def update_settings(payload: dict) -> SiteSettings:
    """Merge ``payload`` into the stored settings; raises ValidationError."""
    settings = SiteSettings.get()
    merged = {name: getattr(settings, name) for name in _SETTINGS_COLUMNS}
    merged.update(payload or {})
    data = SiteSettingsIn.model_validate(merged).model_dump()
    for name, value in data.items():
        setattr(settings, name, value)
    db.session.commit()
    logger.info("Site settings updated by %s", getattr(current_user, "username", "-"))
    return settings


@bp.route("/api/site-settings", methods=["GET"])
def api_settings():
    return success_response(SiteSettings.get().to_dict())


@bp.route("/api/site-settings", methods=["PUT", "PATCH"])
@api_role_required("admin")
def api_settings_update():
    settings = update_settings(request.get_json(silent=True) or {})
    return success_response(settings.to_dict(), _("settings_saved"))


@bp.route("/admin/settings", methods=["GET", "POST"])
@role_required(["admin"])
def admin_settings():
    settings = SiteSettings.get()
    errors = {}
    if request.method == "POST":
        values = {f.name: f.read(request.form) for f in SETTINGS_FIELDS}
        try:
            update_settings(values)
        except ValidationError as exc:
            db.session.rollback()
            errors = {e["field"]: e["message"] for e in validation_errors(exc)}
            flash(_("validation_failed"), "danger")
            return render_template("admin/settings.html", fields=SETTINGS_FIELDS, values=values, errors=errors), 400
        flash(_("settings_saved"), "success")
        return redirect(url_for("site.admin_settings"))

    values = {f.name: getattr(settings, f.name) for f in SETTINGS_FIELDS}
    return render_template("admin/settings.html", fields=SETTINGS_FIELDS, values=values, errors=errors)


# ---------- search ----------
SEARCH_TABS = (
    ("scholarships", Scholarship, ("title", "description", "content", "university")),
    ("posts", Post, ("title", "excerpt", "content")),
    ("success_stories", SuccessStory, ("name", "title", "content")),
)


def search_content(keyword: str, limit: int = 20) -> dict:
    """Published scholarships, posts and success stories matching ``keyword``."""
    results = {}
    like = like_pattern(keyword)
    for tab, model, columns in SEARCH_TABS:
        results[tab] = (
            model.query.filter(model.is_published.is_(True))
            .filter(or_(*[getattr(model, c).ilike(like, escape=LIKE_ESCAPE) for c in columns]))
            .order_by(model.created_at.desc(), model.id.desc())
            .limit(limit)
            .all()
        )
    return results


@bp.route("/api/search")
def api_search():
    keyword = (request.args.get("q") or "").strip()
    if not keyword:
        return success_response({"query": "", "total": 0, "results": {tab: [] for tab, _m, _c in SEARCH_TABS}},
                                _("search_empty"))
    limit = min(parse_int(request.args.get("limit")) or 20, 100)
    found = search_content(keyword, limit)
    results = {tab: [o.to_dict() for o in items] for tab, items in found.items()}
    return success_response({
        "query": keyword,
        "total": sum(len(items) for items in results.values()),
        "results": results,
    })

