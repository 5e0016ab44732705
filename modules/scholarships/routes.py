"""Scholarship CRUD plus the featured listing."""

from flask import request

from api import success_response
from crud import FormField, Resource, parse_int
from extensions import db
from modules.catalog.models import Category, Country, Level
from schemas import ScholarshipIn

from . import bp
from .models import Scholarship


def _choices(model):
    def load():
        return [("", "—")] + [(str(o.id), o.name) for o in model.query.order_by(model.name).all()]
    return load


def increment_views(obj) -> None:
    obj.views = (obj.views or 0) + 1
    db.session.commit()


SEO_FIELDS = [
    FormField("seo_title", "عنوان SEO", help_text="70 حرفًا كحد أقصى"),
    FormField("seo_description", "وصف SEO", kind="textarea", help_text="170 حرفًا كحد أقصى"),
    FormField("seo_keywords", "الكلمات المفتاحية"),
    FormField("focus_keyword", "الكلمة المفتاحية الرئيسية"),
]

scholarships = Resource(
    "scholarships",
    Scholarship,
    ScholarshipIn,
    label="منحة",
    label_plural="المنح الدراسية",
    fields=[
        FormField("title", "عنوان المنحة", required=True),
        FormField("slug", "الاسم المختصر (slug)"),
        FormField("description", "وصف مختصر", kind="textarea", required=True),
        FormField("content", "المحتوى", kind="richtext", required=True),
        FormField("country_id", "الدولة", kind="select", choices=_choices(Country)),
        FormField("level_id", "المستوى الدراسي", kind="select", choices=_choices(Level)),
        FormField("category_id", "التصنيف", kind="select", choices=_choices(Category)),
        FormField("university", "الجامعة"),
        FormField("department", "القسم"),
        FormField("website", "الموقع الرسمي", kind="url"),
        FormField("amount", "قيمة المنحة"),
        FormField("currency", "العملة"),
        FormField("start_date", "تاريخ البداية", kind="date"),
        FormField("end_date", "تاريخ النهاية", kind="date"),
        FormField("deadline", "آخر موعد للتقديم", kind="date"),
        FormField("featured_image", "الصورة البارزة"),
        FormField("is_featured", "منحة مميزة", kind="checkbox"),
        FormField("is_published", "منشورة", kind="checkbox"),
        *SEO_FIELDS,
    ],
    slug_source="title",
    display_field="title",
    list_columns=["title", "country_name", "deadline", "is_featured", "is_published", "views"],
    filters={
        "country_id": int,
        "level_id": int,
        "category_id": int,
        "is_featured": bool,
        "is_published": bool,
    },
    search_fields=("title", "description", "university"),
    on_view=increment_views,
).register(bp)


@bp.route("/api/scholarships/featured")
def featured():
    limit = parse_int(request.args.get("limit")) or 6
    items = (
        scholarships.base_query()
        .filter(Scholarship.is_featured.is_(True))
        .order_by(Scholarship.created_at.desc(), Scholarship.id.desc())
        .limit(limit)
        .all()
    )
    return success_response([scholarships.serialize(o) for o in items])
