"""CRUD registrations for posts, pages and success stories."""

from flask_login import current_user

from crud import FormField, Resource
from modules.catalog.models import Tag
from modules.scholarships.models import Scholarship
from modules.scholarships.routes import SEO_FIELDS, increment_views
from schemas import PageIn, PostIn, SuccessStoryIn

from . import bp
from .models import Page, Post, SuccessStory


def _tag_choices():
    return [(str(t.id), t.name) for t in Tag.query.order_by(Tag.name).all()]


def _scholarship_choices():
    rows = Scholarship.query.order_by(Scholarship.title).all()
    return [("", "—")] + [(str(s.id), s.title) for s in rows]


def _post_before_save(post, data, creating):
    if creating and post.author_id is None and current_user.is_authenticated:
        post.author_id = current_user.id
    ids = data.get("tag_ids") or []
    post.tags = Tag.query.filter(Tag.id.in_(ids)).all() if ids else []


posts = Resource(
    "posts",
    Post,
    PostIn,
    label="مقال",
    label_plural="المقالات",
    fields=[
        FormField("title", "العنوان", required=True),
        FormField("slug", "الاسم المختصر (slug)"),
        FormField("excerpt", "مقتطف", kind="textarea"),
        FormField("content", "المحتوى", kind="richtext", required=True),
        FormField("tag_ids", "الوسوم", kind="multiselect", choices=_tag_choices),
        FormField("featured_image", "الصورة البارزة"),
        FormField("is_featured", "مقال مميز", kind="checkbox"),
        FormField("is_published", "منشور", kind="checkbox"),
        *SEO_FIELDS,
    ],
    slug_source="title",
    display_field="title",
    list_columns=["title", "author_name", "is_published", "views"],
    filters={"is_published": bool, "is_featured": bool, "author_id": int},
    search_fields=("title", "excerpt", "content"),
    before_save=_post_before_save,
    current_extra=lambda post: {"tag_ids": [t.id for t in post.tags]},
    on_view=increment_views,
).register(bp)

pages = Resource(
    "pages",
    Page,
    PageIn,
    label="صفحة",
    label_plural="الصفحات",
    fields=[
        FormField("title", "العنوان", required=True),
        FormField("slug", "الاسم المختصر (slug)"),
        FormField("content", "المحتوى", kind="richtext", required=True),
        FormField("meta_title", "عنوان الميتا"),
        FormField("meta_description", "وصف الميتا", kind="textarea"),
        FormField("is_published", "منشورة", kind="checkbox"),
        FormField("show_in_header", "إظهار في الرأس", kind="checkbox"),
        FormField("show_in_footer", "إظهار في التذييل", kind="checkbox"),
    ],
    slug_source="title",
    display_field="title",
    list_columns=["title", "slug", "is_published", "show_in_header", "show_in_footer"],
    filters={"is_published": bool, "show_in_header": bool, "show_in_footer": bool},
    search_fields=("title", "content"),
    order_by=lambda model: (model.title.asc(),),
).register(bp)

success_stories = Resource(
    "success-stories",
    SuccessStory,
    SuccessStoryIn,
    label="قصة نجاح",
    label_plural="قصص النجاح",
    fields=[
        FormField("name", "اسم الطالب", required=True),
        FormField("title", "العنوان", required=True),
        FormField("slug", "الاسم المختصر (slug)"),
        FormField("content", "القصة", kind="richtext", required=True),
        FormField("scholarship_id", "المنحة", kind="select", choices=_scholarship_choices),
        FormField("country", "الدولة"),
        FormField("university", "الجامعة"),
        FormField("featured_image", "الصورة"),
        FormField("is_published", "منشورة", kind="checkbox"),
    ],
    slug_source="title",
    display_field="title",
    list_columns=["name", "title", "scholarship_title", "is_published"],
    filters={"is_published": bool, "scholarship_id": int},
    search_fields=("name", "title", "content", "university"),
).register(bp)
