"""CRUD registrations for the taxonomy tables."""

from crud import FormField, Resource
from schemas import CategoryIn, CountryIn, LevelIn, TagIn

from . import bp
from .models import Category, Country, Level, Tag


def _taxonomy_fields(*extra):
    return [
        FormField("name", "الاسم", required=True),
        FormField("slug", "الاسم المختصر (slug)", help_text="يُولَّد تلقائيًا من الاسم إذا تُرك فارغًا"),
        FormField("description", "الوصف", kind="textarea"),
        *extra,
    ]


def _by_name(model):
    return (model.name.asc(),)


countries = Resource(
    "countries",
    Country,
    CountryIn,
    label="دولة",
    label_plural="الدول",
    fields=_taxonomy_fields(FormField("flag_url", "رابط العلم", kind="url")),
    slug_source="name",
    list_columns=["name", "slug"],
    search_fields=("name", "slug"),
    order_by=_by_name,
).register(bp)

levels = Resource(
    "levels",
    Level,
    LevelIn,
    label="مستوى دراسي",
    label_plural="المستويات الدراسية",
    fields=_taxonomy_fields(),
    slug_source="name",
    list_columns=["name", "slug"],
    search_fields=("name", "slug"),
    order_by=_by_name,
).register(bp)

categories = Resource(
    "categories",
    Category,
    CategoryIn,
    label="تصنيف",
    label_plural="التصنيفات",
    fields=_taxonomy_fields(),
    slug_source="name",
    list_columns=["name", "slug"],
    search_fields=("name", "slug"),
    order_by=_by_name,
).register(bp)

tags = Resource(
    "tags",
    Tag,
    TagIn,
    label="وسم",
    label_plural="الوسوم",
    fields=[
        FormField("name", "الاسم", required=True),
        FormField("slug", "الاسم المختصر (slug)"),
    ],
    slug_source="name",
    list_columns=["name", "slug"],
    search_fields=("name",),
    order_by=_by_name,
).register(bp)
