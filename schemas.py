"""Input schemas shared by the API and the admin client.

The same models validate a form before it is submitted (client side) and
the payload when it arrives (server side).
"""

from datetime import date
from typing import Annotated, List, Literal, Optional
from urllib.parse import urlparse

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, EmailStr, Field, model_validator

from utils import SLUG_PATTERN


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _strip(value):
    return value.strip() if isinstance(value, str) else value


def _normalize_email(value):
    return value.strip().lower() if isinstance(value, str) else value


def _blank_to_zero(value):
    return 0 if value is None or (isinstance(value, str) and not value.strip()) else value


def _check_url(value):
    if value is None:
        return value
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("must be an http(s) URL")
    return value


Text = Annotated[Optional[str], BeforeValidator(_blank_to_none)]
Url = Annotated[Optional[str], BeforeValidator(_blank_to_none), AfterValidator(_check_url)]
OptionalId = Annotated[Optional[int], BeforeValidator(_blank_to_none)]
OptionalDate = Annotated[Optional[date], BeforeValidator(_blank_to_none)]
Slug = Annotated[
    Optional[Annotated[str, Field(min_length=2, max_length=120, pattern=SLUG_PATTERN)]],
    BeforeValidator(_blank_to_none),
]
Order = Annotated[int, BeforeValidator(_blank_to_zero)]
HexColor = Annotated[
    Optional[Annotated[str, Field(pattern=r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$")]],
    BeforeValidator(_blank_to_none),
]


def bounded(min_length=1, max_length=200):
    return Annotated[str, BeforeValidator(_strip), Field(min_length=min_length, max_length=max_length)]


def optional_bounded(min_length=None, max_length=None):
    return Annotated[Optional[Annotated[str, Field(min_length=min_length, max_length=max_length)]], BeforeValidator(_blank_to_none)]


class InputSchema(BaseModel):
    model_config = ConfigDict(extra="ignore")


# ---------- taxonomy ----------
class CountryIn(InputSchema):
    name: bounded(2, 100)
    slug: Slug = None
    description: Text = None
    flag_url: Url = None


class LevelIn(InputSchema):
    name: bounded(2, 100)
    slug: Slug = None
    description: Text = None


class CategoryIn(InputSchema):
    name: bounded(2, 100)
    slug: Slug = None
    description: Text = None


class TagIn(InputSchema):
    name: bounded(2, 60)
    slug: Slug = None


# ---------- content ----------
class SeoFields(InputSchema):
    seo_title: optional_bounded(max_length=70) = None
    seo_description: optional_bounded(max_length=170) = None
    seo_keywords: Text = None
    focus_keyword: Text = None


class ScholarshipIn(SeoFields):
    title: bounded(10, 200)
    slug: Slug = None
    description: bounded(10, 500)
    content: bounded(10, 100_000)
    country_id: OptionalId = None
    level_id: OptionalId = None
    category_id: OptionalId = None
    university: Text = None
    department: Text = None
    website: Url = None
    amount: Text = None
    currency: Text = None
    start_date: OptionalDate = None
    end_date: OptionalDate = None
    deadline: OptionalDate = None
    is_featured: bool = False
    is_published: bool = True
    featured_image: Text = None

    @model_validator(mode="after")
    def _dates_in_order(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class PostIn(SeoFields):
    title: bounded(10, 200)
    slug: Slug = None
    excerpt: optional_bounded(min_length=10, max_length=500) = None
    content: bounded(10, 100_000)
    is_published: bool = True
    is_featured: bool = False
    featured_image: Text = None
    tag_ids: List[int] = Field(default_factory=list)


class PageIn(InputSchema):
    title: bounded(1, 200)
    slug: Slug = None
    content: bounded(1, 200_000)
    meta_title: optional_bounded(max_length=70) = None
    meta_description: optional_bounded(max_length=170) = None
    is_published: bool = True
    show_in_header: bool = False
    show_in_footer: bool = False


class SuccessStoryIn(InputSchema):
    name: bounded(1, 150)
    title: bounded(1, 200)
    slug: Slug = None
    content: bounded(1, 100_000)
    scholarship_id: OptionalId = None
    country: Text = None
    university: Text = None
    featured_image: Text = None
    is_published: bool = True


# ---------- community ----------
class PartnerIn(InputSchema):
    name: bounded(1, 150)
    slug: Slug = None
    logo_url: bounded(1, 500)
    website_url: Url = None
    description: Text = None
    is_active: bool = True
    display_order: Order = 0


class SubscriberIn(InputSchema):
    email: Annotated[EmailStr, BeforeValidator(_normalize_email)]
    is_active: bool = True


# ---------- site ----------
class StatisticIn(InputSchema):
    title: bounded(1, 100)
    value: bounded(1, 50)
    icon: Text = None
    display_order: Order = 0
    is_active: bool = True


class SiteSettingsIn(InputSchema):
    site_name: bounded(1, 150)
    site_tagline: Text = None
    site_description: Text = None
    logo: Text = None
    logo_dark: Text = None
    favicon: Text = None
    email: Annotated[Optional[EmailStr], BeforeValidator(_blank_to_none)] = None
    phone: Text = None
    whatsapp: Text = None
    address: Text = None
    facebook: Url = None
    twitter: Url = None
    instagram: Url = None
    youtube: Url = None
    linkedin: Url = None
    primary_color: HexColor = None
    secondary_color: HexColor = None
    accent_color: HexColor = None
    enable_dark_mode: bool = True
    rtl_direction: bool = True
    default_language: Literal["ar", "en"] = "ar"
    enable_newsletter: bool = True
    enable_scholarship_search: bool = True
    footer_text: Text = None


# ---------- media ----------
Pixels = Annotated[Optional[Annotated[int, Field(ge=1, le=20_000)]], BeforeValidator(_blank_to_none)]


class MediaFileIn(InputSchema):
    title: optional_bounded(max_length=255) = None
    alt: optional_bounded(max_length=255) = None
    width: Pixels = None
    height: Pixels = None


class MediaBulkDeleteIn(InputSchema):
    ids: Annotated[List[int], Field(min_length=1, max_length=500)]


# ---------- seo ----------
class SeoSettingIn(InputSchema):
    page_path: Annotated[str, BeforeValidator(_strip), Field(min_length=1, max_length=255, pattern=r"^/[^\s?#]*$")]
    meta_title: optional_bounded(max_length=70) = None
    meta_description: optional_bounded(max_length=170) = None
    og_image: Text = None
    keywords: Text = None


# ---------- accounts ----------
class UserIn(InputSchema):
    username: Annotated[str, BeforeValidator(_strip), Field(min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_.-]+$")]
    email: Annotated[Optional[EmailStr], BeforeValidator(_blank_to_none)] = None
    full_name: Text = None
    password: optional_bounded(min_length=8, max_length=128) = None
    role: Literal["admin", "editor"] = "editor"


class LoginIn(InputSchema):
    username: Annotated[str, BeforeValidator(_strip), Field(min_length=1)]
    password: Annotated[str, Field(min_length=1)]


SCHEMAS = {
    "countries": CountryIn,
    "levels": LevelIn,
    "categories": CategoryIn,
    "tags": TagIn,
    "scholarships": ScholarshipIn,
    "posts": PostIn,
    "pages": PageIn,
    "success-stories": SuccessStoryIn,
    "partners": PartnerIn,
    "subscribers": SubscriberIn,
    "statistics": StatisticIn,
    "users": UserIn,
    "site-settings": SiteSettingsIn,
    "seo-settings": SeoSettingIn,
    "media": MediaFileIn,
}
