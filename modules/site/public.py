"""Server-rendered public pages (Arabic first, RTL)."""

from flask import abort, current_app, flash, redirect, render_template, request, url_for
from pydantic import ValidationError

from api import ApiError
from crud import parse_int
from i18n import gettext as _
from modules.catalog.models import Category, Country, Level
from modules.community.models import Partner
from modules.community.routes import subscribers
from modules.content.models import Page, Post, SuccessStory
from modules.content.routes import posts
from modules.scholarships.models import Scholarship
from modules.scholarships.routes import scholarships
from utils import LIKE_ESCAPE, like_pattern, safe_redirect_target

from . import bp
from .models import Statistic
from .routes import SEARCH_TABS, search_content


def _published(model):
    return model.query.filter(model.is_published.is_(True))


def _newest(query, model):
    return query.order_by(model.created_at.desc(), model.id.desc())


def _page_number() -> int:
    return max(parse_int(request.args.get("page")) or 1, 1)


@bp.route("/")
def home():
    featured = _newest(_published(Scholarship).filter(Scholarship.is_featured.is_(True)), Scholarship).limit(6).all()
    latest = _newest(_published(Scholarship), Scholarship).limit(6).all()
    articles = _newest(_published(Post), Post).limit(3).all()
    stories = _newest(_published(SuccessStory), SuccessStory).limit(3).all()
    partners = (Partner.query.filter(Partner.is_active.is_(True))
                .order_by(Partner.display_order.asc(), Partner.name.asc()).all())
    stats = (Statistic.query.filter(Statistic.is_active.is_(True))
             .order_by(Statistic.display_order.asc(), Statistic.id.asc()).all())
    return render_template(
        "site/home.html",
        featured=featured,
        latest=latest,
        articles=articles,
        stories=stories,
        partners=partners,
        stats=stats,
        countries=Country.query.order_by(Country.name).all(),
    )


@bp.route("/scholarships")
def scholarship_list():
    query = _published(Scholarship)
    filters = {}
    for arg, model, column in (
        ("country", Country, Scholarship.country_id),
        ("level", Level, Scholarship.level_id),
        ("category", Category, Scholarship.category_id),
    ):
        slug = (request.args.get(arg) or "").strip()
        if slug:
            row = model.query.filter_by(slug=slug).first()
            # unknown filter value matches nothing rather than everything
            query = query.filter(column == (row.id if row else -1))
            filters[arg] = slug

    keyword = (request.args.get("q") or "").strip()
    if keyword:
        like = like_pattern(keyword)
        query = query.filter(Scholarship.title.ilike(like, escape=LIKE_ESCAPE)
                             | Scholarship.description.ilike(like, escape=LIKE_ESCAPE))

    pagination = _newest(query, Scholarship).paginate(
        page=_page_number(), per_page=current_app.config.get("ITEMS_PER_PAGE", 12), error_out=False
    )
    return render_template(
        "site/scholarships.html",
        pagination=pagination,
        items=pagination.items,
        filters=filters,
        q=keyword,
        countries=Country.query.order_by(Country.name).all(),
        levels=Level.query.order_by(Level.name).all(),
        categories=Category.query.order_by(Category.name).all(),
    )


@bp.route("/scholarships/<slug>")
def scholarship_detail(slug):
    item = _published(Scholarship).filter_by(slug=slug).first_or_404()
    scholarships.record_view(item)
    related = []
    if item.country_id:
        related = (_newest(_published(Scholarship), Scholarship)
                   .filter(Scholarship.country_id == item.country_id, Scholarship.id != item.id)
                   .limit(3).all())
    return render_template("site/scholarship_detail.html", item=item, related=related)


@bp.route("/articles")
def article_list():
    pagination = _newest(_published(Post), Post).paginate(
        page=_page_number(), per_page=current_app.config.get("ITEMS_PER_PAGE", 12), error_out=False
    )
    return render_template("site/articles.html", pagination=pagination, items=pagination.items)


@bp.route("/articles/<slug>")
def article_detail(slug):
    item = _published(Post).filter_by(slug=slug).first_or_404()
    posts.record_view(item)
    return render_template("site/article_detail.html", item=item)


@bp.route("/success-stories")
def story_list():
    items = _newest(_published(SuccessStory), SuccessStory).all()
    return render_template("site/stories.html", items=items)


@bp.route("/success-stories/<slug>")
def story_detail(slug):
    item = _published(SuccessStory).filter_by(slug=slug).first_or_404()
    return render_template("site/story_detail.html", item=item)


@bp.route("/page/<slug>")
def page_detail(slug):
    page = _published(Page).filter_by(slug=slug).first_or_404()
    return render_template("site/page.html", page=page)


@bp.route("/search")
def search():
    keyword = (request.args.get("q") or "").strip()
    tabs = [tab for tab, _m, _c in SEARCH_TABS]
    active = request.args.get("tab") if request.args.get("tab") in tabs else tabs[0]
    results = search_content(keyword) if keyword else {tab: [] for tab in tabs}
    return render_template("site/search.html", q=keyword, results=results, tabs=tabs, active=active)


@bp.route("/newsletter", methods=["POST"])
def newsletter():
    back = safe_redirect_target(request.referrer, request.host) or url_for("site.home")
    try:
        subscribers.create({"email": request.form.get("email", "")})
    except ValidationError:
        flash(_("invalid_email"), "danger")
        return redirect(back)
    except ApiError as exc:
        flash(exc.message, "warning")
        return redirect(back)
    flash(_("subscribed"), "success")
    return redirect(back)


@bp.route("/lang/<code>")
def switch_language(code):
    if code not in current_app.config.get("SUPPORTED_LANGUAGES", ("ar", "en")):
        abort(404)
    back = safe_redirect_target(request.referrer, request.host) or url_for("site.home")
    resp = redirect(back)
    resp.set_cookie("lang", code, max_age=60 * 60 * 24 * 365, samesite="Lax")
    return resp
