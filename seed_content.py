"""
seed_content.py: fill an empty database with the starter taxonomy and demo content.

Modes:
- python seed_content.py            → add missing rows only (safe to re-run)
- python seed_content.py --reset    → drop every table and start over (all data is lost)
"""

import argparse
from datetime import date, timedelta

from app import create_app
from extensions import db
from modules.catalog.models import Category, Country, Level
from modules.content.models import Page
from modules.scholarships.models import Scholarship
from modules.site.models import SiteSettings, Statistic

COUNTRIES = [
    ("ألمانيا", "germany"),
    ("تركيا", "turkey"),
    ("المملكة المتحدة", "united-kingdom"),
    ("كندا", "canada"),
    ("اليابان", "japan"),
]

LEVELS = [
    ("بكالوريوس", "bachelor"),
    ("ماجستير", "master"),
    ("دكتوراه", "phd"),
]

CATEGORIES = [
    ("ممولة بالكامل", "fully-funded"),
    ("ممولة جزئيًا", "partially-funded"),
    ("تدريب", "training"),
]

STATISTICS = [
    ("منحة دراسية", "+500", "graduation-cap"),
    ("دولة", "+40", "globe"),
    ("طالب مستفيد", "+10K", "users"),
]

PAGES = [
    ("من نحن", "about", "فل سكو منصة عربية لنشر المنح الدراسية الموثوقة حول العالم.", True, True),
    ("سياسة الخصوصية", "privacy", "نحترم خصوصيتك ولا نشارك بريدك الإلكتروني مع أي طرف ثالث.", False, True),
]


def _get_or_create(model, slug, **fields):
    row = model.query.filter_by(slug=slug).first()
    if row is None:
        row = model(slug=slug, **fields)
        db.session.add(row)
    return row


def seed():
    SiteSettings.get()

    countries = {slug: _get_or_create(Country, slug, name=name) for name, slug in COUNTRIES}
    levels = {slug: _get_or_create(Level, slug, name=name) for name, slug in LEVELS}
    categories = {slug: _get_or_create(Category, slug, name=name) for name, slug in CATEGORIES}

    for title, slug, content, header, footer in PAGES:
        _get_or_create(Page, slug, title=title, content=content, show_in_header=header, show_in_footer=footer)

    if Statistic.query.count() == 0:
        for order, (title, value, icon) in enumerate(STATISTICS):
            db.session.add(Statistic(title=title, value=value, icon=icon, display_order=order))

    db.session.flush()

    _get_or_create(
        Scholarship,
        "daad-master-scholarship-germany",
        title="منحة DAAD لدراسة الماجستير في ألمانيا",
        description="منحة ممولة بالكامل من الهيئة الألمانية للتبادل العلمي لطلاب الماجستير من الدول النامية.",
        content="<p>تغطي المنحة الرسوم الدراسية وراتبًا شهريًا وتأمينًا صحيًا وتذكرة سفر.</p>",
        country_id=countries["germany"].id,
        level_id=levels["master"].id,
        category_id=categories["fully-funded"].id,
        university="جامعات ألمانية متعددة",
        website="https://www.daad.de/en/",
        deadline=date.today() + timedelta(days=90),
        is_featured=True,
    )
    _get_or_create(
        Scholarship,
        "turkiye-burslari-bachelor",
        title="منحة الحكومة التركية للبكالوريوس",
        description="منحة حكومية تركية تشمل السكن والرسوم وسنة تحضيرية للغة التركية.",
        content="<p>يتم التقديم إلكترونيًا عبر بوابة المنح التركية.</p>",
        country_id=countries["turkey"].id,
        level_id=levels["bachelor"].id,
        category_id=categories["fully-funded"].id,
        website="https://www.turkiyeburslari.gov.tr/",
        deadline=date.today() + timedelta(days=60),
    )

    db.session.commit()


def main():
    parser = argparse.ArgumentParser(description="Seed starter content")
    parser.add_argument("--reset", action="store_true", help="drop all tables first (data will be lost)")
    args = parser.parse_args()

    app = create_app()
    with app.app_context():
        if args.reset:
            print("→ Dropping all tables …")
            db.drop_all()
            db.create_all()
        print("→ Seeding content …")
        seed()
        print("✔ Done.")


if __name__ == "__main__":
    main()
