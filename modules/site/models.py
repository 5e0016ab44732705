from extensions import db
from models import SerializerMixin, TimestampMixin


class Statistic(SerializerMixin, TimestampMixin, db.Model):
    """Homepage counter, e.g. "+500 scholarships"."""

    __tablename__ = "statistics"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(100), nullable=False)
    value = db.Column(db.String(50), nullable=False)
    icon = db.Column(db.String(100))
    display_order = db.Column(db.Integer, nullable=False, default=0)
    is_active = db.Column(db.Boolean, nullable=False, default=True)


class SiteSettings(SerializerMixin, TimestampMixin, db.Model):
    """Single-row table; use ``SiteSettings.get()``."""

    __tablename__ = "site_settings"

    SINGLETON_ID = 1

    id = db.Column(db.Integer, primary_key=True)
    site_name = db.Column(db.String(150), nullable=False, default="فل سكو")
    site_tagline = db.Column(db.String(255))
    site_description = db.Column(db.Text)
    logo = db.Column(db.String(500))
    logo_dark = db.Column(db.String(500))
    favicon = db.Column(db.String(500))

    email = db.Column(db.String(255))
    phone = db.Column(db.String(50))
    whatsapp = db.Column(db.String(50))
    address = db.Column(db.String(255))

    facebook = db.Column(db.String(500))
    twitter = db.Column(db.String(500))
    instagram = db.Column(db.String(500))
    youtube = db.Column(db.String(500))
    linkedin = db.Column(db.String(500))

    primary_color = db.Column(db.String(7), default="#1e40af")
    secondary_color = db.Column(db.String(7), default="#0f766e")
    accent_color = db.Column(db.String(7), default="#f59e0b")

    enable_dark_mode = db.Column(db.Boolean, nullable=False, default=True)
    rtl_direction = db.Column(db.Boolean, nullable=False, default=True)
    default_language = db.Column(db.String(5), nullable=False, default="ar")
    enable_newsletter = db.Column(db.Boolean, nullable=False, default=True)
    enable_scholarship_search = db.Column(db.Boolean, nullable=False, default=True)
    footer_text = db.Column(db.Text)

    @classmethod
    def get(cls) -> "SiteSettings":
        """The settings row, created with defaults on first read."""
        settings = db.session.get(cls, cls.SINGLETON_ID)
        if settings is None:
            settings = cls(id=cls.SINGLETON_ID)
            db.session.add(settings)
            db.session.commit()
        return settings


class SeoSetting(SerializerMixin, TimestampMixin, db.Model):
    """Meta tags for one public path, e.g. "/scholarships"."""

    __tablename__ = "seo_settings"

    id = db.Column(db.Integer, primary_key=True)
    page_path = db.Column(db.String(255), unique=True, nullable=False)
    meta_title = db.Column(db.String(70))
    meta_description = db.Column(db.String(170))
    og_image = db.Column(db.String(500))
    keywords = db.Column(db.Text)

    @classmethod
    def for_path(cls, path):
        return cls.query.filter_by(page_path=path).first()
