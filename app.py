import logging
import os

from dotenv import load_dotenv
from flask import Flask, has_request_context, request

load_dotenv()

from config import Config  # noqa: E402  (load_dotenv needs to run first)
from extensions import db, login_manager  # noqa: E402  (load_dotenv needs to run first)


def _configure_logging(app: Flask) -> None:
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app.logger.setLevel(level)


def create_app(config_object=None, **overrides) -> Flask:
    """Application factory for the scholarship portal."""

    app = Flask(__name__)
    app.config.from_object(config_object or Config)
    app.config.update(overrides)
    _configure_logging(app)

    # init extensions
    db.init_app(app)
    login_manager.init_app(app)
    login_manager.login_view = "accounts.login"

    import session_store
    from api import register_error_handlers

    session_store.init_app(app)
    register_error_handlers(app)

    # blueprints
    from modules.accounts import bp as accounts_bp
    from modules.catalog import bp as catalog_bp
    from modules.scholarships import bp as scholarships_bp
    from modules.content import bp as content_bp
    from modules.community import bp as community_bp
    from modules.media import bp as media_bp
    from modules.site import bp as site_bp

    app.register_blueprint(accounts_bp)
    app.register_blueprint(catalog_bp)
    app.register_blueprint(scholarships_bp)
    app.register_blueprint(content_bp)
    app.register_blueprint(community_bp)
    app.register_blueprint(media_bp)
    app.register_blueprint(site_bp)  # public "/"

    # DB
    with app.app_context():
        # models must be imported before create_all()
        import models  # noqa: F401
        from modules.catalog import models as catalog_models  # noqa: F401
        from modules.scholarships import models as scholarship_models  # noqa: F401
        from modules.content import models as content_models  # noqa: F401
        from modules.community import models as community_models  # noqa: F401
        from modules.media import models as media_models  # noqa: F401
        from modules.site import models as site_models  # noqa: F401

        db.create_all()

    # uploads dir
    os.makedirs(app.config.get("UPLOAD_FOLDER", "uploads"), exist_ok=True)

    # --- template globals ---
    from i18n import get_locale, gettext, text_direction
    from permissions import can_create, can_delete, can_edit, can_manage_settings, can_manage_users, is_admin
    from modules.content.models import Page
    from modules.site.models import SeoSetting, SiteSettings

    @app.context_processor
    def inject_globals():
        locale = get_locale()
        return dict(
            can_create=can_create, can_edit=can_edit, can_delete=can_delete,
            can_manage_users=can_manage_users, can_manage_settings=can_manage_settings,
            is_admin=is_admin,
            _=gettext,
            locale=locale,
            text_dir=text_direction(locale),
            site=SiteSettings.get(),
            page_seo=SeoSetting.for_path(request.path) if has_request_context() else None,
            header_pages=Page.query.filter_by(is_published=True, show_in_header=True).order_by(Page.title).all(),
            footer_pages=Page.query.filter_by(is_published=True, show_in_footer=True).order_by(Page.title).all(),
        )

    app.logger.info("App ready (env=%s)", app.config.get("APP_ENV"))
    return app


if __name__ == "__main__":
    app = create_app()
    app.run(debug=app.config.get("APP_ENV") != "production")
