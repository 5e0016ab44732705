"""SQL-backed Flask sessions.

The cookie carries only a signed session id. Session data lives in the
``web_sessions`` table with a sliding expiry (``PERMANENT_SESSION_LIFETIME``,
24h by default). Expired rows are never loaded, and a sweep removes them at
most once per ``SESSION_SWEEP_INTERVAL``.
"""

import logging
import secrets
from datetime import datetime

import click
from flask.sessions import SessionInterface, SessionMixin, session_json_serializer
from itsdangerous import BadSignature, Signer
from werkzeug.datastructures import CallbackDict

from extensions import db
from models import WebSession

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Clock used for every expiry decision (patched in tests)."""
    return datetime.utcnow()


def sweep_expired(now: datetime | None = None) -> int:
    """Delete every session past its expiry; returns the number removed."""
    now = now or utcnow()
    removed = WebSession.query.filter(WebSession.expires_at <= now).delete(synchronize_session=False)
    db.session.commit()
    if removed:
        logger.info("Swept %d expired session(s)", removed)
    return removed


def destroy_session(sid: str) -> None:
    record = db.session.get(WebSession, sid)
    if record is not None:
        db.session.delete(record)
        db.session.commit()


class ServerSideSession(CallbackDict, SessionMixin):
    """Dict-like session bound to a server-side record."""

    def __init__(self, initial=None, sid=None, new=False, expired=False):
        def on_update(self):
            self.modified = True

        super().__init__(initial, on_update)
        self.sid = sid
        self.new = new
        self.expired = expired
        self.modified = False
        self.rotate = False

    def regenerate(self) -> None:
        """Issue a fresh sid on save (used at login against fixation)."""
        self.rotate = True
        self.modified = True


class SqlSessionInterface(SessionInterface):
    session_class = ServerSideSession
    serializer = session_json_serializer
    salt = "fullsco-session"

    def __init__(self):
        self._last_sweep = None

    # ---------- helpers ----------
    def _signer(self, app) -> Signer:
        return Signer(app.secret_key, salt=self.salt)

    @staticmethod
    def _new_sid() -> str:
        return secrets.token_urlsafe(32)

    def _maybe_sweep(self, app, now: datetime) -> None:
        interval = app.config["SESSION_SWEEP_INTERVAL"]
        if self._last_sweep is None or now - self._last_sweep >= interval:
            self._last_sweep = now
            sweep_expired(now)

    # ---------- SessionInterface ----------
    def open_session(self, app, request):
        now = utcnow()
        self._maybe_sweep(app, now)

        signed = request.cookies.get(self.get_cookie_name(app))
        if not signed:
            return self.session_class(sid=self._new_sid(), new=True)

        try:
            sid = self._signer(app).unsign(signed).decode("utf-8")
        except BadSignature:
            logger.warning("Rejected session cookie with a bad signature")
            return self.session_class(sid=self._new_sid(), new=True)

        record = db.session.get(WebSession, sid)
        if record is None or record.expires_at <= now:
            if record is not None:
                db.session.delete(record)
                db.session.commit()
            return self.session_class(sid=self._new_sid(), new=True, expired=True)

        try:
            data = self.serializer.loads(record.data)
        except ValueError:
            logger.warning("Discarding unreadable session %s", sid[:8])
            data = {}
        return self.session_class(data, sid=sid)

    def save_session(self, app, session, response):
        name = self.get_cookie_name(app)
        domain = self.get_cookie_domain(app)
        path = self.get_cookie_path(app)

        if not session:
            if session.modified:
                destroy_session(session.sid)
                response.delete_cookie(name, domain=domain, path=path)
            return

        if session.rotate:
            destroy_session(session.sid)
            session.sid = self._new_sid()
            session.rotate = False

        expires = utcnow() + app.permanent_session_lifetime
        user_id = session.get("_user_id")

        record = db.session.get(WebSession, session.sid)
        if record is None:
            record = WebSession(sid=session.sid)
            db.session.add(record)
        record.data = self.serializer.dumps(dict(session))
        record.user_id = int(user_id) if user_id else None
        record.expires_at = expires
        db.session.commit()

        response.vary.add("Cookie")
        response.set_cookie(
            name,
            self._signer(app).sign(session.sid).decode("utf-8"),
            max_age=int(app.permanent_session_lifetime.total_seconds()),
            expires=expires,
            httponly=self.get_cookie_httponly(app),
            secure=self.get_cookie_secure(app),
            samesite=self.get_cookie_samesite(app),
            domain=domain,
            path=path,
        )


def init_app(app) -> None:
    app.session_interface = SqlSessionInterface()

    @app.cli.command("sweep-sessions")
    def sweep_sessions_command():
        """Remove expired sessions from the store."""
        removed = sweep_expired()
        click.echo(f"Removed {removed} expired session(s).")
