"""Shared SQLAlchemy models and mixins."""

from datetime import date, datetime
from decimal import Decimal

from flask_login import UserMixin

from extensions import db

ROLES = ("admin", "editor")


class SerializerMixin:
    """Column-driven ``to_dict`` used by the JSON API."""

    serialize_exclude: tuple = ()

    def to_dict(self) -> dict:
        out = {}
        for column in self.__table__.columns:
            if column.key in self.serialize_exclude:
                continue
            value = getattr(self, column.key)
            if isinstance(value, (datetime, date)):
                value = value.isoformat()
            elif isinstance(value, Decimal):
                value = str(value)
            out[column.key] = value
        return out


class TimestampMixin:
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class User(UserMixin, SerializerMixin, TimestampMixin, db.Model):
    """Represents a back-office user."""

    __tablename__ = "users"
    serialize_exclude = ("password",)

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(150), unique=True, nullable=False)
    email = db.Column(db.String(255), unique=True)
    full_name = db.Column(db.String(150))
    password = db.Column(db.String(255), nullable=False)  # werkzeug hash, never plaintext
    role = db.Column(db.String(50), nullable=False, default="editor")  # admin, editor

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<User {self.username}>"


class WebSession(db.Model):
    """Server-side session record; the cookie only carries the signed sid."""

    __tablename__ = "web_sessions"

    sid = db.Column(db.String(64), primary_key=True)
    data = db.Column(db.Text, nullable=False, default="{}")
    user_id = db.Column(db.Integer, index=True)
    expires_at = db.Column(db.DateTime, nullable=False, index=True)

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<WebSession {self.sid[:8]} until {self.expires_at:%Y-%m-%d %H:%M}>"
