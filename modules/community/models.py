from extensions import db
from models import SerializerMixin, TimestampMixin


class Partner(SerializerMixin, TimestampMixin, db.Model):
    __tablename__ = "partners"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(150), nullable=False)
    slug = db.Column(db.String(120), unique=True, nullable=False, index=True)
    logo_url = db.Column(db.String(500), nullable=False)
    website_url = db.Column(db.String(500))
    description = db.Column(db.Text)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    display_order = db.Column(db.Integer, nullable=False, default=0)


class Subscriber(SerializerMixin, TimestampMixin, db.Model):
    """Newsletter address; unique, no slug."""

    __tablename__ = "subscribers"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
