"""Taxonomy tables used to classify scholarships and posts."""

from extensions import db
from models import SerializerMixin, TimestampMixin


class Country(SerializerMixin, TimestampMixin, db.Model):
    __tablename__ = "countries"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    slug = db.Column(db.String(120), unique=True, nullable=False, index=True)
    description = db.Column(db.Text)
    flag_url = db.Column(db.String(500))

    scholarships = db.relationship("Scholarship", back_populates="country", lazy="dynamic", passive_deletes=True)


class Level(SerializerMixin, TimestampMixin, db.Model):
    """Study level (bachelor, master, PhD...)."""

    __tablename__ = "levels"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    slug = db.Column(db.String(120), unique=True, nullable=False, index=True)
    description = db.Column(db.Text)

    scholarships = db.relationship("Scholarship", back_populates="level", lazy="dynamic", passive_deletes=True)


class Category(SerializerMixin, TimestampMixin, db.Model):
    __tablename__ = "categories"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    slug = db.Column(db.String(120), unique=True, nullable=False, index=True)
    description = db.Column(db.Text)

    scholarships = db.relationship("Scholarship", back_populates="category", lazy="dynamic", passive_deletes=True)


class Tag(SerializerMixin, TimestampMixin, db.Model):
    __tablename__ = "tags"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(60), nullable=False)
    slug = db.Column(db.String(120), unique=True, nullable=False, index=True)
