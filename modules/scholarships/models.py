from extensions import db
from models import SerializerMixin, TimestampMixin


class SeoMixin:
    seo_title = db.Column(db.String(70))
    seo_description = db.Column(db.String(170))
    seo_keywords = db.Column(db.Text)
    focus_keyword = db.Column(db.String(100))


class Scholarship(SeoMixin, SerializerMixin, TimestampMixin, db.Model):
    __tablename__ = "scholarships"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(120), unique=True, nullable=False, index=True)
    description = db.Column(db.String(500), nullable=False)
    content = db.Column(db.Text, nullable=False)

    country_id = db.Column(db.Integer, db.ForeignKey("countries.id", ondelete="SET NULL"), index=True)
    level_id = db.Column(db.Integer, db.ForeignKey("levels.id", ondelete="SET NULL"), index=True)
    category_id = db.Column(db.Integer, db.ForeignKey("categories.id", ondelete="SET NULL"), index=True)

    university = db.Column(db.String(200))
    department = db.Column(db.String(200))
    website = db.Column(db.String(500))
    amount = db.Column(db.String(100))  # free text: "full funding", "10 000"...
    currency = db.Column(db.String(10))
    start_date = db.Column(db.Date)
    end_date = db.Column(db.Date)
    deadline = db.Column(db.Date)

    is_featured = db.Column(db.Boolean, nullable=False, default=False, index=True)
    is_published = db.Column(db.Boolean, nullable=False, default=True, index=True)
    featured_image = db.Column(db.String(500))
    views = db.Column(db.Integer, nullable=False, default=0)

    country = db.relationship("Country", back_populates="scholarships")
    level = db.relationship("Level", back_populates="scholarships")
    category = db.relationship("Category", back_populates="scholarships")

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["country_name"] = self.country.name if self.country else None
        data["level_name"] = self.level.name if self.level else None
        data["category_name"] = self.category.name if self.category else None
        return data
