from extensions import db
from models import SerializerMixin, TimestampMixin
from modules.scholarships.models import SeoMixin

post_tags = db.Table(
    "post_tags",
    db.Column("post_id", db.Integer, db.ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True),
    db.Column("tag_id", db.Integer, db.ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


class Post(SeoMixin, SerializerMixin, TimestampMixin, db.Model):
    __tablename__ = "posts"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(120), unique=True, nullable=False, index=True)
    excerpt = db.Column(db.String(500))
    content = db.Column(db.Text, nullable=False)
    author_id = db.Column(db.Integer, db.ForeignKey("users.id"))
    is_published = db.Column(db.Boolean, nullable=False, default=True, index=True)
    is_featured = db.Column(db.Boolean, nullable=False, default=False)
    featured_image = db.Column(db.String(500))
    views = db.Column(db.Integer, nullable=False, default=0)

    author = db.relationship("User")
    tags = db.relationship("Tag", secondary=post_tags, lazy="selectin", order_by="Tag.name")

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["author_name"] = (self.author.full_name or self.author.username) if self.author else None
        data["tags"] = [{"id": t.id, "name": t.name, "slug": t.slug} for t in self.tags]
        data["tag_ids"] = [t.id for t in self.tags]
        return data


class Page(SerializerMixin, TimestampMixin, db.Model):
    """Static page (about, privacy...) shown by slug and optionally linked in header/footer."""

    __tablename__ = "pages"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(120), unique=True, nullable=False, index=True)
    content = db.Column(db.Text, nullable=False)
    meta_title = db.Column(db.String(70))
    meta_description = db.Column(db.String(170))
    is_published = db.Column(db.Boolean, nullable=False, default=True)
    show_in_header = db.Column(db.Boolean, nullable=False, default=False)
    show_in_footer = db.Column(db.Boolean, nullable=False, default=False)


class SuccessStory(SerializerMixin, TimestampMixin, db.Model):
    __tablename__ = "success_stories"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(150), nullable=False)  # the student
    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(120), unique=True, nullable=False, index=True)
    content = db.Column(db.Text, nullable=False)
    scholarship_id = db.Column(db.Integer, db.ForeignKey("scholarships.id", ondelete="SET NULL"))
    country = db.Column(db.String(100))
    university = db.Column(db.String(200))
    featured_image = db.Column(db.String(500))
    is_published = db.Column(db.Boolean, nullable=False, default=True, index=True)

    scholarship = db.relationship("Scholarship", backref=db.backref("success_stories", passive_deletes=True))

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["scholarship_title"] = self.scholarship.title if self.scholarship else None
        return data
