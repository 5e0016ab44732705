from extensions import db
from models import SerializerMixin, TimestampMixin


class MediaFile(SerializerMixin, TimestampMixin, db.Model):
    """One uploaded file; ``filename`` is the stored name under UPLOAD_FOLDER."""

    __tablename__ = "media_files"

    id = db.Column(db.Integer, primary_key=True)
    filename = db.Column(db.String(255), unique=True, nullable=False)
    original_filename = db.Column(db.String(255), nullable=False)
    url = db.Column(db.String(500), nullable=False)
    mime_type = db.Column(db.String(100), nullable=False)
    size = db.Column(db.Integer, nullable=False)  # bytes
    title = db.Column(db.String(255))
    alt = db.Column(db.String(255))
    width = db.Column(db.Integer)
    height = db.Column(db.Integer)

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<MediaFile {self.filename}>"
