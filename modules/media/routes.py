"""Media library API, upload handling and file serving."""

import logging
import os

from flask import current_app, flash, redirect, request, send_from_directory, url_for
from flask_login import current_user
from pydantic import ValidationError

from api import ApiError, success_response, validation_errors
from crud import FormField, Resource
from extensions import db
from i18n import gettext as _
from permissions import api_role_required, role_required
from schemas import MediaBulkDeleteIn, MediaFileIn
from utils import handle_file_upload

from . import bp
from .models import MediaFile

logger = logging.getLogger(__name__)


def _stored_path(filename):
    return os.path.join(current_app.config["UPLOAD_FOLDER"], filename)


def remove_stored_file(item: dict):
    """Delete the file behind a media row that is already gone from the database."""
    path = _stored_path(item["filename"])
    try:
        os.remove(path)
    except FileNotFoundError:
        logger.warning("Media file %s was already missing on disk", path)


media = Resource(
    "media",
    MediaFile,
    MediaFileIn,
    label="ملف وسائط",
    label_plural="مكتبة الوسائط",
    fields=[
        FormField("title", "العنوان"),
        FormField("alt", "النص البديل"),
        FormField("width", "العرض (بكسل)", kind="number"),
        FormField("height", "الارتفاع (بكسل)", kind="number"),
    ],
    display_field="original_filename",
    list_columns=["original_filename", "title", "mime_type", "size"],
    filters={"mime_type": str},
    search_fields=("title", "original_filename", "alt"),
    creatable=False,
    on_delete=remove_stored_file,
).register(bp)


def store_upload(file, metadata: dict) -> MediaFile:
    """Save ``file`` and record it; raises ApiError for missing or disallowed files."""
    meta = MediaFileIn.model_validate(metadata).model_dump()
    filename = handle_file_upload(file, current_app.config["UPLOAD_FOLDER"])
    if filename is None:
        raise ApiError(400, _("invalid_file"), errors=[{"field": "file", "message": _("invalid_file")}],
                       code="invalid_file")
    path = _stored_path(filename)
    item = MediaFile(
        filename=filename,
        original_filename=file.filename,
        url=url_for("media.media_file", filename=filename),
        mime_type=file.mimetype or "application/octet-stream",
        size=os.path.getsize(path),
        **meta,
    )
    db.session.add(item)
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        os.remove(path)
        raise
    logger.info("Media %s uploaded by %s", filename, current_user.username)
    return item


@bp.route("/api/media", methods=["POST"])
@api_role_required("admin", "editor")
def api_upload_media():
    item = store_upload(request.files.get("file"), request.form.to_dict())
    return success_response(item.to_dict(), _("uploaded"), 201)


@bp.route("/api/media/bulk-delete", methods=["POST"])
@api_role_required("admin")
def api_bulk_delete_media():
    ids = list(dict.fromkeys(MediaBulkDeleteIn.model_validate(request.get_json(silent=True) or {}).ids))
    items = MediaFile.query.filter(MediaFile.id.in_(ids)).all()
    removed = [item.to_dict() for item in items]
    for item in items:
        db.session.delete(item)
    db.session.commit()
    for row in removed:
        remove_stored_file(row)

    deleted = {row["id"] for row in removed}
    logger.info("%d media files deleted by %s", len(deleted), current_user.username)
    return success_response(
        {"deleted": sorted(deleted), "missing": [i for i in ids if i not in deleted]},
        _("deleted"),
    )


@bp.route("/admin/media/upload", methods=["POST"])
@role_required(["admin", "editor"])
def admin_upload_media():
    try:
        item = store_upload(request.files.get("file"), request.form.to_dict())
    except ValidationError as exc:
        flash("; ".join(e["message"] for e in validation_errors(exc)), "danger")
        return redirect(url_for(media.endpoint("admin_list")))
    except ApiError as exc:
        flash(exc.message, "warning")
        return redirect(url_for(media.endpoint("admin_list")))
    flash(_("uploaded"), "success")
    return redirect(url_for(media.endpoint("admin_list"), highlight=item.id))


@bp.route("/uploads/<path:filename>")
def media_file(filename):
    return send_from_directory(os.path.abspath(current_app.config["UPLOAD_FOLDER"]), filename)
