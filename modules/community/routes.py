"""Partners, newsletter subscribers and the subscriber export/import."""

import csv
import io
import logging
from datetime import datetime

from flask import flash, make_response, redirect, request, send_file, url_for
from openpyxl import Workbook, load_workbook
from pydantic import ValidationError

from crud import FormField, Resource
from extensions import db
from permissions import role_required
from schemas import PartnerIn, SubscriberIn

from . import bp
from .models import Partner, Subscriber

logger = logging.getLogger(__name__)

EXPORT_HEADER = ["EMAIL", "ACTIVE", "SUBSCRIBED AT"]

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


partners = Resource(
    "partners",
    Partner,
    PartnerIn,
    label="شريك",
    label_plural="الشركاء",
    fields=[
        FormField("name", "الاسم", required=True),
        FormField("slug", "الاسم المختصر (slug)"),
        FormField("logo_url", "رابط الشعار", required=True),
        FormField("website_url", "الموقع الإلكتروني", kind="url"),
        FormField("description", "الوصف", kind="textarea"),
        FormField("display_order", "ترتيب العرض", kind="number"),
        FormField("is_active", "نشط", kind="checkbox"),
    ],
    slug_source="name",
    list_columns=["name", "website_url", "display_order", "is_active"],
    filters={"is_active": bool},
    search_fields=("name", "description"),
    order_by=lambda model: (model.display_order.asc(), model.name.asc()),
).register(bp)

subscribers = Resource(
    "subscribers",
    Subscriber,
    SubscriberIn,
    label="مشترك",
    label_plural="المشتركون في النشرة",
    fields=[
        FormField("email", "البريد الإلكتروني", kind="email", required=True),
        FormField("is_active", "نشط", kind="checkbox"),
    ],
    display_field="email",
    list_columns=["email", "is_active", "created_at"],
    filters={"is_active": bool},
    search_fields=("email",),
    unique_fields={"email": "already_subscribed"},
    write_roles=("admin",),
    read_roles=("admin",),
    public_create=True,
    created_message="subscribed",
).register(bp)


# ---------- export ----------
def _export_rows():
    for s in Subscriber.query.order_by(Subscriber.created_at.asc(), Subscriber.id.asc()).all():
        yield [s.email, "yes" if s.is_active else "no", s.created_at.isoformat(sep=" ", timespec="seconds")]


@bp.route("/admin/subscribers/export.csv")
@role_required(["admin"])
def export_subscribers_csv():
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(EXPORT_HEADER)
    writer.writerows(_export_rows())
    data = ("\ufeff" + out.getvalue()).encode("utf-8")
    resp = make_response(data)
    resp.headers["Content-Type"] = "text/csv; charset=utf-8"
    resp.headers["Content-Disposition"] = f"attachment; filename=subscribers_{datetime.utcnow():%Y%m%d_%H%M%S}.csv"
    return resp


@bp.route("/admin/subscribers/export.xlsx")
@role_required(["admin"])
def export_subscribers_xlsx():
    wb = Workbook()
    ws = wb.active
    ws.title = "Subscribers"
    ws.append(EXPORT_HEADER)
    for row in _export_rows():
        ws.append(row)
    ws.column_dimensions["A"].width = 40
    ws.column_dimensions["C"].width = 22

    output = io.BytesIO()
    wb.save(output)
    output.seek(0)
    return send_file(
        output,
        mimetype=XLSX_MIMETYPE,
        as_attachment=True,
        download_name=f"subscribers_{datetime.utcnow():%Y%m%d_%H%M%S}.xlsx",
    )


# ---------- import ----------
def import_subscribers(emails) -> tuple[int, int]:
    """Add every valid, not yet known address. Returns (added, skipped)."""
    added = skipped = 0
    seen = {email for (email,) in db.session.query(Subscriber.email)}
    for raw in emails:
        try:
            email = SubscriberIn.model_validate({"email": raw}).email
        except ValidationError:
            skipped += 1
            continue
        if email in seen:
            skipped += 1
            continue
        db.session.add(Subscriber(email=email, is_active=True))
        seen.add(email)
        added += 1
    db.session.commit()
    logger.info("Subscriber import: %d added, %d skipped", added, skipped)
    return added, skipped


def _read_first_column(file) -> list:
    filename = (file.filename or "").lower()
    if filename.endswith(".xlsx"):
        wb = load_workbook(file, read_only=True)
        ws = wb.active
        return [row[0] for row in ws.iter_rows(min_row=2, values_only=True) if row and row[0]]
    text = file.read().decode("utf-8-sig")
    rows = list(csv.reader(io.StringIO(text)))
    return [row[0] for row in rows[1:] if row and row[0].strip()]


@bp.route("/admin/subscribers/import", methods=["POST"])
@role_required(["admin"])
def import_subscribers_file():
    file = request.files.get("file")
    if not file or not file.filename:
        flash("يرجى اختيار ملف CSV أو XLSX", "warning")
        return redirect(url_for(subscribers.endpoint("admin_list")))
    added, skipped = import_subscribers(_read_first_column(file))
    flash(f"تمت إضافة {added} مشترك، وتم تخطي {skipped}", "success")
    return redirect(url_for(subscribers.endpoint("admin_list")))
