import csv
import io

from openpyxl import Workbook, load_workbook

from i18n import MESSAGES
from modules.community.models import Partner, Subscriber


def test_public_signup_normalises_email(anon):
    resp = anon.post("/api/subscribers", json={"email": "  Reader@Mail.com "})
    body = resp.get_json()
    assert resp.status_code == 201
    assert body["message"] == MESSAGES["ar"]["subscribed"]
    assert body["data"]["email"] == "reader@mail.com"


def test_duplicate_signup_conflicts(anon):
    assert anon.post("/api/subscribers", json={"email": "reader@mail.com"}).status_code == 201
    resp = anon.post("/api/subscribers", json={"email": "READER@mail.com"})
    assert resp.status_code == 409
    assert resp.get_json()["message"] == MESSAGES["ar"]["already_subscribed"]


def test_invalid_email_rejected(anon):
    resp = anon.post("/api/subscribers", json={"email": "not-an-email"})
    assert resp.status_code == 400
    assert resp.get_json()["errors"][0]["field"] == "email"


def test_subscriber_list_is_admin_only(anon, as_editor, add):
    add(Subscriber(email="a@mail.com"))
    assert anon.get("/api/subscribers").status_code == 401
    assert as_editor.get("/api/subscribers").status_code == 403


def test_newsletter_form_flashes_result(app, anon):
    first = anon.post("/newsletter", data={"email": "fan@mail.com"}, follow_redirects=True)
    assert MESSAGES["ar"]["subscribed"] in first.get_data(as_text=True)

    again = anon.post("/newsletter", data={"email": "fan@mail.com"}, follow_redirects=True)
    assert MESSAGES["ar"]["already_subscribed"] in again.get_data(as_text=True)

    bad = anon.post("/newsletter", data={"email": "nope"}, follow_redirects=True)
    assert MESSAGES["ar"]["invalid_email"] in bad.get_data(as_text=True)

    with app.app_context():
        assert Subscriber.query.count() == 1


def test_csv_export(as_admin, add):
    add(Subscriber(email="one@mail.com"), Subscriber(email="two@mail.com", is_active=False))

    resp = as_admin.get("/admin/subscribers/export.csv")
    assert resp.status_code == 200
    assert resp.headers["Content-Type"].startswith("text/csv")
    assert "attachment" in resp.headers["Content-Disposition"]

    rows = list(csv.reader(io.StringIO(resp.get_data().decode("utf-8-sig"))))
    assert rows[0] == ["EMAIL", "ACTIVE", "SUBSCRIBED AT"]
    assert [r[:2] for r in rows[1:]] == [["one@mail.com", "yes"], ["two@mail.com", "no"]]


def test_xlsx_export(as_admin, add):
    add(Subscriber(email="one@mail.com"))

    resp = as_admin.get("/admin/subscribers/export.xlsx")
    assert resp.status_code == 200
    ws = load_workbook(io.BytesIO(resp.get_data())).active
    assert ws["A1"].value == "EMAIL"
    assert ws["A2"].value == "one@mail.com"


def test_export_requires_admin(as_editor):
    assert as_editor.get("/admin/subscribers/export.csv").status_code == 302


def test_import_csv_skips_invalid_and_known(app, as_admin, add):
    add(Subscriber(email="known@mail.com"))
    data = b"email\nnew@mail.com\nknown@mail.com\nbroken\n"

    resp = as_admin.post(
        "/admin/subscribers/import",
        data={"file": (io.BytesIO(data), "list.csv")},
        content_type="multipart/form-data",
    )
    assert resp.status_code == 302
    with app.app_context():
        assert sorted(s.email for s in Subscriber.query.all()) == ["known@mail.com", "new@mail.com"]


def test_import_xlsx(app, as_admin):
    wb = Workbook()
    ws = wb.active
    ws.append(["EMAIL"])
    ws.append(["Sheet@Mail.com"])
    buf = io.BytesIO()
    wb.save(buf)
    buf.seek(0)

    as_admin.post(
        "/admin/subscribers/import",
        data={"file": (buf, "list.xlsx")},
        content_type="multipart/form-data",
    )
    with app.app_context():
        assert [s.email for s in Subscriber.query.all()] == ["sheet@mail.com"]


def test_partners_sorted_by_display_order(anon, add):
    add(
        Partner(name="Beta", slug="beta", logo_url="/b.png", display_order=2),
        Partner(name="Alpha", slug="alpha", logo_url="/a.png", display_order=1),
        Partner(name="Gamma", slug="gamma", logo_url="/g.png", display_order=1, is_active=False),
    )
    names = [p["name"] for p in anon.get("/api/partners?is_active=1").get_json()["data"]]
    assert names == ["Alpha", "Beta"]
