import io

import pytest

from i18n import MESSAGES
from modules.media.models import MediaFile


@pytest.fixture()
def uploads(app, tmp_path):
    app.config["UPLOAD_FOLDER"] = str(tmp_path)
    return tmp_path


def _upload(client, name="Cover Photo.png", body=b"\x89PNG fake", **form):
    return client.post(
        "/api/media",
        data={"file": (io.BytesIO(body), name), **form},
        content_type="multipart/form-data",
    )


def test_editor_uploads_image(app, as_editor, uploads):
    resp = _upload(as_editor, alt="Graduation day", title="Cover")
    data = resp.get_json()["data"]
    assert resp.status_code == 201
    assert resp.get_json()["message"] == MESSAGES["ar"]["uploaded"]
    assert data["filename"].startswith("Cover_Photo-")
    assert data["original_filename"] == "Cover Photo.png"
    assert data["mime_type"] == "image/png"
    assert data["size"] == len(b"\x89PNG fake")
    assert (data["title"], data["alt"]) == ("Cover", "Graduation day")
    assert (uploads / data["filename"]).exists()
    assert as_editor.get(data["url"]).get_data() == b"\x89PNG fake"
    with app.app_context():
        assert MediaFile.query.count() == 1


def test_library_is_listed_and_searchable(as_editor, anon, uploads):
    _upload(as_editor, name="logo.svg", body=b"<svg/>", title="Partner logo")
    _upload(as_editor, name="campus.jpg", body=b"jpeg", title="Campus")

    names = [m["original_filename"] for m in anon.get("/api/media").get_json()["data"]]
    assert sorted(names) == ["campus.jpg", "logo.svg"]
    found = anon.get("/api/media?q=partner").get_json()["data"]
    assert [m["original_filename"] for m in found] == ["logo.svg"]
    svgs = anon.get("/api/media?mime_type=image/svg%2Bxml").get_json()["data"]
    assert [m["original_filename"] for m in svgs] == ["logo.svg"]


def test_metadata_update_keeps_the_file_fields(as_editor, uploads):
    item = _upload(as_editor).get_json()["data"]
    resp = as_editor.put(f"/api/media/{item['id']}", json={"alt": "Students on campus", "width": 1200,
                                                           "filename": "../../etc/passwd"})
    data = resp.get_json()["data"]
    assert resp.status_code == 200
    assert data["alt"] == "Students on campus"
    assert data["width"] == 1200
    assert data["filename"] == item["filename"]

    bad = as_editor.patch(f"/api/media/{item['id']}", json={"height": 0})
    assert bad.status_code == 400
    assert bad.get_json()["errors"][0]["field"] == "height"


def test_deleting_an_item_removes_its_file(as_admin, uploads):
    item = _upload(as_admin).get_json()["data"]
    assert as_admin.delete(f"/api/media/{item['id']}").status_code == 200
    assert not (uploads / item["filename"]).exists()
    assert as_admin.get(f"/api/media/{item['id']}").status_code == 404


def test_delete_survives_a_file_already_gone(as_admin, uploads):
    item = _upload(as_admin).get_json()["data"]
    (uploads / item["filename"]).unlink()
    assert as_admin.delete(f"/api/media/{item['id']}").status_code == 200


def test_bulk_delete(app, as_admin, uploads):
    first = _upload(as_admin, name="a.png").get_json()["data"]
    second = _upload(as_admin, name="b.png").get_json()["data"]
    kept = _upload(as_admin, name="c.png").get_json()["data"]

    resp = as_admin.post("/api/media/bulk-delete", json={"ids": [second["id"], first["id"], 999, first["id"]]})
    data = resp.get_json()["data"]
    assert resp.status_code == 200
    assert data == {"deleted": sorted([first["id"], second["id"]]), "missing": [999]}
    assert sorted(p.name for p in uploads.iterdir()) == [kept["filename"]]
    with app.app_context():
        assert [m.id for m in MediaFile.query.all()] == [kept["id"]]

    assert as_admin.post("/api/media/bulk-delete", json={"ids": []}).status_code == 400


def test_editors_cannot_delete(as_editor, uploads):
    item = _upload(as_editor).get_json()["data"]
    assert as_editor.delete(f"/api/media/{item['id']}").status_code == 403
    assert as_editor.post("/api/media/bulk-delete", json={"ids": [item["id"]]}).status_code == 403
    assert (uploads / item["filename"]).exists()


def test_upload_rejects_other_types_and_visitors(app, as_editor, anon, uploads):
    bad = _upload(as_editor, name="setup.exe", body=b"MZ")
    assert bad.status_code == 400
    assert bad.get_json()["code"] == "invalid_file"

    missing = as_editor.post("/api/media", data={}, content_type="multipart/form-data")
    assert missing.get_json()["code"] == "invalid_file"

    assert anon.post("/api/media", data={}, content_type="multipart/form-data").status_code == 401
    assert list(uploads.iterdir()) == []
    with app.app_context():
        assert MediaFile.query.count() == 0


def test_media_has_no_generic_create(as_admin):
    assert as_admin.post("/api/media", json={"title": "x"}).get_json()["code"] == "invalid_file"
    assert as_admin.get("/admin/media/new").status_code == 404


def test_admin_upload_form(as_admin, uploads):
    page = as_admin.get("/admin/media/")
    assert page.status_code == 200
    assert "/admin/media/upload" in page.get_data(as_text=True)

    resp = as_admin.post(
        "/admin/media/upload",
        data={"file": (io.BytesIO(b"gif"), "badge.gif"), "alt": "Badge"},
        content_type="multipart/form-data",
    )
    assert resp.status_code == 302
    assert len(list(uploads.iterdir())) == 1
    listing = as_admin.get("/admin/media/").get_data(as_text=True)
    assert "badge.gif" in listing
    assert "/admin/media/new" not in listing
