from modules.catalog.models import Country, Level
from modules.scholarships.models import Scholarship


def _payload(**overrides):
    data = {
        "title": "Erasmus Mundus Joint Master",
        "description": "Fully funded joint master programme across Europe.",
        "content": "<p>Tuition, travel and a monthly allowance are covered.</p>",
        "university": "Several EU universities",
        "deadline": "2030-01-15",
    }
    data.update(overrides)
    return data


def _scholarship(slug, **fields):
    defaults = dict(title=f"Scholarship {slug}", description="A long enough description", content="Long enough content")
    defaults.update(fields)
    return Scholarship(slug=slug, **defaults)


def test_create_with_taxonomy_names(as_admin, add):
    country_id, level_id = add(Country(name="Germany", slug="germany"), Level(name="Master", slug="master"))

    resp = as_admin.post("/api/scholarships", json=_payload(country_id=country_id, level_id=level_id))
    data = resp.get_json()["data"]
    assert resp.status_code == 201
    assert data["slug"] == "erasmus-mundus-joint-master"
    assert data["country_name"] == "Germany"
    assert data["level_name"] == "Master"
    assert data["deadline"] == "2030-01-15"
    assert data["views"] == 0


def test_title_and_description_lengths_are_checked(as_admin):
    resp = as_admin.post("/api/scholarships", json=_payload(title="Short", description="tiny"))
    fields = {e["field"] for e in resp.get_json()["errors"]}
    assert resp.status_code == 400
    assert {"title", "description"} <= fields


def test_end_date_must_not_precede_start_date(as_admin):
    resp = as_admin.post("/api/scholarships", json=_payload(start_date="2030-05-01", end_date="2030-04-01"))
    assert resp.status_code == 400
    assert resp.get_json()["code"] == "validation_error"


def test_partial_update_keeps_other_fields(as_admin):
    created = as_admin.post("/api/scholarships", json=_payload()).get_json()["data"]

    resp = as_admin.put(f"/api/scholarships/{created['id']}", json={"is_featured": True})
    data = resp.get_json()["data"]
    assert resp.status_code == 200
    assert data["is_featured"] is True
    assert data["title"] == created["title"]
    assert data["deadline"] == "2030-01-15"


def test_unpublished_rows_are_hidden_from_visitors(as_admin, anon, add):
    add(_scholarship("visible"), _scholarship("draft", is_published=False))

    public = [s["slug"] for s in anon.get("/api/scholarships").get_json()["data"]]
    assert public == ["visible"]
    assert anon.get("/api/scholarships/slug/draft").status_code == 404

    staff = {s["slug"] for s in as_admin.get("/api/scholarships").get_json()["data"]}
    assert staff == {"visible", "draft"}


def test_filters(anon, add):
    de, jp = add(Country(name="Germany", slug="germany"), Country(name="Japan", slug="japan"))
    add(
        _scholarship("daad", country_id=de, is_featured=True),
        _scholarship("mext", country_id=jp),
    )

    by_country = anon.get(f"/api/scholarships?country_id={jp}").get_json()["data"]
    assert [s["slug"] for s in by_country] == ["mext"]

    featured = anon.get("/api/scholarships?is_featured=true").get_json()["data"]
    assert [s["slug"] for s in featured] == ["daad"]


def test_featured_endpoint(anon, add):
    add(
        _scholarship("one", is_featured=True),
        _scholarship("two"),
        _scholarship("three", is_featured=True, is_published=False),
    )
    resp = anon.get("/api/scholarships/featured")
    assert resp.status_code == 200
    assert [s["slug"] for s in resp.get_json()["data"]] == ["one"]


def test_opening_by_slug_counts_views(anon, add):
    add(_scholarship("counted"))
    assert anon.get("/api/scholarships/slug/counted").get_json()["data"]["views"] == 1
    assert anon.get("/api/scholarships/slug/counted").get_json()["data"]["views"] == 2


def test_editor_cannot_delete_scholarship(as_editor, add):
    (sid,) = add(_scholarship("keep"))
    assert as_editor.delete(f"/api/scholarships/{sid}").status_code == 403
