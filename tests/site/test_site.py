from urllib.parse import urlsplit

from i18n import MESSAGES
from modules.catalog.models import Country
from modules.content.models import Page, Post, SuccessStory
from modules.scholarships.models import Scholarship
from modules.site.models import SeoSetting, SiteSettings


def _scholarship(slug, **fields):
    defaults = dict(title=f"Scholarship {slug}", description="A long enough description", content="Long enough content")
    defaults.update(fields)
    return Scholarship(slug=slug, **defaults)


# ---------- public pages ----------
def test_home_renders_featured(anon, add):
    add(_scholarship("daad", title="DAAD Research Grant", is_featured=True))
    resp = anon.get("/")
    assert resp.status_code == 200
    body = resp.get_data(as_text=True)
    assert "DAAD Research Grant" in body
    assert 'dir="rtl"' in body


def test_scholarship_list_filters_by_country_slug(anon, add):
    de, jp = add(Country(name="Germany", slug="germany"), Country(name="Japan", slug="japan"))
    add(
        _scholarship("daad", title="DAAD Research Grant", country_id=de),
        _scholarship("mext", title="MEXT Government Award", country_id=jp),
    )

    body = anon.get("/scholarships?country=japan").get_data(as_text=True)
    assert "MEXT Government Award" in body
    assert "DAAD Research Grant" not in body

    unknown = anon.get("/scholarships?country=atlantis").get_data(as_text=True)
    assert "MEXT Government Award" not in unknown


def test_detail_pages_hide_drafts_and_count_views(app, anon, add):
    add(_scholarship("open"), _scholarship("draft", is_published=False))

    assert anon.get("/scholarships/open").status_code == 200
    assert anon.get("/scholarships/draft").status_code == 404
    with app.app_context():
        assert Scholarship.query.filter_by(slug="open").one().views == 1


def test_article_and_story_pages(anon, add):
    (sid,) = add(_scholarship("chevening", title="Chevening Scholarship"))
    add(
        Post(title="Interview checklist", slug="interview-checklist", content="Bring documents"),
        SuccessStory(name="Sara", title="From Amman to London", slug="amman-london",
                     content="My year in London", scholarship_id=sid),
    )
    assert "Interview checklist" in anon.get("/articles").get_data(as_text=True)
    assert anon.get("/articles/interview-checklist").status_code == 200
    assert "From Amman to London" in anon.get("/success-stories").get_data(as_text=True)
    assert anon.get("/success-stories/amman-london").status_code == 200


def test_static_page_and_html_404(anon, add):
    add(Page(title="Privacy policy", slug="privacy", content="We keep little data"))
    assert "Privacy policy" in anon.get("/page/privacy").get_data(as_text=True)

    missing = anon.get("/page/missing")
    assert missing.status_code == 404
    assert "text/html" in missing.headers["Content-Type"]


def test_unknown_api_path_uses_envelope(anon):
    resp = anon.get("/api/nope")
    assert resp.status_code == 404
    assert resp.get_json()["success"] is False


# ---------- search ----------
def test_search_api_groups_by_tab(anon, add):
    add(
        _scholarship("oxford", title="Oxford Rhodes Scholarship"),
        _scholarship("hidden", title="Oxford draft", is_published=False),
        Post(title="Living in Oxford", slug="living-oxford", content="Rent and transport"),
    )
    resp = anon.get("/api/search?q=oxford")
    data = resp.get_json()["data"]
    assert resp.status_code == 200
    assert data["query"] == "oxford"
    assert data["total"] == 2
    assert [s["slug"] for s in data["results"]["scholarships"]] == ["oxford"]
    assert [p["slug"] for p in data["results"]["posts"]] == ["living-oxford"]
    assert data["results"]["success_stories"] == []


def test_search_api_without_query(anon):
    body = anon.get("/api/search?q=%20").get_json()
    assert body["data"]["total"] == 0
    assert body["message"] == MESSAGES["ar"]["search_empty"]


def test_search_treats_wildcards_literally(anon, add):
    add(
        _scholarship("full", title="100% funded master programme"),
        _scholarship("partial", title="Partial tuition waiver"),
    )
    data = anon.get("/api/search?q=100%25").get_json()["data"]
    assert [s["slug"] for s in data["results"]["scholarships"]] == ["full"]
    assert anon.get("/api/search?q=_").get_json()["data"]["total"] == 0

    body = anon.get("/scholarships?q=%25").get_data(as_text=True)
    assert "100% funded master programme" in body
    assert "Partial tuition waiver" not in body


def test_search_page(anon, add):
    add(_scholarship("rhodes", title="Rhodes Scholarship"))
    resp = anon.get("/search?q=rhodes")
    assert resp.status_code == 200
    assert "Rhodes Scholarship" in resp.get_data(as_text=True)


# ---------- settings ----------
def test_settings_are_public_and_created_on_first_read(app, anon):
    resp = anon.get("/api/site-settings")
    assert resp.status_code == 200
    assert resp.get_json()["data"]["id"] == SiteSettings.SINGLETON_ID
    with app.app_context():
        assert SiteSettings.query.count() == 1


def test_admin_updates_settings(as_admin, anon):
    resp = as_admin.put("/api/site-settings", json={"site_name": "FullSco", "primary_color": "#112233"})
    assert resp.status_code == 200
    assert resp.get_json()["message"] == MESSAGES["ar"]["settings_saved"]

    data = anon.get("/api/site-settings").get_json()["data"]
    assert data["site_name"] == "FullSco"
    assert data["primary_color"] == "#112233"
    assert data["default_language"] == "ar"


def test_settings_reject_bad_color(as_admin):
    bad = as_admin.patch("/api/site-settings", json={"primary_color": "blue"})
    assert bad.status_code == 400
    assert bad.get_json()["errors"][0]["field"] == "primary_color"


def test_editors_cannot_change_settings(as_editor):
    assert as_editor.put("/api/site-settings", json={"site_name": "Mine"}).status_code == 403


def test_admin_settings_form(as_admin):
    assert as_admin.get("/admin/settings").status_code == 200
    resp = as_admin.post("/admin/settings", data={"site_name": "", "default_language": "ar"})
    assert resp.status_code == 400


# ---------- statistics ----------
def test_statistics_crud(as_admin, anon):
    created = as_admin.post("/api/statistics", json={"title": "Scholarships", "value": "+500", "display_order": ""})
    assert created.status_code == 201
    stat = created.get_json()["data"]
    assert stat["display_order"] == 0

    as_admin.post("/api/statistics", json={"title": "Countries", "value": "40", "display_order": -1})
    titles = [s["title"] for s in anon.get("/api/statistics").get_json()["data"]]
    assert titles == ["Countries", "Scholarships"]

    assert as_admin.delete(f"/api/statistics/{stat['id']}").status_code == 200


# ---------- language ----------
def test_language_switch_sets_cookie(anon):
    resp = anon.get("/lang/en")
    assert resp.status_code == 302
    assert "lang=en" in resp.headers["Set-Cookie"]
    assert anon.get("/lang/fr").status_code == 404


def test_language_switch_only_returns_to_this_site(anon):
    back = anon.get("/lang/en", headers={"Referer": "http://localhost/articles?page=2"})
    assert urlsplit(back.headers["Location"])[2:4] == ("/articles", "page=2")

    offsite = anon.get("/lang/en", headers={"Referer": "https://evil.example/phish"})
    assert urlsplit(offsite.headers["Location"]).netloc in ("", "localhost")
    assert urlsplit(offsite.headers["Location"]).path == "/"


def test_newsletter_ignores_offsite_referrer(anon):
    resp = anon.post("/newsletter", data={"email": "fan@mail.com"}, headers={"Referer": "https://evil.example/"})
    assert resp.status_code == 302
    assert "evil.example" not in resp.headers["Location"]


def test_messages_follow_requested_language(anon):
    body = anon.get("/api/scholarships/999?lang=en").get_json()
    assert body["message"] == MESSAGES["en"]["not_found"]



# ---------- per-path seo ----------
def test_seo_settings_lookup_by_path(as_admin, anon):
    created = as_admin.post("/api/seo-settings", json={
        "page_path": "/scholarships",
        "meta_title": "Fully funded scholarships",
        "keywords": "scholarships, funding",
    })
    assert created.status_code == 201

    found = anon.get("/api/seo-settings/path/scholarships")
    assert found.status_code == 200
    assert found.get_json()["data"]["meta_title"] == "Fully funded scholarships"

    missing = anon.get("/api/seo-settings/path/articles")
    assert missing.status_code == 404
    assert missing.get_json()["code"] == "not_found"


def test_seo_settings_for_home_and_duplicates(as_admin, anon):
    assert as_admin.post("/api/seo-settings", json={"page_path": "/", "meta_title": "FullSco home"}).status_code == 201
    assert anon.get("/api/seo-settings/path/").get_json()["data"]["meta_title"] == "FullSco home"

    dup = as_admin.post("/api/seo-settings", json={"page_path": "/"})
    assert dup.status_code == 409
    assert dup.get_json()["code"] == "page_path_taken"

    bad = as_admin.post("/api/seo-settings", json={"page_path": "scholarships"})
    assert bad.status_code == 400


def test_seo_settings_are_admin_only(as_editor):
    assert as_editor.post("/api/seo-settings", json={"page_path": "/articles"}).status_code == 403


def test_public_page_uses_path_seo(anon, add):
    add(SeoSetting(page_path="/articles", meta_title="Scholarship guides", meta_description="Tips for applicants",
                   og_image="https://cdn.fullsco.org/og.png"))
    body = anon.get("/articles").get_data(as_text=True)
    assert "<title>Scholarship guides</title>" in body
    assert 'content="Tips for applicants"' in body
    assert 'property="og:image" content="https://cdn.fullsco.org/og.png"' in body
