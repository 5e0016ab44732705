from modules.catalog.models import Tag
from modules.content.models import Page
from modules.content.routes import posts
from modules.scholarships.models import Scholarship


def _post(**overrides):
    data = {
        "title": "How to write a motivation letter",
        "excerpt": "Ten practical tips for a strong letter.",
        "content": "<p>Start with why you chose this programme.</p>",
    }
    data.update(overrides)
    return data


def test_post_gets_author_and_tags(as_editor, editor_user, add):
    tips, letters = add(Tag(name="Tips", slug="tips"), Tag(name="Letters", slug="letters"))

    resp = as_editor.post("/api/posts", json=_post(tag_ids=[tips, letters]))
    data = resp.get_json()["data"]
    assert resp.status_code == 201
    assert data["author_id"] == editor_user.id
    assert data["author_name"] == "Editor"
    assert set(data["tag_ids"]) == {tips, letters}
    assert [t["name"] for t in data["tags"]] == ["Letters", "Tips"]


def test_post_update_keeps_tags_unless_given(as_editor, add):
    (tips,) = add(Tag(name="Tips", slug="tips"))
    created = as_editor.post("/api/posts", json=_post(tag_ids=[tips])).get_json()["data"]

    renamed = as_editor.put(f"/api/posts/{created['id']}", json={"title": "How to write a cover letter"})
    assert renamed.get_json()["data"]["tag_ids"] == [tips]
    assert renamed.get_json()["data"]["slug"] == created["slug"]

    cleared = as_editor.put(f"/api/posts/{created['id']}", json={"tag_ids": []})
    assert cleared.get_json()["data"]["tag_ids"] == []


def test_post_slug_lookup_counts_views(as_editor, anon):
    as_editor.post("/api/posts", json=_post())
    resp = anon.get("/api/posts/slug/how-to-write-a-motivation-letter")
    assert resp.status_code == 200
    assert resp.get_json()["data"]["views"] == 1


def test_page_by_slug_and_unpublished_pages(anon, add):
    add(
        Page(title="About us", slug="about", content="Who we are"),
        Page(title="Draft", slug="draft", content="Not yet", is_published=False),
    )
    assert anon.get("/api/pages/slug/about").get_json()["data"]["title"] == "About us"
    assert anon.get("/api/pages/slug/draft").status_code == 404


def test_success_story_links_scholarship(as_editor, add):
    (sid,) = add(Scholarship(title="Chevening Scholarship", slug="chevening",
                             description="UK government awards", content="Full funding"))
    resp = as_editor.post("/api/success-stories", json={
        "name": "Sara",
        "title": "From Amman to London",
        "content": "My year as a Chevening scholar.",
        "scholarship_id": sid,
    })
    data = resp.get_json()["data"]
    assert resp.status_code == 201
    assert data["slug"] == "from-amman-to-london"
    assert data["scholarship_title"] == "Chevening Scholarship"


def test_admin_post_form_with_tags(as_admin, add):
    (tips,) = add(Tag(name="Tips", slug="tips"))
    page = as_admin.get("/admin/posts/new")
    assert page.status_code == 200
    assert "Tips" in page.get_data(as_text=True)

    resp = as_admin.post("/admin/posts/new", data={
        "title": "Scholarship interview checklist",
        "content": "Bring your documents and arrive early.",
        "tag_ids": [str(tips)],
        "is_published": "1",
    })
    assert resp.status_code == 302

    posts = as_admin.get("/api/posts").get_json()["data"]
    assert posts[0]["tag_ids"] == [tips]
    assert posts[0]["is_featured"] is False


def test_create_form_defaults_include_factory_values():
    defaults = posts.form_defaults()
    assert defaults["tag_ids"] == []
    assert defaults["is_published"] is True


def test_deleting_a_tag_unlinks_it_from_posts(as_admin, add):
    (old,) = add(Tag(name="Old", slug="old"))
    post = as_admin.post("/api/posts", json=_post(tag_ids=[old])).get_json()["data"]

    assert as_admin.delete(f"/api/tags/{old}").status_code == 200
    as_admin.post("/api/tags", json={"name": "Unrelated"})

    data = as_admin.get(f"/api/posts/{post['id']}").get_json()["data"]
    assert data["tag_ids"] == []
    assert data["tags"] == []


def test_deleting_a_scholarship_clears_story_link(as_admin, add):
    (sid,) = add(Scholarship(title="Chevening Scholarship", slug="chevening",
                             description="UK government awards", content="Full funding"))
    story = as_admin.post("/api/success-stories", json={
        "name": "Sara", "title": "From Amman to London", "content": "My year in London", "scholarship_id": sid,
    }).get_json()["data"]

    assert as_admin.delete(f"/api/scholarships/{sid}").status_code == 200
    add(Scholarship(title="Totally Different Award", slug="different",
                    description="Another programme", content="Other funding"))

    data = as_admin.get(f"/api/success-stories/{story['id']}").get_json()["data"]
    assert data["scholarship_id"] is None
    assert data["scholarship_title"] is None
