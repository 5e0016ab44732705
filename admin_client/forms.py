"""Form helpers shared by the admin screens."""

from __future__ import annotations

from utils import slugify


class SlugSync:
    """Keeps ``slug`` derived from ``name`` until the user edits the slug.

    A name change re-derives the slug only while it still equals the
    derivation of the previous name. Editing the slug by hand to anything
    else opts out for the rest of the form's life.
    """

    def __init__(self, name: str = "", slug: str | None = None):
        self.name = name or ""
        derived = slugify(self.name)
        self.slug = derived if slug is None else slug
        self.diverged = slug is not None and slug != derived

    def set_name(self, name: str) -> str:
        previous = slugify(self.name)
        self.name = name or ""
        if not self.diverged and self.slug == previous:
            self.slug = slugify(self.name)
        return self.slug

    def set_slug(self, slug: str) -> str:
        self.slug = slug
        if slug != slugify(self.name):
            self.diverged = True
        return self.slug

    def values(self, name_field: str = "name") -> dict:
        return {name_field: self.name, "slug": self.slug}
