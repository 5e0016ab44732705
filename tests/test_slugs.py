import re

import pytest

from utils import SLUG_PATTERN, allowed_file, fallback_slug, like_pattern, safe_redirect_target, slugify


@pytest.mark.parametrize("text, expected", [
    ("  Hello,   World!! ", "hello-world"),
    ("منحة DAAD 2024", "daad-2024"),
    ("Master--Degree", "master-degree"),
    ("ألمانيا", ""),
    ("", ""),
])
def test_slugify(text, expected):
    assert slugify(text) == expected


def test_slugify_is_idempotent():
    for text in ("Erasmus Mundus 2025", "  a -- b  ", "منحة DAAD"):
        once = slugify(text)
        assert slugify(once) == once


def test_fallback_slug_is_valid_and_unique():
    first, second = fallback_slug("success-stories"), fallback_slug("success-stories")
    assert re.fullmatch(r"success-stories-[0-9a-f]{8}", first)
    assert re.fullmatch(SLUG_PATTERN, first)
    assert first != second


def test_allowed_file():
    assert allowed_file("logo.PNG")
    assert not allowed_file("notes.exe")
    assert not allowed_file("README")


def test_like_pattern_escapes_wildcards():
    assert like_pattern("100%") == r"%100\%%"
    assert like_pattern("first_name") == r"%first\_name%"
    assert like_pattern("a\\b") == r"%a\\b%"


@pytest.mark.parametrize("target, host, expected", [
    ("/admin/countries/", None, "/admin/countries/"),
    ("//evil.example", None, None),
    ("/\\evil.example", None, None),
    ("https://evil.example/x", None, None),
    ("https://evil.example/x", "localhost", None),
    ("http://localhost/articles?page=2", "localhost", "/articles?page=2"),
    ("javascript:alert(1)", "localhost", None),
    (None, "localhost", None),
])
def test_safe_redirect_target(target, host, expected):
    assert safe_redirect_target(target, host) == expected
