"""
Tests for category resolution and object key construction.
"""
from starlette.datastructures import Headers

from r2gateway.gateway.categories import (
    CATEGORY_HEADERS,
    build_object_key,
    gallery_prefix,
    missing_category_message,
    resolve_category,
)


class TestResolveCategory:
    """Tests for resolve_category."""

    def test_priority_order(self):
        """The table order is the tie-break order."""
        assert [header for header, _ in CATEGORY_HEADERS] == [
            "gallery", "logo", "users", "materials", "workers",
            "standards", "badStandards", "pdf", "projectImages", "beforeWorks",
        ]

    def test_no_headers(self):
        assert resolve_category({}) is None

    def test_first_truthy_wins(self):
        headers = {"pdf": "1", "workers": "1", "badStandards": "1"}
        assert resolve_category(headers) == "workers"

    def test_empty_value_is_skipped(self):
        assert resolve_category({"logo": "", "projectImages": "x"}) == "projectImages"

    def test_case_insensitive_headers(self):
        headers = Headers(raw=[(b"badstandards", b"1")])
        assert resolve_category(headers) == "badStandards"

    def test_unrelated_headers_ignored(self):
        assert resolve_category({"code": "ABC", "content-type": "application/json"}) is None


class TestObjectKeys:
    """Tests for key construction."""

    def test_build_object_key(self):
        assert build_object_key("XYZ", "logo", "photo.jpg") == "XYZ/logo/photo.jpg"

    def test_code_used_verbatim(self):
        assert build_object_key("a/b c", "pdf", "x.pdf") == "a/b c/pdf/x.pdf"

    def test_gallery_prefix(self):
        assert gallery_prefix("ABC123") == "ABC123/gallery/"

    def test_missing_category_message_names_every_header(self):
        message = missing_category_message()
        for header, _ in CATEGORY_HEADERS:
            assert header in message
