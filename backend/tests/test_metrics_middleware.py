"""
Tests for request path normalization in the metrics middleware.
"""
import pytest

from r2gateway.middleware.metrics_middleware import MetricsMiddleware


@pytest.fixture
def middleware() -> MetricsMiddleware:
    return MetricsMiddleware(app=None)


class TestNormalizePath:
    """Only the routing prefix of the object name survives."""

    @pytest.mark.parametrize("path", ["/standards", "/standards/foo.png", "/standards-v2/a.png"])
    def test_standards_paths(self, middleware: MetricsMiddleware, path):
        assert middleware._normalize_path(path) == "/standards/*"

    @pytest.mark.parametrize("path", ["/gallery", "/gallery/", "/gallery/x.jpg"])
    def test_gallery_paths(self, middleware: MetricsMiddleware, path):
        assert middleware._normalize_path(path) == "/gallery/*"

    @pytest.mark.parametrize("path", ["/", "/XYZ/logo/a.jpg", "/photo.jpg", "//standards/a.png"])
    def test_other_paths_collapse(self, middleware: MetricsMiddleware, path):
        assert middleware._normalize_path(path) == "/{object}"
