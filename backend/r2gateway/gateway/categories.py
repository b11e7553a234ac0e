"""
Upload categories and object key construction.

A write request names its category through a header flag. When several
flags are set, the first one in CATEGORY_HEADERS wins.
"""
from typing import Mapping, Optional, Tuple

# (header name, category folder), in priority order
CATEGORY_HEADERS: Tuple[Tuple[str, str], ...] = (
    ("gallery", "gallery"),
    ("logo", "logo"),
    ("users", "users"),
    ("materials", "materials"),
    ("workers", "workers"),
    ("standards", "standards"),
    ("badStandards", "badStandards"),
    ("pdf", "pdf"),
    ("projectImages", "projectImages"),
    ("beforeWorks", "beforeWorks"),
)

GALLERY_FOLDER = "gallery"

# GET paths are matched on these literal prefixes of the object name
STANDARDS_READ_PREFIX = "standards"
GALLERY_READ_PREFIX = "gallery"


def resolve_category(headers: Mapping[str, str]) -> Optional[str]:
    """
    Pick the category for a write request.

    Args:
        headers: Request headers (lookup is expected to be case-insensitive)

    Returns:
        Category folder of the first header with a non-empty value, or None
    """
    for header, category in CATEGORY_HEADERS:
        if headers.get(header):
            return category
    return None


def build_object_key(code: str, category: str, object_name: str) -> str:
    """Key for an upload: {code}/{category}/{objectName}."""
    return f"{code}/{category}/{object_name}"


def gallery_prefix(code: str) -> str:
    """Listing prefix for a code's gallery."""
    return f"{code}/{GALLERY_FOLDER}/"


def missing_category_message() -> str:
    names = ", ".join(header for header, _ in CATEGORY_HEADERS)
    return f"None of the required headers ({names}) are present"
